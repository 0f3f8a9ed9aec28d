"""
State-based method dispatch (a.k.a. "control-path" templating) via decorators.

This module provides a small mechanism for routing a single method call to
one of several registered implementations based on the runtime value of a
named attribute on the receiving object (its *state*).

Core idea
---------
- You define a *base* method on a class (its signature becomes the canonical one).
- You then register multiple "control paths" for that method, each keyed by:
    (ClassName, MethodName, StateVal)
- At runtime, the wrapper reads the state attribute from `self` and dispatches
  to the registered implementation that matches the current state.

In ndcore the state attribute is ``dtype``: reduction and transform kernels
register one control path per storage dtype, and an array whose dtype has no
registered path fails with the builder's trap exception.

Important notes
---------------
- This design mutates the class: the first time you decorate a control path,
  the original method name is replaced with a wrapper that performs dispatch.
- Registered implementations are stored in a closure-local mapping owned by
  `create_path_builder()`. Different builders do not share mappings.
- The selected implementation is called as a normal instance method, i.e.
  ``sub_method(self, *args, **kwargs)``.
"""

from typing import (
    Callable,
    Hashable,
    Optional,
    Dict,
    Type,
    Any,
)
from typing_extensions import ParamSpec, TypeVar
from collections import namedtuple
from functools import wraps

P = ParamSpec("P")
R = TypeVar("R")

TrapFactory = Callable[[str, Any], Exception]

_MISSING = object()


def create_path_builder(
    state_attr: str = "_state",
) -> Callable[
    [Type, Callable[P, R], Hashable, Optional[TrapFactory]],
    Callable[[Callable[P, R]], Callable[P, R]],
]:
    """
    Create and return a "path builder" function used to register stateful
    control paths for methods.

    The returned function (`templator`) is used like this:

        decorator = create_path_builder("mode")

        class MyClass:
            def foo(self, x: int) -> int: ...

        @decorator(MyClass, MyClass.foo, "A")
        def foo_A(self, x: int) -> int:
            ...

        @decorator(MyClass, MyClass.foo, "B")
        def foo_B(self, x: int) -> int:
            ...

    When `obj.foo(...)` is called, it dispatches to `foo_A` or `foo_B`
    depending on `obj.mode`.

    Parameters
    ----------
    state_attr : str, optional
        Name of the attribute (or property) read from `self` to select the
        control path. Defaults to ``"_state"``.

    Returns
    -------
    Callable
        A function with signature:

            (cls, method, state, trap_exception=None) -> decorator

        where `decorator(sub_method)` registers `sub_method` for that control
        path and replaces `cls.method` with a dispatcher wrapper.
    """

    MethodKey = namedtuple(
        "MethodKey",
        [
            "ClassName",
            "MethodName",
            "StateVal",
        ],
    )
    """
    Tuple-like key used to uniquely identify a control path.

    Fields
    ------
    ClassName : str
        The owning class name.
    MethodName : str
        The base method name being templated.
    StateVal : Hashable
        The state value that selects this implementation.
    """

    methods_map: Dict[MethodKey, Callable] = {}
    """Mapping from (class, method, state) keys to registered implementations."""

    def templator(
        cls: Type,
        method: Callable[P, R],
        state: Hashable,
        trap_exception: Optional[TrapFactory] = None,
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """
        Build a decorator that registers a control path implementation.

        Parameters
        ----------
        cls : Type
            The class whose method should be wrapped for state-based dispatch.
            The wrapper is installed on this class under `method.__name__`.
        method : Callable[P, R]
            The base method being templated. Its signature and metadata (name,
            docstring, annotations) are used for the installed wrapper via
            `functools.wraps(method)`.
        state : Hashable
            The state value that selects the decorated implementation.
            Must be hashable so it can be used as part of the dispatch key.
        trap_exception : Optional[Callable[[str, Any], Exception]]
            Factory called as ``trap_exception(method_name, state)`` when no
            control path matches the runtime state. The returned exception is
            raised. If `None`, a plain `NotImplementedError` is raised.

        Returns
        -------
        Callable[[Callable[P, R]], Callable[P, R]]
            A decorator that, when applied to `sub_method`, registers
            `sub_method` for `(cls, method, state)` and installs/updates the
            dispatcher wrapper on `cls.method.__name__`.

        Raises
        ------
        TypeError
            If `state` is not hashable.
        """
        try:
            hash(state)
        except TypeError:
            raise TypeError(
                f"The argument for 'state' must be hashable. Got {repr(state)}"
            )

        method_name = method.__name__
        smk: MethodKey = MethodKey(cls.__name__, method_name, state)
        """Static method key for the control path being registered by this call."""

        def decorator(sub_method: Callable[P, R]) -> Callable[P, R]:
            """
            Register `sub_method` as the implementation for the configured state.

            This function:
            1) stores `sub_method` in the internal dispatch map under the
               precomputed key `(cls.__name__, method.__name__, state)`,
            2) installs a wrapper on `cls` under `method.__name__` that:
                - reads the state attribute from `self`,
                - finds the matching implementation,
                - calls it (or raises per `trap_exception`).

            Parameters
            ----------
            sub_method : Callable[P, R]
                The implementation to run when the state matches.

            Returns
            -------
            Callable[P, R]
                The original `sub_method` (returned unchanged), enabling
                decorator stacking and direct calls in tests.
            """
            methods_map[smk] = sub_method

            @wraps(method)
            def wrapper(self: Any, *args: P.args, **kwargs: P.kwargs) -> Any:
                """
                Dispatch to a registered implementation based on the state.

                Behavior
                --------
                - If `self` does not expose the state attribute, raises
                  `NotImplementedError` naming the missing attribute.
                - If a matching control path exists, calls it with `self` and
                  returns its result.
                - Otherwise raises the trap exception (or `NotImplementedError`).
                """
                cur_state = getattr(self, state_attr, _MISSING)
                if cur_state is _MISSING:
                    raise NotImplementedError(
                        "{} is missing attribute {}".format(
                            type(self), repr(state_attr)
                        )
                    )
                key = MethodKey(cls.__name__, method_name, cur_state)
                if sm := methods_map.get(key):
                    return sm(self, *args, **kwargs)
                if trap_exception is None:
                    raise NotImplementedError(
                        "Missing control path (state={}) for {}".format(
                            repr(cur_state), repr(method_name)
                        )
                    )
                raise trap_exception(method_name, cur_state)

            setattr(cls, method_name, wrapper)
            return sub_method

        return decorator

    return templator
