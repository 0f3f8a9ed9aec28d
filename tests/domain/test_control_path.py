import unittest

from src.ndcore.domain.utils._control_path import create_path_builder


class TestCreatePathBuilder(unittest.TestCase):
    def setUp(self) -> None:
        # Fresh builder per test to avoid map-sharing across tests.
        self.decorator = create_path_builder("mode")

    def test_state_must_be_hashable(self) -> None:
        class C:
            mode = "A"

            def foo(self, x: int) -> int:
                return x

        with self.assertRaises(TypeError) as ctx:
            self.decorator(C, C.foo, ["not-hashable"])(lambda self, x: x)

        self.assertIn("must be hashable", str(ctx.exception))

    def test_dispatch_selects_registered_control_path(self) -> None:
        class C:
            def __init__(self, mode):
                self.mode = mode

            def foo(self, x: int) -> int:
                return -999

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 10

        @self.decorator(C, C.foo, "B")
        def foo_B(self, x: int) -> int:
            return x + 20

        self.assertEqual(C("A").foo(1), 11)
        self.assertEqual(C("B").foo(1), 21)

    def test_control_path_receives_self(self) -> None:
        class C:
            def __init__(self, mode, scale):
                self.mode = mode
                self.scale = scale

            def foo(self, x: int) -> int:
                return -999

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x * self.scale

        self.assertEqual(C("A", 3).foo(2), 6)

    def test_dispatch_supports_none_state(self) -> None:
        class C:
            mode = None

            def foo(self, x: int) -> int:
                return -999

        @self.decorator(C, C.foo, None)
        def foo_none(self, x: int) -> int:
            return x * 2

        self.assertEqual(C().foo(3), 6)

    def test_state_read_from_property(self) -> None:
        class C:
            @property
            def mode(self):
                return "P"

            def foo(self) -> str:
                return "base"

        @self.decorator(C, C.foo, "P")
        def foo_P(self) -> str:
            return "property"

        self.assertEqual(C().foo(), "property")

    def test_missing_state_attribute_raises_not_implemented(self) -> None:
        class C:
            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(NotImplementedError) as ctx:
            C().foo(1)

        self.assertIn("missing attribute", str(ctx.exception))
        self.assertIn("'mode'", str(ctx.exception))

    def test_missing_control_path_without_trap_raises_not_implemented(self) -> None:
        class C:
            def __init__(self, mode):
                self.mode = mode

            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(NotImplementedError) as ctx:
            C("B").foo(1)

        self.assertIn("Missing control path", str(ctx.exception))
        self.assertIn("state='B'", str(ctx.exception))

    def test_trap_factory_builds_the_raised_exception(self) -> None:
        class MissingPathError(Exception):
            pass

        calls = []

        def trap(method_name, state):
            calls.append((method_name, state))
            return MissingPathError(f"{method_name}:{state}")

        class C:
            def __init__(self, mode):
                self.mode = mode

            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, "A", trap)
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(MissingPathError) as ctx:
            C("B").foo(123)

        self.assertEqual(calls, [("foo", "B")])
        self.assertEqual(str(ctx.exception), "foo:B")

    def test_wrapper_preserves_original_method_metadata(self) -> None:
        class C:
            mode = "A"

            def foo(self, x: int) -> int:
                """Original foo docstring."""
                return x

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 1

        self.assertEqual(C.foo.__name__, "foo")
        self.assertEqual(C.foo.__doc__, "Original foo docstring.")

    def test_decorator_returns_sub_method_unchanged(self) -> None:
        class C:
            mode = "A"

            def foo(self) -> int:
                return 0

        def foo_A(self) -> int:
            return 1

        self.assertIs(self.decorator(C, C.foo, "A")(foo_A), foo_A)

    def test_two_builders_do_not_share_control_paths(self) -> None:
        deco1 = create_path_builder("mode")
        deco2 = create_path_builder("mode")

        class C:
            def __init__(self, mode):
                self.mode = mode

            def foo(self, x: int) -> int:
                return -999

        @deco1(C, C.foo, "A")
        def foo_A_1(self, x: int) -> int:
            return 111

        # The second installation replaces the wrapper, which consults
        # deco2's map only.
        @deco2(C, C.foo, "B")
        def foo_B_2(self, x: int) -> int:
            return 222

        with self.assertRaises(NotImplementedError):
            C("A").foo(0)

        self.assertEqual(C("B").foo(0), 222)

    def test_default_state_attribute(self) -> None:
        decorator = create_path_builder()

        class C:
            _state = "S"

            def foo(self) -> str:
                return "base"

        @decorator(C, C.foo, "S")
        def foo_S(self) -> str:
            return "state"

        self.assertEqual(C().foo(), "state")


if __name__ == "__main__":
    unittest.main()
