from ._ndarray import NDArray

__all__ = [NDArray.__name__]
