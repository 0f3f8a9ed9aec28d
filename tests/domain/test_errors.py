import unittest

from src.ndcore.domain._errors import (
    AllocationError,
    AxisError,
    DTypeNotSupportedError,
)


class TestErrors(unittest.TestCase):
    def test_allocation_error_is_memory_error(self) -> None:
        err = AllocationError(10, "UINT8")
        self.assertIsInstance(err, MemoryError)
        self.assertEqual(err.count, 10)
        self.assertEqual(err.dtype, "UINT8")
        self.assertIn("10", str(err))

    def test_axis_error_is_value_and_index_error(self) -> None:
        err = AxisError(5, 2)
        self.assertIsInstance(err, ValueError)
        self.assertIsInstance(err, IndexError)
        self.assertEqual(str(err), "index out of range")
        self.assertEqual((err.axis, err.ndim), (5, 2))

    def test_dtype_not_supported_error(self) -> None:
        err = DTypeNotSupportedError("diff", "BOOL")
        self.assertIsInstance(err, NotImplementedError)
        self.assertEqual(err.op, "diff")
        self.assertEqual(err.dtype, "BOOL")
        self.assertEqual(str(err), "diff is not implemented for dtype 'BOOL'.")


if __name__ == "__main__":
    unittest.main()
