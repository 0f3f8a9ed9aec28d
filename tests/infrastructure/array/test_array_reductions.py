"""
Unit tests for the NDArray reduction kernels (sum, mean, std, min, max,
argmin, argmax), checked against NumPy references.
"""

import math
import os
import unittest
import warnings

import numpy as np

from src.ndcore.domain._dtype import DType
from src.ndcore.domain._errors import AxisError
from src.ndcore.infrastructure._config import RANK_CAP
from src.ndcore.infrastructure.array._ndarray import NDArray


def _arr(data, dtype=None) -> NDArray:
    return NDArray.from_numpy(data, dtype)


class TestSum(unittest.TestCase):
    def setUp(self) -> None:
        self.a = _arr([[1, 2, 3], [4, 5, 6]])

    def test_axis_examples(self) -> None:
        self.assertEqual(self.a.sum(axis=0).tolist(), [5.0, 7.0, 9.0])
        self.assertEqual(self.a.sum(axis=1).tolist(), [6.0, 15.0])
        self.assertEqual(self.a.sum(axis=-1).tolist(), [6.0, 15.0])
        self.assertEqual(self.a.sum(), 21)

    def test_result_dtype_follows_source(self) -> None:
        a = _arr(np.array([[1, 2], [3, 4]], dtype=np.int16))
        out = a.sum(axis=0)
        self.assertEqual(out.dtype, DType.INT16)
        self.assertEqual(out.tolist(), [4, 6])
        self.assertIsInstance(a.sum(), int)

    def test_integer_sum_wraps_and_warns(self) -> None:
        a = _arr(np.array([200, 100], dtype=np.uint8))
        with self.assertWarns(RuntimeWarning):
            self.assertEqual(a.sum(), 44)

        b = _arr(np.array([[100, 100], [1, 1]], dtype=np.int8))
        with self.assertWarns(RuntimeWarning):
            self.assertEqual(b.sum(axis=1).tolist(), [-56, 2])

    def test_wrap_warning_points_at_caller(self) -> None:
        a = _arr(np.array([200, 100], dtype=np.uint8))
        b = _arr(np.array([[100, 100], [1, 1]], dtype=np.int8))
        for run in (lambda: a.sum(), lambda: b.sum(axis=1)):
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter("always")
                run()
            self.assertEqual(len(caught), 1)
            self.assertEqual(
                os.path.basename(caught[0].filename), os.path.basename(__file__)
            )

    def test_boolean_sum_counts_true(self) -> None:
        a = _arr([True, False, True])
        self.assertEqual(a.sum(), 2)

    def test_traversal_order_does_not_change_sum(self) -> None:
        data = np.arange(24, dtype=np.float64).reshape(2, 3, 4)
        a = _arr(data)
        self.assertEqual(a.sum(), a.flip(1).sum())
        self.assertEqual(a.sum(), a.flip().sum())
        self.assertAlmostEqual(a.sum(), float(data.sum()))

    def test_axis_sum_matches_numpy_on_rank_three(self) -> None:
        data = np.arange(24, dtype=np.float64).reshape(2, 3, 4)
        a = _arr(data)
        for axis in range(3):
            np.testing.assert_allclose(a.sum(axis=axis).to_numpy(), data.sum(axis=axis))

    def test_single_element_result_is_unwrapped(self) -> None:
        a = _arr([[1, 2, 3]])
        self.assertEqual(a.sum(axis=1), 6.0)
        self.assertEqual(_arr([4.0, 5.0]).sum(axis=0), 9.0)

    def test_strided_view(self) -> None:
        a = self.a.flip(1)
        self.assertEqual(a.sum(axis=1).tolist(), [6.0, 15.0])
        self.assertEqual(a.sum(axis=0).tolist(), [9.0, 7.0, 5.0])

    def test_empty_axis(self) -> None:
        a = NDArray((2, 0))
        self.assertEqual(a.sum(), 0.0)
        self.assertEqual(a.sum(axis=1).tolist(), [0.0, 0.0])

    def test_axis_validation(self) -> None:
        with self.assertRaises(TypeError) as ctx:
            self.a.sum(axis="x")
        self.assertEqual(str(ctx.exception), "axis must be None, or an integer")
        with self.assertRaises(TypeError):
            self.a.sum(axis=1.0)
        with self.assertRaises(ValueError):
            self.a.sum(axis=5)
        with self.assertRaises(AxisError):
            self.a.sum(axis=-3)


class TestMeanStd(unittest.TestCase):
    def setUp(self) -> None:
        self.data = np.array([[1.0, 2.0, 4.0], [3.0, 8.0, 5.0]])
        self.a = _arr(self.data)

    def test_mean(self) -> None:
        self.assertAlmostEqual(self.a.mean(), float(self.data.mean()))
        np.testing.assert_allclose(self.a.mean(axis=0).to_numpy(), self.data.mean(axis=0))
        np.testing.assert_allclose(self.a.mean(axis=1).to_numpy(), self.data.mean(axis=1))

    def test_mean_of_integers_is_float(self) -> None:
        a = _arr(np.array([1, 2], dtype=np.uint8))
        self.assertEqual(a.mean(), 1.5)
        out = _arr(np.array([[1, 2], [4, 4]], dtype=np.int8)).mean(axis=1)
        self.assertEqual(out.dtype, DType.FLOAT)
        self.assertEqual(out.tolist(), [1.5, 4.0])

    def test_std_matches_closed_form(self) -> None:
        for ddof in (0, 1):
            self.assertAlmostEqual(self.a.std(ddof=ddof), float(self.data.std(ddof=ddof)))
            for axis in (0, 1):
                np.testing.assert_allclose(
                    self.a.std(axis=axis, ddof=ddof).to_numpy(),
                    self.data.std(axis=axis, ddof=ddof),
                )

    def test_std_ddof_at_least_count_is_zero(self) -> None:
        self.assertEqual(self.a.std(ddof=6), 0.0)
        self.assertEqual(self.a.std(axis=0, ddof=2).tolist(), [0.0, 0.0, 0.0])

    def test_std_ddof_validation(self) -> None:
        with self.assertRaises(TypeError):
            self.a.std(ddof=1.5)
        with self.assertRaises(ValueError):
            self.a.std(ddof=-1)

    def test_empty_mean_and_std(self) -> None:
        a = NDArray((0,))
        self.assertEqual(a.mean(), 0.0)
        self.assertEqual(a.std(), 0.0)

    def test_stable_for_large_offsets(self) -> None:
        a = _arr([1e9 + 4, 1e9 + 7, 1e9 + 13, 1e9 + 16])
        self.assertAlmostEqual(a.std(ddof=1), math.sqrt(30.0), places=5)


class TestExtrema(unittest.TestCase):
    def test_first_index_on_ties(self) -> None:
        a = _arr([3, 1, 1, 5])
        self.assertEqual(a.argmin(), 1)
        self.assertEqual(a.argmax(), 3)
        self.assertEqual(a.min(), 1.0)
        self.assertEqual(a.max(), 5.0)

    def test_axis_extrema(self) -> None:
        a = _arr(np.array([[1, 5, 2], [7, 0, 7]], dtype=np.int16))
        self.assertEqual(a.max(axis=0).tolist(), [7, 5, 7])
        self.assertEqual(a.min(axis=1).tolist(), [1, 0])
        self.assertEqual(a.max(axis=0).dtype, DType.INT16)
        self.assertEqual(a.argmax(axis=1).tolist(), [1, 0])
        self.assertEqual(a.argmin(axis=0).tolist(), [0, 1, 0])

    def test_arg_results_are_uint16(self) -> None:
        a = _arr([[1.0, 2.0], [3.0, 0.0]])
        self.assertEqual(a.argmax(axis=0).dtype, DType.UINT16)

    def test_flat_argmax_uses_traversal_order(self) -> None:
        a = _arr([[1.0, 9.0], [3.0, 4.0]]).flip(0)
        # traversal order of the view: 3, 4, 1, 9
        self.assertEqual(a.argmax(), 3)
        self.assertEqual(a.argmin(), 2)

    def test_boolean_extrema_stay_boolean(self) -> None:
        a = _arr([[True, False], [True, True]])
        self.assertIs(a.max(), True)
        self.assertIs(a.min(), False)
        out = a.min(axis=1)
        self.assertTrue(out.boolean)
        self.assertEqual(out.tolist(), [False, True])

    def test_empty_raises(self) -> None:
        a = NDArray((0,))
        for op in (a.min, a.max, a.argmin, a.argmax):
            with self.assertRaises(ValueError):
                op()

    def test_arg_axis_too_long(self) -> None:
        a = NDArray((65536,), DType.UINT8)
        with self.assertRaises(ValueError):
            a.argmax(axis=0)
        self.assertEqual(a.argmax(), 0)

    def test_axis_validation(self) -> None:
        a = _arr([[1.0, 2.0]])
        with self.assertRaises(TypeError):
            a.min(axis="0")
        with self.assertRaises(ValueError):
            a.argmax(axis=2)


@unittest.skipIf(RANK_CAP < 4, "needs four-dimensional arrays")
class TestRankFour(unittest.TestCase):
    def setUp(self) -> None:
        rng = np.random.default_rng(0)
        self.data = rng.integers(-50, 50, size=(2, 3, 4, 5)).astype(np.float64)
        dense = _arr(self.data)
        # a dense array and a view reversed along two of its axes
        self.cases = [
            (dense, self.data),
            (dense.flip(1).flip(3), self.data[:, ::-1, :, ::-1]),
        ]

    def test_sum_mean_std_every_axis(self) -> None:
        for a, ref in self.cases:
            self.assertAlmostEqual(a.sum(), ref.sum())
            self.assertAlmostEqual(a.mean(), ref.mean())
            self.assertAlmostEqual(a.std(None, 1), ref.std(ddof=1))
            for axis in range(-4, 4):
                np.testing.assert_allclose(a.sum(axis).to_numpy(), ref.sum(axis))
                np.testing.assert_allclose(a.mean(axis).to_numpy(), ref.mean(axis))
                np.testing.assert_allclose(
                    a.std(axis, 1).to_numpy(), ref.std(axis, ddof=1)
                )

    def test_extrema_every_axis(self) -> None:
        for a, ref in self.cases:
            self.assertEqual(a.min(), ref.min())
            self.assertEqual(a.argmax(), int(np.argmax(ref)))
            self.assertEqual(a.argmin(), int(np.argmin(ref)))
            for axis in range(-4, 4):
                np.testing.assert_array_equal(a.min(axis).to_numpy(), ref.min(axis))
                np.testing.assert_array_equal(
                    a.argmin(axis).to_numpy(), np.argmin(ref, axis)
                )
                np.testing.assert_array_equal(
                    a.argmax(axis).to_numpy(), np.argmax(ref, axis)
                )

    def test_integer_sum_every_axis(self) -> None:
        data = self.data.astype(np.int16)
        a = _arr(data).flip(0).flip(2)
        ref = data[::-1, :, ::-1, :]
        for axis in range(-4, 4):
            out = a.sum(axis)
            self.assertEqual(out.dtype, DType.INT16)
            np.testing.assert_array_equal(out.to_numpy(), ref.sum(axis))


if __name__ == "__main__":
    unittest.main()
