"""
Unit tests for the NDArray shape-transform kernels (diff, flip, roll).
"""

import unittest

import numpy as np

from src.ndcore.domain._dtype import DType
from src.ndcore.domain._errors import AxisError, DTypeNotSupportedError
from src.ndcore.infrastructure._config import RANK_CAP
from src.ndcore.infrastructure.array._ndarray import NDArray


def _arr(data, dtype=None) -> NDArray:
    return NDArray.from_numpy(data, dtype)


class TestDiff(unittest.TestCase):
    def test_first_and_second_order(self) -> None:
        a = _arr([1, 2, 4, 7])
        self.assertEqual(a.diff().tolist(), [1.0, 2.0, 3.0])
        self.assertEqual(a.diff(2).tolist(), a.diff().diff().tolist())
        self.assertEqual(a.diff(2).tolist(), [1.0, 1.0])

    def test_higher_order_matches_numpy(self) -> None:
        data = np.array([1.0, 2.0, 4.0, 7.0, 11.0, 20.0, 3.0, -5.0, 0.5, 2.0, 9.0])
        a = _arr(data)
        for n in range(10):
            np.testing.assert_allclose(a.diff(n).to_numpy(), np.diff(data, n))

    def test_zero_order_returns_copy(self) -> None:
        a = _arr([1.0, 2.0])
        out = a.diff(0)
        self.assertEqual(out.tolist(), [1.0, 2.0])
        self.assertIsNot(out.storage, a.storage)

    def test_along_axes(self) -> None:
        data = np.array([[1, 2, 7], [4, 8, 9]], dtype=np.int16)
        a = _arr(data)
        out = a.diff(axis=0)
        self.assertEqual(out.shape, (1, 3))
        self.assertEqual(out.dtype, DType.INT16)
        self.assertEqual(out.tolist(), [[3, 6, 2]])
        self.assertEqual(a.diff(axis=1).tolist(), [[1, 5], [4, 1]])
        np.testing.assert_array_equal(a.diff(2, axis=1).to_numpy(), np.diff(data, 2, axis=1))

    def test_integer_results_wrap(self) -> None:
        a = _arr(np.array([5, 2], dtype=np.uint8))
        self.assertEqual(a.diff().tolist(), [253])

    def test_on_flipped_view(self) -> None:
        a = _arr([1, 2, 4, 7]).flip()
        self.assertEqual(a.diff().tolist(), [-3.0, -2.0, -1.0])

    def test_order_out_of_range(self) -> None:
        a = _arr(np.arange(12, dtype=np.float64))
        for n in (-1, 10, 12):
            with self.assertRaises(ValueError) as ctx:
                a.diff(n)
            self.assertEqual(str(ctx.exception), "differentiation order out of range")
        with self.assertRaises(ValueError):
            _arr([1.0, 2.0, 3.0, 4.0]).diff(4)

    def test_argument_types(self) -> None:
        a = _arr([1.0, 2.0, 3.0])
        with self.assertRaises(TypeError):
            a.diff(1.5)
        with self.assertRaises(TypeError):
            a.diff(1, axis=None)
        with self.assertRaises(AxisError):
            a.diff(1, axis=1)

    def test_boolean_is_rejected(self) -> None:
        with self.assertRaises(DTypeNotSupportedError):
            _arr([True, False, True]).diff()


class TestFlip(unittest.TestCase):
    def setUp(self) -> None:
        self.data = np.arange(24, dtype=np.int16).reshape(2, 3, 4)
        self.a = _arr(self.data)

    def test_axis_flip_is_a_view(self) -> None:
        v = self.a.flip(1)
        self.assertIs(v.storage, self.a.storage)
        self.assertEqual(v.strides, (12, -4, 1))
        self.assertEqual(v.offset, 8)
        self.assertFalse(v.dense)
        np.testing.assert_array_equal(v.to_numpy(), np.flip(self.data, 1))

    def test_every_axis_matches_numpy(self) -> None:
        for axis in (0, 1, 2, -1):
            np.testing.assert_array_equal(
                self.a.flip(axis).to_numpy(), np.flip(self.data, axis)
            )

    def test_flattened_flip_is_a_rank_one_copy(self) -> None:
        v = self.a.flip()
        self.assertEqual(v.shape, (24,))
        self.assertIsNot(v.storage, self.a.storage)
        self.assertEqual(v.tolist(), list(range(23, -1, -1)))

    def test_self_inverse(self) -> None:
        for axis in (0, 1, 2):
            self.assertEqual(self.a.flip(axis).flip(axis).tolist(), self.a.tolist())
        self.assertEqual(self.a.flip().flip().tolist(), self.a.flatten().tolist())

    def test_views_compose(self) -> None:
        v = self.a.flip(0).flip(2)
        np.testing.assert_array_equal(v.to_numpy(), self.data[::-1, :, ::-1])

    def test_boolean_flag_is_kept(self) -> None:
        v = _arr([True, False, False]).flip(0)
        self.assertTrue(v.boolean)
        self.assertEqual(v.tolist(), [False, False, True])

    def test_empty(self) -> None:
        a = NDArray((0,), DType.UINT8)
        self.assertEqual(a.flip().tolist(), [])
        self.assertEqual(a.flip(0).tolist(), [])

    def test_axis_validation(self) -> None:
        with self.assertRaises(TypeError) as ctx:
            self.a.flip("x")
        self.assertEqual(str(ctx.exception), "wrong axis index")
        with self.assertRaises(ValueError):
            self.a.flip(3)


class TestRoll(unittest.TestCase):
    def test_flattened_examples(self) -> None:
        a = _arr([1, 2, 3, 4, 5])
        self.assertEqual(a.roll(2).tolist(), [4.0, 5.0, 1.0, 2.0, 3.0])
        self.assertEqual(a.roll(-1).tolist(), [2.0, 3.0, 4.0, 5.0, 1.0])
        self.assertEqual(a.roll(7).tolist(), a.roll(2).tolist())
        self.assertEqual(a.roll(0).tolist(), a.tolist())

    def test_flattened_keeps_shape(self) -> None:
        a = _arr([[1, 2, 3], [4, 5, 6]])
        out = a.roll(1)
        self.assertEqual(out.shape, (2, 3))
        self.assertEqual(out.tolist(), [[6.0, 1.0, 2.0], [3.0, 4.0, 5.0]])

    def test_along_axes_matches_numpy(self) -> None:
        data = np.arange(24, dtype=np.int8).reshape(2, 3, 4)
        a = _arr(data)
        for axis in (0, 1, 2, -2):
            for d in (-5, -1, 0, 1, 2, 7):
                np.testing.assert_array_equal(
                    a.roll(d, axis).to_numpy(), np.roll(data, d, axis)
                )

    def test_round_trip_and_full_period(self) -> None:
        a = _arr(np.arange(12, dtype=np.uint16).reshape(3, 4))
        for axis in (None, 0, 1):
            self.assertEqual(a.roll(5, axis).roll(-5, axis).tolist(), a.tolist())
        self.assertEqual(a.roll(3, 0).tolist(), a.tolist())
        self.assertEqual(a.roll(4, 1).tolist(), a.tolist())
        self.assertEqual(a.roll(12).tolist(), a.tolist())

    def test_result_is_a_fresh_dense_array(self) -> None:
        a = _arr([[1.0, 2.0], [3.0, 4.0]]).flip(1)
        out = a.roll(1, 1)
        self.assertTrue(out.dense)
        self.assertIsNot(out.storage, a.storage)
        self.assertEqual(out.tolist(), [[1.0, 2.0], [3.0, 4.0]])

    def test_boolean_flag_is_kept(self) -> None:
        out = _arr([True, False, False]).roll(1)
        self.assertTrue(out.boolean)
        self.assertEqual(out.tolist(), [False, True, False])

    def test_empty(self) -> None:
        self.assertEqual(NDArray((0,)).roll(3).tolist(), [])
        self.assertEqual(NDArray((2, 0)).roll(1, 1).tolist(), [[], []])

    def test_argument_validation(self) -> None:
        a = _arr([1.0, 2.0])
        with self.assertRaises(TypeError):
            a.roll(1.5)
        with self.assertRaises(TypeError):
            a.roll(True)
        with self.assertRaises(TypeError):
            a.roll(1, "x")
        with self.assertRaises(ValueError):
            a.roll(1, 1)


@unittest.skipIf(RANK_CAP < 4, "needs four-dimensional arrays")
class TestRankFour(unittest.TestCase):
    def setUp(self) -> None:
        rng = np.random.default_rng(0)
        self.data = rng.integers(-50, 50, size=(2, 3, 4, 5)).astype(np.float64)
        dense = _arr(self.data)
        self.cases = [
            (dense, self.data),
            (dense.flip(1).flip(3), self.data[:, ::-1, :, ::-1]),
        ]

    def test_diff_every_axis(self) -> None:
        for a, ref in self.cases:
            for axis in range(-4, 4):
                np.testing.assert_allclose(
                    a.diff(1, axis).to_numpy(), np.diff(ref, 1, axis)
                )
            np.testing.assert_allclose(a.diff(3).to_numpy(), np.diff(ref, 3))

    def test_flip_every_axis(self) -> None:
        for a, ref in self.cases:
            for axis in range(-4, 4):
                np.testing.assert_array_equal(
                    a.flip(axis).to_numpy(), np.flip(ref, axis)
                )
            np.testing.assert_array_equal(
                a.flip().to_numpy(), np.flip(ref.reshape(-1))
            )

    def test_roll_every_axis(self) -> None:
        for a, ref in self.cases:
            for d in (-7, -1, 3, 13):
                np.testing.assert_array_equal(a.roll(d).to_numpy(), np.roll(ref, d))
                for axis in range(-4, 4):
                    np.testing.assert_array_equal(
                        a.roll(d, axis).to_numpy(), np.roll(ref, d, axis)
                    )


if __name__ == "__main__":
    unittest.main()
