"""
scripts/bench_reductions_vs_numpy.py

Benchmark script (NOT a unit test) comparing the ndcore strided engine with
NumPy for every reduction and shape transform.

For each operation it
1) checks that ndcore and NumPy agree on the result (parity), and
2) times both at the Python API level.

ndcore walks its arrays element by element in Python, so large slowdowns
against NumPy are expected; the point is to track regressions between
revisions, not to compete.

Usage examples
--------------
# Default: a 3-axis float array
python scripts/bench_reductions_vs_numpy.py

# Another shape / dtype
python scripts/bench_reductions_vs_numpy.py --shape 16 32 --dtype int16

# More repeats (more stable)
python scripts/bench_reductions_vs_numpy.py --repeats 30 --warmup 5
"""

from __future__ import annotations

import os
import sys

# Ensure repo_root/src is importable when running this file directly:
# repo_root/
#   src/ndcore/...
#   scripts/bench_reductions_vs_numpy.py
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

import argparse
import statistics
import time
import warnings
from typing import Any, Callable

import numpy as np

import ndcore


def _time_one(fn: Callable[[], Any], *, warmup: int, repeats: int) -> list[float]:
    for _ in range(warmup):
        fn()

    times: list[float] = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def _fmt_seconds(x: float) -> str:
    if x < 1e-6:
        return f"{x*1e9:.2f} ns"
    if x < 1e-3:
        return f"{x*1e6:.2f} µs"
    if x < 1:
        return f"{x*1e3:.2f} ms"
    return f"{x:.3f} s"


def _as_numpy(result: Any) -> np.ndarray:
    if isinstance(result, ndcore.NDArray):
        return result.to_numpy()
    return np.asarray(result)


def _print_row(name: str, ok: bool, numpy_s: float, ndcore_s: float) -> None:
    ratio = (ndcore_s / numpy_s) if numpy_s > 0 else float("inf")
    print(
        f"{name:<18}  parity={'ok' if ok else 'MISMATCH':<8}  "
        f"numpy(median)={_fmt_seconds(numpy_s):>10}  "
        f"ndcore(median)={_fmt_seconds(ndcore_s):>10}  "
        f"slowdown={ratio:>9.1f}x"
    )


def bench(shape: tuple[int, ...], dtype: str, *, warmup: int, repeats: int) -> int:
    """Run every case; return the number of parity mismatches."""
    rng = np.random.default_rng(0)
    if dtype == "float":
        data = rng.standard_normal(shape)
    else:
        info = np.iinfo(np.dtype(dtype))
        data = rng.integers(info.min, info.max, size=shape, endpoint=True).astype(dtype)

    x = ndcore.array(data, dtype)
    last = len(shape) - 1

    # Integer sums wrap in ndcore (narrow accumulator); compare against the
    # same modular arithmetic in NumPy.
    def np_sum(a, axis=None):
        return np.sum(a, axis=axis, dtype=a.dtype)

    cases: list[tuple[str, Callable[[], Any], Callable[[], Any]]] = [
        ("sum", lambda: ndcore.sum(x), lambda: np_sum(data)),
        ("sum(axis=0)", lambda: ndcore.sum(x, 0), lambda: np_sum(data, 0)),
        ("mean", lambda: ndcore.mean(x), lambda: np.mean(data)),
        ("std(ddof=1)", lambda: ndcore.std(x, None, 1), lambda: np.std(data, ddof=1)),
        ("min(axis=-1)", lambda: ndcore.min(x, -1), lambda: np.min(data, axis=-1)),
        ("max", lambda: ndcore.max(x), lambda: np.max(data)),
        ("argmin", lambda: ndcore.argmin(x), lambda: np.argmin(data)),
        ("argmax(axis=0)", lambda: ndcore.argmax(x, 0), lambda: np.argmax(data, axis=0)),
        ("diff(n=2)", lambda: ndcore.diff(x, 2), lambda: np.diff(data, 2)),
        ("flip(axis=0)", lambda: ndcore.flip(x, 0), lambda: np.flip(data, 0)),
        ("flip", lambda: ndcore.flip(x), lambda: np.flip(data.reshape(-1))),
        ("roll(3)", lambda: ndcore.roll(x, 3), lambda: np.roll(data, 3)),
        ("roll(-2, last)", lambda: ndcore.roll(x, -2, last), lambda: np.roll(data, -2, last)),
    ]

    # Wrapped integer sums warn by default; keep the warnings out of the timings.
    warnings.filterwarnings("ignore", category=RuntimeWarning)

    print("\n" + "=" * 90)
    print(f"Shape: {shape}  dtype={dtype}  (warmup={warmup}, repeats={repeats})")
    print("-" * 90)

    mismatches = 0
    for name, run_ndcore, run_numpy in cases:
        ok = np.allclose(
            _as_numpy(run_ndcore()).astype(np.float64),
            _as_numpy(run_numpy()).astype(np.float64),
        )
        mismatches += not ok
        t_ndcore = _time_one(run_ndcore, warmup=warmup, repeats=repeats)
        t_numpy = _time_one(run_numpy, warmup=warmup, repeats=repeats)
        _print_row(name, ok, statistics.median(t_numpy), statistics.median(t_ndcore))
    return mismatches


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--shape", type=int, nargs="+", default=[4, 8, 16])
    ap.add_argument(
        "--dtype",
        default="float",
        choices=["float", "uint8", "int8", "uint16", "int16"],
    )
    ap.add_argument("--warmup", type=int, default=2)
    ap.add_argument("--repeats", type=int, default=10)
    args = ap.parse_args()

    mismatches = bench(
        tuple(args.shape), args.dtype, warmup=args.warmup, repeats=args.repeats
    )
    if mismatches:
        print(f"\n{mismatches} parity mismatch(es)")
        sys.exit(1)


if __name__ == "__main__":
    main()
