"""
Benchmark for filter throughput.

Measures:
- Block processing time vs. number of taps (FIR and IIR)
- Per-sample process_one overhead
- Numba engine vs. reference Python engine

Usage:
    python benchmarks/benchmark_filters.py
"""

import time

import numpy as np

from tapfilter import FIRFilter, IIRFilter, NumbaEngine


def benchmark_block(make_filter, x: np.ndarray, n_runs: int = 5) -> tuple[float, float]:
    """
    Time block processing on fresh filters.

    Returns:
        (mean_time, std_time) in seconds
    """
    times = []
    for _ in range(n_runs):
        filt = make_filter()
        start = time.perf_counter()
        filt.process(x)
        times.append(time.perf_counter() - start)
    return np.mean(times), np.std(times)


def run_taps_benchmark() -> dict:
    """Block throughput vs. number of taps, Numba engine."""
    print("=" * 70)
    print("BENCHMARK 1: Block Processing vs. Number of Taps")
    print("=" * 70)

    rng = np.random.default_rng(42)
    x = rng.standard_normal(48000)
    results = {}

    for taps in [3, 9, 33, 129]:
        b = rng.standard_normal(taps) / taps
        a = np.zeros(taps)
        a[0] = 1.0
        a[1] = -0.5

        fir_mean, _ = benchmark_block(lambda: FIRFilter(b), x)
        iir_mean, _ = benchmark_block(lambda: IIRFilter(b, a), x)
        results[taps] = (fir_mean, iir_mean)

        print(
            f"taps={taps:4d}  FIR: {fir_mean * 1e3:8.3f} ms ({len(x) / fir_mean / 1e6:6.2f} MS/s)  "
            f"IIR: {iir_mean * 1e3:8.3f} ms ({len(x) / iir_mean / 1e6:6.2f} MS/s)"
        )

    return results


def run_engine_benchmark() -> dict:
    """Numba vs. reference engine on a 9-tap IIR."""
    print("=" * 70)
    print("BENCHMARK 2: Numba vs. Reference Engine (9-tap IIR)")
    print("=" * 70)

    x = np.random.default_rng(0).standard_normal(8192)
    b = np.full(9, 1.0 / 9.0)
    a = np.array([1.0, -0.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0])

    numba_mean, _ = benchmark_block(lambda: IIRFilter(b, a, use_numba=True), x)
    ref_mean, _ = benchmark_block(lambda: IIRFilter(b, a, use_numba=False), x, n_runs=2)

    print(f"Numba:     {numba_mean * 1e3:8.3f} ms")
    print(f"Reference: {ref_mean * 1e3:8.3f} ms")
    print(f"Speedup:   {ref_mean / numba_mean:8.1f}x")
    return {"numba": numba_mean, "reference": ref_mean}


def run_process_one_benchmark() -> float:
    """Per-call overhead of streaming one sample at a time."""
    print("=" * 70)
    print("BENCHMARK 3: process_one Overhead")
    print("=" * 70)

    filt = IIRFilter([0.0675, 0.1349, 0.0675], [1.0, -1.1430, 0.4128])
    x = np.random.default_rng(1).standard_normal(20000).tolist()

    start = time.perf_counter()
    for v in x:
        filt.process_one(v)
    per_sample = (time.perf_counter() - start) / len(x)

    print(f"process_one: {per_sample * 1e6:.2f} µs/sample")
    return per_sample


if __name__ == "__main__":
    NumbaEngine().warmup()
    run_taps_benchmark()
    run_engine_benchmark()
    run_process_one_benchmark()
