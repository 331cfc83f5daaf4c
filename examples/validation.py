"""
Numerical validation of the filter engines against known responses.

Usage:
    python examples/validation.py
"""

import numpy as np
from scipy.fft import rfft

from tapfilter import (
    FIRFilter,
    IIRFilter,
    biquad,
    impulse_train,
    sample,
    triangular,
    unit_step,
)


def test_convolution_identity():
    """Test 1: deltas through a triangular FIR give shifted triangles."""
    tri = triangular(5)
    deltas = impulse_train(32, [0, 10, 20], [1.0, 1.0, 2.0])

    y = FIRFilter(tri, taps=5).process(deltas)

    assert np.array_equal(y[0:5], tri)
    assert np.array_equal(y[10:15], tri)
    assert np.array_equal(y[20:25], 2.0 * tri)
    assert not np.any(y[5:10]) and not np.any(y[15:20])
    print("✓ Convolution identity verified")


def test_bilinear_rc():
    """Test 2: bilinear-transformed RC low-pass vs analog step response."""
    rc, t_samp = 1.0, 0.1
    analog = sample(lambda t: 1.0 - np.exp(-t / rc), 0.0, 5.0, t_samp)

    k = 2.0 * rc / t_samp
    digital = biquad([1.0, 1.0, 0.0], [1.0 + k, 1.0 - k, 0.0]).process(unit_step(50))

    error = np.max(np.abs(analog - digital))
    print(f"Max step-response error: {error:.4f}")
    assert error <= 0.05, f"Bilinear RC mismatch: error={error}"
    print("✓ Bilinear transform equivalence verified")


def test_butterworth_rejection():
    """Test 3: 8th-order low-pass keeps f1=0.1 and removes f2=0.5."""
    b = [7.092397e-04, 5.673917e-03, 1.985871e-02, 3.971742e-02, 4.964678e-02,
         3.971742e-02, 1.985871e-02, 5.673917e-03, 7.092397e-04]
    a = [1.000000e+00, -2.652714e+00, 3.914857e+00, -3.608835e+00, 2.259673e+00,
         -9.570251e-01, 2.663485e-01, -4.404093e-02, 3.300823e-03]
    f1, f2 = 0.1, 0.5

    n = np.arange(1024)
    x = np.cos(2 * np.pi * f1 * n) + 2.0 * np.cos(2 * np.pi * f2 * n)
    y = IIRFilter(b, a, taps=9).process(x)

    Y = np.abs(rfft(np.concatenate([y, np.zeros(1024)])))
    peak_bin = int(np.argmax(Y))
    print(f"Spectral peak at bin {peak_bin} (expected {round(f1 * 2048)})")
    assert peak_bin == round(f1 * 2048)
    print("✓ High-order rejection verified")


def test_streaming_equals_block():
    """Test 4: one sample at a time equals one block."""
    x = np.random.default_rng(0).standard_normal(4096)
    block = IIRFilter([0.0675, 0.1349, 0.0675], [1.0, -1.1430, 0.4128]).process(x)

    streaming = IIRFilter([0.0675, 0.1349, 0.0675], [1.0, -1.1430, 0.4128])
    stream = np.array([streaming.process_one(v) for v in x])

    assert np.array_equal(block, stream)
    print("✓ Streaming / block equivalence verified")


if __name__ == "__main__":
    print("=" * 60)
    print("tapfilter validation")
    print("=" * 60)
    test_convolution_identity()
    test_bilinear_rc()
    test_butterworth_rejection()
    test_streaming_equals_block()
    print("\nAll validations passed")
