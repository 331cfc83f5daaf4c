"""
FIR filter tests.

Driving an FIR filter with Kronecker deltas must reproduce shifted, scaled
copies of its taps exactly (discrete convolution).
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal
from scipy.signal import lfilter

from tapfilter import (
    Coefficients,
    ConfigError,
    FIRFilter,
    impulse_train,
    triangular,
)


@pytest.fixture(params=[True, False], ids=["numba", "reference"])
def use_numba(request):
    return request.param


class TestFIRConvolution:
    """Convolution identity with a triangular window."""

    def test_triangle_with_impulse_train(self, use_numba):
        """
        Each delta yields a shifted copy of the triangle; the double-height
        delta yields a doubled copy.
        """
        tri = triangular(5, peak=1.0)
        deltas = impulse_train(32, positions=[0, 10, 20], amplitudes=[1.0, 1.0, 2.0])

        fir = FIRFilter(tri, taps=5, use_numba=use_numba)
        conv_output = np.zeros(32)
        fir.process(deltas, conv_output)

        zeros = np.zeros(5)
        assert_array_equal(conv_output[0:5], tri)
        assert_array_equal(conv_output[5:10], zeros)
        assert_array_equal(conv_output[10:15], tri)
        assert_array_equal(conv_output[15:20], zeros)
        assert_array_equal(conv_output[20:25], 2.0 * tri)
        assert_array_equal(conv_output[25:], np.zeros(7))

    def test_impulse_response_is_taps(self, use_numba):
        b = np.array([0.5, -1.25, 3.0, 0.125])
        fir = FIRFilter(b, use_numba=use_numba)
        y = fir.process(impulse_train(8, [0]))
        assert_array_equal(y[:4], b)
        assert_array_equal(y[4:], np.zeros(4))

    def test_matches_scipy_lfilter(self, use_numba):
        rng = np.random.default_rng(42)
        b = rng.standard_normal(16)
        x = rng.standard_normal(500)

        y = FIRFilter(b, use_numba=use_numba).process(x)

        assert_allclose(y, lfilter(b, [1.0], x), rtol=1e-10, atol=1e-12)

    def test_moving_average(self, use_numba):
        fir = FIRFilter([0.5, 0.5], use_numba=use_numba)
        assert fir.process_one(1.0) == 0.5
        assert fir.process_one(1.0) == 1.0
        assert fir.process_one(0.0) == 0.5
        assert fir.process_one(0.0) == 0.0

    def test_history_holds_latest_inputs(self, use_numba):
        fir = FIRFilter([1.0, 0.0, 0.0], use_numba=use_numba)
        fir.process([1.0, 2.0, 3.0, 4.0])
        assert_array_equal(fir.x_history.to_array(), [4.0, 3.0, 2.0])

    def test_nan_propagates_for_n_samples(self, use_numba):
        """A NaN input poisons exactly the outputs whose window contains it."""
        fir = FIRFilter([1.0, 1.0], use_numba=use_numba)
        y = fir.process([1.0, np.nan, 1.0, 1.0, 1.0])
        assert y[0] == 1.0
        assert np.isnan(y[1])
        assert np.isnan(y[2])
        assert_array_equal(y[3:], [2.0, 2.0])


class TestFIRConstruction:
    """Validation and accessors."""

    def test_taps_mismatch(self):
        with pytest.raises(ConfigError, match="fixed capacity"):
            FIRFilter([1.0, 2.0, 3.0], taps=5)

    def test_empty_taps(self):
        with pytest.raises(ConfigError):
            FIRFilter([])

    def test_accessors(self):
        fir = FIRFilter([1.0, 2.0, 3.0], use_numba=False)
        assert fir.taps == 3
        assert_array_equal(fir.b, [1.0, 2.0, 3.0])
        assert fir.get_info() == {"kind": "fir", "taps": 3, "engine": "ReferenceEngine"}
        assert repr(fir) == "FIRFilter(b=[1.0, 2.0, 3.0])"

    def test_from_coefficients(self):
        fir = FIRFilter.from_coefficients(Coefficients(b=[0.25, 0.75]), taps=2)
        assert fir.process_one(4.0) == 1.0

    def test_from_coefficients_rejects_feedback(self):
        with pytest.raises(ConfigError):
            FIRFilter.from_coefficients(Coefficients(b=[1.0, 0.0], a=[1.0, 0.5]))
