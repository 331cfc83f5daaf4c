"""Window and test-signal generators."""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from tapfilter import ConfigError, impulse_train, sample, triangular, unit_step


class TestTriangular:
    """Symmetric triangular windows."""

    def test_width_five(self):
        assert_allclose(triangular(5), [1 / 3, 2 / 3, 1.0, 2 / 3, 1 / 3])

    def test_peak_scaling(self):
        w = triangular(7, peak=2.5)
        assert np.max(w) == 2.5
        assert w[3] == 2.5

    @pytest.mark.parametrize("width", [1, 2, 4, 5, 8, 11])
    def test_symmetric_and_positive(self, width):
        w = triangular(width)
        assert len(w) == width
        assert_allclose(w, w[::-1])
        assert np.all(w > 0)
        assert np.isclose(np.max(w), 1.0)

    def test_invalid_width(self):
        with pytest.raises(ConfigError):
            triangular(0)


class TestSignals:
    """Step, impulse train and sampled functions."""

    def test_unit_step(self):
        assert_array_equal(unit_step(4), [1.0, 1.0, 1.0, 1.0])
        assert_array_equal(unit_step(2, amplitude=-3.0), [-3.0, -3.0])

    def test_unit_step_negative_length(self):
        with pytest.raises(ConfigError):
            unit_step(-1)

    def test_impulse_train(self):
        x = impulse_train(32, [0, 10, 20], [1.0, 1.0, 2.0])
        assert x.shape == (32,)
        assert x[0] == 1.0 and x[10] == 1.0 and x[20] == 2.0
        assert np.count_nonzero(x) == 3

    def test_impulse_train_default_amplitudes(self):
        assert_array_equal(impulse_train(4, [1, 3]), [0.0, 1.0, 0.0, 1.0])

    def test_impulse_out_of_range(self):
        with pytest.raises(ConfigError):
            impulse_train(4, [4])

    def test_impulse_amplitude_count(self):
        with pytest.raises(ConfigError):
            impulse_train(4, [0, 1], [1.0])

    def test_sample_grid(self):
        x = sample(lambda t: 2.0 * t, 0.0, 1.0, 0.25)
        assert_allclose(x, [0.0, 0.5, 1.0, 1.5])

    def test_sample_count_is_robust_to_rounding(self):
        assert len(sample(np.exp, 0.0, 5.0, 0.1)) == 50

    @pytest.mark.parametrize("start,stop,step", [(0.0, 1.0, 0.0), (0.0, 1.0, -0.1), (1.0, 0.0, 0.1)])
    def test_sample_invalid(self, start, stop, step):
        with pytest.raises(ConfigError):
            sample(np.sin, start, stop, step)
