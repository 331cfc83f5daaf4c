"""
SampleHistory ring-buffer tests.

The history must behave like a fixed-length queue read newest first:
push newest, evict oldest, never grow.
"""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from tapfilter import ConfigError, SampleHistory


class TestSampleHistory:
    """Push / evict / iteration order."""

    def test_initial_state_is_zero(self):
        h = SampleHistory(4)
        assert len(h) == 4
        assert h.capacity == 4
        assert list(h) == [0.0, 0.0, 0.0, 0.0]

    def test_push_newest_first(self):
        h = SampleHistory(3)
        h.push(1.0)
        h.push(2.0)
        assert list(h) == [2.0, 1.0, 0.0]
        assert h[0] == 2.0
        assert h[1] == 1.0

    def test_push_evicts_oldest(self):
        h = SampleHistory(3)
        for v in [1.0, 2.0, 3.0, 4.0, 5.0]:
            h.push(v)
        assert list(h) == [5.0, 4.0, 3.0]
        assert len(h) == 3

    def test_wraps_many_times(self):
        """After any number of pushes the history holds the last N values."""
        h = SampleHistory(5)
        values = np.arange(103, dtype=np.float64)
        for v in values:
            h.push(v)
        assert_array_equal(h.to_array(), values[::-1][:5])

    def test_negative_index_counts_from_oldest(self):
        h = SampleHistory(3)
        for v in [1.0, 2.0, 3.0]:
            h.push(v)
        assert h[-1] == 1.0
        assert h[-3] == 3.0

    def test_index_out_of_range(self):
        h = SampleHistory(3)
        with pytest.raises(IndexError):
            h[3]
        with pytest.raises(IndexError):
            h[-4]

    def test_capacity_one(self):
        h = SampleHistory(1)
        h.push(7.0)
        h.push(8.0)
        assert list(h) == [8.0]

    def test_push_does_not_reallocate(self):
        h = SampleHistory(4)
        arena = h.data
        for v in range(10):
            h.push(float(v))
        assert h.data is arena

    @pytest.mark.parametrize("capacity", [0, -3])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ConfigError):
            SampleHistory(capacity)

    def test_non_integer_capacity(self):
        with pytest.raises(ConfigError):
            SampleHistory(2.5)
