"""
Fixed-capacity sample history.

A ring buffer over a preallocated float64 arena. ``head`` indexes the newest
sample; pushing moves ``head`` one slot back (mod N) and overwrites the
oldest sample there, so the buffer never allocates after construction.

Logical order is newest to oldest, which is the order the filter
recurrences take their dot products in:

    history[0] = x[n], history[1] = x[n-1], ..., history[N-1] = x[n-N+1]
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from tapfilter.coefficients import ArrayF
from tapfilter.errors import ConfigError


class SampleHistory:
    """
    The N most recent real samples, newest first, initially all 0.0.

    Example:
        >>> h = SampleHistory(3)
        >>> h.push(1.0); h.push(2.0)
        >>> list(h)
        [2.0, 1.0, 0.0]
    """

    __slots__ = ("data", "head")

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, (int, np.integer)):
            raise ConfigError(f"capacity must be an integer, got {type(capacity).__name__}")
        if capacity <= 0:
            raise ConfigError(f"capacity must be positive, got {capacity}")

        # Raw arena and newest-sample index; the compiled engine advances
        # both in place.
        self.data: ArrayF = np.zeros(int(capacity), dtype=np.float64)
        self.head: int = 0

    @property
    def capacity(self) -> int:
        return int(self.data.shape[0])

    def __len__(self) -> int:
        return self.capacity

    def push(self, sample: float) -> None:
        """Insert ``sample`` as the newest entry, discarding the oldest."""
        self.head = (self.head - 1) % self.data.shape[0]
        self.data[self.head] = sample

    def __getitem__(self, i: int) -> float:
        n = self.data.shape[0]
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"history index out of range for capacity {n}")
        return float(self.data[(self.head + i) % n])

    def __iter__(self) -> Iterator[float]:
        n = self.data.shape[0]
        for i in range(n):
            yield float(self.data[(self.head + i) % n])

    def to_array(self) -> ArrayF:
        """Copy of the history, newest first."""
        return np.roll(self.data, -self.head)

    def __repr__(self) -> str:
        return f"SampleHistory(capacity={self.capacity}, samples={self.to_array().tolist()})"
