"""
Shared processing contract for all filters.

Every filter consumes one sample and returns one sample per call, mutating
its own history. Block processing is defined in terms of that: for any
input, ``process(x)`` returns exactly what calling ``process_one`` on each
element in order would.

Block length policy: when an output buffer is supplied it must have exactly
as many elements as the input, for every filter. A mismatch raises
UsageError before any state is touched.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import MutableSequence, Optional, Sequence, Union

import numpy as np

from tapfilter.coefficients import ArrayF
from tapfilter.errors import UsageError


class FilterCore(ABC):
    """Single-sample / block processing contract."""

    @abstractmethod
    def process_one(self, sample: float) -> float:
        """Consume one input sample and return one output sample."""

    def process(
        self,
        x: Union[Sequence[float], ArrayF],
        out: Optional[Union[MutableSequence[float], ArrayF]] = None,
    ) -> ArrayF:
        """
        Filter a block of samples, retaining state across calls.

        Args:
            x: Input samples (1D)
            out: Optional output buffer with len(out) == len(x). A float64
                ndarray is written in place and returned; any other mutable
                sequence is filled element by element.

        Returns:
            Output samples as a float64 array (same length as ``x``)

        Raises:
            UsageError: If ``x`` is not 1D or ``out`` has the wrong length.
        """
        try:
            x_arr = np.asarray(x, dtype=np.float64)
        except (TypeError, ValueError) as err:
            raise UsageError("Input must be a sequence of real numbers") from err

        if x_arr.ndim != 1:
            raise UsageError(f"Input must be 1D, got shape {x_arr.shape}")
        x_arr = np.ascontiguousarray(x_arr)
        n = x_arr.shape[0]

        if out is not None and len(out) != n:
            raise UsageError(
                f"Output length must equal input length, got len(out)={len(out)}, len(x)={n}"
            )

        if (
            isinstance(out, np.ndarray)
            and out.dtype == np.float64
            and out.ndim == 1
            and out.flags.c_contiguous
            and out.flags.writeable
        ):
            y = out
            # A partly overlapping view would be read after being written
            if y is not x_arr and np.shares_memory(x_arr, y):
                x_arr = x_arr.copy()
        else:
            y = np.empty(n, dtype=np.float64)

        self._process_block(x_arr, y)

        if out is not None and y is not out:
            for i, value in enumerate(y.tolist()):
                out[i] = value

        return y

    def _process_block(self, x: ArrayF, y: ArrayF) -> None:
        """Default block evaluation: one ``process_one`` call per sample."""
        for n in range(x.shape[0]):
            y[n] = self.process_one(x.item(n))
