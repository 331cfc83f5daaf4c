"""
Recurrence engines.

An engine evaluates a filter's recurrence over a block of samples, advancing
the filter's sample histories in place. Two implementations share one
accumulation order (feed-forward terms newest first, then feedback terms,
then the division by a[0]), so they produce the same samples:

- ReferenceEngine: plain Python over SampleHistory, easy to audit.
- NumbaEngine: compiled kernels working on the raw ring arenas.

The numba kernels are compiled without ``fastmath``: NaN/Inf must propagate
and the operation order must stay IEEE-exact.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numba import njit

from tapfilter.coefficients import ArrayF
from tapfilter.history import SampleHistory
from tapfilter.logging import get_logger

logger = get_logger(__name__)


class FilterEngine(Protocol):
    """Strategy interface for block evaluation of the filter recurrences."""

    def fir_run(self, x_hist: SampleHistory, b: ArrayF, x: ArrayF, y: ArrayF) -> None:
        """
        y[n] = Σᵢ b[i]·x[n-i], pushing every x[n] into ``x_hist``.

        Args:
            x_hist: Input history, capacity len(b)
            b: Feed-forward taps (N,)
            x: Input block (B,)
            y: Output block (B,), written in place
        """
        ...

    def iir_run(
        self,
        x_hist: SampleHistory,
        y_hist: SampleHistory,
        b: ArrayF,
        a_neg: ArrayF,
        x: ArrayF,
        y: ArrayF,
    ) -> None:
        """
        y[n] = (Σᵢ b[i]·x[n-i] + Σᵢ₌₁ a_neg[i]·y[n-i]) / a_neg[0].

        ``a_neg`` holds a[0] followed by the negated feedback taps.
        """
        ...


class ReferenceEngine:
    """Pure-Python engine. Slow, but every step maps onto the recurrence."""

    def fir_run(self, x_hist: SampleHistory, b: ArrayF, x: ArrayF, y: ArrayF) -> None:
        n_taps = b.shape[0]
        for n in range(x.shape[0]):
            x_hist.push(x.item(n))
            acc = 0.0
            for i in range(n_taps):
                acc += x_hist[i] * b.item(i)
            y[n] = acc

    def iir_run(
        self,
        x_hist: SampleHistory,
        y_hist: SampleHistory,
        b: ArrayF,
        a_neg: ArrayF,
        x: ArrayF,
        y: ArrayF,
    ) -> None:
        n_taps = b.shape[0]
        a0 = a_neg.item(0)
        for n in range(x.shape[0]):
            x_hist.push(x.item(n))
            acc = 0.0
            for i in range(n_taps):
                acc += x_hist[i] * b.item(i)
            # y_hist still holds y[n-1]..y[n-N]; the oldest one is not used
            # and gets overwritten by the push below.
            for i in range(1, n_taps):
                acc += y_hist[i - 1] * a_neg.item(i)
            acc /= a0
            y_hist.push(acc)
            y[n] = acc


@njit(cache=True)
def _numba_fir(data, head, b, x, y):
    """Ring-buffer FIR; returns the new head index."""
    n_taps = b.shape[0]
    for n in range(x.shape[0]):
        head -= 1
        if head < 0:
            head = n_taps - 1
        data[head] = x[n]

        acc = 0.0
        j = head
        for i in range(n_taps):
            acc += data[j] * b[i]
            j += 1
            if j == n_taps:
                j = 0
        y[n] = acc

    return head


@njit(cache=True)
def _numba_iir(x_data, x_head, y_data, y_head, b, a_neg, x, y):
    """Ring-buffer direct form I; returns the new (x_head, y_head)."""
    n_taps = b.shape[0]
    a0 = a_neg[0]
    for n in range(x.shape[0]):
        x_head -= 1
        if x_head < 0:
            x_head = n_taps - 1
        x_data[x_head] = x[n]

        acc = 0.0
        j = x_head
        for i in range(n_taps):
            acc += x_data[j] * b[i]
            j += 1
            if j == n_taps:
                j = 0

        # Previous outputs, newest first; the oldest slot is reserved for y[n]
        j = y_head
        for i in range(1, n_taps):
            acc += y_data[j] * a_neg[i]
            j += 1
            if j == n_taps:
                j = 0

        acc /= a0
        y_head -= 1
        if y_head < 0:
            y_head = n_taps - 1
        y_data[y_head] = acc
        y[n] = acc

    return x_head, y_head


class NumbaEngine:
    """
    Numba-compiled engine.

    Kernels are cached on disk and compiled on first use; ``warmup()``
    forces compilation up front for latency-sensitive callers.
    """

    def warmup(self) -> None:
        """Pre-compile the kernels for float64 blocks."""
        b = np.ones(2, dtype=np.float64)
        x = np.zeros(4, dtype=np.float64)
        y = np.empty(4, dtype=np.float64)
        self.fir_run(SampleHistory(2), b, x, y)
        self.iir_run(SampleHistory(2), SampleHistory(2), b, b, x, y)

    def fir_run(self, x_hist: SampleHistory, b: ArrayF, x: ArrayF, y: ArrayF) -> None:
        x_hist.head = int(_numba_fir(x_hist.data, x_hist.head, b, x, y))

    def iir_run(
        self,
        x_hist: SampleHistory,
        y_hist: SampleHistory,
        b: ArrayF,
        a_neg: ArrayF,
        x: ArrayF,
        y: ArrayF,
    ) -> None:
        x_head, y_head = _numba_iir(
            x_hist.data, x_hist.head, y_hist.data, y_hist.head, b, a_neg, x, y
        )
        x_hist.head = int(x_head)
        y_hist.head = int(y_head)


_REFERENCE_ENGINE = ReferenceEngine()
_NUMBA_ENGINE = NumbaEngine()


def select_engine(use_numba: bool = True) -> FilterEngine:
    """Return the shared engine instance for the requested backend."""
    if use_numba:
        logger.debug("Using Numba engine")
        return _NUMBA_ENGINE
    logger.debug("Using reference Python engine")
    return _REFERENCE_ENGINE
