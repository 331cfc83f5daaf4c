"""
Infinite impulse response filter (direct form I).

Convention:
    a[0]·y[n] = Σᵢ b[i]·x[n-i] - Σᵢ₌₁ a[i]·y[n-i]

The feedback taps a[1:] are stored negated so the recurrence is a single
running sum divided by a[0]. Callers always pass (and read back) ``a`` in
the convention above.
"""

from __future__ import annotations

import warnings
from typing import Optional, Sequence, Union

import numpy as np

from tapfilter.coefficients import ArrayF, Coefficients
from tapfilter.core import FilterCore
from tapfilter.engines import FilterEngine, select_engine
from tapfilter.errors import ConfigError
from tapfilter.history import SampleHistory
from tapfilter.logging import get_logger

logger = get_logger(__name__)

BIQUAD_TAPS = 3


class IIRFilter(FilterCore):
    """
    Recursive filter with matching feed-forward and feedback tap counts.

    Args:
        b: Feed-forward taps (N,)
        a: Feedback taps (N,), a[0] != 0
        taps: Fixed capacity. When given, len(b) and len(a) must equal it.
        use_numba: Evaluate with the compiled engine (default) or the
            reference Python engine.

    Raises:
        ConfigError: If a[0] == 0, lengths differ, or ``taps`` does not match.

    Warns:
        RuntimeWarning: If the feedback polynomial has a root on or outside
            the unit circle (the filter is still built).

    Example:
        >>> rc = IIRFilter([1.0, 1.0, 0.0], [21.0, -19.0, 0.0])  # RC=1, T=0.1
        >>> round(rc.process_one(1.0), 6)
        0.047619
    """

    def __init__(
        self,
        b: Union[Sequence[float], ArrayF],
        a: Union[Sequence[float], ArrayF],
        taps: Optional[int] = None,
        use_numba: bool = True,
    ):
        self._init(Coefficients(b=b, a=a), taps, use_numba)

    @classmethod
    def from_coefficients(
        cls, coefficients: Coefficients, taps: Optional[int] = None, use_numba: bool = True
    ) -> "IIRFilter":
        """Build from already validated coefficients (feedback taps required)."""
        if not coefficients.is_recursive:
            raise ConfigError("IIR filters need feedback taps a, got None")
        filt = cls.__new__(cls)
        filt._init(coefficients, taps, use_numba)
        return filt

    def _init(
        self,
        coefficients: Coefficients,
        taps: Optional[int],
        use_numba: bool,
        stacklevel: int = 3,
    ) -> None:
        """``stacklevel`` points the stability warning at the caller's frame."""
        coefficients.check_taps(taps)
        N = coefficients.taps

        a_neg = -coefficients.a
        a_neg[0] = coefficients.a[0]
        a_neg.setflags(write=False)

        self.coefficients = coefficients
        self.use_numba = use_numba
        self.engine: FilterEngine = select_engine(use_numba)
        self._a_neg = a_neg
        self._x = SampleHistory(N)
        self._y = SampleHistory(N)

        self._x1 = np.zeros(1, dtype=np.float64)
        self._y1 = np.zeros(1, dtype=np.float64)

        if not self.is_stable:
            warnings.warn(
                f"Feedback taps a={coefficients.a.tolist()} have poles on or outside "
                f"the unit circle; the output may grow without bound",
                RuntimeWarning,
                stacklevel=stacklevel,
            )

        logger.debug(f"IIR filter: taps={N}, engine={type(self.engine).__name__}")

    @property
    def taps(self) -> int:
        return self.coefficients.taps

    @property
    def b(self) -> ArrayF:
        return self.coefficients.b

    @property
    def a(self) -> ArrayF:
        return self.coefficients.a

    @property
    def x_history(self) -> SampleHistory:
        return self._x

    @property
    def y_history(self) -> SampleHistory:
        return self._y

    @property
    def is_stable(self) -> bool:
        """True if every pole lies strictly inside the unit circle."""
        poles = np.roots(self.coefficients.a)
        return bool(np.all(np.abs(poles) < 1.0))

    def process_one(self, sample: float) -> float:
        self._x1[0] = sample
        self.engine.iir_run(self._x, self._y, self.coefficients.b, self._a_neg, self._x1, self._y1)
        return self._y1.item(0)

    def _process_block(self, x: ArrayF, y: ArrayF) -> None:
        self.engine.iir_run(self._x, self._y, self.coefficients.b, self._a_neg, x, y)

    def get_info(self) -> dict:
        """Get filter configuration info."""
        return {
            "kind": "iir",
            "taps": self.taps,
            "engine": type(self.engine).__name__,
            "stable": self.is_stable,
        }

    def __repr__(self) -> str:
        return f"IIRFilter(b={self.b.tolist()}, a={self.a.tolist()})"


def biquad(
    b: Union[Sequence[float], ArrayF],
    a: Union[Sequence[float], ArrayF],
    use_numba: bool = True,
) -> IIRFilter:
    """
    Second-order section: an IIRFilter fixed at 3 taps.

    Raises:
        ConfigError: If b or a does not have exactly 3 taps, or a[0] == 0.
    """
    filt = IIRFilter.__new__(IIRFilter)
    filt._init(Coefficients(b=b, a=a), BIQUAD_TAPS, use_numba)
    return filt
