"""
Finite impulse response filter.

    y[n] = Σᵢ b[i]·x[n-i],  i = 0..N-1

The output depends only on the N most recent inputs, so driving the filter
with a stream is a causal convolution of that stream with ``b``.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from tapfilter.coefficients import ArrayF, Coefficients
from tapfilter.core import FilterCore
from tapfilter.engines import FilterEngine, select_engine
from tapfilter.errors import ConfigError
from tapfilter.history import SampleHistory
from tapfilter.logging import get_logger

logger = get_logger(__name__)


class FIRFilter(FilterCore):
    """
    Non-recursive filter over a fixed-capacity input history.

    Args:
        b: Feed-forward taps (N,)
        taps: Fixed capacity. When given, len(b) must equal it.
        use_numba: Evaluate with the compiled engine (default) or the
            reference Python engine.

    Raises:
        ConfigError: If ``b`` is empty, not 1D, non-finite, or does not
            match ``taps``.

    Example:
        >>> fir = FIRFilter([0.5, 0.5])
        >>> fir.process([1.0, 1.0, 0.0]).tolist()
        [0.5, 1.0, 0.5]
    """

    def __init__(
        self,
        b: Union[Sequence[float], ArrayF],
        taps: Optional[int] = None,
        use_numba: bool = True,
    ):
        self._init(Coefficients(b=b), taps, use_numba)

    @classmethod
    def from_coefficients(
        cls, coefficients: Coefficients, taps: Optional[int] = None, use_numba: bool = True
    ) -> "FIRFilter":
        """Build from already validated coefficients (feedback taps not allowed)."""
        if coefficients.is_recursive:
            raise ConfigError("FIR filters take feed-forward taps only, got feedback taps a")
        filt = cls.__new__(cls)
        filt._init(coefficients, taps, use_numba)
        return filt

    def _init(self, coefficients: Coefficients, taps: Optional[int], use_numba: bool) -> None:
        coefficients.check_taps(taps)

        self.coefficients = coefficients
        self.use_numba = use_numba
        self.engine: FilterEngine = select_engine(use_numba)
        self._x = SampleHistory(coefficients.taps)

        # Scratch buffers so process_one never allocates
        self._x1 = np.zeros(1, dtype=np.float64)
        self._y1 = np.zeros(1, dtype=np.float64)

        logger.debug(f"FIR filter: taps={coefficients.taps}, engine={type(self.engine).__name__}")

    @property
    def taps(self) -> int:
        return self.coefficients.taps

    @property
    def b(self) -> ArrayF:
        return self.coefficients.b

    @property
    def x_history(self) -> SampleHistory:
        return self._x

    def process_one(self, sample: float) -> float:
        self._x1[0] = sample
        self.engine.fir_run(self._x, self.coefficients.b, self._x1, self._y1)
        return self._y1.item(0)

    def _process_block(self, x: ArrayF, y: ArrayF) -> None:
        self.engine.fir_run(self._x, self.coefficients.b, x, y)

    def get_info(self) -> dict:
        """Get filter configuration info."""
        return {
            "kind": "fir",
            "taps": self.taps,
            "engine": type(self.engine).__name__,
        }

    def __repr__(self) -> str:
        return f"FIRFilter(b={self.b.tolist()})"
