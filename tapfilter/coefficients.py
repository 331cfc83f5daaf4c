"""
Filter coefficient vectors.

Convention (standard difference-equation signs):

    a[0]·y[n] = Σᵢ b[i]·x[n-i] - Σᵢ₌₁ a[i]·y[n-i]

An FIR filter has ``a = None``. Coefficients are validated once here and
stored as read-only float64 arrays, so a filter built from them can never
fail during steady-state processing.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
import numpy.typing as npt

from tapfilter.errors import ConfigError

ArrayF = npt.NDArray[np.floating]


def _as_taps(values, name: str) -> ArrayF:
    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as err:
        raise ConfigError(f"{name} must be a sequence of real numbers") from err

    if arr.ndim != 1:
        raise ConfigError(f"{name} must be 1D, got shape {arr.shape}")
    if arr.shape[0] == 0:
        raise ConfigError(f"{name} cannot be empty")
    if not np.all(np.isfinite(arr)):
        raise ConfigError(f"{name} must contain only finite values")

    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Coefficients:
    """
    Validated feed-forward (``b``) and optional feedback (``a``) taps.

    Both vectors have the same length N (the filter order plus one).
    ``a[0]`` must be nonzero.
    """

    b: ArrayF  # Feed-forward taps (N,)
    a: Optional[ArrayF] = None  # Feedback taps (N,), None for FIR

    def __post_init__(self):
        b = _as_taps(self.b, "b")
        object.__setattr__(self, "b", b)

        if self.a is not None:
            a = _as_taps(self.a, "a")
            if a.shape[0] != b.shape[0]:
                raise ConfigError(
                    f"a and b must have the same length, got len(a)={a.shape[0]}, "
                    f"len(b)={b.shape[0]}"
                )
            if a[0] == 0.0:
                raise ConfigError("a[0] must be nonzero (it divides every output sample)")
            object.__setattr__(self, "a", a)

    @property
    def taps(self) -> int:
        return int(self.b.shape[0])

    @property
    def is_recursive(self) -> bool:
        return self.a is not None

    def check_taps(self, taps: Optional[int]) -> None:
        """Raise ConfigError unless the vectors have exactly ``taps`` elements."""
        if taps is None:
            return
        if isinstance(taps, bool) or not isinstance(taps, (int, np.integer)):
            raise ConfigError(f"taps must be an integer, got {type(taps).__name__}")
        if taps <= 0:
            raise ConfigError(f"taps must be positive, got {taps}")
        if self.taps != taps:
            raise ConfigError(f"Filter has a fixed capacity of {taps} taps, got {self.taps}")

    def to_npz(self, path: Path) -> None:
        if self.a is None:
            np.savez_compressed(path, b=self.b)
        else:
            np.savez_compressed(path, b=self.b, a=self.a)

    @staticmethod
    def from_npz(path: Path) -> "Coefficients":
        with np.load(path) as data:
            a = data["a"] if "a" in data.files else None
            return Coefficients(b=data["b"], a=a)
