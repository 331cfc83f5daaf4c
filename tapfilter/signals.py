"""
Test-signal generators: steps, impulse trains and sampled continuous
functions.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import numpy as np

from tapfilter.coefficients import ArrayF
from tapfilter.errors import ConfigError


def _check_length(n: int) -> int:
    if n < 0:
        raise ConfigError(f"Signal length must be non-negative, got {n}")
    return int(n)


def unit_step(n: int, amplitude: float = 1.0) -> ArrayF:
    """Step of ``n`` samples, all equal to ``amplitude``."""
    return np.full(_check_length(n), amplitude, dtype=np.float64)


def impulse_train(
    n: int,
    positions: Sequence[int],
    amplitudes: Optional[Sequence[float]] = None,
) -> ArrayF:
    """
    Zeros with Kronecker deltas at ``positions``.

    Args:
        n: Signal length
        positions: Sample indices of the impulses (0 <= p < n)
        amplitudes: Height of each impulse (default: all 1.0)

    Returns:
        Signal of length ``n``

    Raises:
        ConfigError: If a position is out of range or the amplitude count
            differs from the position count.

    Example:
        >>> impulse_train(6, [0, 3], [1.0, 2.0]).tolist()
        [1.0, 0.0, 0.0, 2.0, 0.0, 0.0]
    """
    x = np.zeros(_check_length(n), dtype=np.float64)
    if amplitudes is None:
        amplitudes = [1.0] * len(positions)
    if len(amplitudes) != len(positions):
        raise ConfigError(
            f"Need one amplitude per impulse, got {len(amplitudes)} for {len(positions)}"
        )

    for p, amp in zip(positions, amplitudes):
        if not 0 <= p < n:
            raise ConfigError(f"Impulse position {p} outside [0, {n})")
        x[p] = amp
    return x


def sample(
    func: Callable[[float], float],
    start: float,
    stop: float,
    step: float,
) -> ArrayF:
    """
    Evaluate ``func`` at t = start, start + step, ... (stop excluded).

    Args:
        func: Continuous-time function of t
        start: First instant
        stop: End of the interval (exclusive)
        step: Sampling interval (must be positive)

    Returns:
        func(t) for every instant, dtype float64

    Raises:
        ConfigError: If step <= 0 or stop < start.
    """
    if step <= 0:
        raise ConfigError(f"Sampling interval must be positive, got {step}")
    if stop < start:
        raise ConfigError(f"stop ({stop}) must not precede start ({start})")

    # Guard against (stop - start) / step landing a hair above an integer
    count = int(np.ceil((stop - start) / step - 1e-9))
    t = start + step * np.arange(count, dtype=np.float64)
    return np.array([func(ti) for ti in t], dtype=np.float64)
