"""
Window generators used to build FIR taps.
"""

import numpy as np
from scipy.signal import windows

from tapfilter.coefficients import ArrayF
from tapfilter.errors import ConfigError


def triangular(width: int, peak: float = 1.0) -> ArrayF:
    """
    Symmetric triangular window whose maximum equals ``peak``.

    Odd widths reach ``peak`` at the centre sample, e.g. width 5 gives
    [1/3, 2/3, 1, 2/3, 1/3]·peak. Endpoints are nonzero, so every sample is
    a usable tap.

    Args:
        width: Number of samples (must be positive).
        peak: Value of the largest sample (default: 1.0).

    Returns:
        Window array of length ``width``, dtype float64.

    Raises:
        ConfigError: If width <= 0.
    """
    if width <= 0:
        raise ConfigError(f"Window width must be positive, got {width}")
    w = windows.triang(int(width), sym=True)
    return peak * w / np.max(w)
