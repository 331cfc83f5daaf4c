"""
Fixed-order digital filters for streamed and block signals.

This package provides causal FIR and IIR filters that keep their sample
history between calls, so a signal can be fed one sample or one block at a
time with identical results.

Features:
---------
- Shared process_one / process contract for every filter
- Fixed-capacity ring-buffer sample histories (no per-sample allocation)
- FIR (convolution) and IIR (direct form I) filters, plus 3-tap biquads
- Numba-compiled and reference Python engines with identical arithmetic
- Coefficient validation up front: ConfigError at construction, never
  during processing

Typical usage:
--------------
    from tapfilter import IIRFilter, unit_step

    # Bilinear transform of an RC low-pass, RC=1s, T=0.1s
    rc = IIRFilter(b=[1.0, 1.0, 0.0], a=[21.0, -19.0, 0.0])
    y = rc.process(unit_step(50))

    # Streaming, one sample at a time
    y_next = rc.process_one(1.0)
"""

from tapfilter.errors import TapFilterError, ConfigError, UsageError
from tapfilter.coefficients import Coefficients, ArrayF
from tapfilter.history import SampleHistory
from tapfilter.core import FilterCore
from tapfilter.engines import FilterEngine, NumbaEngine, ReferenceEngine, select_engine
from tapfilter.fir import FIRFilter
from tapfilter.iir import IIRFilter, biquad
from tapfilter.windows import triangular
from tapfilter.signals import unit_step, impulse_train, sample

__version__ = "0.1.0"

__all__ = [
    # Errors
    "TapFilterError",
    "ConfigError",
    "UsageError",
    # Core types
    "Coefficients",
    "ArrayF",
    "SampleHistory",
    "FilterCore",
    # Engines
    "FilterEngine",
    "NumbaEngine",
    "ReferenceEngine",
    "select_engine",
    # Filters
    "FIRFilter",
    "IIRFilter",
    "biquad",
    # Collaborators
    "triangular",
    "unit_step",
    "impulse_train",
    "sample",
]
