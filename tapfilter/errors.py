"""
Exception types raised by tapfilter.

Configuration problems are reported when a filter (or one of its
collaborators) is built; usage problems when a block call is malformed.
Once a filter exists, single-sample processing never raises.
"""


class TapFilterError(Exception):
    """Base class for all tapfilter errors."""


class ConfigError(TapFilterError, ValueError):
    """Invalid coefficients, capacity or generator parameters."""


class UsageError(TapFilterError, ValueError):
    """Malformed call, e.g. input/output length mismatch in block processing."""
