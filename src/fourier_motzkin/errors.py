"""
Exception types raised by the elimination engine and its I/O wrappers.

Two fault classes exist: malformed input, detected once at parse time
before any system is built, and internal-consistency faults, raised at the
point where an engine invariant is found broken.
"""


class FourierMotzkinError(Exception):
    """Base class for all package errors."""


class InputFormatError(FourierMotzkinError, ValueError):
    """The input file does not follow the documented format."""


class InternalConsistencyError(FourierMotzkinError, RuntimeError):
    """An engine invariant does not hold (dimension, provenance, or result check)."""


class ChainSizeLimitError(FourierMotzkinError, RuntimeError):
    """An elimination step would exceed the configured constraint limit."""
