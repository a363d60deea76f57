"""
Error types raised by the MFAS core

All errors derive from ValueError so callers that already guard pipeline
inputs with `except ValueError` keep working.
"""


class MFASError(ValueError):
    """Base class for MFAS errors"""


class GraphValidationError(MFASError):
    """Structurally malformed graph input (unknown node, self loop, duplicates)"""


class DegenerateDirectionError(MFASError):
    """Zero-magnitude or non-finite direction/weight that would produce NaN weights"""


class InvalidOrderingError(MFASError):
    """Ordering is not a permutation of the graph nodes"""
