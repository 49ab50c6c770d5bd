"""
Exceptions raised by the registration precision core.

Contract violations are reported with ValueError subclasses so callers that
already guard against ValueError keep working. Insufficient data is not an
error: the estimators report it by returning False.
"""


class PrecisionError(ValueError):
    """Base class for registration precision contract violations."""


class DegenerateVectorError(PrecisionError):
    """Raised when a vector is defined by two coincident points."""


class NoControlPointsError(PrecisionError):
    """Raised when an origin is requested from a set without control points."""
