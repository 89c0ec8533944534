"""
Geometry exceptions.

Only one class of failure exists in the construction pipeline: an
internal-consistency violation, where a solid is assembled from end
caps whose winding does not face away from its interior.  These are
programming errors in the transform pipeline, never input errors.
"""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of invariant violation."""
    BAD_BOTTOM_NORMAL = "bad bottom normal"
    BAD_TOP_NORMAL = "bad top normal"


class GeometryError(Exception):
    """Base exception for monotile geometry errors."""
    pass


class InvariantViolation(GeometryError):
    """A constructed solid breaks an orientation invariant."""

    def __init__(self, kind: ErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        message = kind.value if not detail else f"{kind.value}: {detail}"
        super().__init__(message)


__all__ = ['ErrorKind', 'GeometryError', 'InvariantViolation']
