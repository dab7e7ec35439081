"""
Error Taxonomy
==============

All exceptions raised by rectimage derive from RectImageError.

Two families exist:

- Expected at runtime (malformed input, failing codecs): InvalidData,
  InvalidFile, RasterOperationFailed, UnsupportedFormat, EncodeFailed.
  Callers are expected to catch these.
- Programmer errors (bad predicate flags, wrong argument counts, use of a
  released image): UnsupportedOperation, InvalidArgumentCount, ImageReleased.
  These should fail fast and are never recovered internally.
"""


class RectImageError(Exception):
    """Base class for every rectimage error."""
    pass


# ============================================================================
# DECODING
# ============================================================================

class InvalidData(RectImageError, ValueError):
    """Raw bytes could not be decoded by any known codec."""
    pass


class InvalidFile(RectImageError, ValueError):
    """A resolved file could not be decoded, even after the raw-data fallback."""
    pass


# ============================================================================
# RASTER BOUNDARY
# ============================================================================

class UnsupportedFormat(RectImageError):
    """Raised by a raster engine when it cannot decode the given input."""
    pass


class EncodeFailed(RectImageError):
    """Raised by a raster engine when encoding fails."""
    pass


class RasterOperationFailed(RectImageError):
    """
    An underlying raster primitive reported failure.

    The name of the failed primitive is kept on ``primitive`` for diagnostics.
    """

    def __init__(self, primitive: str, message: str = None):
        self.primitive = primitive
        super().__init__(message or f"Raster primitive failed: {primitive}")


class ImageReleased(RectImageError, ValueError):
    """An operation was attempted on an image whose raster handle was released."""
    pass


# ============================================================================
# PREDICATES
# ============================================================================

class UnsupportedOperation(RectImageError):
    """A comparison received a flag combination that cannot be evaluated."""
    pass


class InvalidArgumentCount(RectImageError, TypeError):
    """A comparison call received neither 2 nor 3 positional values."""
    pass
