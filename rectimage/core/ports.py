"""
Capability Interfaces
=====================

The core never talks to a codec or hashing library directly. It consumes the
two protocols below; concrete adapters live in ``rectimage.backends`` and test
doubles can be dropped in anywhere a port is accepted.
"""

from typing import Any, BinaryIO, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

# Anything a raster engine can decode from
DecodeSource = Union[bytes, str, BinaryIO]

# Fixed-length numeric vector
Signature = Sequence[Any]


@runtime_checkable
class RasterEngine(Protocol):
    """
    Interface for decoding, encoding and blitting raster handles.

    Handles are opaque to the core; only the engine that produced a handle may
    be given that handle back.
    """

    def decode(self, source: DecodeSource, format: Optional[str] = None) -> Any:
        """Decode ``source``; raise UnsupportedFormat on failure."""
        ...

    def encode(
        self,
        handle: Any,
        format: str,
        quality: Optional[int] = None,
        destination: Optional[str] = None
    ) -> Optional[bytes]:
        """Encode to bytes, or write to ``destination``; raise EncodeFailed on failure."""
        ...

    def create_blank(self, width: int, height: int) -> Any:
        """Allocate a black canvas; raise RasterOperationFailed("create_blank") on failure."""
        ...

    def blit(
        self,
        dest: Any,
        source: Any,
        source_box: Tuple[int, int, int, int],
        dest_origin: Tuple[int, int],
        dest_size: Tuple[int, int],
        resample: bool
    ) -> bool:
        """Copy a region between handles; return False if the primitive failed."""
        ...

    def dimensions(self, handle: Any) -> Tuple[int, int]:
        ...

    def set_alpha_mode(self, handle: Any, blending: bool, save_alpha: bool) -> None:
        ...

    def release(self, handle: Any) -> None:
        """Free the handle. Must be safe to call more than once."""
        ...


@runtime_checkable
class SignatureEngine(Protocol):
    """Interface for perceptual signatures."""

    def compute_signature(self, source: Union[bytes, str]) -> Signature:
        """Compute a signature from lossless image bytes or a path."""
        ...

    def distance(self, a: Signature, b: Signature) -> float:
        """Normalized distance in [0, 1]; lower means more similar."""
        ...
