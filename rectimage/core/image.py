"""
Image Compositing
=================

An Image owns exactly one raster handle produced by a RasterEngine and
exposes region-level compositing on top of it:

- copy() describes a region of an image as a CopyData
- paste() transfers a CopyData into another image, copying pixels exactly
  when source and destination sizes match and resampling otherwise
- crop(), resize() and duplicate() compose copy() and paste() over a freshly
  allocated destination

Resource model:
---------------
The raster handle is released exactly once, by close(), by leaving a ``with``
block, or (as a last resort) when the Image is garbage collected. Any
operation on a released image raises ImageReleased.

Usage:
------
    with Image.create_from_url("photo.jpg") as photo:
        box = Rect(0, 0, 500, 500).fit_inside_of(photo.full_rect, FitFlags.CENTER)
        with photo.crop(box) as cropped, cropped.resize(Rect(0, 0, 250, 250)) as thumb:
            data = thumb.render_png(9)
"""

import logging
import weakref
from dataclasses import dataclass
from typing import Any, BinaryIO, Optional

from rectimage.core import config
from rectimage.core.errors import (
    EncodeFailed,
    ImageReleased,
    InvalidData,
    InvalidFile,
    RasterOperationFailed,
    UnsupportedFormat,
)
from rectimage.core.file import File
from rectimage.core.ports import RasterEngine, Signature, SignatureEngine
from rectimage.core.rect import Rect, RectField
from rectimage.utils.logger import log_operation

logger = logging.getLogger(__name__)


def _default_engine() -> RasterEngine:
    from rectimage.backends import default_raster_engine
    return default_raster_engine()


def _default_hasher() -> SignatureEngine:
    from rectimage.backends import default_signature_engine
    return default_signature_engine()


@dataclass(frozen=True)
class CopyData:
    """A rectangular region of an image, pending transfer by Image.paste()."""
    image: "Image"
    rect: Rect


class Image:
    """
    A decoded raster image.

    Instances are created through the ``create_*`` class methods rather than
    the constructor.
    """

    def __init__(self, handle: Any, engine: RasterEngine, hasher: Optional[SignatureEngine] = None):
        self._handle = handle
        self._engine = engine
        self._hasher = hasher
        self._signature: Optional[Signature] = None
        self._finalizer = weakref.finalize(self, engine.release, handle)

    # ========================================================================
    # CONSTRUCTORS
    # ========================================================================

    @classmethod
    def create_from_url(
        cls,
        url: str,
        engine: Optional[RasterEngine] = None,
        hasher: Optional[SignatureEngine] = None
    ) -> "Image":
        """Load an image from a local path or a remote URL."""
        with File.create_from_url(url) as file:
            return cls.create_from_file(file, engine, hasher)

    @classmethod
    @log_operation(operation="decode file")
    def create_from_file(
        cls,
        file: File,
        engine: Optional[RasterEngine] = None,
        hasher: Optional[SignatureEngine] = None
    ) -> "Image":
        """
        Decode a File with the codec matching its sniffed type.

        If that fails (or the type is unknown) the raw bytes are handed to the
        generic decoder.

        Raises:
            InvalidFile: if neither attempt succeeds.
        """
        engine = engine or _default_engine()
        file_type = file.type
        if file_type is not None:
            try:
                return cls(engine.decode(file.stream, format=file_type), engine, hasher)
            except UnsupportedFormat as e:
                logger.debug(f"{file_type} decoder rejected {file.remote_url or 'stream'}: {e}")

        try:
            return cls.create_from_data(file.read(), engine, hasher)
        except InvalidData as e:
            raise InvalidFile(f"Could not decode image file {file.remote_url or ''}".rstrip()) from e

    @classmethod
    def create_from_data(
        cls,
        data: bytes,
        engine: Optional[RasterEngine] = None,
        hasher: Optional[SignatureEngine] = None
    ) -> "Image":
        """
        Decode raw image bytes.

        Raises:
            InvalidData: if no codec can decode ``data``.
        """
        engine = engine or _default_engine()
        try:
            handle = engine.decode(data)
        except UnsupportedFormat as e:
            raise InvalidData(f"Could not decode {len(data)} bytes of image data") from e
        return cls(handle, engine, hasher)

    @classmethod
    def create_from_stream(
        cls,
        stream: BinaryIO,
        engine: Optional[RasterEngine] = None,
        hasher: Optional[SignatureEngine] = None
    ) -> "Image":
        """Decode from a caller-owned binary stream. The stream is left open."""
        with File(stream, owns_stream=False) as file:
            return cls.create_from_file(file, engine, hasher)

    @classmethod
    def create_new(
        cls,
        width: float,
        height: float,
        engine: Optional[RasterEngine] = None,
        hasher: Optional[SignatureEngine] = None
    ) -> "Image":
        """
        Allocate a blank image of the given size.

        Raises:
            RasterOperationFailed: if the engine cannot allocate the canvas
                (for instance a negative width or height).
        """
        engine = engine or _default_engine()
        return cls(engine.create_blank(int(round(width)), int(round(height))), engine, hasher)

    def _create_sibling(self, width: float, height: float) -> "Image":
        return type(self).create_new(width, height, self._engine, self._hasher)

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    def close(self) -> None:
        """Release the raster handle. Safe to call more than once."""
        self._finalizer()
        self._signature = None

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def __enter__(self) -> "Image":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    @property
    def handle(self) -> Any:
        if not self._finalizer.alive:
            raise ImageReleased("Operation on a released image")
        return self._handle

    @property
    def engine(self) -> RasterEngine:
        return self._engine

    @property
    def hasher(self) -> SignatureEngine:
        if self._hasher is None:
            self._hasher = _default_hasher()
        return self._hasher

    # ========================================================================
    # COMPOSITING
    # ========================================================================

    def copy(self, source_rect: Optional[Rect] = None) -> CopyData:
        """Describe ``source_rect`` of this image (the whole image by default)."""
        if source_rect is None:
            source_rect = self.full_rect
        return CopyData(self, source_rect)

    def paste(self, copy_data: CopyData, dest_rect: Optional[Rect] = None) -> "Image":
        """
        Transfer ``copy_data`` into this image at ``dest_rect``.

        When the destination has the same width and height as the source
        region, pixels are copied as-is; otherwise the region is resampled to
        the destination size. ``dest_rect`` defaults to the whole image.

        Returns self, so calls can be chained.

        Raises:
            RasterOperationFailed: if the engine reports a failed blit.
        """
        dest = self.handle
        source = copy_data.image.handle
        source_rect = copy_data.rect
        if dest_rect is None:
            dest_rect = self.full_rect

        exact = dest_rect.compare_to(source_rect, RectField.WIDTH | RectField.HEIGHT)
        primitive = "copy" if exact else "copy_resampled"
        left, top, right, bottom = dest_rect.as_box()
        logger.debug(f"{primitive}: {source_rect} -> {dest_rect}")

        ok = self._engine.blit(
            dest,
            source,
            source_rect.as_box(),
            (left, top),
            (right - left, bottom - top),
            not exact
        )
        if not ok:
            raise RasterOperationFailed(primitive)

        self._signature = None
        return self

    def crop(self, source_rect: Rect) -> "Image":
        """Return a new image holding ``source_rect`` of this one."""
        image = self._create_sibling(source_rect.width, source_rect.height)
        try:
            return image.paste(self.copy(source_rect))
        except Exception:
            image.close()
            raise

    def resize(self, dest_rect: Rect) -> "Image":
        """Return a new image of ``dest_rect``'s size holding this image, resampled."""
        image = self._create_sibling(dest_rect.width, dest_rect.height)
        try:
            return image.paste(self.copy())
        except Exception:
            image.close()
            raise

    def duplicate(self) -> "Image":
        """Return an independent copy of this image."""
        image = self._create_sibling(self.width, self.height)
        try:
            return image.paste(self.copy())
        except Exception:
            image.close()
            raise

    def retain_alpha(self) -> None:
        """Turn on alpha blending and keep the alpha channel when encoding."""
        self._engine.set_alpha_mode(self.handle, blending=True, save_alpha=True)

    # ========================================================================
    # SIGNATURE AND RENDERING
    # ========================================================================

    def get_signature(self) -> Signature:
        """Perceptual signature of the current pixels, computed once and cached."""
        if self._signature is None:
            self._signature = self._compute_signature()
        return self._signature

    @log_operation(operation="signature")
    def _compute_signature(self) -> Signature:
        data = self.render_png(config.SIGNATURE_PNG_COMPRESSION)
        return self.hasher.compute_signature(data)

    @log_operation(operation="encode")
    def render(self, format: str, quality: Optional[int] = None, destination: Optional[str] = None) -> Optional[bytes]:
        """
        Encode the image.

        Args:
            format: 'png', 'jpeg'/'jpg' or 'gif'.
            quality: Engine-level quality (PNG compression level or JPEG 0-100).
            destination: Path to write to. When omitted the bytes are returned.

        Raises:
            RasterOperationFailed: if the encoder fails.
        """
        try:
            return self._engine.encode(self.handle, format, quality, destination)
        except EncodeFailed as e:
            raise RasterOperationFailed(f"encode_{format.lower()}", str(e)) from e

    def render_png(self, compression: int = config.DEFAULT_PNG_COMPRESSION, destination: Optional[str] = None) -> Optional[bytes]:
        return self.render("png", compression, destination)

    def render_jpeg(self, quality: int = config.DEFAULT_JPEG_QUALITY, destination: Optional[str] = None) -> Optional[bytes]:
        # 0-9 scale -> 0-100
        quality = int(round(quality / config.JPEG_QUALITY_SCALE * 100))
        return self.render("jpeg", quality, destination)

    # ========================================================================
    # DIMENSIONS
    # ========================================================================

    @property
    def width(self) -> int:
        return self._engine.dimensions(self.handle)[0]

    @property
    def height(self) -> int:
        return self._engine.dimensions(self.handle)[1]

    @property
    def area(self) -> int:
        width, height = self._engine.dimensions(self.handle)
        return width * height

    @property
    def full_rect(self) -> Rect:
        return self.get_rect()

    def get_rect(self, x: float = 0, y: float = 0) -> Rect:
        """Rectangle of this image's size with its origin at (x, y)."""
        width, height = self._engine.dimensions(self.handle)
        return Rect(x, y, width, height)

    def __repr__(self) -> str:
        if self.closed:
            return f"<{type(self).__name__} released>"
        width, height = self._engine.dimensions(self._handle)
        return f"<{type(self).__name__} {width}x{height}>"
