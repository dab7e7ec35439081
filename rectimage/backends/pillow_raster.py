"""
Pillow Raster Engine
====================

RasterEngine implementation on top of Pillow. Every decoded image is
normalized to a truecolor mode (RGB, or RGBA when the source carries
transparency) so blits between any two handles behave the same way.

Dependencies:
-------------
- PIL (Pillow): decoding, encoding, cropping, resampling and pasting
"""

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple, Union

from PIL import Image as PILImage

from rectimage.core import config
from rectimage.core.errors import EncodeFailed, RasterOperationFailed, UnsupportedFormat

logger = logging.getLogger(__name__)

# Sniffed file types -> Pillow decoder identifiers
DECODE_FORMATS = {
    "jpg": "JPEG",
    "png": "PNG",
    "gif": "GIF",
}


@dataclass
class RasterHandle:
    """Pillow image plus the alpha flags set through set_alpha_mode()."""
    image: Optional[PILImage.Image]
    alpha_blending: bool = False
    save_alpha: bool = False

    @property
    def released(self) -> bool:
        return self.image is None


def _to_truecolor(image: PILImage.Image) -> PILImage.Image:
    has_alpha = image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info
    return image.convert("RGBA" if has_alpha else "RGB")


class PillowRasterEngine:
    """
    Raster engine backed by Pillow.

    Args:
        resample_filter: Name of a ``PIL.Image.Resampling`` member used when a
            blit has to scale.
    """

    def __init__(self, resample_filter: str = config.RESAMPLE_FILTER):
        try:
            self.resample = PILImage.Resampling[resample_filter.upper()]
        except KeyError:
            raise ValueError(f"Unsupported resampling filter: {resample_filter}")

    def decode(self, source: Union[bytes, str, BinaryIO], format: Optional[str] = None) -> RasterHandle:
        formats = [DECODE_FORMATS[format]] if format in DECODE_FORMATS else None
        fp = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
        try:
            with PILImage.open(fp, formats=formats) as opened:
                opened.load()
                image = _to_truecolor(opened)
        except (OSError, ValueError, SyntaxError, PILImage.DecompressionBombError) as e:
            raise UnsupportedFormat(f"Cannot decode image ({format or 'any format'}): {e}") from e
        return RasterHandle(image)

    def encode(
        self,
        handle: RasterHandle,
        format: str,
        quality: Optional[int] = None,
        destination: Optional[str] = None
    ) -> Optional[bytes]:
        pil_format = config.ENCODE_FORMATS.get(format.lower())
        if pil_format is None:
            raise EncodeFailed(f"Unsupported output format: {format}")

        image = handle.image
        params = {}
        if pil_format == "PNG":
            if quality is not None:
                params["compress_level"] = int(quality)
            if image.mode == "RGBA" and not handle.save_alpha:
                image = image.convert("RGB")
        elif pil_format == "JPEG":
            if quality is not None:
                params["quality"] = max(1, min(100, int(quality)))
            if image.mode != "RGB":
                image = image.convert("RGB")

        target = destination if destination is not None else io.BytesIO()
        try:
            image.save(target, format=pil_format, **params)
        except (OSError, ValueError, KeyError) as e:
            raise EncodeFailed(f"{pil_format} encoding failed: {e}") from e

        if destination is not None:
            return None
        return target.getvalue()

    def create_blank(self, width: int, height: int) -> RasterHandle:
        try:
            return RasterHandle(PILImage.new("RGB", (width, height), (0, 0, 0)))
        except ValueError as e:
            raise RasterOperationFailed("create_blank", str(e)) from e

    def blit(
        self,
        dest: RasterHandle,
        source: RasterHandle,
        source_box: Tuple[int, int, int, int],
        dest_origin: Tuple[int, int],
        dest_size: Tuple[int, int],
        resample: bool
    ) -> bool:
        try:
            region = source.image.crop(source_box)
            if resample:
                region = region.resize(dest_size, resample=self.resample)
            if region.mode != dest.image.mode:
                region = region.convert(dest.image.mode)

            if dest.alpha_blending and region.mode == "RGBA":
                dest.image.paste(region, dest_origin, region)
            else:
                dest.image.paste(region, dest_origin)
        except (OSError, ValueError) as e:
            logger.warning(f"Blit of {source_box} to {dest_origin} {dest_size} failed: {e}")
            return False
        return True

    def dimensions(self, handle: RasterHandle) -> Tuple[int, int]:
        return handle.image.size

    def set_alpha_mode(self, handle: RasterHandle, blending: bool, save_alpha: bool) -> None:
        handle.alpha_blending = blending
        handle.save_alpha = save_alpha
        if save_alpha and handle.image.mode != "RGBA":
            previous = handle.image
            handle.image = previous.convert("RGBA")
            previous.close()

    def release(self, handle: RasterHandle) -> None:
        if handle.image is not None:
            handle.image.close()
            handle.image = None
