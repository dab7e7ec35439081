"""
Concrete engine adapters.

The core only depends on the protocols in ``rectimage.core.ports``; this
package provides the Pillow and imagehash implementations and the process
defaults used when no engine is passed explicitly.
"""

from functools import lru_cache

from rectimage.backends.imagehash_signature import ImageHashSignatureEngine
from rectimage.backends.pillow_raster import PillowRasterEngine, RasterHandle


@lru_cache(maxsize=None)
def default_raster_engine() -> PillowRasterEngine:
    return PillowRasterEngine()


@lru_cache(maxsize=None)
def default_signature_engine() -> ImageHashSignatureEngine:
    return ImageHashSignatureEngine()


__all__ = [
    'ImageHashSignatureEngine',
    'PillowRasterEngine',
    'RasterHandle',
    'default_raster_engine',
    'default_signature_engine',
]
