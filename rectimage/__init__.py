"""
rectimage
=========

Geometry-aware image compositing with a near-duplicate registry.

Usage:
------
    from rectimage import FitFlags, Image, Rect, SignatureStore

    with Image.create_from_url("photo.jpg") as photo:
        box = Rect(0, 0, 4, 3).fit_inside_of(photo.full_rect, FitFlags.CENTER)
        with photo.crop(box) as cropped:
            store = SignatureStore()
            owner = store.find_similar_image(cropped, custom_data="photo.jpg")
"""

from rectimage.core.compare import (
    Bitwise,
    Combinator,
    Compare,
    Comparison,
    ComparisonKind
)
from rectimage.core.errors import (
    EncodeFailed,
    ImageReleased,
    InvalidArgumentCount,
    InvalidData,
    InvalidFile,
    RasterOperationFailed,
    RectImageError,
    UnsupportedFormat,
    UnsupportedOperation
)
from rectimage.core.file import File
from rectimage.core.image import CopyData, Image
from rectimage.core.ports import RasterEngine, SignatureEngine
from rectimage.core.rect import FitFlags, Rect, RectField
from rectimage.core.signature import LockedSignatureStore, SignatureRecord, SignatureStore

__version__ = "1.0.0"

__all__ = [
    # Predicates
    'Bitwise',
    'Combinator',
    'Compare',
    'Comparison',
    'ComparisonKind',

    # Geometry
    'FitFlags',
    'Rect',
    'RectField',

    # Compositing
    'CopyData',
    'File',
    'Image',
    'RasterEngine',
    'SignatureEngine',

    # Registry
    'LockedSignatureStore',
    'SignatureRecord',
    'SignatureStore',

    # Errors
    'EncodeFailed',
    'ImageReleased',
    'InvalidArgumentCount',
    'InvalidData',
    'InvalidFile',
    'RasterOperationFailed',
    'RectImageError',
    'UnsupportedFormat',
    'UnsupportedOperation',
]
