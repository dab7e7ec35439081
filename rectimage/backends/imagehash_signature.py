"""
Image Hash Signature Engine
===========================

SignatureEngine implementation using the ``imagehash`` perceptual hashes.
Supports pHash, dHash, aHash and wHash. A signature is the hash grid
flattened into a boolean numpy vector.
"""

import io
from typing import Union

import imagehash
import numpy as np
from PIL import Image

from rectimage.core import config
from rectimage.core.signature.hash_comparison import (
    calculate_hamming_distance,
    calculate_normalized_distance
)


class ImageHashSignatureEngine:
    """
    Calculates perceptual signatures and their normalized distance.

    Args:
        algorithm: One of SUPPORTED_ALGOS.
        hash_size: Side of the hash grid; the signature has hash_size ** 2 bits.
    """

    SUPPORTED_ALGOS = {
        'phash': imagehash.phash,
        'dhash': imagehash.dhash,
        'ahash': imagehash.average_hash,
        'whash': imagehash.whash
    }

    def __init__(self, algorithm: str = config.DEFAULT_HASH_ALGORITHM, hash_size: int = config.DEFAULT_HASH_SIZE):
        algo_name = algorithm.lower()
        if algo_name not in self.SUPPORTED_ALGOS:
            raise ValueError(f"Unsupported perceptual algorithm: {algorithm}")
        self.algorithm = algo_name
        self.hash_size = hash_size

    def load_image(self, source: Union[bytes, str]) -> Image.Image:
        """
        Loads an image from bytes or a path.
        Converts to RGB to ensure consistency for perceptual hashing.
        """
        fp = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
        try:
            with Image.open(fp) as image:
                return image.convert('RGB')
        except (OSError, ValueError) as e:
            raise ValueError(f"Failed to load image for hashing: {e}") from e

    def compute_signature(self, source: Union[bytes, str]) -> np.ndarray:
        image = self.load_image(source)
        try:
            hash_obj = self.SUPPORTED_ALGOS[self.algorithm](image, hash_size=self.hash_size)
        finally:
            image.close()
        # hash_obj.hash is a 2-D numpy array of bools
        return np.asarray(hash_obj.hash, dtype=bool).ravel()

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        hamming = calculate_hamming_distance(a, b)
        return calculate_normalized_distance(hamming, np.asarray(a).size)
