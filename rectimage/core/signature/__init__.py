"""
Near-Duplicate Registry
=======================

Usage:
------
    from rectimage.core.signature import SignatureStore

    store = SignatureStore()
    owner = store.find_similar_image(image, custom_data="photo-42")
"""

from rectimage.core.signature.hash_comparison import (
    calculate_hamming_distance,
    calculate_normalized_distance
)
from rectimage.core.signature.signature_store import (
    LockedSignatureStore,
    SignatureRecord,
    SignatureStore
)

__all__ = [
    # Comparison
    'calculate_hamming_distance',
    'calculate_normalized_distance',

    # Registry
    'SignatureRecord',
    'SignatureStore',
    'LockedSignatureStore',
]
