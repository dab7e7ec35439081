"""
Library Configuration and Constants
===================================

This module contains the global configuration values and defaults used
throughout rectimage. It serves as a single source of truth for:

- Similarity tolerances for the signature registry
- Perceptual hash parameters
- Encoder defaults (PNG compression, JPEG quality)
- Remote download parameters

Note:
    All constants use UPPER_SNAKE_CASE naming convention. Modify these values to
    change library-wide behavior without touching business logic.
"""

# ============================================================================
# SIGNATURE REGISTRY
# ============================================================================
# Two signatures whose normalized distance is strictly below this value are
# treated as the same picture by SignatureStore.find_similar_image().

DEFAULT_SIMILARITY_TOLERANCE = 0.6

# ============================================================================
# PERCEPTUAL HASHING
# ============================================================================
# Algorithm used by the imagehash signature engine. One of the keys of
# ImageHashSignatureEngine.SUPPORTED_ALGOS.

DEFAULT_HASH_ALGORITHM = "phash"

# Side length of the hash grid (8 -> 64-bit signature)
DEFAULT_HASH_SIZE = 8

# ============================================================================
# ENCODING
# ============================================================================
# PNG compression and JPEG quality both use a 0-9 scale at the Image level.

# PNG zlib compression level (0 = none, 9 = best). Signatures are computed from
# the maximum level.
DEFAULT_PNG_COMPRESSION = 0
SIGNATURE_PNG_COMPRESSION = 9

# JPEG quality on the 0-9 scale; mapped linearly onto Pillow's 0-100 range
DEFAULT_JPEG_QUALITY = 7
JPEG_QUALITY_SCALE = 9

# Formats the Pillow engine can write, mapped to Pillow format identifiers
ENCODE_FORMATS = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "gif": "GIF",
}

# Resampling filter used when a paste has to scale (Pillow Resampling name)
RESAMPLE_FILTER = "LANCZOS"

# ============================================================================
# FILE ACQUISITION
# ============================================================================
# Settings for reading local files and downloading remote ones.

# Number of leading bytes read when sniffing a file's format
SNIFF_HEADER_LENGTH = 10

# Remote downloads are copied into a temporary file in chunks of this size
DOWNLOAD_CHUNK_SIZE = 1024 * 2500

# Maximum time to wait for network responses before timing out
NETWORK_TIMEOUT_SECONDS = 30
