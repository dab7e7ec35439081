"""
Signature Comparison Utilities
==============================

Functions for comparing boolean signature vectors using Hamming distance and
turning that distance into the normalized [0, 1] scale used by the registry.
"""

from typing import Sequence

import numpy as np


def calculate_hamming_distance(signature1: Sequence, signature2: Sequence) -> int:
    """
    Calculates the number of differing positions between two signatures.
    Raises ValueError if lengths differ.
    """
    a = np.asarray(signature1).ravel()
    b = np.asarray(signature2).ravel()
    if a.size != b.size:
        raise ValueError("Signatures must be of the same length to calculate Hamming distance.")
    return int(np.count_nonzero(a != b))


def calculate_normalized_distance(hamming_distance: int, bit_length: int) -> float:
    """
    Maps a Hamming distance onto [0, 1].

    Formula: min(1, distance / (bit_length / 2)). Two unrelated hashes differ
    in about half their bits, so they land near 1.0 while identical ones are 0.
    """
    if bit_length <= 0:
        raise ValueError("Bit length must be positive.")
    if hamming_distance < 0:
        raise ValueError("Hamming distance cannot be negative.")

    return min(1.0, hamming_distance / (bit_length / 2))
