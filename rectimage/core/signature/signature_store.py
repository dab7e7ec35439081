"""
Signature Store
===============

Append-only, insertion-ordered registry of (signature, custom data) records
used to deduplicate visually similar images.

find_similar_image() scans the records in insertion order and returns the
custom data of the first record closer than the tolerance; when nothing
matches, the image's signature is appended together with the supplied custom
data, which is returned unchanged.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

from rectimage.core import config
from rectimage.core.image import Image
from rectimage.core.ports import Signature, SignatureEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignatureRecord:
    """One registered picture."""
    signature: Signature
    custom_data: Any = None


class SignatureStore:
    """
    Registry of previously seen images.

    Args:
        hasher: Engine providing the distance function. When omitted the
            queried image's own engine is used.
    """

    def __init__(self, hasher: Optional[SignatureEngine] = None):
        self._hasher = hasher
        self._records: List[SignatureRecord] = []

    @property
    def signatures(self) -> Tuple[SignatureRecord, ...]:
        """Snapshot of the records, in insertion order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SignatureRecord]:
        return iter(self.signatures)

    def find_similar_image(
        self,
        image: Image,
        custom_data: Any = None,
        tolerance: float = config.DEFAULT_SIMILARITY_TOLERANCE
    ) -> Any:
        """
        Return the custom data of the first stored image similar to ``image``.

        If no record is closer than ``tolerance``, ``image`` is registered with
        ``custom_data`` and ``custom_data`` is returned.
        """
        hasher = self._hasher or image.hasher
        image_signature = image.get_signature()

        for index, record in enumerate(self._records):
            distance = hasher.distance(image_signature, record.signature)
            if distance < tolerance:
                logger.debug(f"Similar image found at record {index} (distance {distance:.3f})")
                return record.custom_data

        self._records.append(SignatureRecord(image_signature, custom_data))
        logger.debug(f"Registered new signature, store size {len(self._records)}")
        return custom_data


class LockedSignatureStore(SignatureStore):
    """
    SignatureStore safe to share between threads.

    The scan and the conditional append run as one critical section, so two
    threads presenting similar images cannot both register them.
    """

    def __init__(self, hasher: Optional[SignatureEngine] = None):
        super().__init__(hasher)
        self._lock = threading.Lock()

    @property
    def signatures(self) -> Tuple[SignatureRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def find_similar_image(
        self,
        image: Image,
        custom_data: Any = None,
        tolerance: float = config.DEFAULT_SIMILARITY_TOLERANCE
    ) -> Any:
        with self._lock:
            return super().find_similar_image(image, custom_data, tolerance)
