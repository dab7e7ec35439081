"""
File and Stream Acquisition
===========================

Wraps a readable binary stream together with a best-effort format sniff.

Local paths are opened directly. Remote URLs are downloaded with ``requests``
into an anonymous temporary file so the decoder always sees a seekable
stream. The stream is closed deterministically by close() or by leaving the
``with`` block.

Format detection inspects the leading bytes for known magic sequences and
falls back to the file extension when none matches.
"""

import logging
import tempfile
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import BinaryIO, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from rectimage.core import config

logger = logging.getLogger(__name__)

# Magic byte sequences, checked in this order
FILE_SIGNATURES = MappingProxyType({
    "gif": b"\x47\x49\x46\x38\x39\x61",
    "png": b"\x89\x50\x4E\x47",
    "jpg": b"\xFF\xD8",
})

EXTENSION_TYPES = MappingProxyType({
    "jpg": "jpg",
    "jpeg": "jpg",
    "png": "png",
    "gif": "gif",
})


def _is_local(url: str) -> bool:
    # A one-letter scheme is a Windows drive
    return len(urlparse(url).scheme) <= 1


class File:
    """
    A readable binary stream plus the location it came from.

    Args:
        stream: Seekable binary stream; the image data starts at offset 0.
        remote_url: Original URL or path, used for extension inference.
        owns_stream: When False, close() leaves ``stream`` open for its owner.
    """

    def __init__(self, stream: BinaryIO, remote_url: Optional[str] = None, owns_stream: bool = True):
        self._stream = stream
        self.remote_url = remote_url
        self._owns_stream = owns_stream
        self._closed = False

        name = getattr(stream, "name", None)
        self.local_url = name if isinstance(name, str) else None

    @classmethod
    def create_from_url(cls, url: str) -> "File":
        """
        Open a local path or download a remote URL.

        Plain paths and ``file://`` URLs are opened directly. Every other
        scheme goes through ``requests``, which only speaks HTTP(S); schemes
        such as ``ftp://`` fail with ``requests.exceptions.InvalidSchema``.

        Raises:
            OSError: if a local file cannot be opened.
            requests.RequestException: if the download fails.
        """
        if _is_local(url):
            logger.debug(f"Opening local file: {url}")
            return cls(open(url, "rb"), url)
        if urlparse(url).scheme.lower() == "file":
            path = url2pathname(urlparse(url).path)
            logger.debug(f"Opening local file: {path}")
            return cls(open(path, "rb"), url)

        logger.info(f"Downloading remote image: {url}")
        temp = tempfile.TemporaryFile()
        try:
            with requests.get(url, stream=True, timeout=config.NETWORK_TIMEOUT_SECONDS) as response:
                response.raise_for_status()
                for chunk in response.iter_content(chunk_size=config.DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        temp.write(chunk)
            temp.seek(0)
        except Exception:
            temp.close()
            raise
        return cls(temp, url)

    # Context management

    def __enter__(self) -> "File":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        """Release the stream. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._owns_stream:
            self._stream.close()

    @property
    def closed(self) -> bool:
        return self._closed

    # Accessors

    @property
    def stream(self) -> BinaryIO:
        if self._closed:
            raise ValueError("I/O operation on closed File")
        return self._stream

    @property
    def extension(self) -> Optional[str]:
        location = self.remote_url or self.local_url
        if not location:
            return None
        path = location if _is_local(location) else urlparse(location).path
        suffix = PurePosixPath(path.replace("\\", "/")).suffix
        return suffix[1:].lower() if suffix else None

    @property
    def type(self) -> Optional[str]:
        """
        Format sniffed from the magic bytes, else inferred from the extension.

        The header is read from the start of the stream, the same origin the
        decoder and read() use, whatever the current position is.
        """
        stream = self.stream
        position = stream.tell()
        stream.seek(0)
        header = stream.read(config.SNIFF_HEADER_LENGTH)
        stream.seek(position)

        for file_type, signature in FILE_SIGNATURES.items():
            if header.startswith(signature):
                return file_type
        return self.type_from_extension

    @property
    def type_from_extension(self) -> Optional[str]:
        return EXTENSION_TYPES.get(self.extension or "")

    def read(self) -> bytes:
        """Read the whole content, leaving the stream position unchanged."""
        stream = self.stream
        position = stream.tell()
        stream.seek(0)
        try:
            return stream.read()
        finally:
            stream.seek(position)
