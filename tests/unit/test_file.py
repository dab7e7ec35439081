"""
Unit tests for File acquisition and format sniffing.
"""

import io
import os
import pathlib
import tempfile
import unittest
from unittest.mock import MagicMock, patch

import requests

from rectimage.core import config
from rectimage.core.file import FILE_SIGNATURES, File


class TestFileSniffing(unittest.TestCase):

    def test_magic_bytes(self):
        cases = {
            b"GIF89a" + b"\x00" * 10: "gif",
            b"\x89PNG\r\n\x1a\n": "png",
            b"\xFF\xD8\xFF\xE0" + b"\x00" * 10: "jpg",
        }
        for header, expected in cases.items():
            with self.subTest(expected=expected):
                with File(io.BytesIO(header)) as file:
                    self.assertEqual(file.type, expected)

    def test_magic_bytes_win_over_extension(self):
        with File(io.BytesIO(b"\x89PNG...."), "http://example.com/photo.jpg") as file:
            self.assertEqual(file.type, "png")

    def test_extension_fallback(self):
        cases = {
            "http://example.com/a/photo.JPEG?size=large": "jpg",
            "/tmp/picture.jpg": "jpg",
            "image.png": "png",
            "anim.gif": "gif",
            "archive.tar": None,
            "no_extension": None,
        }
        for url, expected in cases.items():
            with self.subTest(url=url):
                with File(io.BytesIO(b"unknown"), url) as file:
                    self.assertEqual(file.type, expected)

    def test_gif87a_is_not_sniffed(self):
        # Only the GIF89a signature is known; the extension decides
        with File(io.BytesIO(b"GIF87a...."), "x.gif") as file:
            self.assertEqual(file.type, "gif")
        with File(io.BytesIO(b"GIF87a....")) as file:
            self.assertIsNone(file.type)

    def test_sniff_preserves_position(self):
        stream = io.BytesIO(b"\x89PNG0123456789")
        with File(stream) as file:
            file.type
            self.assertEqual(stream.tell(), 0)
            self.assertEqual(file.read(), b"\x89PNG0123456789")
            self.assertEqual(stream.tell(), 0)

    def test_sniff_reads_from_start(self):
        stream = io.BytesIO(b"\x89PNG0123456789")
        stream.read(4)
        with File(stream) as file:
            self.assertEqual(file.type, "png")
            self.assertEqual(stream.tell(), 4)

    def test_sniff_ignores_signature_after_start(self):
        stream = io.BytesIO(b"JUNK\x89PNG0123456789")
        stream.read(4)
        with File(stream) as file:
            self.assertIsNone(file.type)

    def test_signature_table_is_read_only(self):
        with self.assertRaises(TypeError):
            FILE_SIGNATURES["bmp"] = b"BM"


class TestFileLifecycle(unittest.TestCase):

    def test_close_is_idempotent(self):
        stream = io.BytesIO(b"data")
        file = File(stream)
        file.close()
        file.close()
        self.assertTrue(file.closed)
        self.assertTrue(stream.closed)

    def test_borrowed_stream_left_open(self):
        stream = io.BytesIO(b"data")
        with File(stream, owns_stream=False) as file:
            pass
        self.assertTrue(file.closed)
        self.assertFalse(stream.closed)

    def test_closed_file_rejects_access(self):
        file = File(io.BytesIO(b"data"))
        file.close()
        with self.assertRaises(ValueError):
            file.stream


class TestCreateFromUrl(unittest.TestCase):

    def test_local_path(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "sample.png")
            with open(path, "wb") as f:
                f.write(b"\x89PNG rest")

            with File.create_from_url(path) as file:
                self.assertEqual(file.local_url, path)
                self.assertEqual(file.remote_url, path)
                self.assertEqual(file.type, "png")
                self.assertEqual(file.read(), b"\x89PNG rest")

    def test_missing_local_path(self):
        with self.assertRaises(OSError):
            File.create_from_url("/definitely/not/here.png")

    def test_file_scheme_url(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "sample.gif")
            with open(path, "wb") as f:
                f.write(b"GIF89a rest")

            url = pathlib.Path(path).as_uri()
            with File.create_from_url(url) as file:
                self.assertEqual(file.remote_url, url)
                self.assertEqual(file.extension, "gif")
                self.assertEqual(file.read(), b"GIF89a rest")

    def test_unsupported_scheme_goes_to_requests(self):
        with self.assertRaises(requests.exceptions.InvalidSchema):
            File.create_from_url("ftp://example.com/photo.png")

    @patch("rectimage.core.file.requests.get")
    def test_remote_download(self, mock_get):
        response = MagicMock()
        response.__enter__.return_value = response
        response.iter_content.return_value = [b"\xFF\xD8", b"", b"rest-of-jpeg"]
        mock_get.return_value = response

        with File.create_from_url("https://example.com/img/photo") as file:
            self.assertEqual(file.type, "jpg")
            self.assertEqual(file.read(), b"\xFF\xD8rest-of-jpeg")
            self.assertEqual(file.remote_url, "https://example.com/img/photo")

        mock_get.assert_called_once_with(
            "https://example.com/img/photo",
            stream=True,
            timeout=config.NETWORK_TIMEOUT_SECONDS
        )
        response.iter_content.assert_called_once_with(chunk_size=config.DOWNLOAD_CHUNK_SIZE)

    @patch("rectimage.core.file.requests.get")
    def test_remote_http_error_propagates(self, mock_get):
        response = MagicMock()
        response.__enter__.return_value = response
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        mock_get.return_value = response

        with self.assertRaises(requests.HTTPError):
            File.create_from_url("https://example.com/missing.png")


if __name__ == "__main__":
    unittest.main()
