"""Storage of uploaded photos on the filesystem."""

from __future__ import annotations

import io
import logging
import os
import random
import shutil
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")
VALID_IMAGE_MIME_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")

_MIME_BY_EXTENSION = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}
_EXTENSION_BY_MIME = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_SNIFF_SIZE = 512


class PhotoStorageError(Exception):
    """Raised when a photo cannot be read, written or removed."""


def _extension(filename: str) -> str:
    name = filename.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def is_image_file(filename: str) -> bool:
    """Whether the file name carries a supported image extension."""
    return _extension(filename).lower() in SUPPORTED_EXTENSIONS


def mime_type_from_extension(filename: str) -> str:
    return _MIME_BY_EXTENSION.get(_extension(filename).lower(), "application/octet-stream")


def extension_from_mime_type(mime_type: str) -> str:
    return _EXTENSION_BY_MIME.get(mime_type, ".jpg")


def detect_mime_from_magic_bytes(data: bytes) -> str:
    """Image MIME type identified from leading bytes, or "" if unrecognised."""
    if len(data) < 8:
        return ""
    if data[:3] == b"\xff\xd8\xff":
        return "image/jpeg"
    if data[:8] == _PNG_SIGNATURE:
        return "image/png"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return ""


def is_valid_image_mime_type(mime_type: str) -> bool:
    return mime_type in VALID_IMAGE_MIME_TYPES


class _PrefixedReader(io.RawIOBase):
    """Serves already-read leading bytes, then the rest of the stream."""

    def __init__(self, head: bytes, rest: BinaryIO) -> None:
        self._head = head
        self._rest = rest

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._head:
            n = min(len(buffer), len(self._head))
            buffer[:n] = self._head[:n]
            self._head = self._head[n:]
            return n
        data = self._rest.read(len(buffer))
        if not data:
            return 0
        n = len(data)
        buffer[:n] = data
        return n


class PhotoManager:
    """Keeps photos, with their thumbnails and previews, under one directory."""

    def __init__(self, photos_dir: str | os.PathLike[str]) -> None:
        self.photos_dir = Path(photos_dir)
        self.thumbnails_dir = self.photos_dir / "thumbnails"
        self.previews_dir = self.photos_dir / "previews"
        for directory in (self.photos_dir, self.thumbnails_dir, self.previews_dir):
            try:
                directory.mkdir(mode=0o755, parents=True, exist_ok=True)
            except OSError as exc:
                logger.error("Errore nella creazione della directory %s: %s", directory, exc)

    def list_photos(self) -> list[str]:
        """Names of the image files in the photos directory, in name order."""
        try:
            entries = sorted(os.scandir(self.photos_dir), key=lambda entry: entry.name)
        except OSError as exc:
            raise PhotoStorageError(f"errore nella lettura della directory: {exc}") from exc
        return [
            entry.name
            for entry in entries
            if not entry.is_dir() and is_image_file(entry.name)
        ]

    def save_photo(
        self,
        stream: BinaryIO,
        original_filename: str,
        content_type: str,
        size: int,
    ) -> str:
        """Write the stream under a new timestamped name and return that name."""
        now = datetime.now()
        random_number = random.randrange(100_000_000)
        ext = _extension(original_filename) or extension_from_mime_type(content_type)
        filename = f"{now:%Y-%m-%d-%H-%M-%S}-{random_number:08d}{ext}"
        path = self.photos_dir / filename
        try:
            dst = open(path, "wb")
        except OSError as exc:
            raise PhotoStorageError(f"errore nella creazione del file: {exc}") from exc
        with dst:
            try:
                shutil.copyfileobj(stream, dst)
            except OSError as exc:
                raise PhotoStorageError(f"errore nella scrittura del file: {exc}") from exc
        # Thumbnails and previews are produced by the worker reading the processing queue.
        return filename

    def delete_photo(self, filename: str) -> None:
        path = self.photos_dir / filename
        if not path.exists():
            raise PhotoStorageError(f"file non trovato: {filename}")
        try:
            path.unlink()
        except OSError as exc:
            raise PhotoStorageError(f"errore nell'eliminazione del file: {exc}") from exc

    @staticmethod
    def _present(path: Path) -> bool:
        try:
            path.stat()
        except FileNotFoundError:
            return False
        except OSError:
            return True
        return True

    def thumbnail_exists(self, filename: str) -> bool:
        return self._present(self.thumbnails_dir / filename)

    def preview_exists(self, filename: str) -> bool:
        return self._present(self.previews_dir / filename)

    def detect_mime_type(self, stream: BinaryIO) -> tuple[str, BinaryIO]:
        """Sniff the stream's image type; return it with a stream that yields every byte."""
        try:
            head = stream.read(_SNIFF_SIZE) or b""
        except OSError as exc:
            raise PhotoStorageError(f"errore nella lettura dei bytes: {exc}") from exc
        return detect_mime_from_magic_bytes(head), _PrefixedReader(head, stream)