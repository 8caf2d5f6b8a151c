"""Business rules for listing and adding photos."""

from __future__ import annotations

import logging
import math
from typing import BinaryIO

from .models import Photo
from .photos import PhotoManager, PhotoStorageError, is_valid_image_mime_type
from .processing_queue import QueueError, QueueManager
from .urls import UrlManager

logger = logging.getLogger(__name__)

_DECLARABLE_IMAGE_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
)


class InvalidImageError(Exception):
    """Raised when uploaded content is not an image of a supported format."""


def mime_types_match(declared: str, real: str) -> bool:
    """Whether a declared MIME type agrees with the one found in the content."""
    if declared == "image/jpg":
        declared = "image/jpeg"
    return declared == real


def is_image_mime_type(mime_type: str) -> bool:
    """Whether a declared MIME type names a supported image format."""
    return mime_type.startswith(_DECLARABLE_IMAGE_TYPES)


class PhotoService:
    """Lists stored photos page by page and accepts new uploads."""

    def __init__(
        self,
        photo_manager: PhotoManager,
        url_manager: UrlManager,
        queue_manager: QueueManager,
    ) -> None:
        self.photo_manager = photo_manager
        self.url_manager = url_manager
        self.queue_manager = queue_manager

    def photo_list(self, page: int, per_page: int) -> tuple[list[Photo], int]:
        """One page of processed photos, newest name first, and the page count."""
        if page < 1 or per_page < 1:
            raise ValueError("page and per_page must be positive")
        try:
            names = self.photo_manager.list_photos()
        except PhotoStorageError as exc:
            raise PhotoStorageError(
                f"errore nel recupero della lista delle immagini: {exc}"
            ) from exc

        photos = sorted(
            (
                Photo(
                    image_name=name,
                    thumbnail_url=self.url_manager.thumbnail_url(name),
                    preview_url=self.url_manager.preview_url(name),
                )
                for name in names
                if self.photo_manager.thumbnail_exists(name)
                and self.photo_manager.preview_exists(name)
            ),
            key=lambda photo: photo.image_name,
            reverse=True,
        )

        total_pages = math.ceil(len(photos) / per_page)
        start = (page - 1) * per_page
        return photos[start : start + per_page], total_pages

    def add_photo(
        self,
        stream: BinaryIO,
        image_name: str,
        content_type: str,
        file_size: int,
    ) -> Photo:
        """Store an uploaded image, queue it for processing and describe it."""
        try:
            real_type, content = self.photo_manager.detect_mime_type(stream)
        except PhotoStorageError as exc:
            raise PhotoStorageError(f"errore nella lettura del file: {exc}") from exc

        if not is_valid_image_mime_type(real_type):
            raise InvalidImageError(
                "il file non è un'immagine valida o il formato non è supportato"
            )

        if not is_image_mime_type(content_type) or not mime_types_match(content_type, real_type):
            logger.warning(
                "MIME type dichiarato (%s) diverso da quello reale (%s)",
                content_type,
                real_type,
            )

        file_name = self.photo_manager.save_photo(content, image_name, real_type, file_size)

        try:
            self.queue_manager.add_image(file_name)
        except QueueError as exc:
            logger.error("Errore nell'aggiunta dell'immagine alla coda: %s", exc)

        return Photo(
            image_name=file_name,
            image_url=self.url_manager.image_url(file_name),
            thumbnail_url=self.url_manager.thumbnail_url(file_name),
            preview_url=self.url_manager.preview_url(file_name),
        )