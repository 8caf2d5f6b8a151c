"""HTTP handlers for the photo endpoints."""

from __future__ import annotations

import io
import re
from typing import BinaryIO, Mapping

from flask import Blueprint, jsonify, request

from .models import AddPhotoResponse, ErrorResponse, GetPhotosResponse
from .photos import PhotoStorageError
from .service import InvalidImageError, PhotoService

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100

_INTEGER = re.compile(r"[+-]?[0-9]+")
_UNSUPPORTED_MARKERS = ("formato non è supportato", "non è un'immagine valida")


def _parse_int(value: str | None) -> int | None:
    if value and _INTEGER.fullmatch(value):
        return int(value)
    return None


def parse_pagination(args: Mapping[str, str]) -> tuple[int, int]:
    """Page number and page size from query arguments, falling back to defaults."""
    page = DEFAULT_PAGE
    per_page = DEFAULT_PER_PAGE

    requested_page = _parse_int(args.get("page"))
    if requested_page is not None and requested_page > 0:
        page = requested_page

    requested_size = _parse_int(args.get("per_page"))
    if requested_size is not None and 0 < requested_size <= MAX_PER_PAGE:
        per_page = requested_size

    return page, per_page


def _stream_size(stream: BinaryIO) -> int:
    try:
        position = stream.tell()
        size = stream.seek(0, io.SEEK_END)
        stream.seek(position)
    except (OSError, AttributeError, ValueError):
        return 0
    return size


def _error(message: str, status: int):
    return jsonify(ErrorResponse(message=message).to_dict()), status


def create_photo_blueprint(photo_service: PhotoService) -> Blueprint:
    """A blueprint serving ``/photos`` for listing and uploading photos."""
    blueprint = Blueprint("photos", __name__)

    @blueprint.post("/photos")
    def add_photo():
        upload = request.files.get("image")
        if upload is None:
            return _error("Errore nel recupero del file: http: no such file", 400)

        image_name = request.form.get("image_name", "") or (upload.filename or "")
        stream = upload.stream
        size = _stream_size(stream)

        try:
            photo = photo_service.add_photo(
                stream, image_name, upload.content_type or "", size
            )
        except (InvalidImageError, PhotoStorageError) as exc:
            message = str(exc)
            status = 400
            if isinstance(exc, InvalidImageError) or any(
                marker in message for marker in _UNSUPPORTED_MARKERS
            ):
                status = 415
            return _error(message, status)
        finally:
            upload.close()

        return jsonify(AddPhotoResponse(photo=photo).to_dict()), 200

    @blueprint.get("/photos")
    def get_photos():
        page, per_page = parse_pagination(request.args)
        try:
            photos, total_pages = photo_service.photo_list(page, per_page)
        except PhotoStorageError as exc:
            return _error(f"Errore nel recupero delle foto: {exc}", 500)

        response = GetPhotosResponse(photos=photos, page=page, total_pages=total_pages)
        return jsonify(response.to_dict()), 200

    return blueprint