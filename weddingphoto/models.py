"""Data objects exchanged by the photo API."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class Photo:
    """A stored photo and the URLs under which it and its derivatives are served."""

    image_name: str
    image_url: str = ""
    thumbnail_url: str = ""
    preview_url: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class AddPhotoRequest:
    """A request to add a photo whose content is given as base64 text."""

    image_content: str
    image_name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AddPhotoRequest":
        """Build a request from decoded JSON; both fields are required and non-empty."""
        values = {}
        for key in ("image_content", "image_name"):
            value = data.get(key)
            if not isinstance(value, str) or not value:
                raise ValueError(f"field {key!r} is required")
            values[key] = value
        return cls(**values)


@dataclass(frozen=True)
class AddPhotoResponse:
    """The reply to a successful upload."""

    photo: Photo

    def to_dict(self) -> dict[str, Any]:
        return {"photo": self.photo.to_dict()}


@dataclass(frozen=True)
class ErrorResponse:
    """The reply sent when a request fails."""

    message: str

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message}


@dataclass(frozen=True)
class GetPhotosResponse:
    """One page of the photo list."""

    photos: list[Photo] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "photos": [photo.to_dict() for photo in self.photos],
            "page": self.page,
            "total_pages": self.total_pages,
        }