import io
import re

import pytest

from weddingphoto.photos import (
    PhotoManager,
    PhotoStorageError,
    detect_mime_from_magic_bytes,
    extension_from_mime_type,
    is_image_file,
    is_valid_image_mime_type,
    mime_type_from_extension,
)

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 20
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 20
GIF_BYTES = b"GIF89a" + b"\x00" * 20
WEBP_BYTES = b"RIFF\x00\x00\x00\x00WEBP" + b"\x00" * 20
NAME_PATTERN = r"\d{4}-\d{2}-\d{2}-\d{2}-\d{2}-\d{2}-\d{8}"


@pytest.mark.parametrize(
    "name, expected",
    [("a.jpg", True), ("b.JPEG", True), ("c.png", True), ("d.gif", True),
     ("e.webp", True), ("f.txt", False), ("noext", False), ("dir.jpg/file", False)],
)
def test_is_image_file(name, expected):
    assert is_image_file(name) is expected


def test_mime_type_from_extension():
    assert mime_type_from_extension("x.JPG") == "image/jpeg"
    assert mime_type_from_extension("x.webp") == "image/webp"
    assert mime_type_from_extension("x.bmp") == "application/octet-stream"


def test_extension_from_mime_type():
    assert extension_from_mime_type("image/png") == ".png"
    assert extension_from_mime_type("image/gif") == ".gif"
    assert extension_from_mime_type("text/plain") == ".jpg"


@pytest.mark.parametrize(
    "data, expected",
    [(JPEG_BYTES, "image/jpeg"), (PNG_BYTES, "image/png"), (GIF_BYTES, "image/gif"),
     (WEBP_BYTES, "image/webp"), (b"hello world!", ""), (b"\xff\xd8\xff", "")],
)
def test_detect_mime_from_magic_bytes(data, expected):
    assert detect_mime_from_magic_bytes(data) == expected


def test_valid_mime_types_round_trip_through_extensions():
    for mime in ("image/jpeg", "image/png", "image/gif", "image/webp"):
        assert is_valid_image_mime_type(mime)
        assert mime_type_from_extension("f" + extension_from_mime_type(mime)) == mime
    assert not is_valid_image_mime_type("image/jpg")
    assert not is_valid_image_mime_type("")


def test_manager_creates_directories(tmp_path):
    root = tmp_path / "media"
    PhotoManager(root)
    assert (root / "thumbnails").is_dir()
    assert (root / "previews").is_dir()


def test_list_photos_filters_and_sorts(tmp_path):
    manager = PhotoManager(tmp_path)
    for name in ["b.png", "a.jpg", "notes.txt"]:
        (tmp_path / name).write_bytes(b"x")
    (tmp_path / "folder.jpg").mkdir()
    assert manager.list_photos() == ["a.jpg", "b.png"]


def test_list_photos_missing_dir_raises(tmp_path):
    manager = PhotoManager(tmp_path / "gone")
    for sub in ("thumbnails", "previews"):
        (tmp_path / "gone" / sub).rmdir()
    (tmp_path / "gone").rmdir()
    with pytest.raises(PhotoStorageError):
        manager.list_photos()


def test_save_photo_keeps_extension_and_content(tmp_path):
    manager = PhotoManager(tmp_path)
    name = manager.save_photo(io.BytesIO(PNG_BYTES), "holiday.png", "image/png", len(PNG_BYTES))
    assert re.fullmatch(NAME_PATTERN + r"\.png", name)
    assert (tmp_path / name).read_bytes() == PNG_BYTES
    assert name in manager.list_photos()


def test_save_photo_extension_from_content_type(tmp_path):
    manager = PhotoManager(tmp_path)
    name = manager.save_photo(io.BytesIO(GIF_BYTES), "upload", "image/gif", len(GIF_BYTES))
    stem, dot, extension = name.rpartition(".")
    assert (dot, extension) == (".", "gif")
    assert re.fullmatch(NAME_PATTERN, stem) is not None
    assert (tmp_path / name).read_bytes() == GIF_BYTES
    assert manager.list_photos() == [name]


def test_save_photo_into_missing_dir_raises(tmp_path):
    manager = PhotoManager(tmp_path / "media")
    for sub in ("thumbnails", "previews"):
        (tmp_path / "media" / sub).rmdir()
    (tmp_path / "media").rmdir()
    with pytest.raises(PhotoStorageError):
        manager.save_photo(io.BytesIO(JPEG_BYTES), "a.jpg", "image/jpeg", 1)


def test_delete_photo(tmp_path):
    manager = PhotoManager(tmp_path)
    (tmp_path / "a.jpg").write_bytes(b"x")
    manager.delete_photo("a.jpg")
    assert manager.list_photos() == []


def test_delete_missing_photo_raises(tmp_path):
    manager = PhotoManager(tmp_path)
    with pytest.raises(PhotoStorageError, match="file non trovato: nope.jpg"):
        manager.delete_photo("nope.jpg")


def test_thumbnail_and_preview_exist(tmp_path):
    manager = PhotoManager(tmp_path)
    assert manager.thumbnail_exists("a.jpg") is False
    assert manager.preview_exists("a.jpg") is False
    (tmp_path / "thumbnails" / "a.jpg").write_bytes(b"x")
    (tmp_path / "previews" / "a.jpg").write_bytes(b"x")
    assert manager.thumbnail_exists("a.jpg") is True
    assert manager.preview_exists("a.jpg") is True


def test_detect_mime_type_preserves_stream(tmp_path):
    manager = PhotoManager(tmp_path)
    content = JPEG_BYTES + bytes(range(256)) * 4
    mime, stream = manager.detect_mime_type(io.BytesIO(content))
    assert mime == "image/jpeg"
    assert stream.read() == content


def test_detect_mime_type_short_stream(tmp_path):
    manager = PhotoManager(tmp_path)
    mime, stream = manager.detect_mime_type(io.BytesIO(b"abc"))
    assert mime == ""
    assert stream.read() == b"abc"


def test_detected_stream_can_be_saved(tmp_path):
    manager = PhotoManager(tmp_path)
    content = WEBP_BYTES * 50
    mime, stream = manager.detect_mime_type(io.BytesIO(content))
    name = manager.save_photo(stream, "", mime, len(content))
    assert name.endswith(".webp")
    assert (tmp_path / name).read_bytes() == content