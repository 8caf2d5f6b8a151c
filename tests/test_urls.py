from weddingphoto.urls import UrlManager


def test_image_url():
    urls = UrlManager("http://localhost:8739")
    assert urls.image_url("a.jpg") == "http://localhost:8739/media/a.jpg"


def test_thumbnail_url():
    urls = UrlManager("http://localhost:8739")
    assert urls.thumbnail_url("a.jpg") == "http://localhost:8739/media/thumbnails/a.jpg"


def test_preview_url():
    urls = UrlManager("http://localhost:8739")
    assert urls.preview_url("a.jpg") == "http://localhost:8739/media/previews/a.jpg"


def test_trailing_slash_is_removed():
    with_slash = UrlManager("http://example.com/base/")
    without_slash = UrlManager("http://example.com/base")
    assert with_slash.image_url("x.png") == without_slash.image_url("x.png")
    assert with_slash.base_url == "http://example.com/base"


def test_only_one_trailing_slash_is_removed():
    assert UrlManager("http://example.com//").base_url == "http://example.com/"