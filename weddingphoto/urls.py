"""Public URLs of stored images."""


class UrlManager:
    """Builds the URLs under which photos, thumbnails and previews are served."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.removesuffix("/")

    def image_url(self, image_name: str) -> str:
        return f"{self.base_url}/media/{image_name}"

    def thumbnail_url(self, image_name: str) -> str:
        return f"{self.base_url}/media/thumbnails/{image_name}"

    def preview_url(self, image_name: str) -> str:
        return f"{self.base_url}/media/previews/{image_name}"