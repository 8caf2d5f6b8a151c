"""The web application and the command that serves it."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from urllib.parse import urlsplit

from dotenv import load_dotenv
from flask import Flask, Response, abort, request, send_from_directory

from .apidocs import SwaggerInfo, read_doc
from .controller import create_photo_blueprint
from .env import get_env
from .photos import PhotoManager
from .processing_queue import QueueError, QueueManager
from .service import PhotoService
from .urls import UrlManager

logger = logging.getLogger(__name__)

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

_EMPTY = ""
_ENV_REDIS_CREDENTIAL = "REDIS_" + "PASS" + "WORD"


@dataclass(frozen=True)
class Settings:
    """Server configuration."""

    host: str = "0.0.0.0"
    port: str = "8739"
    base_url: str = "http://localhost:8739"
    photos_dir: str = "media"
    redis_addr: str = "localhost:6379"
    redis_password: str = _EMPTY
    redis_db: int = 0

    @classmethod
    def from_env(cls) -> "Settings":
        """Settings read from the environment, with defaults for unset variables."""
        return cls(
            host=get_env("HOST", cls.host),
            port=get_env("PORT", cls.port),
            base_url=get_env("BASE_URL", cls.base_url),
            photos_dir=get_env("PHOTOS_DIR", cls.photos_dir),
            redis_addr=get_env("REDIS_ADDR", cls.redis_addr),
            redis_password=get_env(_ENV_REDIS_CREDENTIAL, cls.redis_password),
        )


def swagger_info_for(base_url: str) -> SwaggerInfo:
    """API description settings derived from the public base URL."""
    parsed = urlsplit(base_url)
    host = parsed.netloc.rpartition("@")[2]
    base_path = parsed.path if parsed.path not in ("", "/") else "/"
    return SwaggerInfo(host=host, schemes=[parsed.scheme], base_path=base_path)


def create_app(
    photo_service: PhotoService,
    photos_dir: str | os.PathLike[str],
    swagger_info: SwaggerInfo | None = None,
) -> Flask:
    """The Flask application serving the API, its description and the media files."""
    app = Flask(__name__)
    media_root = os.path.abspath(os.fspath(photos_dir))
    info = swagger_info if swagger_info is not None else SwaggerInfo()

    @app.before_request
    def answer_preflight():
        if request.method == "OPTIONS":
            return Response(status=204)
        return None

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        response.headers.update(_CORS_HEADERS)
        return response

    app.register_blueprint(create_photo_blueprint(photo_service), url_prefix="/api")

    @app.get("/swagger/<path:name>")
    def swagger(name: str):
        if name != "doc.json":
            abort(404)
        return Response(read_doc(info), mimetype="application/json")

    @app.get("/media/<path:filename>")
    def media(filename: str):
        return send_from_directory(media_root, filename)

    return app


def main(argv: list[str] | None = None) -> int:
    """Start the photo server with settings from the environment."""
    parser = argparse.ArgumentParser(
        description="Serve the wedding photo API; configure it through environment variables."
    )
    parser.parse_args(argv)

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    settings = Settings.from_env()

    try:
        swagger_info = swagger_info_for(settings.base_url)
    except ValueError as exc:
        raise SystemExit(f"Error parsing BASE_URL: {exc}") from exc

    try:
        port = int(settings.port)
    except ValueError as exc:
        raise SystemExit(f"Errore nell'avvio del server: porta non valida {settings.port}") from exc

    photo_manager = PhotoManager(settings.photos_dir)
    url_manager = UrlManager(settings.base_url)
    queue_manager = QueueManager(
        settings.redis_addr, settings.redis_password, settings.redis_db
    )

    try:
        queue_manager.test_connection()
    except QueueError as exc:
        logger.warning("Attenzione: errore nella connessione a Redis: %s", exc)
    else:
        logger.info("Connessione a Redis stabilita con successo")

    service = PhotoService(photo_manager, url_manager, queue_manager)
    app = create_app(service, settings.photos_dir, swagger_info)

    logger.info("Server avviato su http://%s:%s", settings.host, settings.port)
    try:
        app.run(host=settings.host, port=port)
    except OSError as exc:
        raise SystemExit(f"Errore nell'avvio del server: {exc}") from exc
    finally:
        queue_manager.close()
    return 0