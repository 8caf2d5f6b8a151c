"""The Redis list through which uploaded images are handed to the processor."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import redis

IMAGE_PROCESSING_QUEUE = "image_processing_queue"


class QueueError(Exception):
    """Raised when the processing queue cannot be reached or answers oddly."""


def _split_address(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep or not host:
        return addr, 6379
    return host, int(port)


class QueueManager:
    """Pushes image names onto the processing queue and pops them off."""

    def __init__(
        self,
        addr: str = "localhost:6379",
        password: str | None = None,
        db: int = 0,
        client: Any = None,
    ) -> None:
        if client is None:
            host, port = _split_address(addr)
            client = redis.Redis(
                host=host,
                port=port,
                password=password or None,
                db=db,
                decode_responses=True,
            )
        self.client = client

    def __enter__(self) -> "QueueManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def add_image(self, image_name: str) -> None:
        """Append an image name to the queue."""
        try:
            self.client.lpush(IMAGE_PROCESSING_QUEUE, image_name)
        except redis.RedisError as exc:
            raise QueueError(f"errore nell'aggiunta dell'immagine alla coda: {exc}") from exc

    def next_image(self, timeout: float | timedelta) -> str | None:
        """Block up to ``timeout`` for the oldest queued name; None if none came."""
        seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else timeout
        try:
            result = self.client.brpop(IMAGE_PROCESSING_QUEUE, timeout=seconds)
        except redis.RedisError as exc:
            raise QueueError(f"errore nel recupero dell'immagine dalla coda: {exc}") from exc
        if result is None:
            return None
        if len(result) < 2:
            raise QueueError("risposta Redis malformata")
        value = result[1]
        return value.decode("utf-8") if isinstance(value, bytes) else value

    def length(self) -> int:
        """Number of names waiting in the queue."""
        try:
            return int(self.client.llen(IMAGE_PROCESSING_QUEUE))
        except redis.RedisError as exc:
            raise QueueError(f"errore nel recupero della lunghezza della coda: {exc}") from exc

    def test_connection(self) -> None:
        """Ping the server, raising QueueError when it cannot be reached."""
        try:
            self.client.ping()
        except redis.RedisError as exc:
            raise QueueError(f"errore nella connessione a Redis: {exc}") from exc

    def close(self) -> None:
        self.client.close()