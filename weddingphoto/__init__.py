"""HTTP backend for uploading wedding photos, queueing them for processing and browsing them."""

__version__ = "1.0.0"