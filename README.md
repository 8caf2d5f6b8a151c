# weddingphoto

A small HTTP backend that lets wedding guests upload photos and lets anyone
browse them page by page.

An upload is checked by its content, not by its declared type. JPEG, PNG, GIF
and WebP are accepted. The file is stored in a media directory under a new
unique name of the form `YYYY-MM-DD-HH-MM-SS-NNNNNNNN.ext`. Its name is then
pushed onto the Redis list `image_processing_queue`. The gallery lists only
photos whose thumbnail and preview already exist, in
`<media>/thumbnails/` and `<media>/previews/`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
weddingphoto
```

The command takes no options apart from `--help`. Settings come from the
environment, and from a `.env` file in the working directory if there is one:

| Variable         | Default                 | Meaning                                   |
|------------------|-------------------------|-------------------------------------------|
| `HOST`           | `0.0.0.0`               | Address to listen on                      |
| `PORT`           | `8739`                  | Port to listen on                         |
| `BASE_URL`       | `http://localhost:8739` | Public address used to build photo URLs   |
| `PHOTOS_DIR`     | `media`                 | Where uploads are stored and served from  |
| `REDIS_ADDR`     | `localhost:6379`        | Redis server (`host:port`) for the queue  |
| `REDIS_PASSWORD` | *(empty)*               | Redis password, if any                    |

The server always uses Redis database 0.

If Redis cannot be reached at start-up, the server logs a warning and runs
anyway. Uploads are still saved. If an upload cannot be queued, the error is
logged and the upload still succeeds.

## HTTP API

Every response carries permissive CORS headers, and any `OPTIONS` request gets
an empty `204`. Errors have the shape `{"message": "..."}`.

### `POST /api/photos`

Send a multipart form upload with these fields:

- `image`: the image file. It is required.
- `image_name`: optional. If it is given, its extension is used for the stored
  file. Otherwise the uploaded file name's extension is used. If there is none,
  the extension follows the detected type.

On success it returns `200` with this body:

```json
{
  "photo": {
    "image_name": "2024-06-01-18-30-05-01234567.jpg",
    "image_url": "http://localhost:8739/media/2024-06-01-18-30-05-01234567.jpg",
    "thumbnail_url": "http://localhost:8739/media/thumbnails/2024-06-01-18-30-05-01234567.jpg",
    "preview_url": "http://localhost:8739/media/previews/2024-06-01-18-30-05-01234567.jpg"
  }
}
```

Other outcomes:

- A missing `image` field gives `400`.
- Content that is not a supported image gives `415`.
- A storage failure gives `400`.

### `GET /api/photos?page=1&per_page=10`

This lists the processed photos, ordered by file name in descending order, which puts the newest first.

- `page` defaults to 1.
- `per_page` defaults to 10 and may be at most 100.
- Values that are missing, not integers or out of range fall back to the defaults.

```json
{"photos": [...], "page": 1, "total_pages": 3}
```

In this listing, each photo's `image_url` is an empty string. Only
`image_name`, `thumbnail_url` and `preview_url` are filled in. A page past the
end returns an empty `photos` list. A failure to read the media directory gives
`500`.

### Other routes

- `GET /media/<path>` serves files from the photos directory, including
  `thumbnails/` and `previews/`.
- `GET /swagger/doc.json` returns the Swagger 2.0 description of the API. Its
  host, scheme and base path are derived from `BASE_URL`.

## What it does not do

The package never creates thumbnails or previews. A separate worker must do
that. The worker takes names off the queue, for example with
`QueueManager.next_image(timeout)`, and writes the files into
`<media>/thumbnails/` and `<media>/previews/`. Until both files exist, an upload
does not appear in `GET /api/photos`.

The package has no route for deleting photos. `PhotoManager.delete_photo`
exists for use from code.

The package also serves no interactive Swagger UI, only the JSON description.

## Using it as a library

```python
from weddingphoto.app import Settings, create_app, swagger_info_for
from weddingphoto.photos import PhotoManager
from weddingphoto.processing_queue import QueueManager
from weddingphoto.service import PhotoService
from weddingphoto.urls import UrlManager

settings = Settings.from_env()
service = PhotoService(
    PhotoManager(settings.photos_dir),
    UrlManager(settings.base_url),
    QueueManager(settings.redis_addr, settings.redis_password, settings.redis_db),
)
app = create_app(service, settings.photos_dir, swagger_info_for(settings.base_url))
```

The modules are:

- `weddingphoto.app`: `Settings`, `swagger_info_for`, `create_app` and `main`.
- `weddingphoto.controller`: `create_photo_blueprint`, a Flask blueprint serving
  `/photos`, and `parse_pagination`.
- `weddingphoto.service`: `PhotoService` with `photo_list(page, per_page)` and
  `add_photo(...)`, plus `InvalidImageError`.
- `weddingphoto.photos`: `PhotoManager`, which handles storage, listing, deletion
  and type sniffing with `detect_mime_type`. It also holds helpers such as
  `detect_mime_from_magic_bytes`, `is_image_file` and `PhotoStorageError`.
- `weddingphoto.processing_queue`: `QueueManager`, which has `add_image`,
  `next_image`, `length`, `test_connection` and `close`, and can be used as a
  context manager. It also holds `QueueError`.
- `weddingphoto.urls`: `UrlManager`, which has `image_url`, `thumbnail_url` and
  `preview_url`.
- `weddingphoto.models`: `Photo`, `AddPhotoRequest`, `AddPhotoResponse`,
  `ErrorResponse` and `GetPhotosResponse`.
- `weddingphoto.apidocs`: `SwaggerInfo` and `read_doc`.
- `weddingphoto.env`: `get_env`.