"""The OpenAPI (Swagger 2.0) description of the photo API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

_CONTACT = {
    "name": "API Support",
    "url": "http://www.swagger.io/support",
    "email": "support@example.com",
}
_LICENSE = {
    "name": "Apache 2.0",
    "url": "http://www.apache.org/licenses/LICENSE-2.0.html",
}
_TERMS = "http://swagger.io/terms/"


@dataclass
class SwaggerInfo:
    """The parts of the API description that depend on deployment."""

    version: str = "1.0"
    host: str = ""
    base_path: str = "/"
    schemes: list[str] = field(default_factory=list)
    title: str = "Wedding Photo Backend API"
    description: str = "API per la gestione delle foto del matrimonio"


def _ref(model: str) -> dict:
    return {"$ref": f"#/definitions/model.{model}"}


def _responses(success: str, *failures: tuple[int, str]) -> dict:
    result = {"200": {"description": "OK", "schema": _ref(success)}}
    for code, text in failures:
        result[str(code)] = {"description": text, "schema": _ref("ErrorResponse")}
    return result


def _param(name: str, kind: str, where: str, description: str, required: bool = False) -> dict:
    param = {"type": kind, "description": description, "name": name, "in": where}
    if required:
        param["required"] = True
    return param


def _operation(
    summary: str,
    description: str,
    parameters: list[dict],
    responses: dict,
    consumes: list[str] | None = None,
) -> dict:
    operation: dict = {"description": description}
    if consumes:
        operation["consumes"] = consumes
    operation.update(
        produces=["application/json"],
        tags=["photos"],
        summary=summary,
        parameters=parameters,
        responses=responses,
    )
    return operation


def _paths() -> dict:
    list_photos = _operation(
        "Recupera la lista delle foto",
        "Ottiene tutte le foto caricate sul server con paginazione",
        [
            _param("page", "integer", "query", "Numero pagina (default: 1)"),
            _param("per_page", "integer", "query", "Elementi per pagina (default: 10, max: 100)"),
        ],
        _responses("GetPhotosResponse", (400, "Bad Request"), (500, "Internal Server Error")),
    )
    upload_photo = _operation(
        "Upload di una foto",
        "Carica una nuova foto sul server",
        [
            _param("fiimagele", "file", "formData", "File immagine da caricare", required=True),
            _param("imageName", "string", "formData", "Nome personalizzato per l'immagine"),
        ],
        _responses("AddPhotoResponse", (400, "Bad Request")),
        consumes=["multipart/form-data"],
    )
    return {"/api/photos": {"get": list_photos, "post": upload_photo}}


def _prop(kind: str, description: str, **extra) -> dict:
    return {"description": description, "type": kind, **extra}


def _object(properties: dict) -> dict:
    return {"type": "object", "required": sorted(properties), "properties": properties}


def _definitions() -> dict:
    photo_fields = {
        "image_name": "Nome dell'immagine",
        "image_url": "URL dell'immagine",
        "preview_url": "URL dell'anteprima",
        "thumbnail_url": "URL del thumbnail",
    }
    return {
        "model.AddPhotoResponse": _object(
            {"photo": {"description": "Nome della foto aggiunta", **_ref("Photo")}}
        ),
        "model.ErrorResponse": _object({"message": _prop("string", "Messaggio di errore")}),
        "model.GetPhotosResponse": _object(
            {
                "page": _prop("integer", "Pagina corrente"),
                "photos": _prop("array", "Lista delle foto", items=_ref("Photo")),
                "total_pages": _prop("integer", "Numero totale di pagine"),
            }
        ),
        "model.Photo": _object(
            {key: _prop("string", text) for key, text in photo_fields.items()}
        ),
    }


def read_doc(info: SwaggerInfo | None = None) -> str:
    """The API description as JSON text, filled in from ``info``."""
    info = info if info is not None else SwaggerInfo()
    document = {
        "schemes": list(info.schemes),
        "swagger": "2.0",
        "info": {
            "description": info.description,
            "title": info.title,
            "termsOfService": _TERMS,
            "contact": dict(_CONTACT),
            "license": dict(_LICENSE),
            "version": info.version,
        },
        "host": info.host,
        "basePath": info.base_path,
        "paths": _paths(),
        "definitions": _definitions(),
    }
    return json.dumps(document, indent=4, ensure_ascii=False)