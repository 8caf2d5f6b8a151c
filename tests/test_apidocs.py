import json

from weddingphoto.apidocs import SwaggerInfo, read_doc


def _collect_refs(node):
    if isinstance(node, dict):
        found = [node["$ref"]] if "$ref" in node else []
        return found + [ref for key, value in node.items() if key != "$ref"
                        for ref in _collect_refs(value)]
    if isinstance(node, list):
        return [ref for item in node for ref in _collect_refs(item)]
    return []


def test_default_document():
    doc = json.loads(read_doc())
    assert doc["swagger"] == "2.0"
    assert doc["info"]["title"] == "Wedding Photo Backend API"
    assert doc["info"]["description"] == "API per la gestione delle foto del matrimonio"
    assert doc["info"]["version"] == "1.0"
    assert doc["basePath"] == "/"
    assert doc["host"] == ""
    assert doc["schemes"] == []


def test_deployment_values_are_filled_in():
    info = SwaggerInfo(host="photos.example.com", base_path="/api-root", schemes=["https"])
    doc = json.loads(read_doc(info))
    assert doc["host"] == "photos.example.com"
    assert doc["basePath"] == "/api-root"
    assert doc["schemes"] == ["https"]


def test_special_characters_round_trip():
    text = 'line one\nline "two"\ttabbed \\ end'
    info = SwaggerInfo(title='A "quoted" title', description=text)
    doc = json.loads(read_doc(info))
    assert doc["info"]["description"] == text
    assert doc["info"]["title"] == 'A "quoted" title'


def test_paths_describe_photo_endpoints():
    paths = json.loads(read_doc())["paths"]
    assert set(paths["/api/photos"]) == {"get", "post"}
    get = paths["/api/photos"]["get"]
    assert [p["name"] for p in get["parameters"]] == ["page", "per_page"]
    assert set(get["responses"]) == {"200", "400", "500"}
    post = paths["/api/photos"]["post"]
    assert post["consumes"] == ["multipart/form-data"]
    assert post["responses"]["200"]["schema"]["$ref"] == "#/definitions/model.AddPhotoResponse"


def test_every_reference_resolves():
    doc = json.loads(read_doc())
    names = {ref.removeprefix("#/definitions/") for ref in _collect_refs(doc)}
    assert names == {
        "model.AddPhotoResponse",
        "model.ErrorResponse",
        "model.GetPhotosResponse",
        "model.Photo",
    }
    assert names - set(doc["definitions"]) == set()


def test_definitions_require_all_photo_fields():
    definitions = json.loads(read_doc())["definitions"]
    photo = definitions["model.Photo"]
    assert sorted(photo["required"]) == sorted(photo["properties"])
    assert definitions["model.GetPhotosResponse"]["required"] == ["page", "photos", "total_pages"]
    assert definitions["model.ErrorResponse"]["required"] == ["message"]