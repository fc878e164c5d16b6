"""
Tests for the generated OpenAPI document.
"""

from api.openapi import OPENAPI_VERSION, build_openapi_schema, downgrade_nullable


def test_openapi_served_as_3_0(client):
    """Test the document is served at its fixed path with 3.0 metadata."""
    response = client.get("/openapi.json")

    assert response.status_code == 200
    schema = response.json()
    assert schema["openapi"] == OPENAPI_VERSION
    assert schema["info"]["title"] == "Books API"
    assert schema["info"]["version"] == "1.0.0"
    assert schema["info"]["description"] == "API for managing books"
    assert schema["servers"] == [{"url": "http://localhost:3000"}]


def test_openapi_documents_book_routes(client):
    """Test every CRUD operation and its status codes are described."""
    paths = client.get("/openapi.json").json()["paths"]

    assert set(paths["/books"]) == {"get", "post"}
    assert set(paths["/books/{book_id}"]) == {"get", "put", "delete"}

    assert set(paths["/books"]["post"]["responses"]) == {"201", "400"}
    assert set(paths["/books"]["get"]["responses"]) == {"200"}
    assert set(paths["/books/{book_id}"]["get"]["responses"]) == {"200", "404"}
    assert set(paths["/books/{book_id}"]["put"]["responses"]) == {"200", "400", "404"}
    assert set(paths["/books/{book_id}"]["delete"]["responses"]) == {"204", "404"}

    assert paths["/books"]["post"]["summary"] == "Create a new book"

    parameter = paths["/books/{book_id}"]["get"]["parameters"][0]
    assert parameter["in"] == "path"
    assert parameter["required"] is True
    assert parameter["schema"]["type"] == "integer"


def test_openapi_book_schemas(client):
    """Test request and response schemas use the JSON field names."""
    schemas = client.get("/openapi.json").json()["components"]["schemas"]

    create = schemas["BookCreate"]
    assert set(create["required"]) == {"title", "author"}
    assert set(create["properties"]) == {"title", "author", "publishedYear"}

    book = schemas["Book"]
    assert book["properties"]["id"]["type"] == "integer"
    assert book["properties"]["publishedYear"]["type"] == "integer"
    assert book["properties"]["publishedYear"]["nullable"] is True

    assert "HTTPValidationError" not in schemas
    assert "ValidationError" not in schemas


def _null_types(node):
    if isinstance(node, dict):
        found = [node] if node.get("type") == "null" else []
        return found + [hit for value in node.values() for hit in _null_types(value)]
    if isinstance(node, list):
        return [hit for item in node for hit in _null_types(item)]
    return []


def test_openapi_has_no_null_types(client):
    """Test no JSON Schema 2020-12 null types leak into the 3.0 document."""
    assert _null_types(client.get("/openapi.json").json()) == []


def test_openapi_schema_is_cached(app, api_settings):
    """Test the document is generated once per app."""
    first = build_openapi_schema(app, api_settings)

    assert build_openapi_schema(app, api_settings) is first
    assert app.openapi() is first


class TestDowngradeNullable:
    """Test cases for downgrade_nullable."""

    def test_scalar_union(self):
        """Test a nullable scalar collapses to the scalar with nullable."""
        node = {"anyOf": [{"type": "integer"}, {"type": "null"}], "title": "Year"}

        assert downgrade_nullable(node) == {"type": "integer", "title": "Year", "nullable": True}

    def test_reference_union(self):
        """Test a nullable reference is wrapped in allOf."""
        node = {"anyOf": [{"$ref": "#/components/schemas/Book"}, {"type": "null"}]}

        assert downgrade_nullable(node) == {
            "allOf": [{"$ref": "#/components/schemas/Book"}],
            "nullable": True
        }

    def test_multi_type_union(self):
        """Test remaining variants are kept in anyOf."""
        node = {"anyOf": [{"type": "string"}, {"type": "integer"}, {"type": "null"}]}

        assert downgrade_nullable(node) == {
            "anyOf": [{"type": "string"}, {"type": "integer"}],
            "nullable": True
        }

    def test_nested_and_untouched(self):
        """Test nested nodes are rewritten and plain nodes are left alone."""
        node = {
            "properties": {
                "a": {"type": "string"},
                "b": {"anyOf": [{"type": "string"}, {"type": "null"}]},
            },
            "required": ["a"],
        }

        assert downgrade_nullable(node) == {
            "properties": {
                "a": {"type": "string"},
                "b": {"type": "string", "nullable": True},
            },
            "required": ["a"],
        }
