"""Schema management service tests."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest
from schema_reconciler.schema_management import (
    SchemaDocument,
    SchemaError,
    SchemaKind,
    load_schema_document,
    load_schema_file,
    schema_node_from_raw,
)


def _samples() -> Path:
    return Path(__file__).resolve().parents[3] / "samples"


def test_openapi_sample_loads_component_schemas_and_endpoints() -> None:
    document = load_schema_file(_samples() / "sample-openapi.json")

    assert document.spec_version == "3.0.3"
    assert list(document.component_schemas) == [
        "OrderList",
        "Order",
        "NewOrder",
        "Customer",
        "OrderItem",
        "Category",
    ]
    assert document.definitions == {}
    assert [endpoint.id for endpoint in document.endpoints] == [
        "GET /orders",
        "POST /orders",
        "GET /orders/{orderId}",
        "DELETE /orders/{orderId}",
        "GET /categories/tree",
    ]


def test_request_body_prefers_json_media_type() -> None:
    document = load_schema_file(_samples() / "sample-openapi.json")
    endpoint = document.find_endpoint("POST /orders")

    assert endpoint is not None
    assert endpoint.request_schema is not None
    assert endpoint.request_schema.ref == "#/components/schemas/NewOrder"
    assert endpoint.response_schema is not None
    assert endpoint.response_schema.ref == "#/components/schemas/Order"


def test_endpoint_without_body_or_schema_has_no_schemas() -> None:
    document = load_schema_file(_samples() / "sample-openapi.json")
    endpoint = document.find_endpoint("delete /orders/{orderId}")

    assert endpoint is not None
    assert endpoint.request_schema is None
    assert endpoint.response_schema is None
    assert endpoint.summary == "DELETE /orders/{orderId}"


def test_swagger_yaml_sample_reads_body_parameter_and_numeric_status_code() -> None:
    document = load_schema_file(_samples() / "sample-swagger.yaml")
    endpoint = document.find_endpoint("POST /users")

    assert document.spec_version == "2.0"
    assert set(document.definitions) == {"NewUser", "User"}
    assert endpoint is not None
    assert endpoint.request_schema is not None
    assert endpoint.request_schema.ref == "#/definitions/NewUser"
    assert endpoint.response_schema is not None
    assert endpoint.response_schema.ref == "#/definitions/User"


def test_document_without_version_key_is_rejected() -> None:
    with pytest.raises(SchemaError, match="valid Swagger/OpenAPI"):
        load_schema_document(json.dumps({"paths": {}}))


def test_invalid_json_is_rejected() -> None:
    with pytest.raises(SchemaError, match="Invalid JSON"):
        load_schema_document("{not json")


def test_missing_schema_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(SchemaError, match="not found"):
        load_schema_file(tmp_path / "missing.json")


def test_translation_marks_nullable_variants() -> None:
    openapi_31 = schema_node_from_raw({"type": ["string", "null"]})
    swagger = schema_node_from_raw({"type": "string", "x-nullable": True})
    plain = schema_node_from_raw({"type": "string"})

    assert openapi_31.kind is SchemaKind.STRING
    assert openapi_31.type_name == "string"
    assert openapi_31.nullable is True
    assert swagger.nullable is True
    assert plain.nullable is False


def test_translation_builds_object_composite_and_enum_nodes() -> None:
    node = schema_node_from_raw(
        {
            "type": "object",
            "required": ["kind"],
            "properties": {
                "kind": {"type": "string", "enum": ["a", "b"]},
                "payload": {"oneOf": [{"type": "string"}, {"type": "integer"}]},
                "labels": {"type": "object", "additionalProperties": {"type": "string"}},
            },
        }
    )

    assert node.kind is SchemaKind.OBJECT
    assert node.required == frozenset({"kind"})
    assert node.properties["kind"].kind is SchemaKind.ENUM
    assert node.properties["kind"].enum == ("a", "b")
    payload = node.properties["payload"]
    assert payload.kind is SchemaKind.COMPOSITE
    assert payload.combinator == "oneOf"
    assert [member.kind for member in payload.members] == [SchemaKind.STRING, SchemaKind.NUMBER]
    labels = node.properties["labels"]
    assert labels.additional_properties is not None
    assert labels.additional_properties is not True
    assert labels.has_object_shape is True


def test_translation_treats_unknown_shapes_as_any() -> None:
    assert schema_node_from_raw("not a schema").kind is SchemaKind.ANY
    assert schema_node_from_raw({"description": "free form"}).kind is SchemaKind.ANY


def test_document_keeps_only_translated_schemas() -> None:
    field_names = {item.name for item in dataclasses.fields(SchemaDocument)}

    assert field_names == {
        "spec_version",
        "definitions",
        "component_schemas",
        "endpoints",
        "source_path",
    }
