"""
JSON Schema bridge.

Definitions are usually authored as plain JSON Schema documents (the same
shape used for tool parameters elsewhere in the framework). This module
converts between those documents and the schema IR.

Mapping:
    {"type": "string"}                          StringSchema
    {"type": "number"} / {"type": "integer"}    NumberSchema
    {"type": "boolean"}                         BooleanSchema
    {"const": value}                            LiteralSchema
    {"type": "array", "items": {...}}           ArraySchema
    {"type": "object", "properties": {...},
     "required": [...]}                         ObjectSchema (non-required
                                                properties are optional)
    {"type": "object",
     "additionalProperties": {...}}             RecordSchema
    {"allOf": [a, b, ...]}                      IntersectionSchema (left fold)
    {"anyOf": [a, {"type": "null"}]}            OptionalSchema (outside object
                                                properties)
    {"$ref": "#/entities/<key>"}                EntitySchema

Usage:
    schema = from_json_schema({
        "type": "object",
        "properties": {"item": {"$ref": "#/entities/item"}},
        "required": ["item"],
    })
    to_json_schema(schema)  # round-trips to the same document
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from interlace.errors import SchemaConversionError

from .nodes import (
    ArraySchema,
    BaseSchema,
    BooleanSchema,
    EntitySchema,
    IntersectionSchema,
    LiteralSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    RecordSchema,
    Schema,
    StringSchema,
)

ENTITY_REF_PREFIX = "#/entities/"
NULL_SCHEMA = {"type": "null"}

_schema_adapter: TypeAdapter[Schema] = TypeAdapter(Schema)


def from_json_schema(document: dict[str, Any]) -> Schema:
    """
    Convert a JSON Schema document to a schema node.

    Args:
        document: JSON Schema dict

    Returns:
        Equivalent schema node

    Raises:
        SchemaConversionError: If the document uses a construct the IR
            cannot represent
    """
    if not isinstance(document, dict):
        raise SchemaConversionError(f"Expected a JSON Schema object, got {type(document).__name__}")

    description = document.get("description")

    if "$ref" in document:
        ref = document["$ref"]
        if not isinstance(ref, str) or not ref.startswith(ENTITY_REF_PREFIX):
            raise SchemaConversionError(f"Unsupported $ref '{ref}'")
        return EntitySchema(entity=ref[len(ENTITY_REF_PREFIX) :], description=description)

    if "allOf" in document:
        parts = [from_json_schema(part) for part in document["allOf"]]
        if not parts:
            raise SchemaConversionError("allOf must contain at least one schema")
        result = parts[0]
        for part in parts[1:]:
            result = IntersectionSchema(left=result, right=part)
        if description is not None:
            result = result.model_copy(update={"description": description})
        return result

    if "anyOf" in document:
        return _nullable_from_json_schema(document["anyOf"], description)

    if "const" in document:
        return LiteralSchema(value=document["const"], description=description)

    schema_type = document.get("type")

    if schema_type == "string":
        return StringSchema(description=description)
    if schema_type in ("number", "integer"):
        return NumberSchema(integer=schema_type == "integer", description=description)
    if schema_type == "boolean":
        return BooleanSchema(description=description)
    if schema_type == "array":
        items = document.get("items")
        if items is None:
            raise SchemaConversionError("Array schema requires 'items'")
        return ArraySchema(items=from_json_schema(items), description=description)
    if schema_type == "object":
        return _object_from_json_schema(document, description)

    raise SchemaConversionError(f"Unsupported schema type: {schema_type!r}")


def _nullable_from_json_schema(variants: list[Any], description: str | None) -> Schema:
    non_null = [variant for variant in variants if variant != NULL_SCHEMA]
    if len(variants) != 2 or len(non_null) != 1:
        raise SchemaConversionError("anyOf is only supported as {\"anyOf\": [schema, {\"type\": \"null\"}]}")
    return OptionalSchema(inner=from_json_schema(non_null[0]), description=description)


def _object_from_json_schema(document: dict[str, Any], description: str | None) -> Schema:
    additional = document.get("additionalProperties")
    if isinstance(additional, dict) and not document.get("properties"):
        return RecordSchema(values=from_json_schema(additional), description=description)

    required = set(document.get("required", []))
    properties: dict[str, Schema] = {}
    for name, prop in document.get("properties", {}).items():
        converted = from_json_schema(prop)
        if name not in required:
            converted = OptionalSchema(inner=converted)
        properties[name] = converted
    return ObjectSchema(properties=properties, description=description)


def to_json_schema(schema: BaseSchema) -> dict[str, Any]:
    """Convert a schema node to a JSON Schema document."""
    document: dict[str, Any]

    if isinstance(schema, StringSchema):
        document = {"type": "string"}
    elif isinstance(schema, NumberSchema):
        document = {"type": "integer" if schema.integer else "number"}
    elif isinstance(schema, BooleanSchema):
        document = {"type": "boolean"}
    elif isinstance(schema, LiteralSchema):
        document = {"const": schema.value}
    elif isinstance(schema, EntitySchema):
        document = {"$ref": f"{ENTITY_REF_PREFIX}{schema.entity}"}
    elif isinstance(schema, ArraySchema):
        document = {"type": "array", "items": to_json_schema(schema.items)}
    elif isinstance(schema, OptionalSchema):
        document = {"anyOf": [to_json_schema(schema.inner), dict(NULL_SCHEMA)]}
    elif isinstance(schema, ObjectSchema):
        document = {
            "type": "object",
            "properties": {name: _property_to_json_schema(prop) for name, prop in schema.properties.items()},
            "required": [
                name
                for name, prop in schema.properties.items()
                if not isinstance(prop, OptionalSchema)
            ],
        }
    elif isinstance(schema, RecordSchema):
        document = {"type": "object", "additionalProperties": to_json_schema(schema.values)}
    elif isinstance(schema, IntersectionSchema):
        document = {"allOf": [to_json_schema(schema.left), to_json_schema(schema.right)]}
    else:
        raise SchemaConversionError(f"Unknown schema node: {type(schema).__name__}")

    if schema.description is not None:
        document["description"] = schema.description
    return document


def _property_to_json_schema(prop: BaseSchema) -> dict[str, Any]:
    # Optional properties are expressed through the parent object's "required" list
    if isinstance(prop, OptionalSchema):
        return to_json_schema(prop.inner)
    return to_json_schema(prop)


def coerce_schema(value: Any) -> Any:
    """
    Accept a schema node, a serialized node, or a JSON Schema document.

    Used as a pydantic before-validator on every schema-bearing field so
    definitions can be declared with plain JSON Schema.
    """
    if isinstance(value, BaseSchema):
        return value
    if isinstance(value, dict):
        if "kind" in value:
            return _schema_adapter.validate_python(value)
        return from_json_schema(value)
    return value


__all__ = [
    "ENTITY_REF_PREFIX",
    "from_json_schema",
    "to_json_schema",
    "coerce_schema",
]
