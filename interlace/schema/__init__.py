"""
Interlace Schema Layer.

Explicit schema IR used by interface resolution:

    - nodes:        tagged union of schema nodes with dereference()/accepts()
    - json_schema:  conversion to and from JSON Schema documents
    - merge:        object/record schema merging
"""

from .json_schema import ENTITY_REF_PREFIX, coerce_schema, from_json_schema, to_json_schema
from .merge import merge_object_schemas
from .nodes import (
    ArraySchema,
    BaseSchema,
    BooleanSchema,
    EntitySchema,
    IntersectionSchema,
    LiteralSchema,
    NumberSchema,
    ObjectSchema,
    ObjectShapedSchema,
    OptionalSchema,
    RecordSchema,
    Schema,
    StringSchema,
)

__all__ = [
    # Nodes
    "BaseSchema",
    "StringSchema",
    "NumberSchema",
    "BooleanSchema",
    "LiteralSchema",
    "EntitySchema",
    "ArraySchema",
    "OptionalSchema",
    "ObjectSchema",
    "RecordSchema",
    "IntersectionSchema",
    "Schema",
    "ObjectShapedSchema",
    # JSON Schema
    "ENTITY_REF_PREFIX",
    "from_json_schema",
    "to_json_schema",
    "coerce_schema",
    # Merge
    "merge_object_schemas",
]
