"""
Object schema merging.

Fixed fields are additive contributions, while record value schemas are
constraints that must all be satisfied at once:

    object + object   union of properties, right-hand side wins on collision
    record + record   record of the intersection of both value schemas
    anything else     SchemaKindMismatchError
"""

from __future__ import annotations

import logging

from interlace.errors import SchemaKindMismatchError

from .nodes import BaseSchema, IntersectionSchema, ObjectSchema, RecordSchema

logger = logging.getLogger(__name__)

_OBJECT_SHAPED = ("object", "record")


def merge_object_schemas(a: BaseSchema, b: BaseSchema) -> BaseSchema:
    """
    Merge two object-shaped schemas.

    Args:
        a: Base schema
        b: Overriding schema

    Returns:
        Schema representing the union of both constraints

    Raises:
        SchemaKindMismatchError: If the schemas are not both objects or
            both records
    """
    kinds = (a.kind, b.kind)

    if kinds == ("object", "object"):
        return ObjectSchema(
            properties={**a.properties, **b.properties},
            description=b.description if b.description is not None else a.description,
        )

    if kinds == ("record", "record"):
        return RecordSchema(
            values=IntersectionSchema(left=a.values, right=b.values),
            description=b.description if b.description is not None else a.description,
        )

    if a.kind in _OBJECT_SHAPED and b.kind in _OBJECT_SHAPED:
        logger.debug(f"[merge] Refusing to merge {a.kind} schema with {b.kind} schema")
        raise SchemaKindMismatchError(
            "Cannot merge object schemas with record schemas",
            left_kind=a.kind,
            right_kind=b.kind,
        )

    raise SchemaKindMismatchError(
        f"Cannot merge {a.kind} schema with {b.kind} schema; only object and record schemas can be merged",
        left_kind=a.kind,
        right_kind=b.kind,
    )


__all__ = ["merge_object_schemas"]
