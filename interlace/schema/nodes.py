"""
Schema IR.

Schemas are an explicit tree of immutable nodes, discriminated by `kind`.
Two capabilities are supported on every node:

    dereference(entities)   Substitute every entity reference with the
                            concrete schema bound to that entity key.
    accepts(value)          Minimal structural check of a Python value.
                            This is not a validation engine; it exists so
                            merge semantics can be exercised with
                            representative values.

Object-shaped kinds:
    ObjectSchema    Fixed fields, each with its own schema. Optional
                    fields are wrapped in OptionalSchema.
    RecordSchema    Arbitrary keys, one schema applied to every value.

Entity placeholders:
    EntitySchema(entity="item") stands for whatever concrete schema the
    integration binds to the interface entity "item".

Usage:
    issue = ObjectSchema(properties={"title": StringSchema()})
    template = ObjectSchema(properties={"item": EntitySchema(entity="item")})

    resolved = template.dereference({"item": issue})
    resolved.accepts({"item": {"title": "Bug"}})  # True
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from interlace.errors import UnresolvedEntityError


class BaseSchema(BaseModel):
    """Common base for all schema nodes. Concrete kinds implement accepts()."""

    kind: str
    description: str | None = None

    class Config:
        frozen = True

    def dereference(self, entities: Mapping[str, Schema]) -> Schema:
        """Return a copy of this schema with entity references substituted."""
        return self

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        """Whether a Python value structurally matches this schema."""
        ...

    def entity_refs(self) -> set[str]:
        """Entity keys referenced anywhere below this node."""
        return set()


class StringSchema(BaseSchema):
    kind: Literal["string"] = "string"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)


class NumberSchema(BaseSchema):
    kind: Literal["number"] = "number"
    integer: bool = False

    def accepts(self, value: Any) -> bool:
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return not self.integer or float(value).is_integer()


class BooleanSchema(BaseSchema):
    kind: Literal["boolean"] = "boolean"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, bool)


class LiteralSchema(BaseSchema):
    kind: Literal["literal"] = "literal"
    value: Any

    def accepts(self, value: Any) -> bool:
        return type(value) is type(self.value) and value == self.value


class EntitySchema(BaseSchema):
    """Placeholder for the concrete schema of an interface entity."""

    kind: Literal["entity"] = "entity"
    entity: str

    def dereference(self, entities: Mapping[str, Schema]) -> Schema:
        # Unbound references stay in place; they are not validated here.
        return entities.get(self.entity, self)

    def accepts(self, value: Any) -> bool:
        raise UnresolvedEntityError(self.entity)

    def entity_refs(self) -> set[str]:
        return {self.entity}


class ArraySchema(BaseSchema):
    kind: Literal["array"] = "array"
    items: Schema

    def dereference(self, entities: Mapping[str, Schema]) -> Schema:
        return self.model_copy(update={"items": self.items.dereference(entities)})

    def accepts(self, value: Any) -> bool:
        return isinstance(value, list) and all(self.items.accepts(item) for item in value)

    def entity_refs(self) -> set[str]:
        return self.items.entity_refs()


class OptionalSchema(BaseSchema):
    kind: Literal["optional"] = "optional"
    inner: Schema

    def dereference(self, entities: Mapping[str, Schema]) -> Schema:
        return self.model_copy(update={"inner": self.inner.dereference(entities)})

    def accepts(self, value: Any) -> bool:
        return value is None or self.inner.accepts(value)

    def entity_refs(self) -> set[str]:
        return self.inner.entity_refs()


class ObjectSchema(BaseSchema):
    """Fixed-field schema. Unknown keys are tolerated."""

    kind: Literal["object"] = "object"
    properties: dict[str, Schema] = Field(default_factory=dict)

    def dereference(self, entities: Mapping[str, Schema]) -> Schema:
        properties = {name: prop.dereference(entities) for name, prop in self.properties.items()}
        return self.model_copy(update={"properties": properties})

    def accepts(self, value: Any) -> bool:
        if not isinstance(value, dict):
            return False
        for name, prop in self.properties.items():
            if name not in value:
                if not isinstance(prop, OptionalSchema):
                    return False
                continue
            if not prop.accepts(value[name]):
                return False
        return True

    def entity_refs(self) -> set[str]:
        refs: set[str] = set()
        for prop in self.properties.values():
            refs |= prop.entity_refs()
        return refs


class RecordSchema(BaseSchema):
    """Dynamic-map schema: arbitrary string keys, uniform value schema."""

    kind: Literal["record"] = "record"
    values: Schema

    def dereference(self, entities: Mapping[str, Schema]) -> Schema:
        return self.model_copy(update={"values": self.values.dereference(entities)})

    def accepts(self, value: Any) -> bool:
        if not isinstance(value, dict):
            return False
        return all(isinstance(k, str) and self.values.accepts(v) for k, v in value.items())

    def entity_refs(self) -> set[str]:
        return self.values.entity_refs()


class IntersectionSchema(BaseSchema):
    """Both constraints must hold."""

    kind: Literal["intersection"] = "intersection"
    left: Schema
    right: Schema

    def dereference(self, entities: Mapping[str, Schema]) -> Schema:
        return self.model_copy(
            update={
                "left": self.left.dereference(entities),
                "right": self.right.dereference(entities),
            }
        )

    def accepts(self, value: Any) -> bool:
        return self.left.accepts(value) and self.right.accepts(value)

    def entity_refs(self) -> set[str]:
        return self.left.entity_refs() | self.right.entity_refs()


Schema = Annotated[
    Union[
        StringSchema,
        NumberSchema,
        BooleanSchema,
        LiteralSchema,
        EntitySchema,
        ArraySchema,
        OptionalSchema,
        ObjectSchema,
        RecordSchema,
        IntersectionSchema,
    ],
    Field(discriminator="kind"),
]

ObjectShapedSchema = Union[ObjectSchema, RecordSchema]

for _model in (ArraySchema, OptionalSchema, ObjectSchema, RecordSchema, IntersectionSchema):
    _model.model_rebuild()


__all__ = [
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
]
