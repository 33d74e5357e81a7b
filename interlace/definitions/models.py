"""
Definition Schemas.

Pydantic models for integrations, interfaces and the definitions they
expose. Every schema-bearing field accepts a schema node, a serialized
node, or a plain JSON Schema document:

    ActionDefinition.model_validate({
        "title": "Sync",
        "input": {"schema": {"type": "object", "properties": {}}},
        "output": {"schema": {"$ref": "#/entities/item"}},
    })

Definitions allow extra keys; anything not modelled here is passthrough
metadata that survives resolution and merging untouched.

Lifecycle:
    InterfaceDefinition     Abstract contract, parameterized over entities
    InterfaceExtension      One attachment of an interface to an integration
                            (immutable input to resolution)
    IntegrationDefinition   Owning aggregate, mutated in place when its
                            interfaces are resolved
    ResolvedInterface       Transient, folded into the integration
    InterfaceImplStatement  Abstract name -> concrete name, per interface
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

from interlace.errors import UnknownEntityError
from interlace.schema import Schema, coerce_schema
from interlace.utils.template import placeholders

logger = logging.getLogger(__name__)

SchemaField = Annotated[Schema, BeforeValidator(coerce_schema)]


# =============================================================================
# Actions, Events, Channels
# =============================================================================


class MessageDefinition(BaseModel):
    """Single message type inside a channel."""

    schema: SchemaField

    class Config:
        extra = "allow"


class ActionInput(BaseModel):
    schema: SchemaField


class ActionOutput(BaseModel):
    schema: SchemaField


class ActionDefinition(BaseModel):
    """Callable operation with an input and an output schema."""

    title: str | None = None
    description: str | None = None
    input: ActionInput
    output: ActionOutput

    class Config:
        extra = "allow"


class EventDefinition(BaseModel):
    """Event emitted by an integration, with a single payload schema."""

    title: str | None = None
    description: str | None = None
    schema: SchemaField

    class Config:
        extra = "allow"


class ChannelDefinition(BaseModel):
    """
    Message channel.

    The channel is a namespace: its message names are never renamed by an
    interface naming template, only the channel name is.
    """

    title: str | None = None
    description: str | None = None
    messages: dict[str, MessageDefinition] = Field(default_factory=dict)

    class Config:
        extra = "allow"


# =============================================================================
# Entities and Interfaces
# =============================================================================


class EntityDefinition(BaseModel):
    """Named, schema-typed entity declared by an integration or an interface."""

    title: str | None = None
    description: str | None = None
    schema: SchemaField

    class Config:
        extra = "allow"


class EntityBinding(BaseModel):
    """Concrete binding of an interface entity key."""

    name: str = Field(..., description="Concrete entity name, e.g. 'issue'")
    schema: SchemaField

    class Config:
        frozen = True


class InterfaceDefinition(BaseModel):
    """
    Abstract interface contract.

    Schemas reference entities with EntitySchema nodes (or
    {"$ref": "#/entities/<key>"} in JSON Schema). When template_name is
    set, resolved action, event and channel names are rendered from it,
    with {{name}} bound to the abstract name and {{<entity key>}} to the
    concrete entity name.
    """

    name: str = Field(..., description="Interface name")
    version: str = Field(..., description="Interface version")
    entities: dict[str, EntityDefinition] = Field(default_factory=dict)
    actions: dict[str, ActionDefinition] = Field(default_factory=dict)
    events: dict[str, EventDefinition] = Field(default_factory=dict)
    channels: dict[str, ChannelDefinition] = Field(default_factory=dict)
    template_name: str | None = Field(
        default=None,
        alias="templateName",
        description="Naming template, e.g. '{{item}}{{name}}'",
    )

    class Config:
        populate_by_name = True
        frozen = True


class InterfaceExtension(BaseModel):
    """One interface attached to an integration, with its entity bindings."""

    id: str | None = None
    name: str
    version: str
    entities: dict[str, EntityBinding] = Field(default_factory=dict)
    definition: InterfaceDefinition

    class Config:
        frozen = True


class IntegrationDefinition(BaseModel):
    """
    Integration definition.

    The actions, events and channels tables are mutated in place when the
    integration's interfaces are resolved. `interfaces` is None when the
    integration declares no interfaces.
    """

    name: str
    version: str = "0.1.0"
    title: str | None = None
    description: str | None = None
    entities: dict[str, EntityDefinition] = Field(default_factory=dict)
    actions: dict[str, ActionDefinition] = Field(default_factory=dict)
    events: dict[str, EventDefinition] = Field(default_factory=dict)
    channels: dict[str, ChannelDefinition] = Field(default_factory=dict)
    interfaces: dict[str, InterfaceExtension] | None = None

    class Config:
        extra = "allow"

    def extend(
        self,
        interface: InterfaceDefinition,
        entities: Mapping[str, str],
        *,
        key: str | None = None,
        id: str | None = None,
    ) -> IntegrationDefinition:
        """
        Attach an interface to this integration.

        Args:
            interface: Abstract interface to implement
            entities: Interface entity key -> integration entity key
            key: Interface key (defaults to the interface name)
            id: Optional interface id

        Returns:
            self, for chaining

        Raises:
            UnknownEntityError: If an integration entity key is not declared
        """
        bindings: dict[str, EntityBinding] = {}
        for interface_key, entity_key in entities.items():
            entity = self.entities.get(entity_key)
            if entity is None:
                raise UnknownEntityError(entity_key, self.name)
            bindings[interface_key] = EntityBinding(name=entity_key, schema=entity.schema)

        unbound = set(interface.entities) - set(bindings)
        if unbound:
            logger.warning(
                f"[interfaces] {self.name} extends {interface.name} without binding "
                f"entities: {sorted(unbound)}"
            )

        if interface.template_name:
            unfilled = set(placeholders(interface.template_name)) - set(bindings) - {"name"}
            if unfilled:
                logger.warning(
                    f"[interfaces] {self.name}: naming template '{interface.template_name}' of "
                    f"{interface.name} references unbound placeholders: {sorted(unfilled)}"
                )

        if self.interfaces is None:
            self.interfaces = {}
        self.interfaces[key or interface.name] = InterfaceExtension(
            id=id,
            name=interface.name,
            version=interface.version,
            entities=bindings,
            definition=interface,
        )
        return self


# =============================================================================
# Resolution Output
# =============================================================================


class ResolvedInterface(BaseModel):
    """Dereferenced and renamed definitions produced from one interface."""

    actions: dict[str, ActionDefinition] = Field(default_factory=dict)
    events: dict[str, EventDefinition] = Field(default_factory=dict)
    channels: dict[str, ChannelDefinition] = Field(default_factory=dict)


class NameMapping(BaseModel):
    name: str


class InterfaceImplStatement(BaseModel):
    """
    Which concrete names an integration uses for an interface.

    Keys are the abstract names declared by the interface; message names
    are never listed since channels are the namespace.
    """

    id: str | None = None
    name: str
    version: str
    entities: dict[str, NameMapping] = Field(default_factory=dict)
    actions: dict[str, NameMapping] = Field(default_factory=dict)
    events: dict[str, NameMapping] = Field(default_factory=dict)
    channels: dict[str, NameMapping] = Field(default_factory=dict)
