"""
Definition Mergers.

Combine a base definition (a) with an overriding definition (b) of the
same kind. Schema-bearing fields are merged with merge_object_schemas();
every other property explicitly set on b (including passthrough
metadata) shadows the one on a.

Action output pairing:
    merge_action() merges the output schema from a.input.schema and
    b.output.schema. Statements and downstream consumers depend on this
    behaviour, so it is kept as the default; pass pairwise_outputs=True
    to merge a.output.schema with b.output.schema instead.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from interlace.schema import merge_object_schemas
from interlace.utils import merge_records

from .models import (
    ActionDefinition,
    ActionInput,
    ActionOutput,
    ChannelDefinition,
    EventDefinition,
    MessageDefinition,
)

logger = logging.getLogger(__name__)


def _explicit_fields(model: BaseModel) -> dict[str, Any]:
    """Fields set explicitly on a model, plus its extra metadata."""
    values = {name: getattr(model, name) for name in model.model_fields_set}
    values.update(model.model_extra or {})
    return values


def merge_action(
    a: ActionDefinition,
    b: ActionDefinition,
    *,
    pairwise_outputs: bool = False,
) -> ActionDefinition:
    """Merge two actions; b's properties take precedence."""
    output_base = a.output.schema if pairwise_outputs else a.input.schema
    return ActionDefinition.model_validate(
        {
            **_explicit_fields(a),
            **_explicit_fields(b),
            "input": ActionInput(schema=merge_object_schemas(a.input.schema, b.input.schema)),
            "output": ActionOutput(schema=merge_object_schemas(output_base, b.output.schema)),
        }
    )


def merge_event(a: EventDefinition, b: EventDefinition) -> EventDefinition:
    """Merge two events; b's properties take precedence."""
    return EventDefinition.model_validate(
        {
            **_explicit_fields(a),
            **_explicit_fields(b),
            "schema": merge_object_schemas(a.schema, b.schema),
        }
    )


def merge_message(a: MessageDefinition, b: MessageDefinition) -> MessageDefinition:
    """Merge two messages. Only the schema is kept."""
    return MessageDefinition(schema=merge_object_schemas(a.schema, b.schema))


def merge_channel(a: ChannelDefinition, b: ChannelDefinition) -> ChannelDefinition:
    """Merge two channels, merging messages that share a name."""
    messages = merge_records(a.messages, b.messages, merge_message)
    return ChannelDefinition.model_validate(
        {
            **_explicit_fields(a),
            **_explicit_fields(b),
            "messages": messages,
        }
    )


__all__ = [
    "merge_action",
    "merge_event",
    "merge_message",
    "merge_channel",
]
