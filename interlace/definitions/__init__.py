"""
Interlace Definitions Layer.

Pydantic models for integrations, interfaces, actions, events and
channels, and the combinators that merge two definitions of the same
kind.
"""

from .merge import merge_action, merge_channel, merge_event, merge_message
from .models import (
    ActionDefinition,
    ActionInput,
    ActionOutput,
    ChannelDefinition,
    EntityBinding,
    EntityDefinition,
    EventDefinition,
    IntegrationDefinition,
    InterfaceDefinition,
    InterfaceExtension,
    InterfaceImplStatement,
    MessageDefinition,
    NameMapping,
    ResolvedInterface,
)

__all__ = [
    # Models
    "ActionDefinition",
    "ActionInput",
    "ActionOutput",
    "ChannelDefinition",
    "EntityBinding",
    "EntityDefinition",
    "EventDefinition",
    "IntegrationDefinition",
    "InterfaceDefinition",
    "InterfaceExtension",
    "InterfaceImplStatement",
    "MessageDefinition",
    "NameMapping",
    "ResolvedInterface",
    # Mergers
    "merge_action",
    "merge_event",
    "merge_message",
    "merge_channel",
]
