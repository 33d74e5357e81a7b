"""
Interface Resolver.

Turns the interfaces an integration declares into the concrete actions,
events and channels it exposes.

Flow:
    1. resolve_interfaces(integration) walks integration.interfaces in
       declaration order
    2. resolve_interface(extension) dereferences every schema of the
       interface against the extension's entity bindings and renames
       actions, events and channels with the naming template
    3. The resolved definitions are folded into the integration's own
       tables; at colliding names both definitions are merged, so the
       integration can set more specific properties while staying
       compatible with the interface

Renaming:
    Without a naming template the abstract name is used verbatim.
    Otherwise the template is rendered with every entity key bound to
    the concrete entity name, plus the reserved key `name` bound to the
    abstract name:

        templateName = "{{item}}.{{name}}", item -> "issue"
        "sync" -> "issue.sync"

    Message names inside a channel are never renamed.

Usage:
    resolver = InterfaceResolver(ResolutionSettings(strict_templates=True))
    resolver.resolve_interfaces(integration)
    statements = resolver.get_implementation_statements(integration)

    # Or with settings from the environment
    resolve_interfaces(integration)
"""

from __future__ import annotations

import logging
from functools import partial

from interlace.config import ResolutionSettings
from interlace.definitions import (
    ActionInput,
    ActionOutput,
    IntegrationDefinition,
    InterfaceExtension,
    InterfaceImplStatement,
    MessageDefinition,
    NameMapping,
    ResolvedInterface,
    merge_action,
    merge_channel,
    merge_event,
)
from interlace.utils import merge_records, render

logger = logging.getLogger(__name__)


class InterfaceResolver:
    """
    Resolves interface extensions against their entity bindings.

    The resolver holds no state besides its settings; the integration
    passed to resolve_interfaces() is borrowed for the duration of the
    call and mutated in place. Mutating it concurrently from elsewhere
    during resolution is undefined behaviour.
    """

    def __init__(self, settings: ResolutionSettings | None = None):
        self._settings = settings or ResolutionSettings()

    @property
    def settings(self) -> ResolutionSettings:
        return self._settings

    def rename(self, extension: InterfaceExtension, name: str) -> str:
        """Apply the interface naming template to an abstract name."""
        template = extension.definition.template_name
        if not template:
            return name
        bindings = {key: entity.name for key, entity in extension.entities.items()}
        bindings["name"] = name
        return render(template, bindings, strict=self._settings.strict_templates)

    def resolve_interface(
        self,
        extension: InterfaceExtension,
    ) -> tuple[ResolvedInterface, InterfaceImplStatement]:
        """
        Resolve a single interface extension.

        Args:
            extension: Interface attachment with its entity bindings

        Returns:
            Tuple of (resolved definitions, implementation statement)
        """
        definition = extension.definition
        entity_schemas = {key: entity.schema for key, entity in extension.entities.items()}

        resolved = ResolvedInterface()
        statement = InterfaceImplStatement(
            id=extension.id,
            name=extension.name,
            version=extension.version,
            entities={key: NameMapping(name=entity.name) for key, entity in extension.entities.items()},
        )

        for action_name, action in definition.actions.items():
            new_name = self.rename(extension, action_name)
            resolved.actions[new_name] = action.model_copy(
                update={
                    "input": ActionInput(schema=action.input.schema.dereference(entity_schemas)),
                    "output": ActionOutput(schema=action.output.schema.dereference(entity_schemas)),
                }
            )
            statement.actions[action_name] = NameMapping(name=new_name)
            logger.debug(f"[interfaces] {extension.name}: action {action_name} -> {new_name}")

        for event_name, event in definition.events.items():
            new_name = self.rename(extension, event_name)
            resolved.events[new_name] = event.model_copy(
                update={"schema": event.schema.dereference(entity_schemas)}
            )
            statement.events[event_name] = NameMapping(name=new_name)
            logger.debug(f"[interfaces] {extension.name}: event {event_name} -> {new_name}")

        for channel_name, channel in definition.channels.items():
            messages: dict[str, MessageDefinition] = {
                message_name: message.model_copy(
                    update={"schema": message.schema.dereference(entity_schemas)}
                )
                for message_name, message in channel.messages.items()
            }
            new_name = self.rename(extension, channel_name)
            resolved.channels[new_name] = channel.model_copy(update={"messages": messages})
            statement.channels[channel_name] = NameMapping(name=new_name)
            logger.debug(f"[interfaces] {extension.name}: channel {channel_name} -> {new_name}")

        return resolved, statement

    def resolve_interfaces(self, integration: IntegrationDefinition) -> IntegrationDefinition:
        """
        Fold every declared interface into the integration's definitions.

        Interfaces are applied in declaration order. At a colliding name
        the existing definition is merged with the resolved one, the
        resolved one taking precedence; other names are inserted as-is.

        Args:
            integration: Integration to resolve (mutated in place)

        Returns:
            The same integration

        Raises:
            SchemaKindMismatchError: If colliding definitions carry
                object and record schemas at the same position
        """
        if not integration.interfaces:
            return integration

        combine_actions = partial(
            merge_action,
            pairwise_outputs=self._settings.merge_action_outputs_pairwise,
        )

        for key, extension in integration.interfaces.items():
            resolved, _ = self.resolve_interface(extension)

            integration.actions = merge_records(integration.actions, resolved.actions, combine_actions)
            integration.channels = merge_records(integration.channels, resolved.channels, merge_channel)
            integration.events = merge_records(integration.events, resolved.events, merge_event)

            logger.info(
                f"[interfaces] Resolved {key} ({extension.name}@{extension.version}) into "
                f"{integration.name}: {len(resolved.actions)} actions, "
                f"{len(resolved.events)} events, {len(resolved.channels)} channels"
            )

        return integration

    def get_implementation_statements(
        self,
        integration: IntegrationDefinition,
    ) -> dict[str, InterfaceImplStatement]:
        """
        Describe how each declared interface is implemented.

        Re-resolves every interface without touching the integration.

        Returns:
            Interface key -> statement (empty if no interfaces)
        """
        if not integration.interfaces:
            return {}

        statements: dict[str, InterfaceImplStatement] = {}
        for key, extension in integration.interfaces.items():
            _, statement = self.resolve_interface(extension)
            statements[key] = statement
        return statements


def resolve_interface(
    extension: InterfaceExtension,
) -> tuple[ResolvedInterface, InterfaceImplStatement]:
    """Resolve one interface extension with settings from the environment."""
    return InterfaceResolver(ResolutionSettings.from_env()).resolve_interface(extension)


def resolve_interfaces(integration: IntegrationDefinition) -> IntegrationDefinition:
    """Resolve all interfaces of an integration with settings from the environment."""
    return InterfaceResolver(ResolutionSettings.from_env()).resolve_interfaces(integration)


def get_implementation_statements(
    integration: IntegrationDefinition,
) -> dict[str, InterfaceImplStatement]:
    """Implementation statements per interface key, with settings from the environment."""
    return InterfaceResolver(ResolutionSettings.from_env()).get_implementation_statements(integration)


__all__ = [
    "InterfaceResolver",
    "resolve_interface",
    "resolve_interfaces",
    "get_implementation_statements",
]
