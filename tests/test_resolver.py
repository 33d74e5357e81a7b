"""
Tests for interface resolution.

Tests cover:
- Renaming with and without naming templates
- resolve_interface (dereferencing, statements)
- resolve_interfaces (folding and override precedence)
- get_implementation_statements
"""

import pytest

from interlace.config import ResolutionSettings
from interlace.definitions import (
    ActionDefinition,
    EventDefinition,
    IntegrationDefinition,
    InterfaceDefinition,
    InterfaceExtension,
)
from interlace.errors import SchemaKindMismatchError, UnresolvedPlaceholderError
from interlace.resolution import (
    InterfaceResolver,
    get_implementation_statements,
    resolve_interface,
    resolve_interfaces,
)
from interlace.schema import NumberSchema, ObjectSchema

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def resolver():
    return InterfaceResolver(ResolutionSettings())


@pytest.fixture
def syncable_interface():
    """Interface with a single 'trigger' action renamed to '{{item}}.sync'."""
    return InterfaceDefinition.model_validate(
        {
            "name": "syncable",
            "version": "1.0.0",
            "templateName": "{{item}}.sync",
            "actions": {
                "trigger": {
                    "title": "Trigger sync",
                    "input": {
                        "schema": {
                            "type": "object",
                            "properties": {
                                "id": {"type": "number"},
                                "item": {"$ref": "#/entities/item"},
                            },
                            "required": ["id", "item"],
                        }
                    },
                    "output": {"schema": {"type": "object", "properties": {"ok": {"type": "boolean"}}}},
                },
            },
        }
    )


def _extension(definition, entities=None):
    return InterfaceExtension(
        name=definition.name,
        version=definition.version,
        entities=entities or {},
        definition=definition,
    )


# =============================================================================
# Renaming
# =============================================================================


class TestRenaming:
    """Tests for the naming template rule."""

    def test_template_with_entity_name(self, resolver, syncable_interface, issue_schema):
        extension = _extension(syncable_interface, {"item": {"name": "issue", "schema": issue_schema}})

        resolved, statement = resolver.resolve_interface(extension)

        assert list(resolved.actions) == ["issue.sync"]
        assert statement.actions["trigger"].name == "issue.sync"

    def test_no_template_keeps_name(self, resolver, syncable_interface, issue_schema):
        definition = syncable_interface.model_copy(update={"template_name": None})
        extension = _extension(definition, {"item": {"name": "issue", "schema": issue_schema}})

        resolved, statement = resolver.resolve_interface(extension)

        assert list(resolved.actions) == ["trigger"]
        assert statement.actions["trigger"].name == "trigger"

    def test_name_is_reserved(self, resolver, syncable_interface, issue_schema):
        definition = syncable_interface.model_copy(update={"template_name": "{{name}}"})
        extension = _extension(definition, {"name": {"name": "issue", "schema": issue_schema}})

        assert resolver.rename(extension, "trigger") == "trigger"

    def test_unknown_placeholder_left_in_name(self, resolver, syncable_interface):
        definition = syncable_interface.model_copy(update={"template_name": "{{user}}.{{name}}"})

        assert resolver.rename(_extension(definition), "get") == "{{user}}.get"

    def test_strict_templates_raise(self, syncable_interface):
        definition = syncable_interface.model_copy(update={"template_name": "{{user}}.{{name}}"})
        strict = InterfaceResolver(ResolutionSettings(strict_templates=True))

        with pytest.raises(UnresolvedPlaceholderError):
            strict.resolve_interface(_extension(definition))


# =============================================================================
# resolve_interface
# =============================================================================


class TestResolveInterface:
    """Tests for resolving a single interface extension."""

    def test_dereferences_every_schema(self, resolver, github_integration):
        resolved, _ = resolver.resolve_interface(github_integration.interfaces["listable"])

        schemas = [
            *(action.input.schema for action in resolved.actions.values()),
            *(action.output.schema for action in resolved.actions.values()),
            *(event.schema for event in resolved.events.values()),
            *(
                message.schema
                for channel in resolved.channels.values()
                for message in channel.messages.values()
            ),
        ]
        assert schemas
        assert all(schema.entity_refs() == set() for schema in schemas)

    def test_resolved_schemas_use_entity_schema(self, resolver, github_integration, sample_issue):
        resolved, _ = resolver.resolve_interface(github_integration.interfaces["listable"])

        output = resolved.actions["issueGet"].output.schema
        assert output.accepts({"item": sample_issue})
        assert not output.accepts({"item": {"title": "No number"}})

        listed = resolved.actions["issueList"].output.schema
        assert listed.accepts({"items": [sample_issue, sample_issue]})

    def test_keeps_passthrough_metadata(self, resolver, github_integration):
        resolved, _ = resolver.resolve_interface(github_integration.interfaces["listable"])

        assert resolved.actions["issueList"].title == "List items"

    def test_channel_renamed_but_message_names_kept(self, resolver, github_integration):
        resolved, statement = resolver.resolve_interface(github_integration.interfaces["listable"])

        assert list(resolved.channels) == ["issueChannel"]
        assert list(resolved.channels["issueChannel"].messages) == ["created", "deleted"]
        assert statement.channels["Channel"].name == "issueChannel"

    def test_does_not_modify_interface(self, resolver, github_integration, listable_interface):
        resolver.resolve_interface(github_integration.interfaces["listable"])

        assert listable_interface.actions["Get"].output.schema.entity_refs() == {"item"}

    def test_statement_identity_and_entities(self, resolver, issue_schema, listable_interface):
        integration = IntegrationDefinition(name="linear", entities={"ticket": {"schema": issue_schema}})
        integration.extend(listable_interface, {"item": "ticket"}, id="intver_1")

        _, statement = resolver.resolve_interface(integration.interfaces["listable"])

        assert statement.id == "intver_1"
        assert statement.name == "listable"
        assert statement.version == "0.1.0"
        assert statement.entities["item"].name == "ticket"

    def test_missing_sections_resolve_empty(self, resolver):
        definition = InterfaceDefinition(name="empty", version="0.0.1")

        resolved, statement = resolver.resolve_interface(_extension(definition))

        assert resolved.actions == {}
        assert resolved.events == {}
        assert resolved.channels == {}
        assert statement.actions == {}

    def test_module_level_function(self, github_integration):
        resolved, statement = resolve_interface(github_integration.interfaces["listable"])

        assert "issueCreated" in resolved.events
        assert statement.events["Created"].name == "issueCreated"


# =============================================================================
# resolve_interfaces
# =============================================================================


class TestResolveInterfaces:
    """Tests for folding interfaces into an integration."""

    def test_no_interfaces_is_identity(self, resolver):
        integration = IntegrationDefinition(
            name="plain",
            events={"ping": {"schema": {"type": "object", "properties": {}}}},
        )
        events = integration.events

        result = resolver.resolve_interfaces(integration)

        assert result is integration
        assert integration.events is events
        assert integration.actions == {}
        assert integration.channels == {}

    def test_returns_same_integration(self, resolver, github_integration):
        assert resolver.resolve_interfaces(github_integration) is github_integration

    def test_inserts_resolved_definitions(self, resolver, github_integration):
        resolver.resolve_interfaces(github_integration)

        assert set(github_integration.actions) == {"issueList", "issueGet"}
        assert set(github_integration.events) == {"issueCreated"}
        assert set(github_integration.channels) == {"issueChannel"}

    def test_existing_definitions_are_kept(self, resolver, github_integration):
        github_integration.events["issueClosed"] = EventDefinition(
            schema={"type": "object", "properties": {}}
        )

        resolver.resolve_interfaces(github_integration)

        assert set(github_integration.events) == {"issueClosed", "issueCreated"}

    def test_colliding_action_is_merged(self, resolver, syncable_interface, issue_schema):
        integration = IntegrationDefinition(
            name="github",
            entities={"issue": {"schema": issue_schema}},
            actions={
                "issue.sync": ActionDefinition.model_validate(
                    {
                        "title": "Sync issues",
                        "description": "Pull issues from GitHub",
                        "input": {
                            "schema": {
                                "type": "object",
                                "properties": {
                                    "id": {"type": "string"},
                                    "force": {"type": "boolean"},
                                },
                                "required": ["id", "force"],
                            }
                        },
                        "output": {"schema": {"type": "object", "properties": {}}},
                    }
                )
            },
        ).extend(syncable_interface, {"item": "issue"})

        resolver.resolve_interfaces(integration)

        action = integration.actions["issue.sync"]
        assert set(action.input.schema.properties) == {"id", "force", "item"}
        # Overlapping field takes the interface's definition
        assert action.input.schema.properties["id"] == NumberSchema()
        assert action.title == "Trigger sync"
        assert action.description == "Pull issues from GitHub"

    def test_later_interfaces_override_at_colliding_names(self, resolver, issue_schema):
        def interface(name, title):
            return InterfaceDefinition.model_validate(
                {
                    "name": name,
                    "version": "1.0.0",
                    "events": {
                        "changed": {
                            "title": title,
                            "schema": {"type": "object", "properties": {name: {"type": "string"}}},
                        },
                        f"{name}Only": {"schema": {"type": "object", "properties": {}}},
                    },
                }
            )

        integration = IntegrationDefinition(name="github", entities={"issue": {"schema": issue_schema}})
        integration.extend(interface("first", "First"), {})
        integration.extend(interface("second", "Second"), {})

        resolver.resolve_interfaces(integration)

        assert set(integration.events) == {"changed", "firstOnly", "secondOnly"}
        assert integration.events["changed"].title == "Second"
        assert set(integration.events["changed"].schema.properties) == {"first", "second"}

    def test_kind_mismatch_aborts_resolution(self, resolver, syncable_interface, issue_schema):
        integration = IntegrationDefinition(
            name="github",
            entities={"issue": {"schema": issue_schema}},
            actions={
                "issue.sync": {
                    "input": {"schema": {"type": "object", "additionalProperties": {"type": "string"}}},
                    "output": {"schema": {"type": "object", "properties": {}}},
                }
            },
        ).extend(syncable_interface, {"item": "issue"})

        with pytest.raises(SchemaKindMismatchError):
            resolver.resolve_interfaces(integration)

    def test_pairwise_output_setting(self, syncable_interface, issue_schema):
        integration = IntegrationDefinition(
            name="github",
            entities={"issue": {"schema": issue_schema}},
            actions={
                "issue.sync": {
                    "input": {"schema": {"type": "object", "properties": {"force": {"type": "boolean"}}}},
                    "output": {"schema": {"type": "object", "properties": {"count": {"type": "number"}}}},
                }
            },
        ).extend(syncable_interface, {"item": "issue"})

        InterfaceResolver(ResolutionSettings(merge_action_outputs_pairwise=True)).resolve_interfaces(integration)

        assert set(integration.actions["issue.sync"].output.schema.properties) == {"count", "ok"}

    def test_module_level_function(self, github_integration):
        result = resolve_interfaces(github_integration)

        assert result is github_integration
        assert "issueGet" in github_integration.actions


# =============================================================================
# get_implementation_statements
# =============================================================================


class TestImplementationStatements:
    """Tests for get_implementation_statements."""

    def test_statement_completeness(self, resolver, github_integration):
        statements = resolver.get_implementation_statements(github_integration)

        assert list(statements) == ["listable"]
        statement = statements["listable"]
        assert len(statement.actions) == 2
        assert len(statement.events) == 1
        assert len(statement.channels) == 1
        assert len(statement.entities) == 1
        assert {k: v.name for k, v in statement.actions.items()} == {"List": "issueList", "Get": "issueGet"}
        assert "created" not in statement.channels
        assert "deleted" not in statement.channels

    def test_does_not_mutate_integration(self, resolver, github_integration):
        resolver.get_implementation_statements(github_integration)

        assert github_integration.actions == {}
        assert github_integration.events == {}
        assert github_integration.channels == {}

    def test_no_interfaces(self, resolver):
        assert resolver.get_implementation_statements(IntegrationDefinition(name="plain")) == {}

    def test_statement_serializes(self, github_integration):
        statements = get_implementation_statements(github_integration)

        data = statements["listable"].model_dump()
        assert data["channels"] == {"Channel": {"name": "issueChannel"}}
        assert data["entities"] == {"item": {"name": "issue"}}

    def test_environment_settings(self, monkeypatch, syncable_interface):
        monkeypatch.setenv("INTERLACE_STRICT_TEMPLATES", "true")
        definition = syncable_interface.model_copy(update={"template_name": "{{user}}.{{name}}"})
        integration = IntegrationDefinition(name="github")
        integration.interfaces = {"syncable": _extension(definition)}

        with pytest.raises(UnresolvedPlaceholderError):
            get_implementation_statements(integration)


class TestResolvedSchemaShape:
    """Resolved schemas stay object-shaped so they can be merged later."""

    def test_action_schemas_are_objects(self, resolver, github_integration):
        resolved, _ = resolver.resolve_interface(github_integration.interfaces["listable"])

        for action in resolved.actions.values():
            assert isinstance(action.input.schema, ObjectSchema)
            assert isinstance(action.output.schema, ObjectSchema)
