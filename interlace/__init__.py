"""
Interlace - interface resolution for bot integrations.

An integration declares conformance to abstract interfaces: reusable
contracts of actions, events and channels parameterized over entities.
Interlace produces the concrete definitions the integration exposes:

- **Dereferencing**: entity placeholders in interface schemas are
  replaced by the integration's concrete entity schemas
- **Renaming**: action, event and channel names are derived from the
  interface naming template
- **Merging**: resolved definitions are merged with the integration's
  own definitions of the same name
- **Statements**: a record of which abstract name maps to which concrete
  name, for capability negotiation

Quick Start:
    >>> from interlace import IntegrationDefinition, InterfaceDefinition, resolve_interfaces
    >>>
    >>> integration = IntegrationDefinition(
    ...     name="github",
    ...     entities={"issue": {"schema": {"type": "object", "properties": {}}}},
    ... ).extend(issue_sync_interface, {"item": "issue"})
    >>> resolve_interfaces(integration)
    >>> integration.actions["issue.sync"]
"""

__version__ = "0.1.0"
__license__ = "MIT"

from interlace.config import ResolutionSettings
from interlace.definitions import (
    ActionDefinition,
    ChannelDefinition,
    EntityBinding,
    EntityDefinition,
    EventDefinition,
    IntegrationDefinition,
    InterfaceDefinition,
    InterfaceExtension,
    InterfaceImplStatement,
    MessageDefinition,
    ResolvedInterface,
)
from interlace.errors import InterlaceError, SchemaKindMismatchError
from interlace.resolution import (
    InterfaceResolver,
    get_implementation_statements,
    resolve_interface,
    resolve_interfaces,
)

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Definitions
    "ActionDefinition",
    "ChannelDefinition",
    "EntityBinding",
    "EntityDefinition",
    "EventDefinition",
    "IntegrationDefinition",
    "InterfaceDefinition",
    "InterfaceExtension",
    "InterfaceImplStatement",
    "MessageDefinition",
    "ResolvedInterface",
    # Resolution
    "InterfaceResolver",
    "resolve_interface",
    "resolve_interfaces",
    "get_implementation_statements",
    # Config and errors
    "ResolutionSettings",
    "InterlaceError",
    "SchemaKindMismatchError",
]
