"""
Pytest configuration and fixtures for Interlace tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to path for imports
# This allows `from interlace.definitions import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from interlace.definitions import IntegrationDefinition, InterfaceDefinition  # noqa: E402


@pytest.fixture
def issue_schema():
    """Concrete entity schema for a tracker issue."""
    return {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "number": {"type": "integer"},
        },
        "required": ["title", "number"],
    }


@pytest.fixture
def sample_issue():
    """Value matching issue_schema."""
    return {"title": "Login fails on Safari", "number": 42}


@pytest.fixture
def listable_interface():
    """Interface with 2 actions, 1 event, 1 channel (2 messages) and 1 entity."""
    return InterfaceDefinition.model_validate(
        {
            "name": "listable",
            "version": "0.1.0",
            "templateName": "{{item}}{{name}}",
            "entities": {
                "item": {"schema": {"type": "object", "properties": {}}},
            },
            "actions": {
                "List": {
                    "title": "List items",
                    "input": {
                        "schema": {
                            "type": "object",
                            "properties": {"nextToken": {"type": "string"}},
                        }
                    },
                    "output": {
                        "schema": {
                            "type": "object",
                            "properties": {
                                "items": {"type": "array", "items": {"$ref": "#/entities/item"}},
                            },
                            "required": ["items"],
                        }
                    },
                },
                "Get": {
                    "input": {
                        "schema": {
                            "type": "object",
                            "properties": {"id": {"type": "string"}},
                            "required": ["id"],
                        }
                    },
                    "output": {
                        "schema": {
                            "type": "object",
                            "properties": {"item": {"$ref": "#/entities/item"}},
                            "required": ["item"],
                        }
                    },
                },
            },
            "events": {
                "Created": {
                    "schema": {
                        "type": "object",
                        "properties": {"item": {"$ref": "#/entities/item"}},
                        "required": ["item"],
                    }
                },
            },
            "channels": {
                "Channel": {
                    "messages": {
                        "created": {
                            "schema": {
                                "type": "object",
                                "properties": {"item": {"$ref": "#/entities/item"}},
                                "required": ["item"],
                            }
                        },
                        "deleted": {
                            "schema": {
                                "type": "object",
                                "properties": {"id": {"type": "string"}},
                                "required": ["id"],
                            }
                        },
                    }
                },
            },
        }
    )


@pytest.fixture
def github_integration(issue_schema, listable_interface):
    """Integration implementing the listable interface for issues."""
    integration = IntegrationDefinition(
        name="github",
        version="1.0.0",
        entities={"issue": {"schema": issue_schema}},
    )
    return integration.extend(listable_interface, {"item": "issue"})
