"""
Exceptions raised by interlace.

Resolution has a single terminal failure, SchemaKindMismatchError: two
object-shaped schemas of different kinds cannot be merged. It is never
retried and propagates out of resolve_interfaces() to the caller.

The remaining exceptions belong to opt-in behaviour (strict templates,
value checks, interface attachment, JSON Schema import).
"""

from __future__ import annotations


class InterlaceError(Exception):
    """Base exception for interlace errors."""


class SchemaKindMismatchError(InterlaceError):
    """Raised when merging object-shaped schemas of incompatible kinds."""

    def __init__(self, message: str, *, left_kind: str, right_kind: str):
        super().__init__(message)
        self.left_kind = left_kind
        self.right_kind = right_kind

    def __str__(self) -> str:
        return f"{self.args[0]} (left={self.left_kind}, right={self.right_kind})"


class UnresolvedPlaceholderError(InterlaceError):
    """Raised by strict template rendering when a placeholder has no binding."""

    def __init__(self, placeholder: str, template: str):
        super().__init__(f"No binding for placeholder '{placeholder}' in template '{template}'")
        self.placeholder = placeholder
        self.template = template


class UnresolvedEntityError(InterlaceError):
    """Raised when checking a value against an entity reference that was never dereferenced."""

    def __init__(self, entity: str):
        super().__init__(f"Entity reference '{entity}' has not been dereferenced")
        self.entity = entity


class UnknownEntityError(InterlaceError):
    """Raised when an interface is bound to an entity the integration does not declare."""

    def __init__(self, entity: str, integration: str):
        super().__init__(f"[{integration}] Unknown entity '{entity}'")
        self.entity = entity
        self.integration = integration


class SchemaConversionError(InterlaceError):
    """Raised when a JSON Schema document cannot be represented as a schema node."""


__all__ = [
    "InterlaceError",
    "SchemaKindMismatchError",
    "UnresolvedPlaceholderError",
    "UnresolvedEntityError",
    "UnknownEntityError",
    "SchemaConversionError",
]
