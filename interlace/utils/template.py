"""
Handlebars-style template rendering.

Only plain variable interpolation is supported:

    render("{{item}}.{{name}}", {"item": "issue", "name": "sync"})  # "issue.sync"

Whitespace inside the braces is tolerated ("{{ item }}"). Placeholders
without a binding are left untouched unless strict=True, in which case
UnresolvedPlaceholderError is raised.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from interlace.errors import UnresolvedPlaceholderError

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_$][\w$.-]*)\s*\}\}")


def render(template: str, bindings: Mapping[str, Any], *, strict: bool = False) -> str:
    """
    Substitute every {{key}} placeholder in a template.

    Args:
        template: Template string
        bindings: Flat mapping of placeholder name to value
        strict: Raise instead of leaving unknown placeholders in place

    Returns:
        Rendered string

    Raises:
        UnresolvedPlaceholderError: In strict mode, for the first
            placeholder without a binding
    """

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in bindings:
            return str(bindings[key])
        if strict:
            raise UnresolvedPlaceholderError(key, template)
        return match.group(0)

    return _PLACEHOLDER.sub(_substitute, template)


def placeholders(template: str) -> list[str]:
    """List placeholder names in order of first appearance."""
    seen: list[str] = []
    for match in _PLACEHOLDER.finditer(template):
        if match.group(1) not in seen:
            seen.append(match.group(1))
    return seen


__all__ = ["render", "placeholders"]
