"""
Interlace Resolution Layer.

Components:
    - InterfaceResolver: resolves interfaces with explicit settings
    - resolve_interface: one extension -> (resolved, statement)
    - resolve_interfaces: fold every interface into an integration
    - get_implementation_statements: abstract -> concrete names per interface
"""

from .resolver import (
    InterfaceResolver,
    get_implementation_statements,
    resolve_interface,
    resolve_interfaces,
)

__all__ = [
    "InterfaceResolver",
    "resolve_interface",
    "resolve_interfaces",
    "get_implementation_statements",
]
