"""
Record (mapping) helpers.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeVar

V = TypeVar("V")


def merge_records(
    a: Mapping[str, V],
    b: Mapping[str, V],
    combine: Callable[[V, V], V],
) -> dict[str, V]:
    """
    Merge two mappings, combining values at colliding keys.

    Unlike a shallow update, a key present in both mappings maps to
    combine(a[key], b[key]) instead of b[key]. Keys keep a's order, then
    b's new keys in b's order. Neither input is mutated.
    """
    merged: dict[str, V] = dict(a)
    for key, value in b.items():
        merged[key] = combine(merged[key], value) if key in merged else value
    return merged


__all__ = ["merge_records"]
