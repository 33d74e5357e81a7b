"""
Interlace Utilities

Small helpers shared by the resolution layer.
"""

from .records import merge_records
from .template import placeholders, render

__all__ = [
    "merge_records",
    "render",
    "placeholders",
]
