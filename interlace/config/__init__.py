"""
Interlace Configuration
"""

from .schemas import ResolutionSettings

__all__ = [
    "ResolutionSettings",
]
