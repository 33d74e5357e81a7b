"""
Configuration Schemas for Interlace.

Settings are plain pydantic models. Environment values are read
explicitly through ResolutionSettings.from_env() so that library callers
can also construct settings directly.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class ResolutionSettings(BaseModel):
    """
    Interface resolution settings.

    Attributes:
        strict_templates: Raise UnresolvedPlaceholderError when a naming
            template references an unknown entity instead of leaving the
            placeholder in the rendered name
        merge_action_outputs_pairwise: Merge an action's output schema
            with the other action's output schema. By default the output
            is merged against the base action's input schema, which is
            the established behaviour consumers rely on.
    """

    strict_templates: bool = Field(
        default=False,
        description="Fail on unresolved naming template placeholders",
    )
    merge_action_outputs_pairwise: bool = Field(
        default=False,
        description="Merge action outputs with outputs instead of base inputs",
    )

    class Config:
        frozen = True

    @classmethod
    def from_env(cls) -> "ResolutionSettings":
        """Build settings from INTERLACE_* environment variables."""
        return cls(
            strict_templates=_env_flag("INTERLACE_STRICT_TEMPLATES"),
            merge_action_outputs_pairwise=_env_flag("INTERLACE_MERGE_ACTION_OUTPUTS_PAIRWISE"),
        )
