"""Render configuration.

This module provides the options that control a single render call:
the missing-variable policy, escaping and the partial nesting limit.
"""

from collections.abc import Callable

from pydantic import BaseModel
from pydantic import Field

from pydantic_mustache.enums import EscapePolicy
from pydantic_mustache.escape_policies import get_escape


class RenderConfig(BaseModel):
    """Configuration for template rendering.

    Attributes:
        allow_missing: Whether a variable that resolves nowhere renders as
            an empty string. When False, MissingVariableError is raised
            instead. Section names never raise. Default is True.
        escape_policy: Escaping applied to ``{{name}}`` interpolation.
            Default is HTML.
        escape: Optional escape function overriding escape_policy.
        max_partial_depth: Maximum nesting of partials before raising
            PartialDepthError. Default is 100.

    """

    model_config = {"frozen": True}

    allow_missing: bool = Field(default=True)
    escape_policy: EscapePolicy = Field(default=EscapePolicy.HTML)
    escape: Callable[[str], str] | None = Field(default=None, exclude=True)
    max_partial_depth: int = Field(
        default=100,
        ge=1,
        description="Maximum nesting of partials before raising PartialDepthError",
    )

    def escape_function(self) -> Callable[[str], str]:
        """Return the escape function in effect for this configuration."""
        if self.escape is not None:
            return self.escape
        return get_escape(self.escape_policy)
