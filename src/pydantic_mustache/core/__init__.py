"""Core functionality for pydantic-mustache.

This module contains the error taxonomy and render configuration.
"""

from pydantic_mustache.core.errors import MissingVariableError
from pydantic_mustache.core.errors import MustacheError
from pydantic_mustache.core.errors import ParseError
from pydantic_mustache.core.errors import PartialDepthError
from pydantic_mustache.core.errors import ProviderError
from pydantic_mustache.core.errors import RenderError
from pydantic_mustache.core.render_config import RenderConfig

__all__ = [
    "MissingVariableError",
    "MustacheError",
    "ParseError",
    "PartialDepthError",
    "ProviderError",
    "RenderConfig",
    "RenderError",
]
