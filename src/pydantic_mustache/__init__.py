"""pydantic-mustache - a Mustache template engine.

Templates are parsed once into an immutable node tree and rendered any
number of times against layered contexts: mappings, dataclasses, pydantic
models or any object exposing attributes and zero-argument accessors.
"""

from pydantic_mustache.api import parse_file
from pydantic_mustache.api import parse_string
from pydantic_mustache.api import render
from pydantic_mustache.api import render_file
from pydantic_mustache.api import render_file_in_layout
from pydantic_mustache.api import render_in_layout
from pydantic_mustache.api import render_to
from pydantic_mustache.core import MissingVariableError
from pydantic_mustache.core import MustacheError
from pydantic_mustache.core import ParseError
from pydantic_mustache.core import PartialDepthError
from pydantic_mustache.core import ProviderError
from pydantic_mustache.core import RenderConfig
from pydantic_mustache.core import RenderError
from pydantic_mustache.enums import EscapePolicy
from pydantic_mustache.enums import TagType
from pydantic_mustache.partials import FileProvider
from pydantic_mustache.partials import StaticProvider
from pydantic_mustache.project_info import ProjectInfo
from pydantic_mustache.project_info import get_project_info
from pydantic_mustache.template import Template
from pydantic_mustache.types import PartialProvider
from pydantic_mustache.types import TextSink
from pydantic_mustache.validation import VariableValidationError
from pydantic_mustache.validation import collect_variables
from pydantic_mustache.validation import validate_context

# Public API - supports both direct and module imports
__all__ = [
    "EscapePolicy",
    "FileProvider",
    "MissingVariableError",
    "MustacheError",
    "ParseError",
    "PartialDepthError",
    "PartialProvider",
    "ProjectInfo",
    "ProviderError",
    "RenderConfig",
    "RenderError",
    "StaticProvider",
    "TagType",
    "Template",
    "TextSink",
    "VariableValidationError",
    "collect_variables",
    "get_project_info",
    "parse_file",
    "parse_string",
    "render",
    "render_file",
    "render_file_in_layout",
    "render_in_layout",
    "render_to",
    "validate_context",
]
__version__ = get_project_info().version
