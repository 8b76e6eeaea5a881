"""Context resolution and tree rendering."""

from pydantic_mustache.render.context import ContextStack
from pydantic_mustache.render.context import is_empty
from pydantic_mustache.render.context import lookup
from pydantic_mustache.render.context import resolve
from pydantic_mustache.render.context import stringify
from pydantic_mustache.render.renderer import Renderer

__all__ = [
    "ContextStack",
    "Renderer",
    "is_empty",
    "lookup",
    "resolve",
    "stringify",
]
