"""Scanner, node types and parser for Mustache source."""

from pydantic_mustache.parse.nodes import DEFAULT_DELIMITERS
from pydantic_mustache.parse.nodes import Node
from pydantic_mustache.parse.nodes import PartialNode
from pydantic_mustache.parse.nodes import SectionNode
from pydantic_mustache.parse.nodes import Tag
from pydantic_mustache.parse.nodes import TextNode
from pydantic_mustache.parse.nodes import VariableNode
from pydantic_mustache.parse.nodes import extract_tags
from pydantic_mustache.parse.parser import Parser
from pydantic_mustache.parse.parser import parse
from pydantic_mustache.parse.scanner import Scanner

__all__ = [
    "DEFAULT_DELIMITERS",
    "Node",
    "Parser",
    "PartialNode",
    "Scanner",
    "SectionNode",
    "Tag",
    "TextNode",
    "VariableNode",
    "extract_tags",
    "parse",
]
