"""Parsed template nodes.

A parsed template is an immutable tree built from four node kinds. Text
is written verbatim; the other three are tags that resolve names against
the context stack at render time.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel
from pydantic import Field

from pydantic_mustache.enums import TagType

DEFAULT_DELIMITERS = ("{{", "}}")


class TextNode(BaseModel):
    """Literal output span."""

    model_config = {"frozen": True}

    text: str


class VariableNode(BaseModel):
    """Interpolation tag; escape is False for ``{{{name}}}`` and ``{{&name}}``."""

    model_config = {"frozen": True}

    name: str
    escape: bool = True

    @property
    def tag_type(self) -> TagType:
        return TagType.VARIABLE

    def tags(self) -> list["Tag"]:
        """Variables have no child tags.

        Raises:
            TypeError: Always

        """
        msg = "Variable tags have no child tags"
        raise TypeError(msg)


class SectionNode(BaseModel):
    """Section or inverted section with its parsed children.

    Attributes:
        name: Name resolved to decide how the section renders.
        inverted: True for ``{{^name}}`` sections.
        line: Line of the opening tag.
        children: Nodes between the opening and closing tags.
        raw_body: Unparsed source between the tags, handed to lambdas.
        delimiters: Open/close delimiters in force at the opening tag.

    """

    model_config = {"frozen": True}

    name: str
    inverted: bool = False
    line: int = 1
    children: tuple["Node", ...] = ()
    raw_body: str = ""
    delimiters: tuple[str, str] = DEFAULT_DELIMITERS

    @property
    def tag_type(self) -> TagType:
        return TagType.INVERTED_SECTION if self.inverted else TagType.SECTION

    def tags(self) -> list["Tag"]:
        """Return the tags among this section's children."""
        return extract_tags(self.children)


class PartialNode(BaseModel):
    """Reference to a named partial, resolved through its provider at render time.

    Attributes:
        name: Partial name passed to the provider.
        indent: Leading whitespace of a standalone partial tag, reapplied to
            every line of the partial.
        provider: PartialProvider captured at parse time, or None.

    """

    model_config = {"frozen": True}

    name: str
    indent: str = ""
    provider: Any = Field(default=None, exclude=True, repr=False)

    @property
    def tag_type(self) -> TagType:
        return TagType.PARTIAL

    def tags(self) -> list["Tag"]:
        """Partials are not expanded during introspection."""
        return []


Node = TextNode | VariableNode | SectionNode | PartialNode
Tag = VariableNode | SectionNode | PartialNode

SectionNode.model_rebuild()


def extract_tags(nodes: Iterable[Node]) -> list[Tag]:
    """Return the tag nodes among nodes, dropping literal text."""
    return [node for node in nodes if not isinstance(node, TextNode)]
