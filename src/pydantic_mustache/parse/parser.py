"""Recursive-descent parser for Mustache source.

The parser threads one piece of mutable lexical state through every
nested section: the scanner cursor and line counter plus the current
delimiter pair, which ``{{=<% %>=}}`` tags replace mid-document. The
top level and each section share one loop that differs only in how it
terminates.
"""

from dataclasses import dataclass
from typing import Any

from pydantic_mustache.core.errors import ParseError
from pydantic_mustache.parse.nodes import DEFAULT_DELIMITERS
from pydantic_mustache.parse.nodes import Node
from pydantic_mustache.parse.nodes import PartialNode
from pydantic_mustache.parse.nodes import SectionNode
from pydantic_mustache.parse.nodes import TextNode
from pydantic_mustache.parse.nodes import VariableNode
from pydantic_mustache.parse.scanner import Scanner

# Tags that vanish with their whole line when standalone.
_STANDALONE_SIGILS = frozenset("!#^/>=")


@dataclass
class _OpenSection:
    name: str
    line: int


class Parser:
    """Parse template source into a tree of nodes."""

    def __init__(
        self,
        source: str,
        *,
        provider: Any = None,
        delimiters: tuple[str, str] = DEFAULT_DELIMITERS,
    ) -> None:
        """Initialize the parser.

        Args:
            source: Template source
            provider: PartialProvider attached to every partial node
            delimiters: Open and close delimiters in force at the start

        """
        self._scanner = Scanner(source)
        self._provider = provider
        self._open, self._close = delimiters

    def parse(self) -> list[Node]:
        """Parse the whole source.

        Returns:
            Root nodes in source order

        Raises:
            ParseError: When the source is malformed

        """
        nodes, _ = self._parse_block(None)
        return nodes

    def _parse_block(self, section: _OpenSection | None) -> tuple[list[Node], int]:
        """Parse nodes until end of input or the close tag of section.

        Returns:
            The nodes and the source offset where the block's body ends.

        """
        scanner = self._scanner
        nodes: list[Node] = []
        while True:
            text, found = scanner.read_until(self._open)
            if not found:
                if section is not None:
                    msg = f"Section {section.name} has no closing tag"
                    raise ParseError(section.line, msg)
                _append_text(nodes, text)
                return nodes, scanner.pos

            text = text[: -len(self._open)]
            tag_start = scanner.pos - len(self._open)
            line = scanner.line
            tag = self._read_tag(line)
            sigil = tag[0]

            indent = ""
            if sigil in _STANDALONE_SIGILS and scanner.is_standalone(tag_start):
                indent = scanner.line_prefix(tag_start)
                text = text[: len(text) - len(indent)]
                scanner.skip_line()
            _append_text(nodes, text)

            match sigil:
                case "!":
                    pass
                case "#" | "^":
                    nodes.append(self._parse_section(tag, line))
                case "/":
                    name = _tag_name(tag[1:], line)
                    if section is None:
                        raise ParseError(line, "unmatched close tag")
                    if name != section.name:
                        raise ParseError(line, f"interleaved closing tag: {name}")
                    return nodes, tag_start - len(indent)
                case ">":
                    nodes.append(
                        PartialNode(
                            name=_tag_name(tag[1:], line),
                            indent=indent,
                            provider=self._provider,
                        )
                    )
                case "=":
                    self._set_delimiters(tag, line)
                case "{":
                    if len(tag) < 2 or not tag.endswith("}"):
                        raise ParseError(line, "unmatched open tag")
                    name = _tag_name(tag[1:-1], line)
                    nodes.append(VariableNode(name=name, escape=False))
                case "&":
                    name = _tag_name(tag[1:], line)
                    nodes.append(VariableNode(name=name, escape=False))
                case _:
                    nodes.append(VariableNode(name=tag))

    def _read_tag(self, line: int) -> str:
        """Read a tag body after its open delimiter and return it trimmed."""
        marker = self._close
        if self._scanner.peek() == "{":
            marker = "}" + self._close
        body, found = self._scanner.read_until(marker)
        if not found:
            raise ParseError(line, "unmatched open tag")
        tag = body[: -len(self._close)].strip()
        if not tag:
            raise ParseError(line, "empty tag")
        return tag

    def _parse_section(self, tag: str, line: int) -> SectionNode:
        name = _tag_name(tag[1:], line)
        delimiters = (self._open, self._close)
        body_start = self._scanner.pos
        children, body_end = self._parse_block(_OpenSection(name, line))
        return SectionNode(
            name=name,
            inverted=tag[0] == "^",
            line=line,
            children=tuple(children),
            raw_body=self._scanner.data[body_start:body_end],
            delimiters=delimiters,
        )

    def _set_delimiters(self, tag: str, line: int) -> None:
        if len(tag) < 2 or not tag.endswith("="):
            raise ParseError(line, "Invalid meta tag")
        delimiters = tag[1:-1].split()
        if len(delimiters) != 2:
            raise ParseError(line, "Invalid meta tag")
        self._open, self._close = delimiters


def _append_text(nodes: list[Node], text: str) -> None:
    if text:
        nodes.append(TextNode(text=text))


def _tag_name(body: str, line: int) -> str:
    """Return the name left after a tag's sigil, which must not be blank."""
    name = body.strip()
    if not name:
        raise ParseError(line, "empty tag")
    return name


def parse(
    source: str,
    *,
    provider: Any = None,
    delimiters: tuple[str, str] = DEFAULT_DELIMITERS,
) -> list[Node]:
    """Parse template source into nodes.

    Args:
        source: Template source
        provider: PartialProvider attached to partial nodes
        delimiters: Open and close delimiters in force at the start

    Returns:
        Root nodes in source order

    Raises:
        ParseError: When the source is malformed

    """
    return Parser(source, provider=provider, delimiters=delimiters).parse()
