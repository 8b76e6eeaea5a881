"""Parsed Mustache templates."""

from collections.abc import Sequence
from io import StringIO
import re
from typing import Any

from pydantic_mustache.core.render_config import RenderConfig
from pydantic_mustache.observability import parse_span
from pydantic_mustache.observability import render_span
from pydantic_mustache.parse.nodes import Node
from pydantic_mustache.parse.nodes import Tag
from pydantic_mustache.parse.nodes import extract_tags
from pydantic_mustache.parse.parser import parse
from pydantic_mustache.render.context import ContextStack
from pydantic_mustache.render.renderer import Renderer
from pydantic_mustache.types import PartialProvider
from pydantic_mustache.types import TextSink

# Splits after each LF only; other line separators stay inside a line.
_LINE_BREAK = re.compile(r"(?<=\n)")


class Template:
    """Compiled template that can be rendered many times.

    A Template is immutable once parsed and may be rendered concurrently;
    each render builds its own context stack.
    """

    def __init__(
        self,
        source: str,
        children: Sequence[Node],
        *,
        provider: PartialProvider | None = None,
    ) -> None:
        """Initialize a template from already parsed nodes.

        Args:
            source: Template source the nodes were parsed from
            children: Root nodes
            provider: Provider used for partials in this template

        """
        self.source = source
        self.children: tuple[Node, ...] = tuple(children)
        self.provider = provider

    @classmethod
    def parse(
        cls, source: object, *, partials: PartialProvider | None = None
    ) -> "Template":
        """Parse template source.

        Args:
            source: Template string
            partials: Provider for ``{{>name}}`` tags. Without one, partials
                render empty.

        Returns:
            Parsed template

        Raises:
            TypeError: When source is not a string
            ParseError: When source is malformed

        """
        if not isinstance(source, str):
            msg = f"Mustache template must be str, got {type(source).__name__}"
            raise TypeError(msg)

        with parse_span(source):
            children = parse(source, provider=partials)
        return cls(source, children, provider=partials)

    def tags(self) -> list[Tag]:
        """Return the root tags of this template."""
        return extract_tags(self.children)

    def indented(self, indent: str) -> "Template":
        """Return this template with indent prefixed to each source line.

        A trailing newline does not start a new line, so no indentation
        follows it.
        """
        lines = _LINE_BREAK.split(self.source)
        return Template.parse(
            "".join(indent + line for line in lines if line), partials=self.provider
        )

    def render(self, *contexts: Any, config: RenderConfig | None = None) -> str:
        """Render the template to a string.

        Args:
            *contexts: Context frames; the first is searched first
            config: Render configuration

        Returns:
            Rendered string

        Raises:
            MissingVariableError: When a variable misses and allow_missing is off
            PartialDepthError: When partials nest past max_partial_depth
            ProviderError: When a partial provider fails

        """
        buffer = StringIO()
        with render_span(self, len(contexts)) as span:
            self._render(buffer, contexts, config)
            result = buffer.getvalue()
            span.set_attribute("mustache.result_length", len(result))
        return result

    def render_to(
        self, sink: TextSink, *contexts: Any, config: RenderConfig | None = None
    ) -> None:
        """Render the template into sink.

        On error, output written before the failing tag stays in sink.

        Args:
            sink: Output target
            *contexts: Context frames; the first is searched first
            config: Render configuration

        """
        with render_span(self, len(contexts)):
            self._render(sink, contexts, config)

    def render_in_layout(
        self,
        layout: "Template",
        *contexts: Any,
        config: RenderConfig | None = None,
    ) -> str:
        """Render this template inside a layout.

        The layout sees the rendered template as ``{{content}}`` ahead of
        the caller's contexts.

        Args:
            layout: Wrapper template
            *contexts: Context frames; the first is searched first
            config: Render configuration

        Returns:
            Rendered layout

        """
        content = self.render(*contexts, config=config)
        return layout.render({"content": content}, *contexts, config=config)

    def render_in_layout_to(
        self,
        sink: TextSink,
        layout: "Template",
        *contexts: Any,
        config: RenderConfig | None = None,
    ) -> None:
        """Render this template inside a layout into sink."""
        content = self.render(*contexts, config=config)
        layout.render_to(sink, {"content": content}, *contexts, config=config)

    def _render(
        self,
        sink: TextSink,
        contexts: Sequence[Any],
        config: RenderConfig | None,
    ) -> None:
        renderer = Renderer(config, provider=self.provider)
        renderer.render(self.children, ContextStack.from_contexts(contexts), sink)

    def __repr__(self) -> str:
        return f"Template(source={self.source[:40]!r}, tags={len(self.tags())})"
