"""Tree-walking renderer.

A Renderer is created per render call. It owns that call's partial cache
and nesting depth, never mutates the node tree, and writes output to a
sink as it walks. The first error aborts the walk; text already written
to the sink stays there.
"""

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from io import StringIO
import logging
from numbers import Number
from typing import TYPE_CHECKING
from typing import Any

from pydantic_mustache.core.errors import MissingVariableError
from pydantic_mustache.core.errors import PartialDepthError
from pydantic_mustache.core.render_config import RenderConfig
from pydantic_mustache.parse.nodes import Node
from pydantic_mustache.parse.nodes import PartialNode
from pydantic_mustache.parse.nodes import SectionNode
from pydantic_mustache.parse.nodes import TextNode
from pydantic_mustache.parse.nodes import VariableNode
from pydantic_mustache.parse.parser import parse
from pydantic_mustache.render.context import ContextStack
from pydantic_mustache.render.context import is_empty
from pydantic_mustache.render.context import is_lambda
from pydantic_mustache.render.context import is_sequence
from pydantic_mustache.render.context import stringify
from pydantic_mustache.render.context import takes_arguments
from pydantic_mustache.types import TextSink

if TYPE_CHECKING:
    from pydantic_mustache.template import Template

logger = logging.getLogger(__name__)

_SCALARS = (str, bytes, bytearray, Number)


class Renderer:
    """Render parsed nodes against a context stack."""

    def __init__(
        self,
        config: RenderConfig | None = None,
        *,
        provider: Any = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            config: Render configuration (defaults to RenderConfig())
            provider: PartialProvider for partials inside lambda output

        """
        self.config = config or RenderConfig()
        self._escape = self.config.escape_function()
        self._provider = provider
        self._partials: dict[tuple[str, str], "Template"] = {}
        self._depth = 0

    def render(self, nodes: Iterable[Node], stack: ContextStack, out: TextSink) -> None:
        """Render nodes in order.

        Args:
            nodes: Nodes to render
            stack: Context stack to resolve names against
            out: Sink receiving the output

        Raises:
            MissingVariableError: When a variable misses and allow_missing is off
            PartialDepthError: When partials nest past max_partial_depth
            ParseError: When lambda output is malformed

        """
        for node in nodes:
            self._render_node(node, stack, out)

    def _render_node(self, node: Node, stack: ContextStack, out: TextSink) -> None:
        match node:
            case TextNode():
                out.write(node.text)
            case VariableNode():
                self._render_variable(node, stack, out)
            case SectionNode(inverted=True):
                if is_empty(_section_value(stack, node.name)):
                    self.render(node.children, stack, out)
            case SectionNode():
                self._render_section(node, stack, out)
            case PartialNode():
                self._render_partial(node, stack, out)

    def _render_variable(
        self, node: VariableNode, stack: ContextStack, out: TextSink
    ) -> None:
        value, found = stack.lookup(node.name)
        if not found:
            if not self.config.allow_missing:
                raise MissingVariableError(node.name)
            logger.debug("Variable %r not found; rendering empty", node.name)
            return

        if is_lambda(value) and takes_arguments(value, 0):
            text = self._expand(stringify(value()), stack)
        else:
            text = stringify(value)
        out.write(self._escape(text) if node.escape else text)

    def _render_section(
        self, node: SectionNode, stack: ContextStack, out: TextSink
    ) -> None:
        value = _section_value(stack, node.name)

        if is_lambda(value):
            if takes_arguments(value, 1):
                out.write(self._expand(stringify(value(node.raw_body)), stack, node))
                return
            if takes_arguments(value, 0):
                out.write(self._expand(stringify(value()), stack, node))
                return

        if is_empty(value):
            return

        if is_sequence(value):
            for item in value:
                with stack.pushed(item):
                    self.render(node.children, stack, out)
        elif isinstance(value, Mapping) or not isinstance(value, _SCALARS):
            with stack.pushed(value):
                self.render(node.children, stack, out)
        else:
            self.render(node.children, stack, out)

    def _expand(
        self, source: str, stack: ContextStack, section: SectionNode | None = None
    ) -> str:
        """Parse and render lambda output against the current stack.

        Variable lambdas are parsed with the default delimiters; section
        lambdas with the delimiters in force at the section's opening tag.
        """
        if section is None:
            nodes = parse(source, provider=self._provider)
        else:
            nodes = parse(source, provider=self._provider, delimiters=section.delimiters)
        buffer = StringIO()
        self.render(nodes, stack, buffer)
        return buffer.getvalue()

    def _render_partial(
        self, node: PartialNode, stack: ContextStack, out: TextSink
    ) -> None:
        if self._depth >= self.config.max_partial_depth:
            msg = (
                f"Partial {node.name!r} exceeded the maximum nesting depth of "
                f"{self.config.max_partial_depth}"
            )
            raise PartialDepthError(msg)

        template = self._resolve_partial(node)
        if template is None:
            return

        self._depth += 1
        try:
            self.render(template.children, stack, out)
        finally:
            self._depth -= 1

    def _resolve_partial(self, node: PartialNode) -> "Template | None":
        """Fetch a partial once per render call, indented for its call site."""
        key = (node.name, node.indent)
        if key in self._partials:
            return self._partials[key]

        if node.provider is None:
            logger.debug("No partial provider for %r; rendering empty", node.name)
            return None

        template = node.provider.get(node.name)
        if node.indent:
            template = template.indented(node.indent)
        self._partials[key] = template
        return template


def _section_value(stack: ContextStack, name: str) -> Any:
    """Look up a section name, materialising iterators so they can be tested."""
    value, _ = stack.lookup(name)
    if isinstance(value, Iterator):
        return list(value)
    return value
