"""Template validation utilities."""

from collections.abc import Iterable
from collections.abc import Mapping
from typing import TYPE_CHECKING

from pydantic_mustache.parse.nodes import Node
from pydantic_mustache.parse.nodes import SectionNode
from pydantic_mustache.parse.nodes import VariableNode

if TYPE_CHECKING:
    from pydantic_mustache.template import Template


class VariableValidationError(ValueError):
    """Raised when template variable validation fails."""

    pass


def collect_variables(template: "Template") -> set[str]:
    """Extract the names a template resolves against its root context.

    Variable and section names outside any non-inverted section are
    collected, reduced to the first segment of dotted names. Names inside
    non-inverted sections resolve against the section's frame first and
    are left out, as are partials, which are not expanded.

    Args:
        template: Parsed template

    Returns:
        Set of root variable names found in template

    """
    return _collect(template.children)


def validate_context(template: "Template", provided: Mapping[str, object]) -> None:
    """Validate that every root variable of a template is provided.

    Args:
        template: Parsed template
        provided: Mapping of provided variable names to values

    Raises:
        VariableValidationError: When variables are missing

    """
    missing = collect_variables(template) - set(provided.keys())
    if missing:
        msg = f"Missing variables: {', '.join(sorted(missing))}"
        raise VariableValidationError(msg)


def _collect(nodes: Iterable[Node]) -> set[str]:
    vars_found: set[str] = set()
    for node in nodes:
        match node:
            case VariableNode() | SectionNode():
                if node.name != ".":
                    vars_found.add(node.name.split(".")[0])
                if isinstance(node, SectionNode) and node.inverted:
                    vars_found |= _collect(node.children)
    return vars_found
