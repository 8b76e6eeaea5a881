"""Convenience functions composing parse and render."""

import logging
from os import PathLike
from pathlib import Path
from typing import Any

from pydantic_mustache.core.render_config import RenderConfig
from pydantic_mustache.partials import FileProvider
from pydantic_mustache.template import Template
from pydantic_mustache.types import PartialProvider
from pydantic_mustache.types import TextSink

logger = logging.getLogger(__name__)

StrPath = str | PathLike[str]


def parse_string(source: str, partials: PartialProvider | None = None) -> Template:
    """Parse a template string.

    Args:
        source: Template source
        partials: Partial provider (default: files in the working directory)

    Returns:
        Parsed template

    """
    if partials is None:
        partials = FileProvider()
    return Template.parse(source, partials=partials)


def parse_file(filename: StrPath, partials: PartialProvider | None = None) -> Template:
    """Load and parse a template file.

    Args:
        filename: Template path
        partials: Partial provider (default: files next to the template)

    Returns:
        Parsed template

    Raises:
        OSError: When the file cannot be read

    """
    path = Path(filename)
    if partials is None:
        partials = FileProvider(paths=(path.parent,))
    logger.debug("Parsing template file %s", path)
    return Template.parse(path.read_text(encoding="utf-8"), partials=partials)


def render(
    source: str,
    *contexts: Any,
    partials: PartialProvider | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Parse a template string and render it.

    Args:
        source: Template source
        *contexts: Context frames; the first is searched first
        partials: Partial provider
        config: Render configuration

    Returns:
        Rendered string

    """
    return parse_string(source, partials).render(*contexts, config=config)


def render_to(
    sink: TextSink,
    source: str,
    *contexts: Any,
    partials: PartialProvider | None = None,
    config: RenderConfig | None = None,
) -> None:
    """Parse a template string and render it into sink."""
    parse_string(source, partials).render_to(sink, *contexts, config=config)


def render_in_layout(
    source: str,
    layout_source: str,
    *contexts: Any,
    partials: PartialProvider | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Render a template string inside a layout string.

    Both are parsed before either is rendered, so a malformed layout fails
    before any rendering happens.

    Args:
        source: Template source
        layout_source: Layout source referencing ``{{content}}``
        *contexts: Context frames; the first is searched first
        partials: Partial provider
        config: Render configuration

    Returns:
        Rendered layout

    """
    layout = parse_string(layout_source, partials)
    template = parse_string(source, partials)
    return template.render_in_layout(layout, *contexts, config=config)


def render_file(
    filename: StrPath,
    *contexts: Any,
    partials: PartialProvider | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Load, parse and render a template file."""
    return parse_file(filename, partials).render(*contexts, config=config)


def render_file_in_layout(
    filename: StrPath,
    layout_filename: StrPath,
    *contexts: Any,
    partials: PartialProvider | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Render a template file inside a layout file."""
    layout = parse_file(layout_filename, partials)
    template = parse_file(filename, partials)
    return template.render_in_layout(layout, *contexts, config=config)
