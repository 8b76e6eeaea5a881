"""OpenTelemetry tracing for parse and render calls."""

from collections.abc import Iterator
from contextlib import contextmanager
import hashlib
import time
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.trace import Span

from pydantic_mustache.validation import collect_variables

if TYPE_CHECKING:
    from pydantic_mustache.template import Template

tracer = trace.get_tracer(__name__)


@contextmanager
def parse_span(source: str) -> Iterator[Span]:
    """Trace a parse call.

    Args:
        source: Template source being parsed

    Yields:
        The active span

    """
    with tracer.start_as_current_span("mustache.parse") as span:
        if span.is_recording():
            span.set_attribute("mustache.template_hash", hash_template(source))
            span.set_attribute("mustache.template_length", len(source))
        yield span


@contextmanager
def render_span(template: "Template", context_count: int) -> Iterator[Span]:
    """Trace a render call.

    Callers may set ``mustache.result_length`` on the yielded span once the
    output is known.

    Args:
        template: Template being rendered
        context_count: Number of context frames supplied by the caller

    Yields:
        The active span

    """
    with tracer.start_as_current_span("mustache.render") as span:
        start_time = time.perf_counter()
        if span.is_recording():
            span.set_attribute("mustache.template_hash", hash_template(template.source))
            span.set_attribute("mustache.context_count", context_count)
            root_vars = collect_variables(template)
            span.set_attribute("mustache.root_vars", ",".join(sorted(root_vars)))

        yield span

        render_ms = (time.perf_counter() - start_time) * 1000
        span.set_attribute("mustache.render_ms", render_ms)


def hash_template(source: str) -> str:
    """Generate hash of template source for telemetry."""
    return hashlib.sha256(source[:500].encode()).hexdigest()[:16]
