"""Core protocols for the template engine."""

from typing import TYPE_CHECKING
from typing import Protocol

if TYPE_CHECKING:
    from pydantic_mustache.template import Template


class PartialProvider(Protocol):
    """Protocol for sources of named partial templates."""

    def get(self, name: str) -> "Template":
        """Return the parsed partial, or an empty template when not found.

        Raises:
            ProviderError: On faults other than a missing partial

        """
        ...


class TextSink(Protocol):
    """Protocol for render output targets such as io.StringIO or a text file."""

    def write(self, text: str, /) -> int:
        """Write text to the sink."""
        ...
