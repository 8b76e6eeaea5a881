"""Custom exceptions for pydantic-mustache.

Parse failures carry the template line they were detected on; render
failures abort the walk at the first error.
"""


class MustacheError(Exception):
    """Base exception for template errors."""


class ParseError(MustacheError):
    """Raised when template source is structurally malformed.

    This occurs when:
    - A tag is opened but its closing delimiter never appears
    - A tag body is empty
    - A section has no closing tag, or is closed by the wrong name
    - A delimiter change tag is malformed
    """

    def __init__(self, line: int, message: str) -> None:
        """Initialize with the offending line and a description."""
        self.line = line
        self.message = message
        super().__init__(f"line {line}: {message}")


class RenderError(MustacheError):
    """Base exception for errors raised while rendering."""


class MissingVariableError(RenderError):
    """Raised when a variable misses and missing variables are not allowed."""

    def __init__(self, name: str) -> None:
        """Initialize with the unresolved variable name."""
        self.name = name
        super().__init__(f"Missing variable {name!r}")


class PartialDepthError(RenderError):
    """Raised when partials nest deeper than the configured maximum.

    This stops self-referencing partials over data that never bottoms out.
    """


class ProviderError(MustacheError):
    """Raised by partial providers for faults other than a missing partial."""
