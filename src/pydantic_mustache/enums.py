"""Type-safe enumerations for the template engine."""

from enum import StrEnum


class TagType(StrEnum):
    """Kinds of Mustache tags reported by tag introspection."""

    VARIABLE = "Variable"
    SECTION = "Section"
    INVERTED_SECTION = "InvertedSection"
    PARTIAL = "Partial"


class EscapePolicy(StrEnum):
    """Escape policies for variable interpolation."""

    NONE = "none"
    HTML = "html"
