"""Escape policy implementations for variable interpolation."""

from collections.abc import Callable
from html import escape

from pydantic_mustache.enums import EscapePolicy


def no_escape(s: str) -> str:
    """Return string without escaping."""
    return s


def escape_html(s: str) -> str:
    """Escape HTML special characters."""
    return escape(s)


def get_escape(policy: EscapePolicy) -> Callable[[str], str]:
    """Get the escape function for a policy.

    Args:
        policy: Escape policy to resolve

    Returns:
        Function mapping raw text to escaped text

    Raises:
        ValueError: When policy is not supported

    """
    match policy:
        case EscapePolicy.HTML:
            return escape_html
        case EscapePolicy.NONE:
            return no_escape
    msg = f"Unsupported escape policy: {policy!s}"
    raise ValueError(msg)
