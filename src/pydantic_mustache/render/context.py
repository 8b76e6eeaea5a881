"""Context stack and name resolution.

Names resolve against a stack of frames, most recently pushed first. On
each frame three capabilities are tried in a fixed order:

1. a zero-argument accessor method defined on the frame's own class,
2. a public attribute (dataclass field, pydantic field, property, ...),
3. a mapping key.

The first frame that answers wins. Dotted names resolve their head
against the whole stack and every later segment only against the value
found for the segment before it.
"""

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import Sequence
from collections.abc import Set
from contextlib import contextmanager
import inspect
from types import FunctionType
from typing import Any

# Methods inherited from these modules are container or framework API,
# not data accessors: {{items}} on a dict reads the key, never dict.items.
_FOREIGN_MODULES = frozenset(
    {
        "_collections_abc",
        "abc",
        "builtins",
        "collections",
        "enum",
        "pydantic",
        "types",
        "typing",
    }
)

_MISS: tuple[Any, bool] = (None, False)
_ABSENT = object()


class ContextStack:
    """Layered context frames searched from the most recently pushed."""

    __slots__ = ("_frames",)

    def __init__(self, frames: Iterable[Any] = ()) -> None:
        """Initialize the stack.

        Args:
            frames: Frames from oldest to most recently pushed

        """
        self._frames = list(frames)

    @classmethod
    def from_contexts(cls, contexts: Sequence[Any]) -> "ContextStack":
        """Build a stack where the first context is the most specific frame."""
        return cls(reversed(contexts))

    @property
    def top(self) -> Any:
        """The most recently pushed frame.

        Raises:
            IndexError: When the stack is empty

        """
        return self._frames[-1]

    def __iter__(self) -> Iterator[Any]:
        return reversed(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    @contextmanager
    def pushed(self, frame: Any) -> Iterator["ContextStack"]:
        """Push frame for the duration of the block."""
        self._frames.append(frame)
        try:
            yield self
        finally:
            self._frames.pop()

    def lookup(self, name: str) -> tuple[Any, bool]:
        """Resolve name against this stack; see lookup()."""
        return lookup(self, name)


def lookup(stack: ContextStack, name: str) -> tuple[Any, bool]:
    """Resolve a possibly dotted name against a context stack.

    Args:
        stack: Frames to search
        name: Tag name, ``.`` for the top frame, or a dotted path

    Returns:
        Tuple of the resolved value and whether it was found. A found value
        may itself be None.

    """
    if name == ".":
        if not stack:
            return _MISS
        return stack.top, True

    if "." in name:
        head, rest = name.split(".", 1)
        value, found = lookup(stack, head)
        if not found:
            return _MISS
        return lookup(ContextStack([value]), rest)

    for frame in stack:
        value, found = resolve(frame, name)
        if found:
            return value, True
    return _MISS


def resolve(frame: Any, name: str) -> tuple[Any, bool]:
    """Resolve a single name segment against one frame.

    Args:
        frame: Context frame
        name: Undotted name

    Returns:
        Tuple of the value and whether the frame answered

    """
    if frame is None:
        return _MISS

    accessor = _accessor(frame, name)
    if accessor is not None:
        return accessor(), True

    if isinstance(frame, Mapping):
        if name in frame:
            return frame[name], True
        return _MISS

    if name.startswith("_") or type(frame).__module__ == "builtins":
        return _MISS
    value = getattr(frame, name, _ABSENT)
    if value is _ABSENT or inspect.ismethod(value) or inspect.isbuiltin(value):
        return _MISS
    return value, True


def _accessor(frame: Any, name: str) -> Callable[[], Any] | None:
    """Return a bound zero-argument method named name, if the frame defines one."""
    if name.startswith("_"):
        return None
    for klass in type(frame).__mro__:
        if klass.__module__.partition(".")[0] in _FOREIGN_MODULES:
            continue
        attribute = vars(klass).get(name)
        if attribute is None:
            continue
        if not isinstance(attribute, FunctionType | staticmethod | classmethod):
            return None
        bound = getattr(frame, name)
        if callable(bound) and takes_arguments(bound, 0):
            return bound
        return None
    return None


def takes_arguments(func: Callable[..., Any], count: int) -> bool:
    """Whether func can be called with exactly count positional arguments.

    The check inspects the signature and never calls func.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind(*([None] * count))
    except TypeError:
        return False
    return True


def is_lambda(value: Any) -> bool:
    """Whether value is a callable hook rather than data."""
    return callable(value) and not isinstance(value, type)


def is_sequence(value: Any) -> bool:
    """Whether value iterates as a list section."""
    return isinstance(value, Sequence | Set) and not isinstance(
        value, str | bytes | bytearray
    )


def is_empty(value: Any) -> bool:
    """Whether value makes a section falsey.

    None, False, whitespace-only strings and zero-length sequences are
    empty. Everything else, including 0, "0" and empty mappings, is not.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, str):
        return not value.strip()
    if is_sequence(value):
        return len(value) == 0
    return False


def stringify(value: Any) -> str:
    """Convert a resolved value to interpolation text."""
    match value:
        case None:
            return ""
        case bool():
            return "true" if value else "false"
        case float() if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        case _:
            return str(value)
