"""Cursor over template source.

The scanner owns the read position and the 1-based line counter. The
parser asks it for text up to the next marker (which changes whenever
delimiters are redefined) and for the geometry of the line around a tag,
which drives standalone-line elision.
"""

_INLINE_WHITESPACE = " \t"


class Scanner:
    """Forward-only reader over a template string."""

    def __init__(self, data: str) -> None:
        """Initialize the scanner at the start of data.

        Args:
            data: Complete template source

        """
        self.data = data
        self.pos = 0
        self.line = 1

    @property
    def at_end(self) -> bool:
        """Whether the cursor has consumed all input."""
        return self.pos >= len(self.data)

    def peek(self) -> str:
        """Return the character under the cursor, or "" at end of input."""
        return self.data[self.pos : self.pos + 1]

    def read_until(self, marker: str) -> tuple[str, bool]:
        """Consume input through the next occurrence of marker.

        Args:
            marker: Literal text to search for

        Returns:
            Tuple of the consumed text (including marker when found) and
            whether the marker was found. When it is not found the rest of
            the input is returned and the cursor moves to the end.

        """
        index = self.data.find(marker, self.pos)
        if index < 0:
            return self._advance(len(self.data)), False
        return self._advance(index + len(marker)), True

    def line_prefix(self, pos: int) -> str:
        """Return the text between the start of pos's line and pos."""
        start = self.data.rfind("\n", 0, pos) + 1
        return self.data[start:pos]

    def rest_of_line(self) -> str:
        """Return the text from the cursor up to, not including, the newline."""
        end = self.data.find("\n", self.pos)
        if end < 0:
            end = len(self.data)
        return self.data[self.pos : end]

    def is_standalone(self, tag_start: int) -> bool:
        """Whether the tag spanning tag_start..cursor sits alone on its line.

        Only spaces and tabs may precede it since the last newline, and only
        spaces, tabs and a carriage return may follow it before the next
        newline or the end of input.
        """
        if self.line_prefix(tag_start).strip(_INLINE_WHITESPACE):
            return False
        return not self.rest_of_line().strip(_INLINE_WHITESPACE + "\r")

    def skip_line(self) -> None:
        """Consume the rest of the current line including its newline."""
        end = self.data.find("\n", self.pos)
        self._advance(len(self.data) if end < 0 else end + 1)

    def _advance(self, end: int) -> str:
        text = self.data[self.pos : end]
        self.line += text.count("\n")
        self.pos = end
        return text
