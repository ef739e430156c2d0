"""Source position information shared by tokens, nodes and errors."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class TokenPosition:
    """Position of the first character of a token in the decoded input."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def advance(self, text: str) -> "TokenPosition":
        """Return the position right after ``text`` starting at this position."""
        newlines = text.count("\n")
        if newlines:
            column = len(text) - text.rfind("\n")
        else:
            column = self.column + len(text)
        return TokenPosition(self.line + newlines, column, self.offset + len(text))

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column, "offset": self.offset}
