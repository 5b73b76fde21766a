from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Position:
    filename: str
    offset: int
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Issue:
    """A top-level if statement whose nested ifs reached the reporting threshold."""

    pos: Position
    complexity: int
    message: str
    condition: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Keys and nesting follow the JSON of the Go `nestif -json` command."""
        return {
            "Pos": {
                "Filename": self.pos.filename,
                "Offset": self.pos.offset,
                "Line": self.pos.line,
                "Column": self.pos.column,
            },
            "Complexity": self.complexity,
            "Message": self.message,
        }
