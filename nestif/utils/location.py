from __future__ import annotations

from nestif.core.issue import Position
from nestif.parsing.treesitter import ParsedFile


def position_from_node(parsed: ParsedFile, node) -> Position:
    line = node.start_point[0] + 1
    column = node.start_point[1] + 1
    return Position(filename=parsed.path, offset=node.start_byte, line=line, column=column)
