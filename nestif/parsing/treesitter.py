from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import tree_sitter_go
from tree_sitter import Language, Parser

from nestif.core.errors import ParseError


GO_LANGUAGE = Language(tree_sitter_go.language())

GO_EXTENSIONS = {".go"}

FUNCTION_NODE_TYPES = {"function_declaration", "method_declaration", "func_literal"}
IF_NODE_TYPE = "if_statement"
BLOCK_NODE_TYPE = "block"
CLOSURE_NODE_TYPE = "func_literal"


@dataclass(frozen=True)
class ParsedFile:
    path: str
    source: bytes
    tree: object

    @property
    def root(self):
        return self.tree.root_node


def is_go_file(path: str) -> bool:
    return Path(path).suffix.lower() in GO_EXTENSIONS


def parse_source(source: bytes, path: str = "<stdin>") -> ParsedFile:
    parser = Parser(GO_LANGUAGE)
    tree = parser.parse(source)
    if tree.root_node.has_error:
        raise ParseError(f"{path}: syntax error")
    return ParsedFile(path=path, source=source, tree=tree)


def parse_file(path: str) -> ParsedFile:
    try:
        source = Path(path).read_bytes()
    except OSError as exc:
        raise ParseError(f"{path}: {exc.strerror or exc}") from exc
    return parse_source(source, path)


def iter_nodes(node) -> Iterable[object]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(parsed: ParsedFile, node) -> str:
    return parsed.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
