from __future__ import annotations

from typing import Iterable, Optional

from nestif.parsing.treesitter import (
    CLOSURE_NODE_TYPE,
    FUNCTION_NODE_TYPES,
    IF_NODE_TYPE,
    ParsedFile,
    iter_nodes,
    node_text,
)


def function_bodies(parsed: ParsedFile) -> Iterable[object]:
    """Yield the body block of every function, method and closure in the file.

    Declarations without a body (assembly stubs) are skipped, and so are
    closures inside an if statement: they are scored with that statement.
    """
    for node in iter_nodes(parsed.root):
        if node.type not in FUNCTION_NODE_TYPES:
            continue
        if node.type == CLOSURE_NODE_TYPE and _inside_if(node):
            continue
        body = node.child_by_field_name("body")
        if body is not None:
            yield body


def _inside_if(node) -> bool:
    parent = node.parent
    while parent is not None:
        if parent.type == IF_NODE_TYPE:
            return True
        parent = parent.parent
    return False


def find_ifs(node) -> Iterable[object]:
    """Yield the outermost if statements below ``node`` in source order.

    The search stops at each if statement it yields and never enters a closure.
    """
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if current.type == IF_NODE_TYPE:
            yield current
            continue
        if current.type == CLOSURE_NODE_TYPE:
            continue
        stack.extend(reversed(current.children))


def condition_text(parsed: ParsedFile, if_node) -> Optional[str]:
    cond = if_node.child_by_field_name("condition")
    if cond is None:
        return None
    return " ".join(node_text(parsed, cond).split())


def is_nil_guard(if_node) -> bool:
    """Report whether the condition is a bare comparison against nil, e.g. ``err != nil``."""
    cond = if_node.child_by_field_name("condition")
    if cond is None or cond.type != "binary_expression":
        return False
    operator = cond.child_by_field_name("operator")
    right = cond.child_by_field_name("right")
    if operator is None or right is None:
        return False
    return operator.type in {"!=", "=="} and right.type == "nil"
