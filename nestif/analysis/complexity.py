from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from nestif.analysis.ast import condition_text, is_nil_guard
from nestif.parsing.treesitter import BLOCK_NODE_TYPE, IF_NODE_TYPE, ParsedFile


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IfComplexity:
    complexity: int
    condition: str


@dataclass
class _ScoreAccumulator:
    complexity: int = 0
    nesting: int = 0


def score_if(
    parsed: ParsedFile,
    node,
    skip_nil_guards: bool = False,
    log: Optional[logging.Logger] = None,
) -> IfComplexity:
    """Score the nested conditionals below one top-level if statement.

    A nested if adds the number of ifs enclosing it. An ``else if`` adds 1
    no matter how deep the chain sits, and so does entering a plain ``else``
    block, whose contents are charged one level deeper. Ifs inside function
    literals count like any other nested if.
    """
    acc = _ScoreAccumulator()
    _visit_if(node, acc, skip_nil_guards, else_if=False)
    condition = condition_text(parsed, node)
    if condition is None:
        (log or logger).debug(
            "failed to convert condition into string: %s:%d:%d has no condition",
            parsed.path,
            node.start_point[0] + 1,
            node.start_point[1] + 1,
        )
        condition = ""
    return IfComplexity(complexity=acc.complexity, condition=condition)


def _visit_if(node, acc: _ScoreAccumulator, skip_nil_guards: bool, else_if: bool) -> None:
    if skip_nil_guards and is_nil_guard(node):
        return

    if else_if:
        acc.complexity += 1
    else:
        acc.complexity += acc.nesting

    body = node.child_by_field_name("consequence")
    if body is not None:
        acc.nesting += 1
        _walk(body, acc, skip_nil_guards)
        acc.nesting -= 1

    alternative = node.child_by_field_name("alternative")
    if alternative is None:
        return
    if alternative.type == BLOCK_NODE_TYPE:
        acc.complexity += 1
        acc.nesting += 1
        _walk(alternative, acc, skip_nil_guards)
        acc.nesting -= 1
    elif alternative.type == IF_NODE_TYPE:
        _visit_if(alternative, acc, skip_nil_guards, else_if=True)


def _walk(node, acc: _ScoreAccumulator, skip_nil_guards: bool) -> None:
    for child in node.children:
        if child.type == IF_NODE_TYPE:
            _visit_if(child, acc, skip_nil_guards, else_if=False)
        else:
            _walk(child, acc, skip_nil_guards)
