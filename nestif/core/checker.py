from __future__ import annotations

import logging
from typing import List, Optional

from nestif.analysis.ast import find_ifs, function_bodies
from nestif.analysis.complexity import score_if
from nestif.core.config import Config
from nestif.core.issue import Issue, Position
from nestif.parsing.treesitter import ParsedFile
from nestif.utils.location import position_from_node


class Checker:
    """Finds if statements whose nested ifs reach ``min_complexity``.

    Only the outermost if statements of each function body are reported; the
    ifs nested inside them count towards their score instead.
    """

    def __init__(
        self,
        min_complexity: int = 1,
        skip_nil_guards: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.min_complexity = min_complexity
        self.skip_nil_guards = skip_nil_guards
        self.logger = logger or logging.getLogger("nestif")

    @classmethod
    def from_config(cls, config: Config, logger: Optional[logging.Logger] = None) -> "Checker":
        return cls(
            min_complexity=config.min_complexity(),
            skip_nil_guards=config.skip_nil_guards(),
            logger=logger,
        )

    def check(self, parsed: ParsedFile) -> List[Issue]:
        issues: List[Issue] = []
        for body in function_bodies(parsed):
            for if_node in find_ifs(body):
                issue = self._check_if(parsed, if_node)
                if issue is not None:
                    issues.append(issue)
        # Closures are visited after their enclosing function.
        issues.sort(key=lambda i: i.pos.offset)
        self.logger.debug("%s: %d issues found", parsed.path, len(issues))
        return issues

    def _check_if(self, parsed: ParsedFile, node) -> Optional[Issue]:
        result = score_if(parsed, node, skip_nil_guards=self.skip_nil_guards, log=self.logger)
        if result.complexity < self.min_complexity:
            return None
        pos = position_from_node(parsed, node)
        return Issue(
            pos=pos,
            complexity=result.complexity,
            message=make_message(pos, result.condition, result.complexity),
            condition=result.condition,
        )


def make_message(pos: Position, condition: str, complexity: int) -> str:
    return f"{pos}: `if {condition}` is nested (complexity: {complexity})"
