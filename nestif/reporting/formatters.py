from __future__ import annotations

import json
from typing import Iterable, List

from nestif.core.issue import Issue


def sort_issues(issues: Iterable[Issue]) -> List[Issue]:
    """Most complex first; ties keep their discovery order."""
    return sorted(issues, key=lambda issue: issue.complexity, reverse=True)


def format_text(issues: Iterable[Issue], top: int) -> str:
    lines = [issue.message for issue in list(issues)[:top]]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def format_json(issues: Iterable[Issue]) -> str:
    """A single-line array of every issue; ``top`` does not apply."""
    return json.dumps([issue.to_dict() for issue in issues]) + "\n"
