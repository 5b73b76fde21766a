from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from nestif.core.checker import Checker
from nestif.core.config import Config
from nestif.core.errors import GeneratedFileError, NestifError, PackageNotFoundError
from nestif.core.issue import Issue
from nestif.parsing.treesitter import parse_file
from nestif.utils.files import (
    compile_exclude_patterns,
    go_files_in_dir,
    is_excluded,
    is_generated,
    resolve_package,
    resolve_targets,
)


@dataclass(frozen=True)
class CheckReport:
    issues: List[Issue]
    files_checked: int
    errors: List[str] = field(default_factory=list)


class CheckEngine:
    """Resolves command-line targets and runs the checker over every Go file."""

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None) -> None:
        self.config = config
        self.logger = logger or logging.getLogger("nestif")
        self.checker = Checker.from_config(config, logger=self.logger)
        self.exclude_patterns = compile_exclude_patterns(config.exclude_dirs())

    def run(self, args: Sequence[str]) -> CheckReport:
        errors: List[str] = []
        paths = self._collect_files(args, errors)
        if len(paths) > 1 and self.config.workers() > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers()) as executor:
                results = list(executor.map(self._check_path, paths))
        else:
            results = [self._check_path(p) for p in paths]

        issues: List[Issue] = []
        checked = 0
        for result in results:
            if result is None:
                continue
            checked += 1
            issues.extend(result)
        return CheckReport(issues=issues, files_checked=checked, errors=errors)

    def check_file(self, path: str) -> List[Issue]:
        """Check one file; raises ``NestifError`` when it cannot be checked."""
        parsed = parse_file(path)
        if is_generated(parsed.source):
            raise GeneratedFileError(f"{path} is a generated file")
        return self.checker.check(parsed)

    def _check_path(self, path: str) -> Optional[List[Issue]]:
        try:
            return self.check_file(path)
        except NestifError as exc:
            self.logger.debug("%s", exc)
            return None

    def _collect_files(self, args: Sequence[str], errors: List[str]) -> List[str]:
        targets = resolve_targets(args)
        paths: List[str] = list(targets.files)
        for dirname in targets.dirs:
            paths.extend(go_files_in_dir(dirname))
        for package in targets.packages:
            try:
                paths.extend(go_files_in_dir(resolve_package(package)))
            except PackageNotFoundError as exc:
                errors.append(str(exc))
        return [p for p in paths if not is_excluded(p, self.exclude_patterns)]

