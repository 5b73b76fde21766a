from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from nestif.core.errors import ConfigError, PackageNotFoundError
from nestif.parsing.treesitter import is_go_file


logger = logging.getLogger(__name__)

RECURSIVE_SUFFIX = "/..."

GENERATED_HEADER = b"// Code generated "
GENERATED_FOOTER = b" DO NOT EDIT."


@dataclass
class Targets:
    files: List[str] = field(default_factory=list)
    dirs: List[str] = field(default_factory=list)
    packages: List[str] = field(default_factory=list)


def resolve_targets(args: Sequence[str]) -> Targets:
    """Sort command-line arguments into files, directories and import paths.

    With no arguments every package below the working directory is checked.
    """
    targets = Targets()
    if not args:
        targets.dirs.extend(all_packages_in_fs("." + RECURSIVE_SUFFIX))
    for arg in args:
        if arg.endswith(RECURSIVE_SUFFIX) and os.path.isdir(arg[: -len(RECURSIVE_SUFFIX)]):
            targets.dirs.extend(all_packages_in_fs(arg))
        elif os.path.isdir(arg):
            targets.dirs.append(arg)
        elif os.path.exists(arg):
            targets.files.append(arg)
        else:
            targets.packages.append(arg)
    return targets


def all_packages_in_fs(pattern: str) -> List[str]:
    """Expand a ``dir/...`` pattern into the directories that hold Go files.

    Hidden directories, ones starting with an underscore and ``testdata``
    directories are skipped below the root.
    """
    root = pattern[: -len(RECURSIVE_SUFFIX)] if pattern.endswith(RECURSIVE_SUFFIX) else pattern
    root = root or "."
    found: List[str] = []
    for current, dirs, _files in os.walk(root):
        dirs[:] = sorted(d for d in dirs if not _ignored_dir(d))
        if go_files_in_dir(current):
            found.append(current)
    if not found:
        logger.warning('warning: "%s" matched no packages', pattern)
    return found


def _ignored_dir(name: str) -> bool:
    return name.startswith(".") or name.startswith("_") or name == "testdata"


def go_files_in_dir(dirname: str) -> List[str]:
    try:
        names = sorted(os.listdir(dirname))
    except OSError:
        return []
    return [
        os.path.join(dirname, name)
        for name in names
        if is_go_file(name)
        and not name.startswith((".", "_"))
        and os.path.isfile(os.path.join(dirname, name))
    ]


def resolve_package(import_path: str, cwd: Optional[str] = None) -> str:
    """Find the directory of a Go import path.

    The enclosing module is tried first, then ``$GOPATH/src`` and ``$GOROOT/src``.
    """
    start = Path(cwd or os.getcwd()).resolve()
    candidates: List[Path] = []
    module = _find_module(start)
    if module is not None:
        module_root, module_path = module
        if import_path == module_path:
            candidates.append(module_root)
        elif import_path.startswith(module_path + "/"):
            candidates.append(module_root / import_path[len(module_path) + 1 :])
    for gopath in _gopaths():
        candidates.append(gopath / "src" / import_path)
    goroot = os.environ.get("GOROOT")
    if goroot:
        candidates.append(Path(goroot) / "src" / import_path)
    for candidate in candidates:
        if candidate.is_dir():
            return str(candidate)
    raise PackageNotFoundError(f"cannot find package {import_path!r}")


def _find_module(start: Path) -> Optional[tuple[Path, str]]:
    current = start
    while True:
        go_mod = current / "go.mod"
        if go_mod.is_file():
            for line in go_mod.read_text(encoding="utf-8", errors="replace").splitlines():
                parts = line.split("//", 1)[0].split()
                if len(parts) == 2 and parts[0] == "module":
                    return current, parts[1].strip('"')
            return None
        if current == current.parent:
            return None
        current = current.parent


def _gopaths() -> List[Path]:
    gopath = os.environ.get("GOPATH")
    if gopath:
        return [Path(p) for p in gopath.split(os.pathsep) if p]
    return [Path.home() / "go"]


def is_generated(source: bytes) -> bool:
    """Report whether the source carries the ``// Code generated ... DO NOT EDIT.`` marker."""
    for line in source.splitlines():
        if (
            line.startswith(GENERATED_HEADER)
            and line.endswith(GENERATED_FOOTER)
            and len(line) >= len(GENERATED_HEADER) + len(GENERATED_FOOTER)
        ):
            return True
    return False


def compile_exclude_patterns(patterns: Sequence[str]) -> List[re.Pattern]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise ConfigError(f"failed to parse exclude dir pattern: {exc}") from exc
    return compiled


def is_excluded(path: str, patterns: Sequence[re.Pattern]) -> bool:
    dirname = os.path.dirname(path) or "."
    return any(p.search(dirname) for p in patterns)
