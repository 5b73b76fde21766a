from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from nestif.core.errors import ConfigError


CONFIG_FILE_NAMES = [
    ".nestif.yaml",
    ".nestif.yml",
    ".nestif.json",
]

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": 1,
    "checker": {
        "min_complexity": 1,
        "skip_nil_guards": False,
    },
    "files": {
        "exclude_dirs": [],
        "workers": 4,
    },
    "reporting": {
        "format": "text",
        "top": 10,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _is_count(value: Any, minimum: int) -> bool:
    # YAML true/false load as bool, a subclass of int.
    return isinstance(value, int) and not isinstance(value, bool) and value >= minimum


def find_config(start_path: str = ".") -> Optional[str]:
    """Search upward from ``start_path`` for a config file."""
    current = Path(start_path).resolve()
    while True:
        for name in CONFIG_FILE_NAMES:
            candidate = current / name
            if candidate.is_file():
                return str(candidate)
        if current == current.parent:
            return None
        current = current.parent


@dataclass(frozen=True)
class Config:
    data: Dict[str, Any]

    @classmethod
    def load(cls, path: str | None) -> "Config":
        if not path:
            return cls(DEFAULT_CONFIG)
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        raw = config_path.read_text(encoding="utf-8")
        try:
            if config_path.suffix.lower() in {".json"}:
                overrides = json.loads(raw)
            else:
                overrides = yaml.safe_load(raw) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ConfigError(f"failed to parse config file {path}: {exc}") from exc
        if not isinstance(overrides, dict):
            raise ConfigError(f"config file {path} must contain a mapping")
        return cls(_deep_merge(DEFAULT_CONFIG, overrides)).validated()

    @classmethod
    def discover(cls, start_path: str = ".") -> "Config":
        return cls.load(find_config(start_path))

    def with_overrides(self, overrides: Dict[str, Any]) -> "Config":
        return Config(_deep_merge(self.data, overrides)).validated()

    def validated(self) -> "Config":
        if not _is_count(self.min_complexity(), 0):
            raise ConfigError(f"min_complexity must be a non-negative integer, got {self.min_complexity()!r}")
        if not _is_count(self.top(), 0):
            raise ConfigError(f"top must be a non-negative integer, got {self.top()!r}")
        if not _is_count(self.workers(), 1):
            raise ConfigError(f"workers must be a positive integer, got {self.workers()!r}")
        if self.output_format() not in {"text", "json"}:
            raise ConfigError(f"unknown output format: {self.output_format()!r}")
        return self

    def checker(self) -> Dict[str, Any]:
        return self.data.get("checker", {})

    def files(self) -> Dict[str, Any]:
        return self.data.get("files", {})

    def reporting(self) -> Dict[str, Any]:
        return self.data.get("reporting", {})

    def min_complexity(self) -> int:
        return self.checker().get("min_complexity", 1)

    def skip_nil_guards(self) -> bool:
        return bool(self.checker().get("skip_nil_guards", False))

    def exclude_dirs(self) -> List[str]:
        return list(self.files().get("exclude_dirs") or [])

    def workers(self) -> int:
        return self.files().get("workers", 4)

    def output_format(self) -> str:
        return self.reporting().get("format", "text")

    def top(self) -> int:
        return self.reporting().get("top", 10)
