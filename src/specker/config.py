"""Configuration management for specker projects."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from specker.errors import SpecError
from specker.models import Options, ProjectConfig

SPECKER_DIR = ".specker"
CONFIG_FILE = "config.json"


class ConfigError(SpecError):
    """Raised when a configuration or variables file is invalid."""


def _config_path(project_root: Path) -> Path:
    return project_root / SPECKER_DIR / CONFIG_FILE


def save_config(config: ProjectConfig, project_root: Path) -> Path:
    """Save project config to .specker/config.json. Returns the config path."""
    specker_dir = project_root / SPECKER_DIR
    specker_dir.mkdir(parents=True, exist_ok=True)
    path = _config_path(project_root)
    data = {
        "version": config.version,
        "spec_dir": config.spec_dir,
        "extension": config.extension,
        "root": config.root,
        "skip_marker": config.skip_marker,
        "item_marker": config.item_marker,
        "var_start": config.var_start,
        "var_end": config.var_end,
        "strict_eof": config.strict_eof,
        "variables": config.variables,
    }
    path.write_text(json.dumps(data, indent=2, default=str) + "\n")
    return path


def load_config(project_root: Path) -> ProjectConfig:
    """Load project config from .specker/config.json."""
    path = _config_path(project_root)
    if not path.exists():
        raise FileNotFoundError(f"No config found at {path}")
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    defaults = ProjectConfig()
    return ProjectConfig(
        version=data.get("version", defaults.version),
        spec_dir=data.get("spec_dir", defaults.spec_dir),
        extension=data.get("extension", defaults.extension),
        root=data.get("root", defaults.root),
        skip_marker=data.get("skip_marker", defaults.skip_marker),
        item_marker=data.get("item_marker", defaults.item_marker),
        var_start=data.get("var_start", defaults.var_start),
        var_end=data.get("var_end", defaults.var_end),
        strict_eof=data.get("strict_eof", defaults.strict_eof),
        variables={str(k): str(v) for k, v in data.get("variables", {}).items()},
    )


def is_initialized(project_root: Path) -> bool:
    """Check if the project has a specker config."""
    return _config_path(project_root).exists()


def options_from_config(config: ProjectConfig, strict_eof: bool | None = None) -> Options:
    """Build parser/matcher Options from a project config."""
    return Options(
        skip_marker=config.skip_marker,
        item_marker=config.item_marker,
        var_start=config.var_start,
        var_end=config.var_end,
        strict_eof=config.strict_eof if strict_eof is None else strict_eof,
    )


def load_variables(path: Path) -> dict[str, str]:
    """Load a YAML mapping of variable names to replacement text."""
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid variables format in {path}: expected mapping")
    return {str(k): "" if v is None else str(v) for k, v in raw.items()}


def parse_var_assignments(assignments: tuple[str, ...] | list[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings into a variable map."""
    variables: dict[str, str] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Expected KEY=VALUE, got {assignment!r}")
        variables[key.strip()] = value
    return variables
