"""YAML configuration loader for prompt defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when textprompt.yaml is invalid."""


@dataclass
class PromptConfig:
    # Label used for the cancel control when a request doesn't name one.
    default_cancel_label: str = "Cancel"
    # Escape is the terminal's back-navigation: dismiss as cancel, or ignore.
    escape_dismisses: bool = True
    log_level: str = "WARNING"
    log_file: str | None = None
    source_path: str | None = None

    def validate(self) -> list[str]:
        """Validate config, returning a list of error messages (empty = valid)."""
        errors: list[str] = []

        if not self.default_cancel_label.strip():
            errors.append("default_cancel_label must not be empty")

        if self.log_level.upper() not in _VALID_LEVELS:
            errors.append(
                f"log_level must be one of {', '.join(_VALID_LEVELS)}, got '{self.log_level}'"
            )

        if self.log_file:
            log_parent = Path(self.log_file).expanduser().parent
            if not log_parent.exists():
                errors.append(f"Log file parent directory does not exist: {log_parent}")

        return errors

    def apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""

        if val := os.environ.get("TEXTPROMPT_CANCEL_LABEL"):
            self.default_cancel_label = val
        if val := os.environ.get("TEXTPROMPT_ESCAPE_DISMISSES"):
            if val.lower() in _TRUE_VALUES:
                self.escape_dismisses = True
            elif val.lower() in _FALSE_VALUES:
                self.escape_dismisses = False
        if val := os.environ.get("TEXTPROMPT_LOG_LEVEL"):
            self.log_level = val.upper()


def load_config(path: str | None = None) -> PromptConfig:
    """Load config from explicit path, textprompt.yaml in CWD, or ~/.config/textprompt/config.yaml."""
    candidates = []
    if path:
        candidates.append(Path(path))
    else:
        candidates.append(Path.cwd() / "textprompt.yaml")
        candidates.append(Path.home() / ".config" / "textprompt" / "config.yaml")

    for candidate in candidates:
        if candidate.exists():
            return _parse_config(candidate)

    if path:
        raise ConfigError(f"Config file not found: {path}")
    return PromptConfig()


def _parse_config(path: Path) -> PromptConfig:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Cannot parse {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")

    escape = data.get("escape_dismisses", True)
    if not isinstance(escape, bool):
        raise ConfigError(f"escape_dismisses must be true or false, got {escape!r}")

    return PromptConfig(
        default_cancel_label=str(data.get("default_cancel_label", "Cancel")),
        escape_dismisses=escape,
        log_level=str(data.get("log_level", "WARNING")),
        log_file=data.get("log_file"),
        source_path=str(path),
    )


def serialize_config(config: PromptConfig) -> dict[str, Any]:
    """Serialize PromptConfig to a dict. Omits None optional fields."""
    data: dict[str, Any] = {
        "default_cancel_label": config.default_cancel_label,
        "escape_dismisses": config.escape_dismisses,
        "log_level": config.log_level,
    }
    if config.log_file is not None:
        data["log_file"] = config.log_file
    return data


def save_config(config: PromptConfig, path: str | None = None) -> None:
    """Write YAML config. Defaults to config.source_path, falls back to ./textprompt.yaml."""
    target = Path(path or config.source_path or "textprompt.yaml")
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w") as f:
        yaml.dump(serialize_config(config), f, default_flow_style=False, sort_keys=False)
