"""Logging for textprompt.

A prompt usually runs while a Textual app owns the terminal, so records go
to a rotating file by default and only reach stderr when asked to.  Level
and file come from :class:`~textprompt.config.PromptConfig`; command-line
flags override them.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from textprompt.config import PromptConfig

DEFAULT_LOG_FILE = "~/.textprompt/textprompt.log"
_MAX_LOG_BYTES = 1024 * 1024
_BACKUP_COUNT = 2
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(config: PromptConfig | None = None, override: str | None = None) -> int:
    """Level from *override*, else the config, else WARNING. Unknown names fall back to WARNING."""
    name = override or (config.log_level if config else None) or "WARNING"
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def resolve_log_file(config: PromptConfig | None = None, override: str | None = None) -> Path:
    path = override or (config.log_file if config else None) or DEFAULT_LOG_FILE
    return Path(path).expanduser()


def setup_logging(
    config: PromptConfig | None = None,
    level: str | None = None,
    log_file: str | None = None,
    stderr: bool = False,
) -> logging.Logger:
    """Configure the ``textprompt`` logger from *config* and return it.

    *level* and *log_file* override the config values.  Existing handlers
    are closed first, so calling this again reconfigures cleanly.
    """
    logger = logging.getLogger("textprompt")
    for h in logger.handlers[:]:
        h.close()
    logger.handlers.clear()
    logger.setLevel(resolve_level(config, level))

    fmt = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_path = resolve_log_file(config, log_file)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        str(file_path), maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT
    )
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    if stderr:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(fmt)
        logger.addHandler(stderr_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the ``textprompt`` namespace."""
    return logging.getLogger(f"textprompt.{name}")


class PromptLogAdapter(logging.LoggerAdapter):
    """Prefixes every message with the prompt title it belongs to."""

    def process(self, msg, kwargs):
        return f"prompt {self.extra['prompt']!r}: {msg}", kwargs


def prompt_logger(title: str) -> PromptLogAdapter:
    """Logger for one prompt instance, tagged with its *title*."""
    return PromptLogAdapter(get_logger("prompt"), {"prompt": title})
