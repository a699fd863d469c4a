"""Shared test fixtures and helpers."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from textprompt.prompt import PromptController, PromptRequest
from tests.fakes.surface import FakeSurface


@pytest.fixture(autouse=True, scope="session")
def _isolate_logging():
    """Prevent tests from writing to ``~/.textprompt/textprompt.log``.

    CLI tests invoke click commands that call ``setup_logging()`` which
    attaches a ``RotatingFileHandler`` pointing at the default log file.
    Redirect all file output to ``/dev/null`` instead.
    """
    import textprompt.cli as _cli
    import textprompt.logging as _tp_logging

    _real_setup = _tp_logging.setup_logging

    def _test_setup(config=None, level=None, log_file=None, stderr=False):
        return _real_setup(config, level=level, log_file="/dev/null", stderr=False)

    with (
        patch.object(_tp_logging, "setup_logging", _test_setup),
        patch.object(_cli, "setup_logging", _test_setup),
    ):
        logger = logging.getLogger("textprompt")
        logger.handlers.clear()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.WARNING)
        yield


class Recorder:
    """Collects callback invocations in call order."""

    def __init__(self, events: list[str] | None = None) -> None:
        self.events = events if events is not None else []

    def listener(self, name: str):
        def _on_text(text: str) -> None:
            self.events.append(f"{name}:{text}")

        return _on_text

    def on_closed(self) -> None:
        self.events.append("closed")


def make_request(
    rec: Recorder,
    title: str = "Rename",
    initial_value: str | None = "old.txt",
    alternate: bool = False,
    cancel: bool = False,
    closed: bool = True,
) -> PromptRequest:
    """Build a PromptRequest whose callbacks all report into *rec*."""
    return PromptRequest(
        title=title,
        primary_label="Rename",
        on_primary=rec.listener("primary"),
        initial_value=initial_value,
        alternate_label="Open" if alternate else None,
        on_alternate=rec.listener("alternate") if alternate else None,
        on_cancel=rec.listener("cancel") if cancel else None,
        on_closed=rec.on_closed if closed else None,
    )


def make_shown(rec: Recorder, **kwargs) -> tuple[PromptController, FakeSurface]:
    """Create a controller for a recorded request and show it on a fake surface."""
    controller = PromptController(make_request(rec, **kwargs))
    surface = FakeSurface(rec.events)
    controller.show(surface)
    return controller, surface


@pytest.fixture
def rec():
    return Recorder()
