"""Prompt controller — routes one text prompt interaction to its callbacks.

The controller owns the field value and the terminal state of a single
prompt.  It knows nothing about rendering: the host surface is handed in
as a :class:`PromptSurface` that can only be shown and closed.  Every
completion path funnels through :meth:`PromptController.close`, which
flips the state to ``CLOSED`` before any handler runs, so a second
trigger arriving in the same frame (Enter on the field plus a click on
the primary button) finds the prompt already closed and is ignored.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from textprompt.logging import prompt_logger


TextSetListener = Callable[[str], None]


class PromptError(Exception):
    """Base class for prompt errors."""


class PromptStateError(PromptError):
    """Raised when a prompt is shown more than once."""


class PromptState(Enum):
    CREATED = "created"
    SHOWN = "shown"
    CLOSED = "closed"


class PromptOutcome(Enum):
    """Which path closed a prompt."""

    PRIMARY = "primary"
    ALTERNATE = "alternate"
    CANCEL = "cancel"
    DISMISSED = "dismissed"  # closed by the host, not by a prompt control


@dataclass(frozen=True)
class PromptRequest:
    """Everything a caller supplies for one prompt.

    ``title``, ``primary_label`` and ``on_primary`` are mandatory.  The
    alternate control is only rendered when ``on_alternate`` is given.
    The cancel control is always rendered; without ``on_cancel`` it just
    closes the prompt.
    """

    title: str
    primary_label: str
    on_primary: TextSetListener
    initial_value: str | None = None
    alternate_label: str | None = None
    on_alternate: TextSetListener | None = None
    cancel_label: str | None = None
    on_cancel: TextSetListener | None = None
    on_closed: Callable[[], None] | None = None

    @property
    def has_alternate(self) -> bool:
        return self.on_alternate is not None

    def resolved_cancel_label(self, default: str) -> str:
        return self.cancel_label or default


class PromptSurface(Protocol):
    """Host-side handle for the modal the controller drives."""

    def show(self) -> None: ...

    def close(self) -> None: ...


class PromptController:
    """State machine for a single prompt interaction.

    ``CREATED`` → ``SHOWN`` on :meth:`show`; ``SHOWN`` → ``CLOSED`` on the
    first of :meth:`primary`, :meth:`submit`, :meth:`alternate`,
    :meth:`cancel` or :meth:`dismiss`.  ``CLOSED`` is terminal.
    """

    def __init__(self, request: PromptRequest) -> None:
        self.request = request
        self.text: str = request.initial_value or ""
        self.state = PromptState.CREATED
        self.outcome: PromptOutcome | None = None
        self._surface: PromptSurface | None = None
        self._log = prompt_logger(request.title)

    @property
    def cursor_position(self) -> int:
        """Initial caret offset: the end of the pre-filled value."""
        return len(self.request.initial_value or "")

    @property
    def is_open(self) -> bool:
        return self.state is PromptState.SHOWN

    def show(self, surface: PromptSurface) -> None:
        if self.state is not PromptState.CREATED:
            raise PromptStateError(f"Prompt {self.request.title!r} already {self.state.value}")
        self._surface = surface
        self.state = PromptState.SHOWN
        self._log.debug("shown")
        surface.show()

    def set_text(self, text: str) -> None:
        if self.state is PromptState.CLOSED:
            return
        self.text = text

    def primary(self) -> bool:
        return self.close(PromptOutcome.PRIMARY)

    def submit(self) -> bool:
        """Keyboard confirm on the field — same outcome as :meth:`primary`."""
        return self.close(PromptOutcome.PRIMARY)

    def alternate(self) -> bool:
        if not self.request.has_alternate:
            self._log.debug("alternate trigger ignored: no alternate handler")
            return False
        return self.close(PromptOutcome.ALTERNATE)

    def cancel(self) -> bool:
        return self.close(PromptOutcome.CANCEL)

    def dismiss(self) -> bool:
        """Host-forced close: behaves as cancel without a cancel handler."""
        return self.close(PromptOutcome.DISMISSED)

    def close(self, outcome: PromptOutcome) -> bool:
        """Close the prompt via *outcome*; returns False if it was not open.

        Order: surface close, terminal handler, ``on_closed``.  The surface
        goes first so a handler is free to show another screen (a follow-up
        prompt, an error dialog) without that screen being closed in place
        of this one.  A handler exception skips ``on_closed``.
        """
        if self.state is not PromptState.SHOWN:
            self._log.debug("%s trigger ignored: prompt is %s", outcome.value, self.state.value)
            return False

        self.state = PromptState.CLOSED
        self.outcome = outcome
        text = self.text
        handler = self._handler_for(outcome)
        self._log.debug("closed via %s", outcome.value)

        if self._surface is not None:
            surface, self._surface = self._surface, None
            surface.close()

        if handler is not None:
            handler(text)
        if self.request.on_closed is not None:
            self.request.on_closed()
        return True

    def _handler_for(self, outcome: PromptOutcome) -> TextSetListener | None:
        if outcome is PromptOutcome.PRIMARY:
            return self.request.on_primary
        if outcome is PromptOutcome.ALTERNATE:
            return self.request.on_alternate
        if outcome is PromptOutcome.CANCEL:
            return self.request.on_cancel
        return None
