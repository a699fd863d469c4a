"""Prompt app — a one-shot Textual App that asks a single question."""

from __future__ import annotations

from dataclasses import dataclass

from textual.app import App, ComposeResult
from textual.widgets import Static

from textprompt.config import PromptConfig
from textprompt.logging import get_logger
from textprompt.prompt import PromptController, PromptOutcome, PromptRequest
from textprompt.ui.text_prompt_modal import show_text_prompt

log = get_logger("ui.app")


@dataclass
class PromptResult:
    """Result returned from :class:`PromptApp` once the prompt closes."""

    outcome: PromptOutcome
    text: str


class PromptApp(App[PromptResult]):
    """Hosts one prompt and exits with its :class:`PromptResult`."""

    TITLE = "textprompt"

    def __init__(
        self,
        title: str,
        primary_label: str = "OK",
        initial_value: str | None = None,
        alternate_label: str | None = None,
        cancel_label: str | None = None,
        config: PromptConfig | None = None,
    ) -> None:
        self.config = config or PromptConfig()
        self.request = PromptRequest(
            title=title,
            primary_label=primary_label,
            on_primary=self._record,
            initial_value=initial_value,
            alternate_label=alternate_label,
            on_alternate=self._record if alternate_label else None,
            cancel_label=cancel_label,
            on_closed=self._on_prompt_closed,
        )
        self.controller: PromptController | None = None
        self._text = ""
        super().__init__()

    def compose(self) -> ComposeResult:
        yield Static("", id="backdrop")

    def on_mount(self) -> None:
        self.controller = show_text_prompt(self, self.request, self.config)

    def _record(self, text: str) -> None:
        self._text = text

    def _on_prompt_closed(self) -> None:
        assert self.controller is not None
        outcome = self.controller.outcome or PromptOutcome.DISMISSED
        if outcome in (PromptOutcome.CANCEL, PromptOutcome.DISMISSED):
            self._text = self.controller.text
        log.info("prompt %r finished: %s", self.request.title, outcome.value)
        self.exit(PromptResult(outcome=outcome, text=self._text))
