"""Text prompt modal — single-line input with primary/alternate/cancel buttons."""

from __future__ import annotations

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

from textprompt.config import PromptConfig
from textprompt.logging import get_logger
from textprompt.prompt import PromptController, PromptRequest

log = get_logger("ui.text_prompt_modal")


class TextPromptModal(ModalScreen[None]):
    """Modal surface driven by a :class:`PromptController`.

    Clicks outside the dialog are never treated as a dismissal; the only
    exits are the buttons, Enter on the field, and Escape when the config
    allows it.
    """

    DEFAULT_CSS = """
    TextPromptModal {
        align: center middle;
    }
    TextPromptModal #prompt-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: thick $accent;
        background: $surface;
    }
    TextPromptModal #prompt-title {
        margin: 0 0 1 0;
    }
    TextPromptModal #prompt-input {
        width: 100%;
    }
    TextPromptModal #prompt-hint {
        color: $text-muted;
    }
    TextPromptModal #prompt-buttons {
        height: auto;
        align: right middle;
        margin: 1 0 0 0;
    }
    TextPromptModal #prompt-buttons Button {
        margin: 0 0 0 1;
    }
    """

    BINDINGS = [Binding("escape", "host_dismiss", "Cancel", show=False)]

    def __init__(
        self,
        controller: PromptController,
        host: App,
        config: PromptConfig | None = None,
    ) -> None:
        self.controller = controller
        self._host = host
        self._config = config or PromptConfig()
        self._detached = False
        super().__init__()

    def compose(self) -> ComposeResult:
        request = self.controller.request
        with Vertical(id="prompt-dialog"):
            yield Label(f"[bold]{escape(request.title)}[/bold]", id="prompt-title")
            yield Input(value=self.controller.text, id="prompt-input")
            yield Label(f"[dim]enter: {escape(request.primary_label)}[/dim]", id="prompt-hint")
            with Horizontal(id="prompt-buttons"):
                yield Button(escape(request.primary_label), variant="primary", id="prompt-primary")
                if request.has_alternate:
                    yield Button(
                        escape(request.alternate_label or ""),
                        variant="default",
                        id="prompt-alternate",
                    )
                yield Button(
                    escape(request.resolved_cancel_label(self._config.default_cancel_label)),
                    variant="default",
                    id="prompt-cancel",
                )

    def on_mount(self) -> None:
        field = self.query_one("#prompt-input", Input)
        field.cursor_position = self.controller.cursor_position
        field.focus()

    def on_unmount(self) -> None:
        # Popped by someone else while still open.
        if self.controller.is_open:
            self._detached = True
            log.debug("prompt %r removed by host", self.controller.request.title)
            self.controller.dismiss()

    # --- PromptSurface ---

    def show(self) -> None:
        self._host.push_screen(self)

    def close(self) -> None:
        if self._detached:
            return
        # dismiss() pops whatever is on top of the stack.
        if self._host.screen is not self:
            log.warning(
                "prompt %r closed while not the active screen", self.controller.request.title
            )
            return
        self.dismiss(None)

    # --- Events ---

    def on_input_changed(self, event: Input.Changed) -> None:
        self.controller.set_text(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.controller.set_text(event.value)
        self.controller.submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if not self.controller.is_open:
            return
        bid = event.button.id or ""
        self.controller.set_text(self.query_one("#prompt-input", Input).value)
        if bid == "prompt-primary":
            self.controller.primary()
        elif bid == "prompt-alternate":
            self.controller.alternate()
        elif bid == "prompt-cancel":
            self.controller.cancel()

    def action_host_dismiss(self) -> None:
        if self._config.escape_dismisses:
            self.controller.dismiss()


def show_text_prompt(
    app: App,
    request: PromptRequest,
    config: PromptConfig | None = None,
) -> PromptController:
    """Show *request* as a modal on *app* and return immediately.

    All further work happens in the request's callbacks.  The returned
    controller exposes the prompt's state and current text.
    """
    controller = PromptController(request)
    modal = TextPromptModal(controller, app, config)
    controller.show(modal)
    return controller
