"""Modal single-line text prompts for Textual applications."""

from textprompt.prompt import (
    PromptController,
    PromptError,
    PromptOutcome,
    PromptRequest,
    PromptState,
    PromptStateError,
    TextSetListener,
)

__version__ = "0.1.0"

__all__ = [
    "PromptController",
    "PromptError",
    "PromptOutcome",
    "PromptRequest",
    "PromptState",
    "PromptStateError",
    "TextSetListener",
]
