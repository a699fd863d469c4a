"""CLI entry point for the textprompt command."""

from __future__ import annotations

import json

import click

from textprompt.config import ConfigError, PromptConfig, load_config
from textprompt.logging import setup_logging
from textprompt.prompt import PromptOutcome
from textprompt.ui.app import PromptApp, PromptResult

# Exit codes for `textprompt ask`, in the style of dialog(1)
EXIT_PRIMARY = 0
EXIT_CANCEL = 1
EXIT_ALTERNATE = 3


def _load(config_path: str | None) -> PromptConfig:
    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc))
    cfg.apply_env_overrides()
    return cfg


def _run_prompt(app: PromptApp) -> PromptResult | None:
    """Run *app* to completion and return its result."""
    return app.run()


@click.group()
@click.option(
    "--log-level",
    default=None,
    envvar="TEXTPROMPT_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (default: config or WARNING)",
)
@click.option(
    "--log-file", default=None, envvar="TEXTPROMPT_LOG_FILE", type=click.Path(), help="Log to file"
)
@click.version_option(package_name="textprompt")
@click.pass_context
def main(ctx: click.Context, log_level: str | None, log_file: str | None) -> None:
    """textprompt -- ask for a line of text in a modal terminal dialog.

    \b
        textprompt ask "Rename session" --initial old-name --primary Rename
        textprompt ask "Save file" --initial a.txt --primary Save --alternate Open
    """
    # Logging is configured per command: `ask` must not write to stderr
    # while the TUI owns the terminal.
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    ctx.obj["log_file"] = log_file


@main.command()
@click.argument("title")
@click.option("-i", "--initial", "initial_value", default=None, help="Pre-filled text")
@click.option("-p", "--primary", "primary_label", default="OK", show_default=True)
@click.option("-a", "--alternate", "alternate_label", default=None, help="Third button label")
@click.option("--cancel", "cancel_label", default=None, help="Cancel button label")
@click.option("--json", "as_json", is_flag=True, help="Print outcome and text as JSON")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True),
    help="Path to textprompt.yaml",
)
@click.pass_context
def ask(
    ctx: click.Context,
    title: str,
    initial_value: str | None,
    primary_label: str,
    alternate_label: str | None,
    cancel_label: str | None,
    as_json: bool,
    config_path: str | None,
) -> None:
    """Show a prompt titled TITLE and print the entered text.

    Exits 0 on the primary button (or Enter), 3 on the alternate button,
    and 1 on cancel.
    """
    cfg = _load(config_path)
    setup_logging(cfg, level=ctx.obj.get("log_level"), log_file=ctx.obj.get("log_file"))

    app = PromptApp(
        title,
        primary_label=primary_label,
        initial_value=initial_value,
        alternate_label=alternate_label,
        cancel_label=cancel_label,
        config=cfg,
    )
    result = _run_prompt(app)
    outcome = result.outcome if result else PromptOutcome.DISMISSED
    text = result.text if result else ""

    if as_json:
        click.echo(json.dumps({"outcome": outcome.value, "text": text}))
    elif outcome in (PromptOutcome.PRIMARY, PromptOutcome.ALTERNATE):
        click.echo(text)

    if outcome is PromptOutcome.ALTERNATE:
        ctx.exit(EXIT_ALTERNATE)
    if outcome in (PromptOutcome.CANCEL, PromptOutcome.DISMISSED):
        ctx.exit(EXIT_CANCEL)


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True),
    help="Path to textprompt.yaml",
)
@click.pass_context
def validate(ctx: click.Context, config_path: str | None) -> None:
    """Validate the textprompt.yaml configuration."""
    # Before loading: a log_file whose directory is missing must be reported, not created.
    setup_logging(level=ctx.obj.get("log_level"), log_file=ctx.obj.get("log_file"), stderr=True)
    cfg = _load(config_path)
    errors = cfg.validate()
    if errors:
        click.echo(f"Found {len(errors)} error(s):", err=True)
        for e in errors:
            click.echo(f"  x {e}", err=True)
        raise SystemExit(1)
    source = cfg.source_path or "built-in defaults"
    click.echo(f"Config OK: {source}")
