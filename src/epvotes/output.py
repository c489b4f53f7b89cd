"""Unified logging and console output."""

import logging

import click

logger = logging.getLogger(__name__)

# Global state set by CLI
_quiet = False
_default_document = None

LEVEL_COLORS = {
    "error": "red",
    "warning": "yellow",
    "info": None,  # default terminal color
    "debug": "bright_black",
}


def configure(quiet: bool = None, document: str = None):
    """Configure global output options.

    Args:
        quiet: If True, suppress click.echo output (logs still go to handlers)
        document: Default document id attached to log records
    """
    global _quiet, _default_document
    if quiet is not None:
        _quiet = quiet
    if document is not None:
        _default_document = document


def log(message: str, document: str = None, level: str = "info", **kwargs):
    """Log a message and echo it to the console.

    The document id and any keyword arguments are attached to the record as
    extra fields, not folded into the message.

    Args:
        message: The message to log/display
        document: Optional document id (uses default if not provided)
        level: Log level - "debug", "info", "warning", "error"
        **kwargs: Additional structured fields for logging
    """
    doc = document or _default_document

    extra = {key: value for key, value in kwargs.items() if value is not None}
    if doc:
        extra["document"] = doc

    log_func = getattr(logger, level, None)
    if level not in LEVEL_COLORS or log_func is None:
        log_func = logger.info
    log_func(message, extra=extra)

    if not _quiet:
        prefix = click.style(f"{doc}: ", fg="cyan") if doc else ""
        color = LEVEL_COLORS.get(level)
        styled_msg = click.style(message, fg=color) if color else message
        click.echo(prefix + styled_msg, err=True)
