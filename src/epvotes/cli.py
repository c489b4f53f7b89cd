import asyncio
import json
import logging
import os

import click
from dotenv import load_dotenv

from . import output
from .api import get_document_identifiers, get_votes_for_document
from .cache import cached_call, to_jsonable
from .documents import fetch_and_parse_document
from .errors import EPVotesError
from .fetcher import Fetcher
from .meps import load_meps
from .sentry import init_sentry
from .settings import settings

# Load .env file early
load_dotenv()

logger = logging.getLogger(__name__)


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    # Standard LogRecord attributes to exclude from extra fields
    RESERVED_ATTRS = {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Include extra fields passed via extra={}
        for key, value in record.__dict__.items():
            if key not in self.RESERVED_ATTRS and not key.startswith("_"):
                log_record[key] = value

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


def configure_logging(command_name: str = "unknown"):
    """Configure logging to the console and to Loki when LOKI_URL is set."""
    handlers = []

    console = logging.StreamHandler()
    console.setFormatter(JsonFormatter())
    handlers.append(console)

    loki_url = os.environ.get("LOKI_URL")
    if loki_url:
        import logging_loki

        loki_handler = logging_loki.LokiHandler(
            url=f"{loki_url}/loki/api/v1/push",
            tags={"job": "epvotes", "host": os.uname().nodename, "command": command_name},
            version="1",
        )
        loki_handler.setFormatter(JsonFormatter())
        handlers.append(loki_handler)

    logging.basicConfig(
        level=logging.INFO,
        handlers=handlers,
    )

    # Suppress noisy httpx logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def run(coro):
    """Run a coroutine, turning epvotes errors into click errors."""
    try:
        return asyncio.run(coro)
    except EPVotesError as e:
        raise click.ClickException(str(e)) from e


def echo_json(data) -> None:
    click.echo(json.dumps(to_jsonable(data), indent=2, ensure_ascii=False))


@click.group()
@click.version_option()
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress console messages (logs still go to the handlers)",
)
@click.option(
    "--cache/--no-cache",
    default=None,
    help="Cache results under CACHE_DIR (default: CACHE_ENABLED)",
)
@click.pass_context
def cli(ctx, quiet, cache):
    """European Parliament roll-call votes"""
    configure_logging(ctx.invoked_subcommand or "cli")
    init_sentry()
    output.configure(quiet=quiet)
    ctx.ensure_object(dict)
    ctx.obj["cache"] = settings.CACHE_ENABLED if cache is None else cache


async def _call(use_cache: bool, func, *args):
    if use_cache:
        return await cached_call(func, *args)
    return await func(*args)


@cli.command()
@click.option("-l", "--limit", default=10, type=int, show_default=True)
@click.pass_context
def documents(ctx, limit):
    """List RCV document identifiers"""
    echo_json(run(_call(ctx.obj["cache"], get_document_identifiers, limit)))


@cli.command()
@click.argument("document_id")
@click.pass_context
def votes(ctx, document_id):
    """Parse the proposals and votes of an RCV document"""
    output.configure(document=document_id)
    proposals = run(_call(ctx.obj["cache"], get_votes_for_document, document_id))
    output.log(f"Parsed {len(proposals)} proposals", document=document_id)
    echo_json(proposals)


async def _load_meps(limit, term, details):
    async with Fetcher() as fetcher:
        return await load_meps(fetcher, limit=limit, term=term, load_details=details)


@cli.command()
@click.option("-l", "--limit", default=5, type=int, show_default=True)
@click.option("-t", "--term", default=9, type=int, show_default=True, help="0 for the current term")
@click.option("--details", is_flag=True, help="Load the full profile of every MEP")
def meps(limit, term, details):
    """List members of a parliamentary term"""
    echo_json(run(_load_meps(limit, term, details)))


async def _load_document(document_id):
    async with Fetcher() as fetcher:
        return await fetch_and_parse_document(document_id, fetcher)


@cli.command()
@click.argument("document_id")
@click.pass_context
def document(ctx, document_id):
    """Fetch the resolution text of an adopted document"""
    output.configure(document=document_id)
    echo_json(run(_call(ctx.obj["cache"], _load_document, document_id)))
