from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from .api import CrptApiClient
from ..core.domain.enums import TimeUnit
from ..core.domain.errors import ConfigurationError
from ..core.domain.models import Document
from ..core.domain.outcomes import SubmissionOutcome
from ..infra.schemas import DocumentPayload


app = typer.Typer(add_completion=False, help="CRPT document API client")


class LogLevel(str, Enum):
    OFF = "OFF"
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"
    NOTSET = "NOTSET"


@app.callback()
def main(
    log_level: Optional[LogLevel] = typer.Option(
        None,
        "--log-level",
        help="Set log level (OFF, CRITICAL, ERROR, WARNING, INFO, DEBUG, NOTSET). Default: OFF",
    ),
) -> None:
    """Root command callback to configure logging if requested."""
    if log_level in (None, LogLevel.OFF):
        return

    level = logging.getLevelNamesMapping().get(log_level.value, logging.INFO)

    package_name = __package__.split(".", 1)[0] if __package__ else "crpt_api"
    logger = logging.getLogger(package_name)

    # Avoid stacking handlers when invoked repeatedly in one process
    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    if not has_stream:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    logger.setLevel(level)


def _load_document(path: Path) -> Document:
    try:
        payload = DocumentPayload.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as e:
        typer.echo(f"Cannot read {path}: {e}", err=True)
        raise typer.Exit(code=2)
    except ValidationError as e:
        typer.echo(f"Invalid document in {path}: {e}", err=True)
        raise typer.Exit(code=2)
    return payload.to_domain()


def _print_outcome(index: int, outcome: SubmissionOutcome) -> None:
    typer.echo(f"[{index}] {type(outcome).__name__} {outcome.status_code}: {outcome.body}")


@app.command(help="Send a JSON document to the API, optionally several copies at once through one rate limit.")
def submit(
    path: Path = typer.Argument(..., help="JSON file with the document (API field names)"),
    unit: TimeUnit = typer.Option(TimeUnit.SECONDS, "--unit", "-u", help="Rate window unit"),
    limit: int = typer.Option(10, "--limit", "-l", help="Maximum requests per window"),
    copies: int = typer.Option(1, "--copies", "-n", min=1, help="Number of concurrent submissions"),
    token: Optional[str] = typer.Option(None, "--token", help="Bearer token (default: CRPT_API_API_TOKEN)"),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Endpoint URL override"),
) -> None:
    document = _load_document(path)
    try:
        client = CrptApiClient(unit, limit, api_token=token, endpoint_url=endpoint)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2)

    with client:
        with ThreadPoolExecutor(max_workers=copies) as pool:
            outcomes = list(pool.map(lambda _: client.submit_document(document), range(copies)))

    for i, outcome in enumerate(outcomes):
        _print_outcome(i, outcome)
    failed = sum(1 for o in outcomes if not o.ok)
    typer.echo(f"Total: {len(outcomes)}, failed: {failed}")
    if failed:
        raise typer.Exit(code=1)


@app.command(help="Print the request body that would be sent for a JSON document, without sending it.")
def preview(path: Path = typer.Argument(..., help="JSON file with the document (API field names)")) -> None:
    document = _load_document(path)
    typer.echo(json.dumps(DocumentPayload.from_domain(document).to_wire(), ensure_ascii=False, indent=2))
