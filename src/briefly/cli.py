from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import typer

from briefly.config import Settings, load_settings
from briefly.errors import PipelineError
from briefly.http_client import HttpFetcher
from briefly.llm_client import StructuringAdapter
from briefly.logging_utils import setup_logging
from briefly.models import DomainRecord
from briefly.pipeline import Pipeline
from briefly.store import JsonlRecordStore
from briefly.variants import Variant, get_variant

T = TypeVar("T")

app = typer.Typer(add_completion=False, help="Briefly: turn web pages into structured summaries and recipes")


def _startup() -> Settings:
    try:
        settings = load_settings()
    except RuntimeError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    setup_logging(settings.log_level)
    return settings


def _resolve_variant(settings: Settings, name: Optional[str]) -> Variant:
    try:
        variant = get_variant(name or settings.variant)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--variant")
    return variant.with_max_chars(settings.max_focus_chars)


async def _with_pipeline(
    settings: Settings,
    variant: Variant,
    action: Callable[[Pipeline], Awaitable[T]],
) -> T:
    async with HttpFetcher(timeout_s=settings.fetch_timeout_s) as fetcher:
        pipeline = Pipeline(
            fetcher=fetcher,
            adapter=StructuringAdapter.from_api_key(settings.openai_api_key, model=settings.openai_model),
            store=JsonlRecordStore(settings.records_file),
            variant=variant,
            min_text_chars=settings.min_text_chars,
            debug_dir=settings.debug_dir,
        )
        return await action(pipeline)


def _echo_record(record: DomainRecord) -> None:
    typer.echo(record.model_dump_json(indent=2, by_alias=True))


def _echo_error(err: PipelineError) -> None:
    typer.secho(f"FAILED {err.code.value}", fg=typer.colors.RED)
    typer.echo(json.dumps(err.to_dict(), indent=2, ensure_ascii=False))
    if err.recoverable:
        typer.echo("Tip: paste the text with `briefly summarize-text --file <path>`.")


@app.command()
def health() -> None:
    """Health check to verify config + logging works."""
    settings = _startup()
    log = logging.getLogger("briefly.health")

    log.info("Health check OK.")
    log.info("Model: %s", settings.openai_model)
    log.info("Variant: %s", settings.variant)
    log.info("Records file: %s", settings.records_file)
    log.info("Debug dir: %s", settings.debug_dir or "-")

    typer.echo("OK")


@app.command()
def version() -> None:
    """Print version and exit."""
    typer.echo("briefly 0.1.0")


@app.command()
def summarize(
    url: str = typer.Argument(..., help="Page URL to fetch and structure"),
    variant: Optional[str] = typer.Option(None, "--variant", help="recipe | narrative (default from BRIEFLY_VARIANT)"),
) -> None:
    """
    Fetch a page, extract its text and save the structured result.
    """
    settings = _startup()
    chosen = _resolve_variant(settings, variant)
    try:
        record = asyncio.run(_with_pipeline(settings, chosen, lambda p: p.from_url(url)))
    except PipelineError as e:
        _echo_error(e)
        raise typer.Exit(code=1)

    _echo_record(record)


@app.command("summarize-text")
def summarize_text(
    file: Optional[Path] = typer.Option(None, "--file", help="Text file to read (default: stdin)"),
    title: Optional[str] = typer.Option(None, "--title", help="Title to use instead of the extracted one"),
    url: Optional[str] = typer.Option(None, "--url", help="Source URL to store with the record"),
    variant: Optional[str] = typer.Option(None, "--variant", help="recipe | narrative (default from BRIEFLY_VARIANT)"),
) -> None:
    """
    Structure pasted text, for sites that block automated access.
    """
    settings = _startup()
    chosen = _resolve_variant(settings, variant)
    if file is not None:
        text = file.read_text(encoding="utf-8")
    else:
        text = typer.get_text_stream("stdin").read()

    try:
        record = asyncio.run(
            _with_pipeline(settings, chosen, lambda p: p.from_text(text, title=title, source_url=url))
        )
    except PipelineError as e:
        _echo_error(e)
        raise typer.Exit(code=1)

    _echo_record(record)


@app.command()
def history(
    limit: int = typer.Option(20, "--limit", min=1, help="Number of records to show"),
) -> None:
    """
    Show the most recent records, newest first.
    """
    settings = _startup()
    store = JsonlRecordStore(settings.records_file)
    records = asyncio.run(store.list_recent(limit))

    if not records:
        typer.echo("No records yet.")
        return

    rows = [r.model_dump(mode="json", by_alias=True) for r in records]
    typer.echo(json.dumps(rows, indent=2, ensure_ascii=False))
