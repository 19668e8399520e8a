"""Command line interface for paravault."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from paravault.config import AppConfig
from paravault.errors import ConfigError, EnrichmentStepError
from paravault.index.processed import ProcessedStore
from paravault.ingestion.scanner import SourceScanner
from paravault.llm.classifier import build_classifier, build_model
from paravault.models import (
    CATEGORY_PROJECT_IDEA,
    CATEGORY_RESOURCE,
    ClassificationRecord,
    ResearchBundle,
)
from paravault.pipeline import Orchestrator, RunSummary
from paravault.research.enricher import ResearchEnricher
from paravault.research.search import WebSearchClient
from paravault.vault.formatter import NoteFormatter, relevance_label
from paravault.vault.router import Router
from paravault.vault.run_log import RunLog
from paravault.vault.store import VaultStore


console = Console()
app = typer.Typer(help="paravault - file post screenshots into a PARA vault")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_config(**overrides) -> AppConfig:
    try:
        config = AppConfig.from_env()
        changes = {key: value for key, value in overrides.items() if value is not None}
        if changes:
            config = replace(config, **changes)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return config


def _search_client(config: AppConfig) -> WebSearchClient:
    return WebSearchClient(
        config.google_api_key, config.search_engine_id, timeout=config.request_timeout
    )


def build_orchestrator(config: AppConfig, *, dry_run: bool = False) -> Orchestrator:
    """Wire up the pipeline components for ``config``."""
    vault = VaultStore(config.vault_path)
    processed = ProcessedStore(config.processed_path)
    processed.load()

    model = build_model(config)
    enricher = None
    if config.enable_research:
        enricher = ResearchEnricher(
            model,
            _search_client(config),
            max_results=config.max_research_results,
            relevance_threshold=config.research_relevance_threshold,
        )

    return Orchestrator(
        scanner=SourceScanner(vault, config.screenshots_dir, processed),
        classifier=build_classifier(model),
        router=Router(
            resources_dir=config.resources_dir,
            projects_dir=config.projects_dir,
            review_dir=config.review_dir,
            confidence_threshold=config.confidence_threshold,
        ),
        formatter=NoteFormatter(),
        run_log=RunLog(vault, config.log_file),
        processed=processed,
        vault=vault,
        enricher=enricher,
        dry_run=dry_run,
    )


def _print_banner(config: AppConfig, dry_run: bool) -> None:
    console.print("[bold]paravault screenshot processor[/bold]")
    console.print(f"Vault: {config.vault_path}")
    console.print(f"AI provider: {config.provider}")
    console.print(
        f"Confidence threshold: {config.confidence_threshold} "
        "(posts below this go to the inbox for review)"
    )
    if config.enable_research:
        console.print(
            f"Auto-research: ENABLED (max {config.max_research_results} results, "
            f"{config.research_relevance_threshold} relevance threshold)"
        )
    else:
        console.print("Auto-research: DISABLED")
    console.print(f"Mode: {'DRY RUN' if dry_run else 'LIVE'}\n")


def _print_summary(summary: RunSummary) -> None:
    if summary.outcomes:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Screenshot")
        table.add_column("Status")
        table.add_column("Category")
        table.add_column("Confidence")
        table.add_column("Note")
        for outcome in summary.outcomes:
            record = outcome.record
            table.add_row(
                outcome.item.identifier,
                outcome.status if not outcome.error else f"failed: {outcome.error[:80]}",
                record.category if record else "",
                f"{record.confidence:.2f}" if record else "",
                outcome.note_path or "",
            )
        console.print(table)

    prefix = "[DRY RUN] " if summary.dry_run else ""
    console.print(
        f"{prefix}Discovered: {summary.discovered}, processed: {summary.processed}, "
        f"failed: {summary.failed}"
    )


def _print_bundle(bundle: Optional[ResearchBundle]) -> None:
    if bundle is None:
        console.print("[yellow]No research bundle (query generation or search failed).[/yellow]")
        return
    console.print(f'Search query: "{bundle.query}" ({bundle.kind.value})')
    if not bundle.results:
        console.print("[yellow]No results met the relevance threshold.[/yellow]")
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Relevance")
    table.add_column("Title")
    table.add_column("URL")
    table.add_column("Summary")
    for result in bundle.results:
        relevance = result.relevance or 0.0
        table.add_row(
            f"{relevance_label(relevance)} ({relevance * 100:.0f}%)",
            result.title,
            result.url,
            (result.summary or result.snippet)[:180],
        )
    console.print(table)


@app.command()
def process(
    vault: Path = typer.Option(None, "--vault", help="Vault root (defaults to VAULT_PATH)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Classify and format without writing"),
    no_research: bool = typer.Option(False, "--no-research", help="Disable auto-research"),
    threshold: Optional[float] = typer.Option(
        None, "--threshold", min=0.0, max=1.0, help="Confidence threshold for filing"
    ),
    provider: Optional[str] = typer.Option(None, "--provider", help="gemini or claude"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Process new screenshots into vault notes."""
    _setup_logging(verbose)
    config = _load_config(
        vault_path=vault,
        confidence_threshold=threshold,
        provider=provider.lower() if provider else None,
        enable_research=False if no_research else None,
    )
    _print_banner(config, dry_run)

    try:
        orchestrator = build_orchestrator(config, dry_run=dry_run)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        summary = orchestrator.run()
    finally:
        orchestrator.close()
    if summary.discovered == 0:
        console.print("[green]No new screenshots to process.[/green]")
        return
    _print_summary(summary)


@app.command()
def status(
    vault: Path = typer.Option(None, "--vault", help="Vault root (defaults to VAULT_PATH)"),
) -> None:
    """List screenshots that have already been processed."""
    config = _load_config(vault_path=vault)
    store = ProcessedStore(config.processed_path)
    store.load()
    if not len(store):
        console.print("[yellow]No screenshots processed yet.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Screenshot")
    table.add_column("Processed at")
    table.add_column("Provider")
    for identifier, marker in store.markers():
        table.add_row(identifier, marker.processed_at, marker.provider)
    console.print(table)
    console.print(f"{len(store)} screenshots processed.")


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    limit: int = typer.Option(3, help="Number of results to request"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Check the web search configuration with a single query."""
    _setup_logging(verbose)
    config = _load_config()
    client = _search_client(config)
    if not client.configured:
        raise typer.BadParameter("GOOGLE_API_KEY and GOOGLE_SEARCH_ENGINE_ID must be set")

    try:
        results = client.search(query, limit=limit)
    except EnrichmentStepError as exc:
        console.print(f"[red]Search failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    finally:
        client.close()

    if not results:
        console.print("[yellow]No results found for this query.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#")
    table.add_column("Title")
    table.add_column("URL")
    table.add_column("Snippet")
    for position, result in enumerate(results, start=1):
        table.add_row(str(position), result.title, result.url, result.snippet[:180])
    console.print(table)


@app.command()
def research(
    text: str = typer.Argument(..., help="Post text to research"),
    tags: List[str] = typer.Option([], "--tag", help="Topic tag (repeatable)"),
    category: str = typer.Option("resource", help="resource or project-idea"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run the auto-research chain for an ad-hoc post text."""
    _setup_logging(verbose)
    if category not in (CATEGORY_RESOURCE, CATEGORY_PROJECT_IDEA):
        raise typer.BadParameter(f"category must be {CATEGORY_RESOURCE} or {CATEGORY_PROJECT_IDEA}")
    config = _load_config()
    try:
        model = build_model(config)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    record = ClassificationRecord(
        text=text, tags=tags, category=category, confidence=1.0, title=text[:40]
    )
    enricher = ResearchEnricher(
        model,
        _search_client(config),
        max_results=config.max_research_results,
        relevance_threshold=config.research_relevance_threshold,
    )
    try:
        bundle = enricher.research(record)
    finally:
        enricher.close()
    _print_bundle(bundle)
