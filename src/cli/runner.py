# src/cli/runner.py

"""Headless CLI commands on top of the async feed service."""

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from lxml import etree
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.config.app_settings import AppSettings, AppSettingsProvider
from src.models.errors import FeedError, FetchExhausted
from src.models.product import CheapestMatch
from src.services.feed_service import FeedService
from src.storage.file_manager import FileManager

logger = logging.getLogger("feed_catalog.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

XML_ERROR_EXIT_CODE = 4


def resolve_settings(
    settings_path: str | None,
    url_overrides: list[str] | None,
    no_cache: bool,
) -> AppSettings:
    """Load deployment settings and apply command-line overrides."""
    provider = AppSettingsProvider(
        Path(settings_path) if settings_path else None
    )
    loaded = provider.load()
    if loaded.used_defaults and not url_overrides:
        _err.print(
            f"[yellow]Using default settings: {loaded.error}[/yellow]"
        )

    settings = loaded.settings
    if url_overrides:
        settings = replace(settings, feed_source_urls=list(url_overrides))
    if no_cache:
        settings = replace(settings, cache_enabled=False)
    return settings


def _report_error(exc: FeedError) -> int:
    """Print a feed error to stderr and return its exit code."""
    _err.print(f"[red]{escape(str(exc))}[/red]")
    if isinstance(exc, FetchExhausted):
        for outcome in exc.outcomes:
            _err.print(f"[dim]  {outcome.url}: {outcome.error}[/dim]")
    return exc.exit_code


def _report_xml_error(exc: etree.XMLSyntaxError) -> int:
    logger.error("Feed is not valid XML: %s", exc, exc_info=True)
    _err.print(f"[red]Feed is not valid XML: {escape(str(exc))}[/red]")
    return XML_ERROR_EXIT_CODE


def _print_match_table(match: CheapestMatch) -> None:
    """Render a Rich table for the cheapest product."""
    product = match.product
    table = Table(
        title=f"Cheapest match for '{match.query}'",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")

    price_str = f"{product.price:,.2f}" if product.has_price else "N/A"
    rows = [
        ("Title", escape(product.title or "—")),
        ("Price", f"[green]{price_str}[/green]"),
        ("In stock", "yes" if product.in_stock else "no"),
        ("Brand", product.brand or "—"),
        ("Category", product.category or "—"),
        ("ID", product.id or "—"),
        ("Link", product.link or "—"),
        ("Matches", str(match.total_matches)),
    ]
    for name, value in rows:
        table.add_row(name, value)

    Console().print(table)


async def cli_feed(
    settings: AppSettings,
    output_dir: str | None,
    service: FeedService | None = None,
) -> int:
    """Print the whole feed as JSON and return an exit code."""
    service = service or FeedService()
    try:
        tree = await service.get_feed_tree(settings)
    except FeedError as exc:
        return _report_error(exc)
    except etree.XMLSyntaxError as exc:
        return _report_xml_error(exc)

    if output_dir is not None:
        path = FileManager(Path(output_dir)).save_feed(tree)
        _err.print(f"[dim]Saved feed → {path}[/dim]")

    json.dump(tree, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


async def cli_cheapest(
    settings: AppSettings,
    query: str,
    output_format: str,
    output_dir: str | None,
    service: FeedService | None = None,
) -> int:
    """Print the cheapest product matching *query*; return an exit code."""
    service = service or FeedService()
    _err.print(f"[bold]Searching feed:[/bold] {query}")
    try:
        match = await service.find_cheapest(settings, query)
    except FeedError as exc:
        return _report_error(exc)
    except etree.XMLSyntaxError as exc:
        return _report_xml_error(exc)

    _err.print(
        f"[green]✓ {match.total_matches} matching products[/green]"
    )

    if output_dir is not None:
        path = FileManager(Path(output_dir)).save_match(match)
        _err.print(f"[dim]Saved match → {path}[/dim]")

    if output_format == "table":
        _print_match_table(match)
    else:
        json.dump(
            match.to_dict(),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return 0


async def run_health_check(settings: AppSettings) -> int:
    """Probe every configured feed URL and print a status table."""
    from src.services.health_checker import HealthChecker

    if not settings.feed_source_urls:
        _err.print("[red]No feed URL configured.[/red]")
        return 2

    _err.print("[bold]Running feed source health check...[/bold]")
    checker = HealthChecker(settings.feed_source_urls)
    results = await checker.check_all()

    table = Table(
        title="Feed Source Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Source", style="bold", overflow="fold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        else:
            status = "[red]❌ DOWN[/red]"
            any_down = True

        latency = (
            f"{r.latency_ms:.0f}ms"
            if r.latency_ms > 0
            else "—"
        )
        table.add_row(r.url, status, latency, r.message)

    Console().print(table)
    return 1 if any_down else 0
