#!/usr/bin/env python3
"""
Command line front-end for omnisearch.

Usage:
    omni search SNAPSHOT "query"        - Search a workspace snapshot
    omni open RESULT_ID                 - Record that a result was opened
    omni recents                        - Show recently opened results
    omni toggle-filter FILTER -c ...    - Preview a content filter toggle
"""

import json
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from ..engine.config import SearchConfig
from ..engine.filters import ContentFilter, parse_content_filters, toggle_content_filters
from ..engine.metrics import SearchMetrics
from ..engine.ranking import now_ms
from ..engine.recency import RecencyStore
from ..engine.search import SearchScope, compute_search_results
from ..engine.snapshot import Snapshot
from ..engine.storage import ClientStore

console = Console()

FILTER_CHOICES = [item.value for item in ContentFilter]
SCOPE_CHOICES = [item.value for item in SearchScope]


def _open_recency_store(config: SearchConfig) -> RecencyStore:
    store = ClientStore(config.storage.data_dir)
    store.load()
    recency = RecencyStore.from_config(store, config)
    recency.load()
    return recency


@click.group()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, path_type=Path),
              help="Config file path")
@click.option("--data-dir", type=click.Path(path_type=Path),
              help="Directory holding persisted client stores")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config_path: Optional[Path], data_dir: Optional[Path], verbose: bool):
    """omnisearch - unified workspace search."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")

    config = SearchConfig.load_or_default(config_path)
    if data_dir is not None:
        config.storage.data_dir = data_dir
    ctx.obj = config


@cli.command()
@click.argument("snapshot_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("query")
@click.option("--scope", "-s", type=click.Choice(SCOPE_CHOICES),
              default=SearchScope.ACTIVE_WORKSPACE.value, help="Active workspace or all")
@click.option("--filter", "-f", "filters", multiple=True, type=click.Choice(FILTER_CHOICES),
              help="Content filter (repeatable)")
@click.option("--limit", "-l", type=int, help="Max results to show")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.option("--stats", is_flag=True, help="Print per-provider latency metrics")
@click.pass_obj
def search(config: SearchConfig, snapshot_path: Path, query: str, scope: str,
           filters: Tuple[str, ...], limit: Optional[int], as_json: bool, stats: bool):
    """Search a workspace snapshot."""
    try:
        snapshot = Snapshot.load(snapshot_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Cannot read snapshot:[/red] {e}")
        sys.exit(1)

    recency = _open_recency_store(config)
    params = snapshot.to_params(
        query,
        scope=SearchScope(scope),
        content_filters=parse_content_filters(filters),
        recency_map=recency.snapshot(),
        report_metrics=True,
    )
    metrics = SearchMetrics(max_elapsed_ms=config.performance.max_elapsed_ms)
    results = compute_search_results(params, config=config, metrics=metrics)
    if limit is not None:
        results = results[:max(limit, 0)]

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        display_search_results(query, results)

    if stats:
        click.echo(metrics.export_metrics("json"))


def display_search_results(query: str, results) -> None:
    """Display search results in a table."""
    if not results:
        console.print("[yellow]No results found[/yellow]")
        return

    table = Table(title=f"Results for '{query}' ({len(results)})")
    table.add_column("Kind", style="magenta")
    table.add_column("Title", style="cyan", no_wrap=False)
    table.add_column("Score", justify="right")
    table.add_column("Location", no_wrap=False)
    table.add_column("Id", style="dim", no_wrap=False)

    for r in results:
        table.add_row(
            r.kind.value,
            r.title,
            str(r.score),
            r.location_label or "",
            r.id
        )

    console.print(table)


@cli.command(name="open")
@click.argument("result_id")
@click.pass_obj
def open_result(config: SearchConfig, result_id: str):
    """Record that a result was opened, boosting it in later searches."""
    recency = _open_recency_store(config)
    recency.record_open(result_id)
    recency.flush()
    console.print(f"[green]✓[/green] Recorded open: {result_id}")


@cli.command()
@click.option("--limit", "-l", default=20, help="Max entries to show")
@click.pass_obj
def recents(config: SearchConfig, limit: int):
    """Show recently opened results, newest first."""
    recency = _open_recency_store(config)
    entries = sorted(recency.snapshot().items(), key=lambda item: item[1], reverse=True)

    if not entries:
        console.print("[yellow]No recently opened results[/yellow]")
        return

    now = now_ms()
    table = Table(title=f"Recently opened ({len(entries)})")
    table.add_column("Id", style="cyan")
    table.add_column("Opened", justify="right")
    for result_id, opened_at in entries[:limit]:
        minutes = max(0, now - opened_at) // 60000
        table.add_row(result_id, f"{minutes} min ago")
    console.print(table)


@cli.command(name="toggle-filter")
@click.argument("selected", type=click.Choice(FILTER_CHOICES))
@click.option("--current", "-c", "current", multiple=True, type=click.Choice(FILTER_CHOICES),
              help="Currently selected filters (default: all)")
def toggle_filter(selected: str, current: Tuple[str, ...]):
    """Show the filter selection after toggling SELECTED."""
    next_filters = toggle_content_filters(
        parse_content_filters(current),
        ContentFilter(selected)
    )
    click.echo(" ".join(item.value for item in next_filters))


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
