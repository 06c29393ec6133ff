"""List entry points ranked by total size."""

import json

import click
from rich.table import Table

from bundlesqueeze.pipeline.ui import console, print_error, print_header, print_warning
from bundlesqueeze.utils.error_handler import handle_exceptions

from ._context import load_context


@click.command()
@click.argument("source", required=False)
@click.option("--ignore", "-i", multiple=True, help="Module id to ignore (with its dependencies); repeatable")
@click.option("--limit", default=None, type=click.IntRange(min=0), help="Show at most N entry points")
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON")
@click.option("--root", default=".", help="Project root holding .squeeze/config.json")
@click.help_option("-h", "--help")
@handle_exceptions
def entries(source, ignore, limit, as_json, root):
    """Rank entry points (modules nothing imports) by total size.

    SOURCE is bundle-analyzer.json, bundle-squeeze.html, or a directory
    holding them. Without SOURCE the configured default paths are used.

    Examples:
      squeeze entries dist/
      squeeze entries dist/bundle-analyzer.json --ignore src/polyfills.ts
      squeeze entries --json --limit 5
    """
    ctx = load_context(source, ignore, root)
    limit = limit if limit is not None else ctx.config["limits"]["max_entries"]
    all_entries = ctx.tree.ranked_entry_points()
    ranked = all_entries[:limit]

    if as_json:
        data = [
            {
                "id": entry.id,
                "self": entry.self_size,
                "total": ctx.attributor.total(entry),
                "ignored": ctx.attributor.is_ignored(entry),
            }
            for entry in ranked
        ]
        click.echo(json.dumps(data, indent=2))
        return

    print_header("ENTRY POINTS")
    if not all_entries:
        print_error("no entry points: every module is imported by another module")
        return

    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Entry point", style="path", overflow="fold")
    table.add_column("Self", justify="right")
    table.add_column("Total", justify="right", style="size")

    for entry in ranked:
        style = "ignored" if ctx.attributor.is_ignored(entry) else None
        table.add_row(
            entry.id,
            ctx.fmt(entry.self_size),
            ctx.fmt(ctx.attributor.total(entry)),
            style=style,
        )
    console.print(table)
    console.print(f"[dim]{len(ctx.records)} modules, {len(ranked)} entry points shown[/dim]")

    dangling = ctx.graph.dangling_edges()
    if dangling:
        print_warning(f"{len(dangling)} imports point at modules missing from the data (skipped)")
