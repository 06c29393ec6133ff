"""Explain the size footprint of a single module."""

import json

import click
from rich.markup import escape
from rich.table import Table

from bundlesqueeze.pipeline.ui import console, print_header, print_warning
from bundlesqueeze.utils.error_handler import handle_exceptions

from ._context import load_context


@click.command()
@click.argument("module_id")
@click.argument("source", required=False)
@click.option("--entry", "-e", "entry_ids", multiple=True, help="Entry point to measure from (default: every entry that reaches the module)")
@click.option("--ignore", "-i", multiple=True, help="Module id to ignore (with its dependencies); repeatable")
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON")
@click.option("--root", default=".", help="Project root holding .squeeze/config.json")
@click.help_option("-h", "--help")
@handle_exceptions
def module(module_id, source, entry_ids, ignore, as_json, root):
    """Break down what one module costs the bundle.

    Reports the module's self and total sizes and, for each entry point
    that reaches it:
      removed: bytes that disappear if the module is deleted outright
      unique:  bytes that disappear if the shortest import route from the
               entry point to the module is cut (other routes stay)

    Examples:
      squeeze module src/charts/index.ts dist/
      squeeze module node_modules/moment/moment.js dist/ --entry src/main.tsx --json
    """
    ctx = load_context(source, ignore, root)
    record = ctx.graph.lookup(module_id)
    walker = ctx.attributor.walker

    if entry_ids:
        entries = [ctx.graph.lookup(entry_id) for entry_id in entry_ids]
    else:
        entries = [
            entry
            for entry in ctx.tree.ranked_entry_points()
            if entry.id == record.id or ctx.attributor.closure.contains(entry, record.id)
        ]

    per_entry = []
    for entry in entries:
        path = walker.shortest_path(entry, record)
        per_entry.append({
            "entry": entry.id,
            "path": list(path) if path else None,
            "removed": ctx.attributor.removed(entry, record),
            "unique": ctx.attributor.unique(entry, path) if path else 0,
        })

    importers = [imp.id for imp in ctx.tree.detector.importers(record)]
    summary = {
        "id": record.id,
        "chunk": record.chunk,
        "self": record.self_size,
        "total": ctx.attributor.total(record),
        "ignored": ctx.attributor.is_ignored(record),
        "dependencies": len(ctx.attributor.closure.closure_of(record)),
        "importers": importers,
        "entries": per_entry,
    }

    if as_json:
        click.echo(json.dumps(summary, indent=2))
        return

    print_header(f"MODULE {escape(record.id)}")
    console.print(f"Self:         [size]{ctx.fmt(summary['self'])}[/size]")
    console.print(f"Total:        [size]{ctx.fmt(summary['total'])}[/size]")
    console.print(f"Dependencies: {summary['dependencies']}")
    console.print(f"Importers:    {len(importers)}")
    if summary["ignored"]:
        print_warning("module is in the ignore set; its bytes count as zero")

    if not per_entry:
        print_warning("no entry point reaches this module through static imports")
        return

    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Entry point", style="path", overflow="fold")
    table.add_column("Removed", justify="right", style="size")
    table.add_column("Unique", justify="right", style="unique")
    table.add_column("Route", style="dim", overflow="fold")
    for item in per_entry:
        route = " > ".join(item["path"]) if item["path"] else "-"
        table.add_row(item["entry"], ctx.fmt(item["removed"]), ctx.fmt(item["unique"]), route)
    console.print(table)
