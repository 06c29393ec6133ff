"""Render the size tree of one or all entry points."""

import json

import click
from rich.markup import escape
from rich.tree import Tree

from bundlesqueeze.graph import SizeNode
from bundlesqueeze.pipeline.ui import console, print_header
from bundlesqueeze.utils.error_handler import handle_exceptions

from ._context import CommandContext, load_context


def _label(ctx: CommandContext, node: SizeNode) -> str:
    text = (
        f"[path]{escape(node.id)}[/path] "
        f"(self {ctx.fmt(node.self_size)}, total [size]{ctx.fmt(node.total_size)}[/size], "
        f"unique [unique]{ctx.fmt(node.unique_size)}[/unique])"
    )
    if node.ignored:
        text = f"[ignored]{text}[/ignored]"
    return text


def _add_children(ctx: CommandContext, branch: Tree, node: SizeNode) -> None:
    for child in node.children:
        _add_children(ctx, branch.add(_label(ctx, child)), child)


@click.command("tree")
@click.argument("source", required=False)
@click.option("--entry", "-e", "entry_ids", multiple=True, help="Entry point to show (default: all)")
@click.option("--depth", "-d", default=None, type=click.IntRange(min=0), help="Levels of dependencies to expand")
@click.option("--max-children", default=None, type=click.IntRange(min=0), help="Children shown per module")
@click.option("--ignore", "-i", multiple=True, help="Module id to ignore (with its dependencies); repeatable")
@click.option("--json", "as_json", is_flag=True, help="Output the tree as JSON")
@click.option("--root", default=".", help="Project root holding .squeeze/config.json")
@click.help_option("-h", "--help")
@handle_exceptions
def tree_command(source, entry_ids, depth, max_children, ignore, as_json, root):
    """Show entry points expanded into their dependencies.

    Each line shows the module's self size, its total size (self plus all
    static dependencies) and its unique size: the bytes that would leave
    the bundle if this one import route were cut. Children are sorted by
    unique size, largest first.

    Examples:
      squeeze tree dist/
      squeeze tree dist/ --entry src/main.tsx --depth 4
      squeeze tree dist/ --ignore node_modules/lodash/lodash.js
    """
    ctx = load_context(source, ignore, root)
    depth = depth if depth is not None else ctx.config["limits"]["tree_depth"]
    max_children = max_children if max_children is not None else ctx.config["limits"]["max_children"]

    if entry_ids:
        entries = [ctx.graph.lookup(entry_id) for entry_id in entry_ids]
    else:
        entries = ctx.tree.ranked_entry_points()

    roots = [ctx.tree.expand((entry.id,), depth, max_children) for entry in entries]

    if as_json:
        click.echo(json.dumps([root_node.to_dict() for root_node in roots], indent=2))
        return

    print_header("SIZE TREE")
    for root_node in roots:
        branch = Tree(_label(ctx, root_node), guide_style="dim")
        _add_children(ctx, branch, root_node)
        console.print(branch)
