"""Shared setup for commands: load records and build an attribution context."""

from dataclasses import dataclass
from typing import Any

from bundlesqueeze.config_runtime import load_runtime_config
from bundlesqueeze.graph import ModuleGraph, ModuleRecord, SizeAttributor, SizeTree, format_size, graph_for
from bundlesqueeze.ingest import load_records, resolve_sources


@dataclass
class CommandContext:
    """Everything a command needs to query sizes."""

    config: dict[str, Any]
    records: list[ModuleRecord]
    graph: ModuleGraph
    attributor: SizeAttributor
    tree: SizeTree

    def fmt(self, size: int) -> str:
        return format_size(
            size,
            unit=self.config["report"]["size_unit"],
            decimals=self.config["report"]["size_decimals"],
        )


def load_context(source: str | None, ignore: tuple[str, ...] = (), root: str = ".") -> CommandContext:
    """Load module data and build the graph, attributor and tree.

    The ignore set is the union of --ignore options and report.ignore from
    the runtime config.
    """
    config = load_runtime_config(root)
    json_path, html_path = resolve_sources(
        source,
        default_json=config["paths"]["data_json"],
        default_html=config["paths"]["report_html"],
    )
    records = load_records(json_path, html_path)

    graph = graph_for(records)
    ignored = set(config["report"]["ignore"]) | set(ignore)
    attributor = SizeAttributor(graph, ignored)
    return CommandContext(
        config=config,
        records=records,
        graph=graph,
        attributor=attributor,
        tree=SizeTree(attributor),
    )
