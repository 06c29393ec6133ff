"""Size tree - the ranked, expandable view of an attribution context.

Reproduces what the interactive report shows: entry points ranked by total
size, each module's children ranked by unique size relative to the entry
point, and the hover relationship between two modules.
"""

from dataclasses import dataclass, field
from enum import Enum

from .attribution import SizeAttributor
from .entry_points import EntryPointDetector
from .types import ModulePath, ModuleRecord, as_path


class Relation(Enum):
    """How a module relates to the one being hovered."""

    NONE = "none"
    DEPENDENCY = "dependency"  # module is imported (transitively) by the hovered one
    DEPENDENT = "dependent"  # module imports (transitively) the hovered one


@dataclass
class SizeNode:
    """One occurrence of a module in the tree."""

    path: ModulePath
    self_size: int
    total_size: int
    unique_size: int
    ignored: bool = False
    children: list["SizeNode"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.path[-1]

    @property
    def entry_point(self) -> str:
        return self.path[0]

    @property
    def depth(self) -> int:
        return len(self.path) - 1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "path": list(self.path),
            "self": self.self_size,
            "total": self.total_size,
            "unique": self.unique_size,
            "ignored": self.ignored,
            "children": [child.to_dict() for child in self.children],
        }


class SizeTree:
    """Builds SizeNodes on demand from an attributor."""

    def __init__(self, attributor: SizeAttributor):
        self.attributor = attributor
        self.graph = attributor.graph
        self.detector = EntryPointDetector(self.graph)

    def ranked_entry_points(self) -> list[ModuleRecord]:
        """Entry points, largest total first. Ties keep record order."""
        entries = self.detector.entry_points()
        return sorted(entries, key=self.attributor.total, reverse=True)

    def node(self, path) -> SizeNode:
        route = as_path(path)
        record = self.graph.lookup(route[-1])
        return SizeNode(
            path=route,
            self_size=record.self_size,
            total_size=self.attributor.total(record),
            unique_size=self.attributor.unique(route[0], route),
            ignored=self.attributor.is_ignored(record),
        )

    def children(self, path) -> list[SizeNode]:
        """Static dependencies of the path's last module, largest unique first.

        Dangling imports are skipped. A dependency imported twice by the
        same module appears once.
        """
        route = as_path(path)
        parent = self.graph.lookup(route[-1])

        nodes = []
        seen: set[str] = set()
        for dep in self.graph.static_dependencies(parent):
            if dep.id in seen:
                continue
            seen.add(dep.id)
            nodes.append(self.node(route + (dep.id,)))

        nodes.sort(key=lambda n: n.unique_size, reverse=True)
        return nodes

    def expand(self, path, depth: int, max_children: int | None = None) -> SizeNode:
        """Node for path with children filled in up to depth levels.

        A module that already appears earlier on the path is listed but not
        expanded again, so import cycles render finitely.
        """
        root = self.node(path)
        frontier = [(root, depth)]
        while frontier:
            current, remaining = frontier.pop()
            if remaining <= 0 or current.id in current.path[:-1]:
                continue
            children = self.children(current.path)
            if max_children is not None:
                children = children[:max_children]
            current.children = children
            frontier.extend((child, remaining - 1) for child in children)
        return root

    def relation(self, hovered: ModuleRecord | str | None, module: ModuleRecord | str) -> Relation:
        """Relationship used to highlight modules while another is hovered."""
        if hovered is None:
            return Relation.NONE
        closure = self.attributor.closure
        hovered_record = self.graph.resolve(hovered)
        record = self.graph.resolve(module)

        if closure.contains(hovered_record, record.id):
            return Relation.DEPENDENCY
        if closure.contains(record, hovered_record.id):
            return Relation.DEPENDENT
        return Relation.NONE


def format_size(size: int, unit: str = "KB", decimals: int = 2) -> str:
    """Format a byte count the way the report does: "1,234.57 KB"."""
    divisors = {"B": 1, "KB": 1024, "MB": 1024 * 1024}
    if unit not in divisors:
        raise ValueError(f"Unknown size unit: {unit}")
    value = size / divisors[unit]
    return f"{value:,.{decimals}f} {unit}"
