"""Module graph - flat record arena plus an id index.

Edges are stored as ids on the records, never as object references, so
cyclic imports need no special ownership handling. Every edge lookup goes
through the index; ids missing from the index are dangling edges and are
skipped by traversal code.
"""

from collections.abc import Iterable, Iterator
from functools import cached_property
from typing import TYPE_CHECKING

from bundlesqueeze.utils.logging import logger

from .exceptions import MalformedInputError, UnknownModuleError
from .types import ModuleRecord

if TYPE_CHECKING:
    from .closure import TransitiveClosure


class ModuleGraph:
    """Read-only view over one snapshot of module records."""

    def __init__(self, records: Iterable[ModuleRecord]):
        self._records: tuple[ModuleRecord, ...] = tuple(records)
        self._closure: "TransitiveClosure | None" = None

    @cached_property
    def _index(self) -> dict[str, int]:
        """id -> position in the arena, built on first use."""
        index: dict[str, int] = {}
        duplicates: list[str] = []
        for position, record in enumerate(self._records):
            if record.id in index:
                duplicates.append(record.id)
                continue
            index[record.id] = position

        if duplicates:
            raise MalformedInputError(
                f"Duplicate module ids in graph: {', '.join(sorted(set(duplicates)))}",
                {"duplicates": sorted(set(duplicates))},
            )

        dangling = sum(
            1
            for record in self._records
            for dep_id in record.imported_ids
            if dep_id not in index
        )
        logger.debug(
            f"[ModuleGraph] Indexed {len(index)} modules ({dangling} dangling static edges)"
        )
        return index

    @property
    def records(self) -> tuple[ModuleRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ModuleRecord]:
        return iter(self._records)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._index

    def get(self, module_id: str) -> ModuleRecord | None:
        """Traversal-side lookup. Returns None for dangling ids."""
        position = self._index.get(module_id)
        if position is None:
            return None
        return self._records[position]

    def lookup(self, module_id: str) -> ModuleRecord:
        """Resolve an id the caller expects to exist.

        Raises:
            UnknownModuleError: If the id is not in the graph
        """
        record = self.get(module_id)
        if record is None:
            raise UnknownModuleError(module_id)
        return record

    def resolve(self, module: ModuleRecord | str) -> ModuleRecord:
        """Accept either a record or an id and return the graph's record."""
        if isinstance(module, ModuleRecord):
            return self.lookup(module.id)
        return self.lookup(module)

    def static_dependencies(self, record: ModuleRecord) -> list[ModuleRecord]:
        """Resolved static imports of a record, in import order, dangling skipped."""
        deps = []
        for dep_id in record.imported_ids:
            dep = self.get(dep_id)
            if dep is not None:
                deps.append(dep)
        return deps

    def dangling_edges(self) -> list[tuple[str, str]]:
        """All (source id, missing id) pairs, static and dynamic."""
        missing = []
        for record in self._records:
            for dep_id in record.imported_ids + record.dynamically_imported_ids:
                if dep_id not in self._index:
                    missing.append((record.id, dep_id))
        return missing

    @property
    def closure(self) -> "TransitiveClosure":
        """Transitive closure memo scoped to this snapshot."""
        if self._closure is None:
            from .closure import TransitiveClosure

            self._closure = TransitiveClosure(self)
        return self._closure


class _GraphCache:
    """Single-slot cache keyed by the identity of the record collection."""

    def __init__(self):
        self._source: object | None = None
        self._graph: ModuleGraph | None = None

    def get(self, records: Iterable[ModuleRecord]) -> ModuleGraph:
        if self._graph is None or self._source is not records:
            self._graph = ModuleGraph(records)
            self._source = records
        return self._graph


_graph_cache = _GraphCache()


def graph_for(records: Iterable[ModuleRecord]) -> ModuleGraph:
    """Return the graph for a record collection, rebuilding when it changes.

    The same collection object yields the same graph (and therefore the
    same index and closure memo); any other object triggers a rebuild.
    """
    return _graph_cache.get(records)
