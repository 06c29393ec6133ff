"""Size attribution - self, total, unique and removed sizes.

One SizeAttributor is one attribution context: a graph snapshot plus an
expanded ignore set. Its three memo caches belong to that pairing only.
Changing what is ignored means building a new attributor (with_ignored),
never editing cached totals in place.

Metrics:
- self:    the module's own bytes (rendered size when known)
- total:   self plus every static transitive dependency, each counted once
- unique:  bytes that become unreachable from the entry point if one exact
           route to the chokepoint is severed
- removed: bytes that become unreachable from the entry point if the module
           is deleted, cutting every route into it

Ignored modules still take part in reachability; they only contribute
zero bytes to the sums.
"""

from collections.abc import Iterable

from bundlesqueeze.utils.logging import logger

from .exceptions import UnknownModuleError
from .module_graph import ModuleGraph
from .types import ModulePath, ModuleRecord, as_path
from .walker import ReachabilityWalker, forbid_module, forbid_path


class SizeAttributor:
    """Computes the four size metrics for one (graph, ignore set) pair."""

    def __init__(self, graph: ModuleGraph, ignored: Iterable[str] = ()):
        self.graph = graph
        self.closure = graph.closure
        self.walker = ReachabilityWalker(graph)

        self._explicitly_ignored = frozenset(ignored)
        self._ignored = self._expand_ignored(self._explicitly_ignored)

        self._total_cache: dict[str, int] = {}
        self._unique_cache: dict[tuple[str, ModulePath], int] = {}
        self._removed_cache: dict[tuple[str, str], int] = {}

    def _expand_ignored(self, explicit: frozenset[str]) -> frozenset[str]:
        """Add the closure of every ignored id.

        Ids that are not in the graph stay in the set (they may name a
        module filtered out of this snapshot) but expand to nothing.
        """
        expanded = set(explicit)
        for module_id in explicit:
            if module_id in self.graph:
                expanded |= self.closure.closure_of(module_id)
            else:
                logger.debug(f"[SizeAttributor] Ignored id not in graph: {module_id}")
        if explicit:
            logger.debug(
                f"[SizeAttributor] Ignore set: {len(explicit)} explicit, {len(expanded)} expanded"
            )
        return frozenset(expanded)

    # === IGNORE SET ===

    @property
    def ignored(self) -> frozenset[str]:
        """The expanded ignore set."""
        return self._ignored

    @property
    def explicitly_ignored(self) -> frozenset[str]:
        return self._explicitly_ignored

    def is_ignored(self, module: ModuleRecord | str) -> bool:
        module_id = module.id if isinstance(module, ModuleRecord) else module
        return module_id in self._ignored

    def with_ignored(self, ignored: Iterable[str]) -> "SizeAttributor":
        """New attribution context over the same graph with another ignore set."""
        return SizeAttributor(self.graph, ignored)

    def clear_caches(self) -> None:
        self._total_cache.clear()
        self._unique_cache.clear()
        self._removed_cache.clear()
        logger.debug("[SizeAttributor] Caches cleared")

    # === METRICS ===

    def self_size(self, module: ModuleRecord | str) -> int:
        return self.graph.resolve(module).self_size

    def _contribution(self, module_id: str) -> int:
        """Self size of a reachable id, zero when ignored or dangling."""
        if module_id in self._ignored:
            return 0
        record = self.graph.get(module_id)
        if record is None:
            return 0
        return record.self_size

    def _sum(self, module_ids: Iterable[str]) -> int:
        return sum(self._contribution(module_id) for module_id in module_ids)

    def total(self, module: ModuleRecord | str) -> int:
        """Self size plus the size of every static transitive dependency."""
        record = self.graph.resolve(module)
        cached = self._total_cache.get(record.id)
        if cached is not None:
            return cached

        deps = self.closure.closure_of(record)
        total = self._contribution(record.id) + self._sum(deps - {record.id})
        self._total_cache[record.id] = total
        return total

    def unique(self, entry_point: ModuleRecord | str, path) -> int:
        """Bytes reachable only through this exact route to its last module.

        Args:
            entry_point: The root the route starts from
            path: Ids (or records) from the entry point to the chokepoint

        Returns:
            Sum of self sizes reachable from the chokepoint that the entry
            point can no longer reach once the route is severed.

        Raises:
            UnknownModuleError: If the entry point or any path id is unknown
            ValueError: If the path is empty or does not start at the entry point
        """
        entry = self.graph.resolve(entry_point)
        route = as_path(path)
        if not route:
            raise ValueError("Path must contain at least the entry point")
        if route[0] != entry.id:
            raise ValueError(f"Path starts at {route[0]!r}, not at entry point {entry.id!r}")
        for module_id in route:
            if module_id not in self.graph:
                raise UnknownModuleError(module_id)

        key = (entry.id, route)
        cached = self._unique_cache.get(key)
        if cached is not None:
            return cached

        chokepoint = route[-1]
        reachable = self.walker.reachable_ids(chokepoint)
        still_reachable = self.walker.reachable_ids(entry, forbid_path(route))
        unique = self._sum(reachable - still_reachable)

        self._unique_cache[key] = unique
        return unique

    def removed(self, entry_point: ModuleRecord | str, module: ModuleRecord | str) -> int:
        """Bytes the entry point stops reaching if the module is deleted outright."""
        entry = self.graph.resolve(entry_point)
        record = self.graph.resolve(module)

        key = (entry.id, record.id)
        cached = self._removed_cache.get(key)
        if cached is not None:
            return cached

        reachable = self.walker.reachable_ids(record)
        still_reachable = self.walker.reachable_ids(entry, forbid_module(record.id))
        removed = self._sum(reachable - still_reachable)

        self._removed_cache[key] = removed
        return removed

    def cache_sizes(self) -> dict[str, int]:
        """Number of memoized entries per metric."""
        return {
            "total": len(self._total_cache),
            "unique": len(self._unique_cache),
            "removed": len(self._removed_cache),
        }
