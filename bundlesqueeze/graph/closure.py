"""Transitive closure of static imports, memoized per module id.

Cycle handling: each top-level call keeps a visited set. When the descent
reaches a module that is still being computed, that occurrence contributes
nothing (the cycle is truncated there). Every module finished during the
descent is memoized, including modules whose closure was truncated.

Because the memo is keyed by id alone, the closure of a module inside a
cycle depends on which module of the cycle was asked for first. This is
the established behavior and is kept as-is; collapsing strongly connected
components would make it order-independent.
"""

from typing import TYPE_CHECKING

from .types import ModuleRecord

if TYPE_CHECKING:
    from .module_graph import ModuleGraph


class TransitiveClosure:
    """All ids statically reachable from a module, excluding the module itself."""

    def __init__(self, graph: "ModuleGraph"):
        self.graph = graph
        self._memo: dict[str, frozenset[str]] = {}

    def __len__(self) -> int:
        return len(self._memo)

    def closure_of(self, module: ModuleRecord | str) -> frozenset[str]:
        """Return the static dependency closure of a module.

        Dynamic imports never contribute. Dangling ids are skipped.

        Args:
            module: Record or id. Ids are resolved with ModuleGraph.lookup.

        Returns:
            Frozen set of dependency ids, never containing the module's own id.
        """
        record = self.graph.resolve(module)
        cached = self._memo.get(record.id)
        if cached is not None:
            return cached

        # Explicit frames: import chains can be deeper than the recursion limit.
        visited = {record.id}
        frames = [(record, iter(record.imported_ids), set())]

        while frames:
            current, pending, deps = frames[-1]

            descended = False
            for dep_id in pending:
                dep = self.graph.get(dep_id)
                if dep is None:
                    continue
                deps.add(dep.id)

                memoized = self._memo.get(dep.id)
                if memoized is not None:
                    deps |= memoized
                    continue
                if dep.id in visited:
                    # Re-entry into an unfinished module: truncate.
                    continue

                visited.add(dep.id)
                frames.append((dep, iter(dep.imported_ids), set()))
                descended = True
                break

            if descended:
                continue

            frames.pop()
            deps.discard(current.id)
            finished = frozenset(deps)
            self._memo[current.id] = finished
            if frames:
                frames[-1][2].update(finished)

        return self._memo[record.id]

    def contains(self, module: ModuleRecord | str, other_id: str) -> bool:
        """True if other_id is a static (transitive) dependency of module."""
        return other_id in self.closure_of(module)
