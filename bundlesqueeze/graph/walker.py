"""Path-aware reachability traversal.

The walker answers "what can still be reached from here if this route is
cut". Routes are cut with a predicate over the full path (tuple of ids from
the start), not over single modules, so a caller can forbid one specific
route into a module while other routes to the same module stay open.

A module is expanded once per visit state, not once per id. A predicate may
expose visit_state(path): two arrivals at the same module with equal states
have the same allowed continuations. Plain functions have a single state,
which is exact for predicates that only look at the last id of the path.
"""

from collections import deque
from collections.abc import Hashable, Iterator

from .module_graph import ModuleGraph
from .types import ModulePath, ModuleRecord, PathPredicate, as_path


def allow_all(path: ModulePath) -> bool:
    return True


def _single_state(path: ModulePath) -> Hashable:
    return None


class ForbiddenRoute:
    """Predicate rejecting exactly one route (same ids, same order)."""

    def __init__(self, path):
        self.route = as_path(path)

    def __call__(self, candidate: ModulePath) -> bool:
        return candidate != self.route

    def visit_state(self, path: ModulePath) -> Hashable:
        """Position on the cut route while path is a prefix of it, else None.

        Once a path leaves the route no extension of it can equal the route,
        so every path off the route shares one state.
        """
        if self.route[: len(path)] == path:
            return len(path)
        return None


def forbid_path(path) -> ForbiddenRoute:
    return ForbiddenRoute(path)


def forbid_module(module_id: str) -> PathPredicate:
    """Predicate rejecting every route that ends at module_id."""

    def allow(candidate: ModulePath) -> bool:
        return candidate[-1] != module_id

    return allow


class ReachabilityWalker:
    """Iterative depth-first traversal over static imports."""

    def __init__(self, graph: ModuleGraph):
        self.graph = graph

    def walk(
        self,
        start: ModuleRecord | str,
        allow: PathPredicate | None = None,
    ) -> Iterator[ModuleRecord]:
        """Yield every module reachable from start, each at most once.

        The predicate sees the extended path before a candidate is pushed,
        including the one-element path of the start module itself. Each call
        returns an independent generator with its own visited set.

        Args:
            start: Record or id to start from (ids are resolved eagerly)
            allow: Path predicate; defaults to allowing every route

        Yields:
            Reachable module records in depth-first order
        """
        record = self.graph.resolve(start)
        return self._walk(record, allow or allow_all)

    def _walk(self, start: ModuleRecord, allow: PathPredicate) -> Iterator[ModuleRecord]:
        start_path = (start.id,)
        if not allow(start_path):
            return

        state_of = getattr(allow, "visit_state", _single_state)
        expanded: set[tuple[str, Hashable]] = set()
        yielded: set[str] = set()
        stack: list[tuple[ModuleRecord, ModulePath]] = [(start, start_path)]

        while stack:
            current, path = stack.pop()
            key = (current.id, state_of(path))
            if key in expanded:
                continue
            expanded.add(key)
            if current.id not in yielded:
                yielded.add(current.id)
                yield current

            for dep_id in current.imported_ids:
                dep = self.graph.get(dep_id)
                if dep is None:
                    continue
                extended = path + (dep_id,)
                if (dep_id, state_of(extended)) in expanded:
                    continue
                if allow(extended):
                    stack.append((dep, extended))

    def shortest_path(
        self,
        start: ModuleRecord | str,
        target: ModuleRecord | str,
    ) -> ModulePath | None:
        """Shortest static import route from start to target (BFS), or None."""
        source = self.graph.resolve(start)
        goal = self.graph.resolve(target)

        queue = deque([(source, (source.id,))])
        visited = {source.id}
        while queue:
            current, path = queue.popleft()
            if current.id == goal.id:
                return path
            for dep in self.graph.static_dependencies(current):
                if dep.id not in visited:
                    visited.add(dep.id)
                    queue.append((dep, path + (dep.id,)))
        return None

    def reachable_ids(
        self,
        start: ModuleRecord | str,
        allow: PathPredicate | None = None,
    ) -> set[str]:
        """Ids of every module the walk visits."""
        return {record.id for record in self.walk(start, allow)}
