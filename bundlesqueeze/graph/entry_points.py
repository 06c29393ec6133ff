"""Entry point detection - modules that nothing imports."""

from collections import defaultdict

from .module_graph import ModuleGraph
from .types import ModuleRecord


class EntryPointDetector:
    """Find graph roots using a reverse-edge index built in one pass.

    Both static and dynamic imports count as importers: a lazily loaded
    chunk is not an entry point just because nobody imports it eagerly.
    """

    def __init__(self, graph: ModuleGraph):
        self.graph = graph
        self._importers: dict[str, list[ModuleRecord]] = defaultdict(list)

        for record in graph:
            seen: set[str] = set()
            for target in record.imported_ids + record.dynamically_imported_ids:
                if target in seen:
                    continue
                seen.add(target)
                self._importers[target].append(record)

    def importers(self, module: ModuleRecord | str) -> list[ModuleRecord]:
        """All records that import the module statically or dynamically."""
        module_id = module.id if isinstance(module, ModuleRecord) else module
        return list(self._importers.get(module_id, ()))

    def is_entry_point(self, module: ModuleRecord | str) -> bool:
        module_id = module.id if isinstance(module, ModuleRecord) else module
        return not self._importers.get(module_id)

    def entry_points(self) -> list[ModuleRecord]:
        """Entry points in record order."""
        return [record for record in self.graph if self.is_entry_point(record)]
