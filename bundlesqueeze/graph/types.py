"""Shared data structures for the graph package.

Architecture:
- ModuleRecord: one module of the bundle, as reported by the build hook
- ModulePath: an ordered route of module ids from an entry point
- PathPredicate: pure function deciding whether a route may be followed
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

ModulePath = tuple[str, ...]
PathPredicate = Callable[[ModulePath], bool]


@dataclass(frozen=True)
class ModuleRecord:
    """A module in the bundle. Read-only once the graph is built."""

    id: str
    size: int
    rendered_size: int | None = None
    chunk: str | None = None
    imported_ids: tuple[str, ...] = ()
    dynamically_imported_ids: tuple[str, ...] = ()

    @property
    def self_size(self) -> int:
        """Bytes attributed to this module alone (post-render if known)."""
        if self.rendered_size is not None:
            return self.rendered_size
        return self.size

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the build hook's field names."""
        data: dict[str, Any] = {
            "id": self.id,
            "size": self.size,
            "importedIds": list(self.imported_ids),
            "dynamicallyImportedIds": list(self.dynamically_imported_ids),
        }
        if self.rendered_size is not None:
            data["renderedSize"] = self.rendered_size
        if self.chunk is not None:
            data["chunk"] = self.chunk
        return data


def as_path(path) -> ModulePath:
    """Coerce a sequence of ids or records into a ModulePath."""
    return tuple(p.id if isinstance(p, ModuleRecord) else p for p in path)
