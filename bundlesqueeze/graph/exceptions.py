"""Custom exceptions for the graph package.

Dangling edges are not represented here: traversal skips them silently.
"""


class UnknownModuleError(KeyError):
    """Raised when an explicitly requested module id is not in the graph."""

    def __init__(self, module_id: str):
        super().__init__(module_id)
        self.module_id = module_id

    def __str__(self) -> str:
        return f"Module not found in graph: {self.module_id}"


class MalformedInputError(ValueError):
    """Raised when a module list cannot be turned into records.

    Attributes:
        message: Human-readable error description
        details: Dict with per-source or per-record failure reasons
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
