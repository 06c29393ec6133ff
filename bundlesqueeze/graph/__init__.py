"""Graph package - the size attribution engine.

Core modules:
- module_graph: record arena and id index
- entry_points: graph roots via reverse edges
- closure: memoized static dependency closure
- walker: path-aware reachability traversal
- attribution: self/total/unique/removed sizes under an ignore set
- tree: ranked view model for rendering
"""

from .attribution import SizeAttributor
from .closure import TransitiveClosure
from .entry_points import EntryPointDetector
from .exceptions import MalformedInputError, UnknownModuleError
from .module_graph import ModuleGraph, graph_for
from .tree import Relation, SizeNode, SizeTree, format_size
from .types import ModulePath, ModuleRecord
from .walker import ReachabilityWalker, forbid_module, forbid_path

__all__ = [
    "ModuleRecord",
    "ModulePath",
    "ModuleGraph",
    "graph_for",
    "EntryPointDetector",
    "TransitiveClosure",
    "ReachabilityWalker",
    "forbid_path",
    "forbid_module",
    "SizeAttributor",
    "SizeTree",
    "SizeNode",
    "Relation",
    "format_size",
    "UnknownModuleError",
    "MalformedInputError",
]
