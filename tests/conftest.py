"""Pytest configuration and fixtures."""
import json

import pytest

from bundlesqueeze.graph import ModuleGraph, ModuleRecord, SizeAttributor


def make_record(module_id, size, imports=(), dynamic=(), rendered=None, chunk=None):
    """Build a ModuleRecord with short positional arguments."""
    return ModuleRecord(
        id=module_id,
        size=size,
        rendered_size=rendered,
        chunk=chunk,
        imported_ids=tuple(imports),
        dynamically_imported_ids=tuple(dynamic),
    )


def make_graph(*records):
    return ModuleGraph(records)


@pytest.fixture
def chain_records():
    """E(10) -> A(20) -> B(5)."""
    return [
        make_record("E", 10, ["A"]),
        make_record("A", 20, ["B"]),
        make_record("B", 5),
    ]


@pytest.fixture
def chain_graph(chain_records):
    return ModuleGraph(chain_records)


@pytest.fixture
def two_entry_graph(chain_records):
    """The chain plus a second entry F(1) -> B."""
    return ModuleGraph(chain_records + [make_record("F", 1, ["B"])])


@pytest.fixture
def cyclic_graph():
    """A(1) -> B(2) -> A."""
    return make_graph(
        make_record("A", 1, ["B"]),
        make_record("B", 2, ["A"]),
    )


@pytest.fixture
def diamond_graph():
    """E -> A -> S, E -> B -> S, S -> T. Shared subtree S/T."""
    return make_graph(
        make_record("E", 1, ["A", "B"]),
        make_record("A", 10, ["S"]),
        make_record("B", 100, ["S"]),
        make_record("S", 1000, ["T"]),
        make_record("T", 10000),
    )


@pytest.fixture
def attributor(chain_graph):
    return SizeAttributor(chain_graph)


@pytest.fixture
def bundle_dir(tmp_path, chain_records):
    """Directory holding a bundle-analyzer.json for the chain graph."""
    data = [r.to_dict() for r in chain_records]
    (tmp_path / "bundle-analyzer.json").write_text(json.dumps(data), encoding="utf-8")
    return tmp_path
