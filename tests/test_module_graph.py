"""Tests for the module graph index and lookups."""

import pytest

from bundlesqueeze.graph import MalformedInputError, ModuleGraph, UnknownModuleError, graph_for
from conftest import make_graph, make_record


class TestLookup:
    """Explicit lookups raise, traversal lookups do not."""

    def test_lookup_returns_record(self, chain_graph):
        assert chain_graph.lookup("A").size == 20

    def test_lookup_unknown_raises(self, chain_graph):
        with pytest.raises(UnknownModuleError) as exc:
            chain_graph.lookup("missing")
        assert exc.value.module_id == "missing"
        assert "missing" in str(exc.value)

    def test_unknown_module_error_is_key_error(self, chain_graph):
        with pytest.raises(KeyError):
            chain_graph.lookup("missing")

    def test_get_returns_none_for_dangling(self, chain_graph):
        assert chain_graph.get("missing") is None

    def test_resolve_accepts_record_or_id(self, chain_graph):
        record = chain_graph.lookup("B")
        assert chain_graph.resolve(record) is record
        assert chain_graph.resolve("B") is record

    def test_contains_and_len(self, chain_graph):
        assert "E" in chain_graph
        assert "Z" not in chain_graph
        assert len(chain_graph) == 3
        assert [r.id for r in chain_graph] == ["E", "A", "B"]


class TestEdges:
    """Dangling edges are tolerated."""

    def test_static_dependencies_skip_dangling(self):
        graph = make_graph(
            make_record("E", 1, ["A", "gone", "B"]),
            make_record("A", 1),
            make_record("B", 1),
        )
        assert [d.id for d in graph.static_dependencies(graph.lookup("E"))] == ["A", "B"]

    def test_dangling_edges_lists_static_and_dynamic(self):
        graph = make_graph(
            make_record("E", 1, ["gone"], dynamic=["lazy-gone"]),
        )
        assert graph.dangling_edges() == [("E", "gone"), ("E", "lazy-gone")]

    def test_duplicate_ids_rejected(self):
        graph = make_graph(make_record("A", 1), make_record("A", 2))
        with pytest.raises(MalformedInputError) as exc:
            graph.lookup("A")
        assert exc.value.details["duplicates"] == ["A"]


class TestGraphCache:
    """graph_for caches against the identity of the record collection."""

    def test_same_collection_same_graph(self, chain_records):
        assert graph_for(chain_records) is graph_for(chain_records)

    def test_new_collection_rebuilds(self, chain_records):
        first = graph_for(chain_records)
        second = graph_for(list(chain_records))
        assert first is not second
        assert isinstance(second, ModuleGraph)

    def test_closure_is_scoped_to_graph(self, chain_records):
        one = ModuleGraph(chain_records)
        two = ModuleGraph(chain_records)
        assert one.closure is one.closure
        assert one.closure is not two.closure
