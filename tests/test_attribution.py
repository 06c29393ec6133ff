"""Tests for self/total/unique/removed size attribution.

Scenario graphs come from conftest:
  chain:     E(10) -> A(20) -> B(5)
  two-entry: chain plus F(1) -> B
  diamond:   E(1) -> A(10) -> S(1000) -> T(10000), E -> B(100) -> S
"""

import itertools

import pytest

from bundlesqueeze.graph import EntryPointDetector, ReachabilityWalker, SizeAttributor, UnknownModuleError
from conftest import make_graph, make_record


class TestChainScenario:
    """E -> A -> B without ignores."""

    def test_totals(self, attributor):
        assert attributor.total("E") == 35
        assert attributor.total("A") == 25
        assert attributor.total("B") == 5

    def test_unique(self, attributor):
        assert attributor.unique("E", ["E", "A"]) == 25
        assert attributor.unique("E", ["E", "A", "B"]) == 5

    def test_removed(self, attributor):
        assert attributor.removed("E", "B") == 5
        assert attributor.removed("E", "A") == 25

    def test_single_element_path_equals_total(self, attributor):
        assert attributor.unique("E", ["E"]) == attributor.total("E")

    def test_removing_entry_point_removes_everything(self, attributor):
        assert attributor.removed("E", "E") == 35


class TestTwoEntryScenario:
    """B is also imported by a second entry point F."""

    def test_removed_is_relative_to_entry_point(self, two_entry_graph):
        attributor = SizeAttributor(two_entry_graph)
        assert attributor.removed("E", "B") == 5
        assert attributor.removed("F", "B") == 5

    def test_unique_unaffected_by_other_entry(self, two_entry_graph):
        attributor = SizeAttributor(two_entry_graph)
        assert attributor.unique("E", ["E", "A", "B"]) == 5
        assert attributor.unique("E", ["E", "A"]) == 25

    def test_totals(self, two_entry_graph):
        attributor = SizeAttributor(two_entry_graph)
        assert attributor.total("E") == 35
        assert attributor.total("F") == 6

    def test_ignoring_a_expands_to_its_closure(self, two_entry_graph):
        attributor = SizeAttributor(two_entry_graph, ignored=["A"])
        assert attributor.ignored == {"A", "B"}
        assert attributor.explicitly_ignored == {"A"}
        assert attributor.total("E") == 10
        assert attributor.total("F") == 1


class TestSharedDependencies:
    """Unique sizes only count bytes no other route keeps alive."""

    def test_unique_excludes_shared_subtree(self, diamond_graph):
        attributor = SizeAttributor(diamond_graph)
        assert attributor.unique("E", ["E", "A"]) == 10
        assert attributor.unique("E", ["E", "B"]) == 100

    def test_unique_of_shared_module_via_one_route_is_zero(self, diamond_graph):
        attributor = SizeAttributor(diamond_graph)
        assert attributor.unique("E", ["E", "A", "S"]) == 0

    def test_removed_shared_module(self, diamond_graph):
        attributor = SizeAttributor(diamond_graph)
        assert attributor.removed("E", "S") == 11000

    def test_removed_at_least_unique_for_every_path(self, diamond_graph):
        attributor = SizeAttributor(diamond_graph)
        walker = ReachabilityWalker(diamond_graph)
        paths = [
            ("E",),
            ("E", "A"),
            ("E", "B"),
            ("E", "A", "S"),
            ("E", "B", "S"),
            ("E", "A", "S", "T"),
            ("E", "B", "S", "T"),
        ]
        for path in paths:
            assert attributor.removed("E", path[-1]) >= attributor.unique("E", path)
        assert walker.shortest_path("E", "T") in paths

    @pytest.mark.parametrize("entry_imports", [["A", "B"], ["B", "A"]])
    def test_shared_intermediate_independent_of_import_order(self, entry_imports):
        graph = make_graph(
            make_record("E", 1, entry_imports),
            make_record("A", 10, ["C"]),
            make_record("B", 100, ["A"]),
            make_record("C", 1000),
        )
        attributor = SizeAttributor(graph)
        # E -> B -> A -> C survives cutting E -> A -> C
        assert attributor.unique("E", ["E", "A", "C"]) == 0
        assert attributor.unique("E", ["E", "A"]) == 0
        assert attributor.unique("E", ["E", "B"]) == 100

    def test_total_never_below_self(self, diamond_graph):
        attributor = SizeAttributor(diamond_graph)
        for record in diamond_graph:
            assert attributor.total(record) >= attributor.self_size(record)


class TestIgnoreSet:
    """Ignored modules contribute zero bytes but stay reachable."""

    def test_ignoring_leaf_reduces_every_ancestor_by_leaf_size(self, chain_graph):
        baseline = SizeAttributor(chain_graph)
        ignored = SizeAttributor(chain_graph, ignored=["B"])
        for module_id in ("E", "A"):
            assert baseline.total(module_id) - ignored.total(module_id) == 5
        assert ignored.total("B") == 0

    def test_ignored_module_still_reachable(self, chain_graph):
        attributor = SizeAttributor(chain_graph, ignored=["A"])
        assert attributor.unique("E", ["E"]) == 10
        assert attributor.removed("E", "A") == 0

    def test_unknown_ignored_id_tolerated(self, chain_graph):
        attributor = SizeAttributor(chain_graph, ignored=["not-in-graph"])
        assert attributor.total("E") == 35
        assert attributor.is_ignored("not-in-graph")

    def test_with_ignored_builds_new_context(self, chain_graph):
        plain = SizeAttributor(chain_graph)
        assert plain.total("E") == 35

        ignoring = plain.with_ignored(["B"])
        assert ignoring is not plain
        assert ignoring.cache_sizes() == {"total": 0, "unique": 0, "removed": 0}
        assert ignoring.total("E") == 30
        assert plain.total("E") == 35


class TestSizes:
    """Self size and memo behavior."""

    def test_rendered_size_supersedes_raw_size(self):
        graph = make_graph(make_record("E", 100, ["A"], rendered=40), make_record("A", 10))
        attributor = SizeAttributor(graph)
        assert attributor.self_size("E") == 40
        assert attributor.total("E") == 50

    def test_zero_rendered_size_is_respected(self):
        graph = make_graph(make_record("E", 100, rendered=0))
        assert SizeAttributor(graph).self_size("E") == 0

    def test_caches_fill_and_clear(self, attributor):
        attributor.total("E")
        attributor.unique("E", ["E", "A"])
        attributor.removed("E", "B")
        assert attributor.cache_sizes() == {"total": 1, "unique": 1, "removed": 1}

        attributor.clear_caches()
        assert attributor.cache_sizes() == {"total": 0, "unique": 0, "removed": 0}
        assert attributor.total("E") == 35

    def test_unique_cache_keyed_by_full_path(self, diamond_graph):
        attributor = SizeAttributor(diamond_graph)
        attributor.unique("E", ["E", "A", "S"])
        attributor.unique("E", ["E", "B", "S"])
        assert attributor.cache_sizes()["unique"] == 2

    def test_cyclic_totals_are_finite(self, cyclic_graph):
        attributor = SizeAttributor(cyclic_graph)
        assert attributor.total("A") == 3
        assert attributor.total("B") == 3


class TestDanglingAndErrors:
    """Dangling edges never raise; unknown explicit ids do."""

    @pytest.fixture
    def dangling(self):
        return SizeAttributor(make_graph(
            make_record("E", 10, ["A", "gone"]),
            make_record("A", 20, ["also-gone"]),
        ))

    def test_metrics_skip_dangling_edges(self, dangling):
        assert dangling.total("E") == 30
        assert dangling.unique("E", ["E", "A"]) == 20
        assert dangling.removed("E", "A") == 20

    def test_unknown_entry_raises(self, attributor):
        with pytest.raises(UnknownModuleError):
            attributor.total("nope")
        with pytest.raises(UnknownModuleError):
            attributor.removed("nope", "A")

    def test_unknown_path_member_raises(self, attributor):
        with pytest.raises(UnknownModuleError):
            attributor.unique("E", ["E", "nope"])

    def test_path_must_start_at_entry(self, attributor):
        with pytest.raises(ValueError):
            attributor.unique("E", ["A", "B"])
        with pytest.raises(ValueError):
            attributor.unique("E", [])


def test_every_metric_on_every_entry_terminates():
    """A tangle of cycles, self-imports and dangling edges."""
    graph = make_graph(
        make_record("root", 1, ["a", "b", "missing"]),
        make_record("a", 2, ["b", "c", "a"]),
        make_record("b", 4, ["c", "root"]),
        make_record("c", 8, ["a", "gone"]),
    )
    attributor = SizeAttributor(graph)
    walker = ReachabilityWalker(graph)
    ids = [r.id for r in graph]
    for entry, target in itertools.product(ids, ids):
        path = walker.shortest_path(entry, target)
        assert attributor.removed(entry, target) >= 0
        if path:
            assert attributor.unique(entry, path) >= 0
    assert EntryPointDetector(graph).entry_points() == []
