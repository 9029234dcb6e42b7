"""Tests for the module graph: indexing, lookup, cycles and visitation order."""

from __future__ import annotations

import pytest

from classforge.core.classpath import ModuleGraph
from classforge.core.modules import (
    DependencyEdge,
    DependencyRole,
    Module,
    ModuleKind,
    ModuleProperties,
    OsClass,
    Variant,
)
from classforge.exceptions import ModuleDeclarationError, UnresolvedDependencyError

DEVICE = Variant(OsClass.DEVICE, "android_common")
HOST = Variant(OsClass.HOST, "linux_common")


def _module(name: str, variant: Variant = DEVICE) -> Module:
    return Module(name, variant, ModuleKind.SOURCE_LIBRARY, "java_library", ModuleProperties())


def _graph(edges: dict[str, list[str]]) -> ModuleGraph:
    graph = ModuleGraph()
    for name in edges:
        graph.add_module(_module(name))
    for name, targets in edges.items():
        for target in targets:
            graph.connect(DependencyEdge(name, target, DependencyRole.SHARED, DEVICE.name))
    return graph


class TestModuleGraphIndex:
    """Adding and looking up modules."""

    def test_same_name_in_two_variants(self) -> None:
        graph = ModuleGraph()
        graph.add_module(_module("foo"))
        graph.add_module(_module("foo", HOST))
        assert len(graph) == 2
        assert [m.variant for m in graph.modules_in("linux_common")] == [HOST]

    def test_duplicate_in_variant_rejected(self) -> None:
        graph = ModuleGraph()
        graph.add_module(_module("foo"))
        with pytest.raises(ModuleDeclarationError):
            graph.add_module(_module("foo"))

    def test_resolve_stays_in_variant(self) -> None:
        graph = ModuleGraph()
        graph.add_module(_module("foo", HOST))
        graph.add_module(_module("bar"))
        with pytest.raises(UnresolvedDependencyError) as excinfo:
            graph.resolve(_module("foo", HOST), "bar", DependencyRole.SHARED)
        assert excinfo.value.variant == "linux_common"

    def test_edges_from(self) -> None:
        graph = _graph({"a": ["b"], "b": []})
        a = graph.get("android_common", "a")
        assert a is not None
        assert [e.target for e in graph.edges_from(a)] == ["b"]


class TestTopologicalOrder:
    """Dependencies come first; ties follow insertion order."""

    def test_chain(self) -> None:
        graph = _graph({"a": ["b"], "b": ["c"], "c": []})
        assert [m.name for m in graph.topological_order()] == ["c", "b", "a"]

    def test_diamond(self) -> None:
        graph = _graph({"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": []})
        assert [m.name for m in graph.topological_order()] == ["d", "b", "c", "a"]

    def test_missing_targets_ignored(self) -> None:
        graph = _graph({"a": ["ghost"]})
        assert [m.name for m in graph.topological_order()] == ["a"]

    def test_independent_modules_keep_insertion_order(self) -> None:
        graph = _graph({"x": [], "y": [], "z": []})
        assert [m.name for m in graph.topological_order()] == ["x", "y", "z"]


class TestCycleDetection:
    """DFS coloring finds back edges."""

    def test_acyclic(self) -> None:
        assert _graph({"a": ["b"], "b": []}).detect_cycles() == []

    def test_two_cycle(self) -> None:
        cycles = _graph({"a": ["b"], "b": ["a"]}).detect_cycles()
        assert len(cycles) == 1
        assert cycles[0].cycle == ["a", "b", "a"]
        assert cycles[0].variant == "android_common"

    def test_self_loop(self) -> None:
        cycles = _graph({"a": ["a"]}).detect_cycles()
        assert [c.cycle for c in cycles] == [["a", "a"]]

    def test_defaults_edges_ignored(self) -> None:
        graph = _graph({"a": []})
        graph.connect(DependencyEdge("a", "a", DependencyRole.DEFAULTS, "android_common"))
        assert graph.detect_cycles() == []


class TestDeepGraphs:
    """Walks are iterative; depth is limited only by memory."""

    DEPTH = 3000

    def _chain(self, close: bool = False) -> ModuleGraph:
        names = [f"m{i}" for i in range(self.DEPTH)]
        edges = {name: [names[i + 1]] if i + 1 < len(names) else [] for i, name in enumerate(names)}
        if close:
            edges[names[-1]] = [names[0]]
        return _graph(edges)

    def test_topological_order_of_deep_chain(self) -> None:
        order = [m.name for m in self._chain().topological_order()]
        assert order[0] == f"m{self.DEPTH - 1}"
        assert order[-1] == "m0"
        assert len(order) == self.DEPTH

    def test_deep_chain_is_acyclic(self) -> None:
        assert self._chain().detect_cycles() == []

    def test_deep_cycle_found(self) -> None:
        cycles = self._chain(close=True).detect_cycles()
        assert len(cycles) == 1
        assert len(cycles[0].cycle) == self.DEPTH + 1
        assert cycles[0].cycle[0] == cycles[0].cycle[-1] == "m0"
