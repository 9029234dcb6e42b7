"""Per-variant module graph.

Indexes every ``Module`` by ``(variant, name)``, stores the materialized
dependency edges, and provides the two graph algorithms the planner needs:

- cycle detection via DFS coloring, and
- a dependency-respecting visitation order (DFS post-order), so that every
  module is visited after all of its dependencies.

Edges never cross variants: a host module's ``libs: ["bar"]`` points at the
host instance of ``bar``.
"""

from __future__ import annotations

from collections import defaultdict

from classforge.core.modules.models import DependencyEdge, DependencyRole, Module
from classforge.exceptions import (
    DependencyCycleError,
    ModuleDeclarationError,
    UnresolvedDependencyError,
)

_WHITE, _GRAY, _BLACK = 0, 1, 2

# Roles that take part in ordering and cycle detection.
_ORDERING_ROLES = frozenset({
    DependencyRole.SHARED,
    DependencyRole.STATIC,
    DependencyRole.BOOTCLASSPATH,
})


class ModuleGraph:
    """The module set of one build, across all variants.

    Modules are kept in insertion order; every query that returns several
    modules preserves it, which is what makes planning deterministic.

    Thread safety: building the graph is single-threaded. Once Phase 1 is
    over the graph is only read, so concurrent readers are safe.
    """

    def __init__(self) -> None:
        self._modules: dict[tuple[str, str], Module] = {}
        self._edges: dict[tuple[str, str], list[DependencyEdge]] = defaultdict(list)

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, key: object) -> bool:
        return key in self._modules

    @property
    def modules(self) -> list[Module]:
        return list(self._modules.values())

    def modules_in(self, variant: str) -> list[Module]:
        return [m for m in self._modules.values() if m.variant.name == variant]

    def add_module(self, module: Module) -> None:
        """Add ``module`` to the graph.

        Raises:
            ModuleDeclarationError: If the variant already has a module of
                that name.
        """
        if module.key in self._modules:
            raise ModuleDeclarationError(
                f"Duplicate module {module.name!r} in {module.variant.name}"
            )
        self._modules[module.key] = module

    def get(self, variant: str, name: str) -> Module | None:
        return self._modules.get((variant, name))

    def resolve(self, module: Module, name: str, role: DependencyRole) -> Module:
        """Look up dependency ``name`` of ``module`` in the module's variant.

        Raises:
            UnresolvedDependencyError: If the variant has no such module.
        """
        dep = self._modules.get((module.variant.name, name))
        if dep is None:
            raise UnresolvedDependencyError(
                module.name, name, role=role.value, variant=module.variant.name
            )
        return dep

    def connect(self, edge: DependencyEdge) -> None:
        """Record a materialized edge. The target may not exist (yet)."""
        self._edges[(edge.variant, edge.source)].append(edge)

    def edges_from(self, module: Module) -> list[DependencyEdge]:
        return list(self._edges.get(module.key, ()))

    def _successors(self, key: tuple[str, str]) -> list[tuple[str, str]]:
        return [
            (edge.variant, edge.target)
            for edge in self._edges.get(key, ())
            if edge.role in _ORDERING_ROLES and (edge.variant, edge.target) in self._modules
        ]

    def detect_cycles(self) -> list[DependencyCycleError]:
        """Find dependency cycles using DFS coloring.

        Iterative; chain depth is not bounded by the recursion limit.

        Returns:
            One ``DependencyCycleError`` per back edge found, each carrying
            the cycle path (e.g. ``["a", "b", "a"]``). Empty if acyclic.
        """
        color = {key: _WHITE for key in self._modules}
        cycles: list[DependencyCycleError] = []

        for root in self._modules:
            if color[root] != _WHITE:
                continue
            color[root] = _GRAY
            stack = [(root, iter(self._successors(root)))]
            while stack:
                u, successors = stack[-1]
                for v in successors:
                    if color[v] == _GRAY:
                        # Back edge: the cycle is the stack suffix starting at v.
                        keys = [key for key, _ in stack]
                        path = [name for _, name in keys[keys.index(v):]]
                        cycles.append(DependencyCycleError(v[0], path + [v[1]]))
                    elif color[v] == _WHITE:
                        color[v] = _GRAY
                        stack.append((v, iter(self._successors(v))))
                        break
                else:
                    stack.pop()
                    color[u] = _BLACK
        return cycles

    def topological_order(self) -> list[Module]:
        """Return all modules, each after every module it depends on.

        Ties are broken by insertion order. Back edges (cycles) are ignored
        here; call ``detect_cycles`` to report them.
        """
        visited: set[tuple[str, str]] = set()
        order: list[Module] = []

        for root in self._modules:
            if root in visited:
                continue
            visited.add(root)
            stack = [(root, iter(self._successors(root)))]
            while stack:
                key, successors = stack[-1]
                for succ in successors:
                    if succ not in visited:
                        visited.add(succ)
                        stack.append((succ, iter(self._successors(succ))))
                        break
                else:
                    stack.pop()
                    order.append(self._modules[key])
        return order
