"""Phase 1 passes: from declarations to a materialized module graph.

Each pass is a total function over the whole module set and completes
before the next one starts:

1. ``select_prebuilts``   -- source vs. prebuilt precedence for shared names
2. ``flatten_defaults``   -- fold ``java_defaults`` into referencing modules
3. ``check_roles``        -- reject names in both ``libs`` and ``static_libs``
4. ``expand_variants``    -- one ``Module`` per applicable variant
5. ``materialize_edges``  -- shared / static / bootclasspath edges
6. ``check_cycles``       -- dependency cycles within a variant

Passes never raise for a single bad module. They record the error in an
``ErrorCollector`` and carry on, so one run reports every problem. A module
that failed a pass stays in the module set (so its dependents still
resolve) but is marked failed and produces no actions.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence

from classforge.core.classpath.graph import ModuleGraph
from classforge.core.defaults.merger import DefaultsMerger
from classforge.core.modules.models import (
    DependencyEdge,
    DependencyRole,
    Module,
    ModuleDeclaration,
    ModuleKind,
)
from classforge.core.sdk.resolver import NO_BOOTCLASSPATH, SdkVersionResolver
from classforge.core.variants.selector import VariantSelector
from classforge.exceptions import (
    ClassforgeError,
    CyclicDefaultsError,
    ModuleDeclarationError,
    RoleConflictError,
    UnresolvedDependencyError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ErrorCollector
# ---------------------------------------------------------------------------


class ErrorCollector:
    """Accumulates resolution errors and remembers which modules failed.

    An error recorded without a variant fails the module in every variant.
    """

    def __init__(self) -> None:
        self._errors: list[ClassforgeError] = []
        self._failed_names: set[str] = set()
        self._failed_keys: set[tuple[str, str]] = set()

    def add(self, error: ClassforgeError, module: str, variant: str | None = None) -> None:
        logger.debug("Recorded error for %s: %s", module, error)
        self._errors.append(error)
        if variant is None:
            self._failed_names.add(module)
        else:
            self._failed_keys.add((variant, module))

    def mark_failed(self, module: str, variant: str | None = None) -> None:
        if variant is None:
            self._failed_names.add(module)
        else:
            self._failed_keys.add((variant, module))

    def failed(self, module: Module) -> bool:
        return module.name in self._failed_names or module.key in self._failed_keys

    @property
    def errors(self) -> list[ClassforgeError]:
        return list(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __len__(self) -> int:
        return len(self._errors)


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------


def select_prebuilts(
    declarations: Sequence[ModuleDeclaration], errors: ErrorCollector
) -> list[ModuleDeclaration]:
    """Keep one declaration per name.

    A source library and a prebuilt import may share a name: the source
    library wins unless the prebuilt sets ``prefer``. Any other shared name
    is a duplicate declaration; the first one is kept.
    """
    by_name: dict[str, list[ModuleDeclaration]] = defaultdict(list)
    for decl in declarations:
        by_name[decl.name].append(decl)

    winners: dict[str, ModuleDeclaration] = {}
    for name, decls in by_name.items():
        if len(decls) == 1:
            winners[name] = decls[0]
            continue
        kinds = sorted(d.kind.value for d in decls)
        if kinds == [ModuleKind.PREBUILT_IMPORT.value, ModuleKind.SOURCE_LIBRARY.value]:
            prebuilt = next(d for d in decls if d.kind is ModuleKind.PREBUILT_IMPORT)
            source = next(d for d in decls if d.kind is ModuleKind.SOURCE_LIBRARY)
            winner, loser = (prebuilt, source) if prebuilt.prefer else (source, prebuilt)
            logger.warning(
                "%s: using %s, ignoring %s of the same name",
                name, winner.kind_tag, loser.kind_tag,
            )
            winners[name] = winner
        else:
            errors.add(
                ModuleDeclarationError(
                    f"Module {name!r} declared {len(decls)} times "
                    f"({', '.join(d.kind_tag for d in decls)})"
                ),
                name,
            )
            winners[name] = decls[0]

    return [d for d in declarations if winners.get(d.name) is d]


def flatten_defaults(
    declarations: Sequence[ModuleDeclaration], errors: ErrorCollector
) -> list[ModuleDeclaration]:
    """Flatten defaults into every buildable declaration; drop the templates.

    Every template is flattened once on its own, so a broken template is
    reported even when nothing references it. A failure already reported
    (the same cycle, or the same message) only marks the later referrer
    failed.
    """
    merger = DefaultsMerger(declarations)
    reported: set[object] = set()

    def _record(exc: ClassforgeError, name: str) -> None:
        key = frozenset(exc.cycle) if isinstance(exc, CyclicDefaultsError) else str(exc)
        if key in reported:
            errors.mark_failed(name)
        else:
            reported.add(key)
            errors.add(exc, name)

    for template in merger.templates.values():
        try:
            merger.flatten(template)
        except ClassforgeError as exc:
            _record(exc, template.name)

    flattened: list[ModuleDeclaration] = []
    for decl in declarations:
        if decl.is_defaults:
            continue
        try:
            flattened.append(merger.flatten(decl))
        except ClassforgeError as exc:
            _record(exc, decl.name)
            flattened.append(decl)
    return flattened


def check_roles(
    declarations: Sequence[ModuleDeclaration], errors: ErrorCollector
) -> list[ModuleDeclaration]:
    """Record a ``RoleConflictError`` for names in both libs and static_libs."""
    for decl in declarations:
        static = set(decl.properties.static_libs)
        both = [n for n in dict.fromkeys(decl.properties.libs) if n in static]
        if both:
            errors.add(RoleConflictError(decl.name, both), decl.name)
    return list(declarations)


def expand_variants(
    declarations: Sequence[ModuleDeclaration],
    selector: VariantSelector,
    errors: ErrorCollector,
) -> ModuleGraph:
    """Instantiate every declaration into the module graph."""
    graph = ModuleGraph()
    for decl in declarations:
        for module in selector.expand(decl):
            try:
                graph.add_module(module)
            except ModuleDeclarationError as exc:
                errors.add(exc, module.name, module.variant.name)
    logger.debug("Expanded %d declarations into %d modules", len(declarations), len(graph))
    return graph


def _edges_for(module: Module, sdk_resolver: SdkVersionResolver) -> list[DependencyEdge]:
    variant = module.variant.name
    edges: list[DependencyEdge] = []
    if module.is_source:
        sdk = sdk_resolver.resolve(module)
        edges.extend(
            DependencyEdge(module.name, name, DependencyRole.BOOTCLASSPATH, variant)
            for name in sdk.bootclasspath
            if name != NO_BOOTCLASSPATH
        )
        edges.extend(
            DependencyEdge(module.name, name, DependencyRole.SHARED, variant)
            for name in sdk.framework_classpath
        )
    props = module.properties
    edges.extend(
        DependencyEdge(module.name, name, DependencyRole.SHARED, variant)
        for name in props.libs
    )
    edges.extend(
        DependencyEdge(module.name, name, DependencyRole.STATIC, variant)
        for name in props.static_libs
    )
    return edges


def materialize_edges(
    graph: ModuleGraph, sdk_resolver: SdkVersionResolver, errors: ErrorCollector
) -> None:
    """Create every dependency edge and report the ones with no target."""
    for module in graph.modules:
        try:
            edges = _edges_for(module, sdk_resolver)
        except ClassforgeError as exc:
            errors.add(exc, module.name, module.variant.name)
            continue
        for edge in edges:
            graph.connect(edge)
            if graph.get(edge.variant, edge.target) is None:
                errors.add(
                    UnresolvedDependencyError(
                        module.name, edge.target, role=edge.role.value, variant=edge.variant
                    ),
                    module.name,
                    module.variant.name,
                )


def check_cycles(graph: ModuleGraph, errors: ErrorCollector) -> None:
    """Record every dependency cycle and fail all modules on it."""
    for cycle in graph.detect_cycles():
        errors.add(cycle, cycle.cycle[0], cycle.variant)
        for name in cycle.cycle:
            errors.mark_failed(name, cycle.variant)
