"""Build planning: declarations in, action graph out.

``BuildPlanner.plan`` runs the two resolution phases:

Phase 1 (sequential)
    The ordered passes of ``classforge.core.pipeline.passes``: prebuilt
    precedence, defaults flattening, role checks, variant expansion, edge
    materialization and cycle detection.

Phase 2 (per module, optionally parallel)
    For every module in dependency order: classpath construction, compile
    action synthesis and artifact combination. Each step reads only
    immutable records, so modules are independent; with ``jobs > 1`` they
    run on a thread pool and are collected back in dependency order, which
    keeps the plan identical to a sequential run.

Errors from both phases are collected per module. If any exist once every
module has been visited, ``plan`` raises ``BuildAbortedError`` carrying all
of them and returns no plan at all.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from classforge.config import BuildConfig
from classforge.core.actions.combine import ArtifactCombiner
from classforge.core.actions.compile import CompileActionSynthesizer
from classforge.core.actions.models import CombineAction, CompileAction, ModuleActions
from classforge.core.classpath.builder import ClasspathBuilder
from classforge.core.classpath.graph import ModuleGraph
from classforge.core.modules.models import Module, ModuleDeclaration
from classforge.core.pipeline import passes
from classforge.core.sdk.resolver import SdkVersionResolver
from classforge.core.variants.selector import VariantSelector
from classforge.exceptions import BuildAbortedError, ClassforgeError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# BuildPlan
# ---------------------------------------------------------------------------


@dataclass
class BuildPlan:
    """The complete, error-free action graph of one planning run.

    Attributes:
        config: The build context the plan was computed with.
        modules: Per module-variant results, dependencies first.
    """

    config: BuildConfig
    modules: list[ModuleActions] = field(default_factory=list)

    def get(self, name: str, variant: str | None = None) -> ModuleActions:
        """Return the result for ``name`` (in ``variant``, default device).

        Raises:
            KeyError: If no such module-variant was planned.
        """
        variant = variant or self.config.device_variant
        for result in self.modules:
            if result.module == name and result.variant == variant:
                return result
        raise KeyError(f"{name} ({variant})")

    @property
    def actions(self) -> list[CompileAction | CombineAction]:
        return [action for result in self.modules for action in result.actions]

    def to_dict(self) -> dict[str, Any]:
        return {
            "build_root": self.config.build_root,
            "modules": [m.to_dict() for m in self.modules],
        }


# ---------------------------------------------------------------------------
# BuildPlanner
# ---------------------------------------------------------------------------


class BuildPlanner:
    """Resolves a module set and synthesizes its build actions.

    Args:
        config: Build context. Defaults to ``BuildConfig()``.
        jobs: Worker threads for Phase 2. 1 runs sequentially.
    """

    def __init__(self, config: BuildConfig | None = None, jobs: int = 1) -> None:
        if jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {jobs}")
        self._config = config or BuildConfig()
        self._jobs = jobs
        self._selector = VariantSelector(self._config)

    @property
    def config(self) -> BuildConfig:
        return self._config

    @property
    def selector(self) -> VariantSelector:
        return self._selector

    def build_graph(
        self,
        declarations: Iterable[ModuleDeclaration],
        errors: passes.ErrorCollector,
    ) -> tuple[ModuleGraph, SdkVersionResolver]:
        """Run Phase 1 and return the materialized graph."""
        decls = list(declarations)
        decls = passes.select_prebuilts(decls, errors)
        decls = passes.flatten_defaults(decls, errors)
        decls = passes.check_roles(decls, errors)
        graph = passes.expand_variants(decls, self._selector, errors)

        device = self._selector.device_variant.name
        prebuilt_sdks = {
            m.name for m in graph.modules_in(device)
            if m.kind_tag == "android_prebuilt_sdk"
        }
        sdk_resolver = SdkVersionResolver(self._config, prebuilt_sdks)

        passes.materialize_edges(graph, sdk_resolver, errors)
        passes.check_cycles(graph, errors)
        return graph, sdk_resolver

    def plan(self, declarations: Iterable[ModuleDeclaration]) -> BuildPlan:
        """Plan every module of ``declarations``.

        Raises:
            BuildAbortedError: If any module failed to resolve. Carries
                every collected error.
        """
        errors = passes.ErrorCollector()
        graph, sdk_resolver = self.build_graph(declarations, errors)

        builder = ClasspathBuilder(graph, self._selector, sdk_resolver)
        compiler = CompileActionSynthesizer(self._config, self._selector)
        combiner = ArtifactCombiner(graph, self._selector)

        def _synthesize(module: Module) -> ModuleActions | ClassforgeError:
            try:
                return self._synthesize(module, builder, compiler, combiner)
            except ClassforgeError as exc:
                return exc

        pending = [m for m in graph.topological_order() if not errors.failed(m)]
        if self._jobs > 1 and len(pending) > 1:
            with ThreadPoolExecutor(max_workers=self._jobs) as pool:
                outcomes = list(pool.map(_synthesize, pending))
        else:
            outcomes = [_synthesize(m) for m in pending]

        plan = BuildPlan(config=self._config)
        for module, outcome in zip(pending, outcomes):
            if isinstance(outcome, ClassforgeError):
                errors.add(outcome, module.name, module.variant.name)
            else:
                plan.modules.append(outcome)

        if errors:
            raise BuildAbortedError(errors.errors)
        logger.info(
            "Planned %d modules, %d actions", len(plan.modules), len(plan.actions)
        )
        return plan

    def _synthesize(
        self,
        module: Module,
        builder: ClasspathBuilder,
        compiler: CompileActionSynthesizer,
        combiner: ArtifactCombiner,
    ) -> ModuleActions:
        if module.is_prebuilt:
            return ModuleActions(
                module=module.name,
                variant=module.variant.name,
                kind=module.kind_tag,
                artifacts=self._selector.advertised_artifacts(module),
            )
        classpaths = builder.build(module)
        return ModuleActions(
            module=module.name,
            variant=module.variant.name,
            kind=module.kind_tag,
            artifacts=self._selector.advertised_artifacts(module),
            classpaths=classpaths,
            compile=compiler.synthesize(module, classpaths),
            combine=combiner.combine(module),
        )
