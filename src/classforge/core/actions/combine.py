"""Artifact combination.

The combine action merges a module's own primary artifact with the
artifacts of its static dependencies. Static dependencies are flattened
depth-first in declaration order: each dependency's advertised artifacts,
followed by those of *its* static dependencies, recursively. Paths are
deduplicated on first sight, so a diamond contributes each artifact once.
"""

from __future__ import annotations

from classforge.core.actions.models import CombineAction
from classforge.core.classpath.graph import ModuleGraph
from classforge.core.classpath.models import Classpath
from classforge.core.modules.models import DependencyRole, Module
from classforge.core.variants.selector import VariantSelector


class ArtifactCombiner:
    """Emits the ``combineJar`` action of a source library.

    Args:
        graph: Resolves static dependency names within the variant.
        selector: Supplies primary, advertised and output paths.
    """

    def __init__(self, graph: ModuleGraph, selector: VariantSelector) -> None:
        self._graph = graph
        self._selector = selector

    def static_artifacts(self, module: Module) -> tuple[str, ...]:
        """Flattened artifacts of ``module``'s static dependencies.

        Raises:
            UnresolvedDependencyError: If a static dependency is missing.
        """
        collected = Classpath()
        visited: set[tuple[str, str]] = {module.key}
        stack = [(module, iter(module.properties.static_libs))]
        while stack:
            current, names = stack[-1]
            for name in names:
                dep = self._graph.resolve(current, name, DependencyRole.STATIC)
                if dep.key in visited:
                    continue
                visited.add(dep.key)
                collected.extend(self._selector.advertised_artifacts(dep))
                stack.append((dep, iter(dep.properties.static_libs)))
                break
            else:
                stack.pop()
        return collected.entries

    def combine(self, module: Module) -> CombineAction:
        """Build the combine action for ``module``."""
        inputs = Classpath(self._selector.primary_artifacts(module))
        inputs.extend(self.static_artifacts(module))
        return CombineAction(
            module=module.name,
            variant=module.variant.name,
            inputs=inputs.entries,
            output=self._selector.combined_jar(module),
        )
