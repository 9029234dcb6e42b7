"""Classpath and bootclasspath construction.

Walks a module's dependency names by role and resolves each to the
artifacts its target advertises:

- source libraries advertise their combined jar,
- prebuilt imports advertise their declared jars, verbatim.

Bootclasspath
    The SDK resolver's module names in order. The no-bootclasspath sentinel
    is kept literally so it reaches the rendered flag.

Classpath
    Implicit framework modules, then ``libs``, then ``static_libs``, each in
    declaration order. A path already on either list is skipped, so the two
    lists never share an entry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from classforge.core.classpath.graph import ModuleGraph
from classforge.core.classpath.models import Classpath, ResolvedClasspaths
from classforge.core.modules.models import DependencyRole, Module
from classforge.core.sdk.resolver import NO_BOOTCLASSPATH, SdkVersionResolver
from classforge.core.variants.selector import VariantSelector

logger = logging.getLogger(__name__)


class ClasspathBuilder:
    """Computes ordered, deduplicated bootclasspath and classpath lists.

    The builder only reads the graph, so one instance can serve many
    modules concurrently.

    Args:
        graph: The fully built module graph.
        selector: Supplies each dependency's advertised artifacts.
        sdk_resolver: Maps SDK selectors to bootclasspath module names.
    """

    def __init__(
        self,
        graph: ModuleGraph,
        selector: VariantSelector,
        sdk_resolver: SdkVersionResolver,
    ) -> None:
        self._graph = graph
        self._selector = selector
        self._sdk = sdk_resolver

    def _artifacts(
        self, module: Module, names: Iterable[str], role: DependencyRole
    ) -> list[str]:
        paths: list[str] = []
        for name in names:
            dep = self._graph.resolve(module, name, role)
            paths.extend(self._selector.advertised_artifacts(dep))
        return paths

    def build(self, module: Module) -> ResolvedClasspaths:
        """Resolve both classpaths of ``module``.

        Raises:
            UnknownSdkVersionError: If the SDK selector cannot be resolved.
            UnresolvedDependencyError: If a dependency is missing from the
                module's variant.
        """
        sdk = self._sdk.resolve(module)

        bootclasspath = Classpath()
        for name in sdk.bootclasspath:
            if name == NO_BOOTCLASSPATH:
                bootclasspath.add(NO_BOOTCLASSPATH)
            else:
                bootclasspath.extend(
                    self._artifacts(module, [name], DependencyRole.BOOTCLASSPATH)
                )

        props = module.properties
        candidates = (
            self._artifacts(module, sdk.framework_classpath, DependencyRole.SHARED)
            + self._artifacts(module, props.libs, DependencyRole.SHARED)
            + self._artifacts(module, props.static_libs, DependencyRole.STATIC)
        )
        classpath = Classpath(p for p in candidates if p not in bootclasspath)

        logger.debug(
            "%s: bootclasspath=%d entries, classpath=%d entries (sdk %s)",
            module,
            len(bootclasspath),
            len(classpath),
            sdk.spec.kind.value,
        )
        return ResolvedClasspaths(
            bootclasspath=bootclasspath.entries,
            classpath=classpath.entries,
            sdk=sdk,
        )
