"""Compile action synthesis for source libraries."""

from __future__ import annotations

from collections.abc import Sequence

from classforge.config import BuildConfig
from classforge.core.actions.models import CompileAction
from classforge.core.classpath.models import ResolvedClasspaths
from classforge.core.modules.models import Module
from classforge.core.variants.selector import VariantSelector


def render_flag(flag: str, entries: Sequence[str], separator: str) -> str:
    """Render ``<flag> a<sep>b`` or the empty string when ``entries`` is empty."""
    if not entries:
        return ""
    return f"{flag} {separator.join(entries)}"


class CompileActionSynthesizer:
    """Emits the ``javac`` action of a source library.

    Args:
        config: Supplies the path separator used in flags.
        selector: Supplies the compiled-jar path.
    """

    def __init__(self, config: BuildConfig, selector: VariantSelector) -> None:
        self._config = config
        self._selector = selector

    def synthesize(self, module: Module, classpaths: ResolvedClasspaths) -> CompileAction:
        """Build the compile action for ``module``.

        The sentinel bootclasspath entry is rendered into ``bootClasspath``
        but left out of ``implicits``.

        Raises:
            ValueError: If ``module`` is not a source library.
        """
        if not module.is_source:
            raise ValueError(f"{module} is a {module.kind.value}, not a source library")

        sep = self._config.path_separator
        return CompileAction(
            module=module.name,
            variant=module.variant.name,
            inputs=module.properties.srcs,
            output=self._selector.compiled_jar(module),
            implicits=classpaths.implicits,
            args={
                "bootClasspath": render_flag("-bootclasspath", classpaths.bootclasspath, sep),
                "classpath": render_flag("-classpath", classpaths.classpath, sep),
            },
        )
