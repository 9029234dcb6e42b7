"""Variant expansion and the intermediate output path convention.

Every buildable declaration is instantiated once per applicable target:
the device-common variant and/or one ``<os>_common`` variant per configured
host operating system. Device and host instances of one name are separate
``Module`` records and are resolved independently.

Artifacts of a module ``M`` in variant ``V`` live under::

    <build_root>/.intermediates/M/V/<artifact-name>

Prebuilt imports own no intermediates: their artifacts are the declared
jars, verbatim.
"""

from __future__ import annotations

from pathlib import Path

from classforge.config import BuildConfig
from classforge.core.modules.models import (
    Module,
    ModuleDeclaration,
    ModuleKind,
    OsClass,
    Variant,
)


class VariantSelector:
    """Decides the variants of each declaration and where their outputs go.

    Args:
        config: The build context.
    """

    def __init__(self, config: BuildConfig) -> None:
        self._config = config
        self._device = Variant(OsClass.DEVICE, config.device_variant)
        self._hosts = tuple(
            Variant(OsClass.HOST, config.host_variant(os_name))
            for os_name in config.host_oses
        )

    @property
    def device_variant(self) -> Variant:
        return self._device

    @property
    def host_variants(self) -> tuple[Variant, ...]:
        return self._hosts

    @property
    def all_variants(self) -> tuple[Variant, ...]:
        return (self._device, *self._hosts)

    def variant_named(self, name: str) -> Variant | None:
        for variant in self.all_variants:
            if variant.name == name:
                return variant
        return None

    def variants_for(self, declaration: ModuleDeclaration) -> list[Variant]:
        """Return the variants ``declaration`` is built for, device first."""
        if declaration.kind is ModuleKind.DEFAULTS_TEMPLATE:
            return []
        variants: list[Variant] = []
        if declaration.device_supported:
            variants.append(self._device)
        if declaration.host_supported:
            variants.extend(self._hosts)
        return variants

    def expand(self, declaration: ModuleDeclaration) -> list[Module]:
        """Instantiate a flattened declaration into one ``Module`` per variant."""
        return [
            Module(
                name=declaration.name,
                variant=variant,
                kind=declaration.kind,
                kind_tag=declaration.kind_tag,
                properties=declaration.properties,
            )
            for variant in self.variants_for(declaration)
        ]

    # -- Path convention --

    def intermediates_dir(self, module: Module) -> Path:
        return self._config.intermediates_dir / module.name / module.variant.name

    def output_path(self, module: Module, artifact_name: str) -> str:
        return str(self.intermediates_dir(module) / artifact_name)

    def compiled_jar(self, module: Module) -> str:
        """Path of the compile action's output for a source library."""
        return self.output_path(module, self._config.compiled_jar_name)

    def combined_jar(self, module: Module) -> str:
        """Path of the combine action's output for a source library."""
        return self.output_path(module, self._config.combined_jar_name)

    def primary_artifacts(self, module: Module) -> tuple[str, ...]:
        """The module's own output, before static dependencies are merged in."""
        if module.is_prebuilt:
            return module.properties.jars
        return (self.compiled_jar(module),)

    def advertised_artifacts(self, module: Module) -> tuple[str, ...]:
        """What downstream modules see when they depend on ``module``.

        The combined jar for source libraries; the declared jars, verbatim,
        for prebuilt imports.
        """
        if module.is_prebuilt:
            return module.properties.jars
        return (self.combined_jar(module),)
