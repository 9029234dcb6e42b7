"""YAML module-declaration loader.

Module declarations normally come from an external configuration parser.
This loader accepts the same fields as plain YAML data so the CLI and tests
can feed the planner without one:

.. code-block:: yaml

    config:
      build_root: out/soong
    modules:
      - kind: java_library
        name: foo
        srcs: [a.java]
        libs: [bar]
        static_libs: [baz]
      - kind: java_import
        name: bar
        jars: [bar.jar]

A document may also be a bare list of module mappings. Every declaration
is validated; all problems are reported together.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from classforge.config import BuildConfig
from classforge.core.modules.models import ModuleDeclaration
from classforge.core.modules.registry import ModuleKindRegistry, default_registry
from classforge.exceptions import (
    BuildAbortedError,
    ClassforgeError,
    ModuleDeclarationError,
)


@dataclass
class DeclarationFile:
    """The parsed content of a declaration document."""

    declarations: list[ModuleDeclaration] = field(default_factory=list)
    config: dict[str, Any] = field(default_factory=dict)

    def build_config(self, **overrides: Any) -> BuildConfig:
        """Build the ``BuildConfig`` from the ``config:`` section."""
        return BuildConfig.from_mapping(self.config, **overrides)


def parse_declarations(
    entries: Iterable[Any], registry: ModuleKindRegistry | None = None
) -> list[ModuleDeclaration]:
    """Turn raw mappings (each with a ``kind`` key) into declarations.

    Raises:
        BuildAbortedError: Carrying one ``ModuleDeclarationError`` per bad
            entry, if any.
    """
    registry = registry or default_registry()
    declarations: list[ModuleDeclaration] = []
    errors: list[ClassforgeError] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            errors.append(
                ModuleDeclarationError(f"Module entry #{index} is not a mapping: {entry!r}")
            )
            continue
        fields = dict(entry)
        tag = fields.pop("kind", None)
        if not isinstance(tag, str):
            errors.append(
                ModuleDeclarationError(
                    f"Module entry #{index} ({fields.get('name', '<unnamed>')!r}) "
                    f"has no kind"
                )
            )
            continue
        try:
            declarations.append(registry.create(tag, fields))
        except ModuleDeclarationError as exc:
            errors.append(exc)
    if errors:
        raise BuildAbortedError(errors)
    return declarations


def loads(text: str, registry: ModuleKindRegistry | None = None) -> DeclarationFile:
    """Parse a YAML declaration document.

    Raises:
        ModuleDeclarationError: If the document is not valid YAML or has
            the wrong shape.
        BuildAbortedError: If any module entry is invalid.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ModuleDeclarationError(f"Invalid YAML: {exc}") from exc

    if data is None:
        return DeclarationFile()
    if isinstance(data, list):
        return DeclarationFile(declarations=parse_declarations(data, registry))
    if not isinstance(data, Mapping):
        raise ModuleDeclarationError(
            "Declaration document must be a mapping or a list of modules"
        )

    unknown = sorted(set(data) - {"config", "modules"})
    if unknown:
        raise ModuleDeclarationError(f"Unknown top-level keys: {', '.join(unknown)}")
    config = data.get("config") or {}
    if not isinstance(config, Mapping):
        raise ModuleDeclarationError("config must be a mapping")
    modules = data.get("modules") or []
    if not isinstance(modules, list):
        raise ModuleDeclarationError("modules must be a list")
    return DeclarationFile(
        declarations=parse_declarations(modules, registry),
        config=dict(config),
    )


def load(path: Path | str, registry: ModuleKindRegistry | None = None) -> DeclarationFile:
    """Read and parse the YAML declaration document at ``path``."""
    return loads(Path(path).read_text(encoding="utf-8"), registry)
