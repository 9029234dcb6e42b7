"""Module record data models.

Pure data holders (frozen dataclasses) describing module declarations and
their per-variant instantiations. They carry no resolution logic, so every
other package can import them without circular-dependency concerns.

Lifecycle
---------
1. ``ModuleDeclaration`` -- one per declared module, as handed over by the
   configuration parser (or the YAML loader). May reference defaults.
2. Defaults flattening produces a new ``ModuleDeclaration`` whose
   ``properties`` already include every template's values.
3. Variant expansion produces one ``Module`` per applicable variant. A
   ``Module`` is never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ModuleKind(Enum):
    """The three shapes a module can take."""

    SOURCE_LIBRARY = "source-library"
    PREBUILT_IMPORT = "prebuilt-import"
    DEFAULTS_TEMPLATE = "defaults-template"


class OsClass(Enum):
    """Target class of a variant."""

    DEVICE = "device"
    HOST = "host"


class DependencyRole(Enum):
    """Role of a dependency edge."""

    SHARED = "shared"
    STATIC = "static"
    BOOTCLASSPATH = "bootclasspath"
    DEFAULTS = "defaults"


# ---------------------------------------------------------------------------
# Variant
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Variant:
    """A target a module is independently resolved and built for.

    Attributes:
        os_class: Device or host.
        name: Directory name of the variant, e.g. ``android_common`` or
            ``linux_common``.
    """

    os_class: OsClass
    name: str

    @property
    def is_host(self) -> bool:
        return self.os_class is OsClass.HOST

    def __str__(self) -> str:
        return self.name


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModuleProperties:
    """The fixed property-record schema shared by all module kinds.

    Which fields a kind may set is enforced by the kind registry; defaults
    templates carry the shared subset (everything except ``jars``).

    Scalars use None for "not set" so the defaults merger can tell an unset
    value apart from an explicit one. ``sdk_version=""`` is an explicit empty
    selector and behaves like the default.
    """

    srcs: tuple[str, ...] = ()
    jars: tuple[str, ...] = ()
    libs: tuple[str, ...] = ()
    static_libs: tuple[str, ...] = ()
    defaults: tuple[str, ...] = ()
    sdk_version: str | None = None
    no_standard_libs: bool | None = None

    @property
    def opts_out_of_standard_libs(self) -> bool:
        return bool(self.no_standard_libs)


LIST_PROPERTIES: tuple[str, ...] = ("srcs", "jars", "libs", "static_libs")
"""List properties concatenated by the defaults merger, in schema order."""

SCALAR_PROPERTIES: tuple[str, ...] = ("sdk_version", "no_standard_libs")
"""Scalar properties overridden by the defaults merger."""


# ---------------------------------------------------------------------------
# ModuleDeclaration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModuleDeclaration:
    """One declared module, before variant expansion.

    Attributes:
        name: Module name, unique within a variant.
        kind_tag: The registry tag it was declared with (``java_library``...).
        kind: The tagged shape selected by the kind tag.
        properties: Declared (or, after flattening, effective) properties.
        device_supported: Whether a device variant is created.
        host_supported: Whether host variants are created.
        prefer: For prebuilt imports, whether it replaces a source module of
            the same name.
    """

    name: str
    kind_tag: str
    kind: ModuleKind
    properties: ModuleProperties = field(default_factory=ModuleProperties)
    device_supported: bool = True
    host_supported: bool = False
    prefer: bool = False

    @property
    def is_defaults(self) -> bool:
        return self.kind is ModuleKind.DEFAULTS_TEMPLATE

    def with_properties(self, properties: ModuleProperties) -> ModuleDeclaration:
        """Return a copy carrying ``properties`` in place of the current ones."""
        return replace(self, properties=properties)


# ---------------------------------------------------------------------------
# Module
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Module:
    """The resolved, defaults-flattened property set of one module in one variant.

    Identity is ``(name, variant)``.
    """

    name: str
    variant: Variant
    kind: ModuleKind
    kind_tag: str
    properties: ModuleProperties

    @property
    def key(self) -> tuple[str, str]:
        """Return the ``(variant, name)`` lookup key."""
        return (self.variant.name, self.name)

    @property
    def is_prebuilt(self) -> bool:
        return self.kind is ModuleKind.PREBUILT_IMPORT

    @property
    def is_source(self) -> bool:
        return self.kind is ModuleKind.SOURCE_LIBRARY

    def __str__(self) -> str:
        return f"{self.name} ({self.variant.name})"


# ---------------------------------------------------------------------------
# DependencyEdge
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DependencyEdge:
    """A directed dependency between two modules of the same variant."""

    source: str
    target: str
    role: DependencyRole
    variant: str
