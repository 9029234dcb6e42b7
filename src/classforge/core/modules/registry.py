"""Static module-kind registry.

Maps a module-kind tag (``java_library``, ``java_import``...) to a
constructor that validates a raw declaration mapping and returns a tagged
``ModuleDeclaration``. Downstream code dispatches on ``ModuleDeclaration.kind``
rather than on Python types, so adding a kind means registering one more
constructor here.

Built-in kinds
--------------
=====================  ================  =====================================
Tag                    Kind              Variants
=====================  ================  =====================================
``java_library``       source-library    device, + hosts if ``host_supported``
``java_library_host``  source-library    hosts only
``java_import``        prebuilt-import   device, + hosts if ``host_supported``
``android_prebuilt_sdk`` prebuilt-import device only
``java_defaults``      defaults-template none (flattened away)
=====================  ================  =====================================
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from classforge.core.modules.models import (
    ModuleDeclaration,
    ModuleKind,
    ModuleProperties,
)
from classforge.exceptions import ModuleDeclarationError

KindConstructor = Callable[[Mapping[str, Any]], ModuleDeclaration]

_SHARED_FIELDS = frozenset({
    "srcs", "libs", "static_libs", "sdk_version", "no_standard_libs", "defaults",
})


# ---------------------------------------------------------------------------
# Field coercion helpers
# ---------------------------------------------------------------------------


def _string_list(value: Any, field_name: str, module: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ModuleDeclarationError(
            f"{module}: {field_name} must be a list of strings, got {value!r}"
        )
    items = tuple(value)
    for item in items:
        if not isinstance(item, str) or not item:
            raise ModuleDeclarationError(
                f"{module}: {field_name} entries must be non-empty strings, "
                f"got {item!r}"
            )
    return items


def _optional_bool(value: Any, field_name: str, module: str) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    raise ModuleDeclarationError(
        f"{module}: {field_name} must be a boolean, got {value!r}"
    )


def _optional_sdk_version(value: Any, module: str) -> str | None:
    if value is None:
        return None
    # YAML turns `sdk_version: 14` into an int.
    if isinstance(value, bool):
        raise ModuleDeclarationError(
            f"{module}: sdk_version must be a string, got {value!r}"
        )
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    raise ModuleDeclarationError(
        f"{module}: sdk_version must be a string, got {value!r}"
    )


def _module_name(raw: Mapping[str, Any]) -> str:
    name = raw.get("name")
    if not isinstance(name, str) or not name:
        raise ModuleDeclarationError(f"Module declaration without a name: {dict(raw)!r}")
    return name


def _check_fields(raw: Mapping[str, Any], allowed: frozenset[str], tag: str) -> str:
    name = _module_name(raw)
    unknown = sorted(set(raw) - allowed - {"name"})
    if unknown:
        raise ModuleDeclarationError(
            f"{name}: {tag} does not support {', '.join(unknown)}"
        )
    return name


def _properties(raw: Mapping[str, Any], name: str) -> ModuleProperties:
    return ModuleProperties(
        srcs=_string_list(raw.get("srcs"), "srcs", name),
        jars=_string_list(raw.get("jars"), "jars", name),
        libs=_string_list(raw.get("libs"), "libs", name),
        static_libs=_string_list(raw.get("static_libs"), "static_libs", name),
        defaults=_string_list(raw.get("defaults"), "defaults", name),
        sdk_version=_optional_sdk_version(raw.get("sdk_version"), name),
        no_standard_libs=_optional_bool(
            raw.get("no_standard_libs"), "no_standard_libs", name
        ),
    )


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def java_library(raw: Mapping[str, Any]) -> ModuleDeclaration:
    name = _check_fields(raw, _SHARED_FIELDS | {"host_supported"}, "java_library")
    return ModuleDeclaration(
        name=name,
        kind_tag="java_library",
        kind=ModuleKind.SOURCE_LIBRARY,
        properties=_properties(raw, name),
        host_supported=bool(
            _optional_bool(raw.get("host_supported"), "host_supported", name)
        ),
    )


def java_library_host(raw: Mapping[str, Any]) -> ModuleDeclaration:
    name = _check_fields(raw, _SHARED_FIELDS, "java_library_host")
    return ModuleDeclaration(
        name=name,
        kind_tag="java_library_host",
        kind=ModuleKind.SOURCE_LIBRARY,
        properties=_properties(raw, name),
        device_supported=False,
        host_supported=True,
    )


def java_import(raw: Mapping[str, Any]) -> ModuleDeclaration:
    name = _check_fields(raw, frozenset({"jars", "host_supported", "prefer"}), "java_import")
    return ModuleDeclaration(
        name=name,
        kind_tag="java_import",
        kind=ModuleKind.PREBUILT_IMPORT,
        properties=_properties(raw, name),
        host_supported=bool(
            _optional_bool(raw.get("host_supported"), "host_supported", name)
        ),
        prefer=bool(_optional_bool(raw.get("prefer"), "prefer", name)),
    )


def android_prebuilt_sdk(raw: Mapping[str, Any]) -> ModuleDeclaration:
    name = _check_fields(raw, frozenset({"jars"}), "android_prebuilt_sdk")
    return ModuleDeclaration(
        name=name,
        kind_tag="android_prebuilt_sdk",
        kind=ModuleKind.PREBUILT_IMPORT,
        properties=_properties(raw, name),
    )


def java_defaults(raw: Mapping[str, Any]) -> ModuleDeclaration:
    name = _check_fields(raw, _SHARED_FIELDS, "java_defaults")
    return ModuleDeclaration(
        name=name,
        kind_tag="java_defaults",
        kind=ModuleKind.DEFAULTS_TEMPLATE,
        properties=_properties(raw, name),
        device_supported=False,
    )


# ---------------------------------------------------------------------------
# ModuleKindRegistry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegisteredKind:
    """A registry entry: tag, constructor and one-line description."""

    tag: str
    constructor: KindConstructor
    description: str


class ModuleKindRegistry:
    """Registry of module kinds, keyed by tag.

    Kinds are kept in registration order so listings are deterministic.
    """

    def __init__(self) -> None:
        self._kinds: dict[str, RegisteredKind] = {}

    def register(self, tag: str, constructor: KindConstructor, description: str = "") -> None:
        """Register ``constructor`` for ``tag``.

        Raises:
            ValueError: If ``tag`` is already registered.
        """
        if tag in self._kinds:
            raise ValueError(f"Module kind {tag!r} is already registered")
        self._kinds[tag] = RegisteredKind(tag, constructor, description)

    def __contains__(self, tag: object) -> bool:
        return tag in self._kinds

    @property
    def kinds(self) -> list[RegisteredKind]:
        return list(self._kinds.values())

    def create(self, tag: str, raw: Mapping[str, Any]) -> ModuleDeclaration:
        """Construct a declaration of kind ``tag`` from its raw fields.

        Raises:
            ModuleDeclarationError: If ``tag`` is unknown or the fields are
                invalid for that kind.
        """
        entry = self._kinds.get(tag)
        if entry is None:
            raise ModuleDeclarationError(
                f"Unknown module kind {tag!r} for {raw.get('name', '<unnamed>')!r}"
            )
        return entry.constructor(raw)


def default_registry() -> ModuleKindRegistry:
    """Create a registry pre-loaded with all built-in module kinds."""
    registry = ModuleKindRegistry()
    registry.register("java_library", java_library, "Java library compiled from sources")
    registry.register("java_library_host", java_library_host, "Host-only Java library")
    registry.register("java_import", java_import, "Prebuilt jar import")
    registry.register("android_prebuilt_sdk", android_prebuilt_sdk, "Prebuilt numbered SDK")
    registry.register("java_defaults", java_defaults, "Property template for other modules")
    return registry
