"""Build context threaded through every resolution and synthesis step.

``BuildConfig`` replaces any notion of a global build directory or ambient
platform state: the build root, the host operating systems to expand host
variants for, the standard-library module names and the output naming
convention all live on one immutable value. Every component receives it
explicitly, which keeps resolution referentially transparent.

The optional ``config:`` section of a YAML declaration document maps onto
this dataclass field-for-field via ``BuildConfig.from_mapping``.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CORE_RUNTIME_MODULES: tuple[str, ...] = ("core-oj", "core-libart")
"""Bootclasspath for device modules with no explicit SDK selector."""

DEFAULT_FRAMEWORK_MODULES: tuple[str, ...] = ("ext", "framework", "okhttp")
"""Implicit classpath for device modules with no explicit SDK selector."""

DEFAULT_SDK_STUB_MODULES: dict[str, str] = {
    "current": "android_stubs_current",
    "system_current": "android_system_stubs_current",
    "test_current": "android_test_stubs_current",
}

_OS_NAMES = {"linux": "linux", "darwin": "darwin", "windows": "windows"}


def detect_host_os() -> str:
    """Return the identifier of the operating system running the build."""
    system = platform.system().lower()
    return _OS_NAMES.get(system, system or "linux")


# ---------------------------------------------------------------------------
# BuildConfig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BuildConfig:
    """Immutable build context.

    Attributes:
        build_root: Root directory for intermediate outputs. Artifacts live
            under ``<build_root>/.intermediates/<module>/<variant>/``.
        host_oses: Host operating systems that host-capable modules are
            expanded for. Each yields a ``<os>_common`` variant.
        device_variant: Directory name of the device-common variant.
        core_runtime_modules: Default device bootclasspath module names,
            in registration order.
        framework_modules: Default device classpath module names, in
            registration order.
        sdk_stub_modules: Named SDK selector -> stub module name.
        prebuilt_sdk_prefix: Prefix of prebuilt SDK module names; numeric
            selector ``N`` resolves to ``<prefix><N>``.
        compiled_jar_name: File name of a source module's compile output.
        combined_jar_name: File name of a source module's combined output,
            the artifact advertised to downstream modules.
        path_separator: Separator used to join classpath entries in flags.
    """

    build_root: str = "out/soong"
    host_oses: tuple[str, ...] = field(default_factory=lambda: (detect_host_os(),))
    device_variant: str = "android_common"
    core_runtime_modules: tuple[str, ...] = DEFAULT_CORE_RUNTIME_MODULES
    framework_modules: tuple[str, ...] = DEFAULT_FRAMEWORK_MODULES
    sdk_stub_modules: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_SDK_STUB_MODULES)
    )
    prebuilt_sdk_prefix: str = "sdk_v"
    compiled_jar_name: str = "classes-compiled.jar"
    combined_jar_name: str = "classes.jar"
    path_separator: str = os.pathsep

    def __post_init__(self) -> None:
        if not self.build_root:
            raise ValueError("build_root must not be empty")
        if not self.host_oses:
            raise ValueError("host_oses must name at least one operating system")
        if self.compiled_jar_name == self.combined_jar_name:
            raise ValueError(
                "compiled_jar_name and combined_jar_name must differ, "
                f"got {self.compiled_jar_name!r} for both"
            )
        if not self.path_separator:
            raise ValueError("path_separator must not be empty")

    @property
    def intermediates_dir(self) -> Path:
        """Return ``<build_root>/.intermediates``."""
        return Path(self.build_root) / ".intermediates"

    def host_variant(self, os_name: str) -> str:
        """Return the variant directory name for a host operating system."""
        return f"{os_name}_common"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, **overrides: Any) -> BuildConfig:
        """Build a config from a plain mapping (e.g. a YAML ``config:`` section).

        List values are converted to tuples. Keyword ``overrides`` take
        precedence over ``data`` and are ignored when None.

        Raises:
            ValueError: On unknown keys or values of the wrong shape.
        """
        known = {f.name for f in fields(cls)}
        merged: dict[str, Any] = dict(data or {})
        merged.update({k: v for k, v in overrides.items() if v is not None})

        unknown = sorted(set(merged) - known)
        if unknown:
            raise ValueError(f"Unknown build config keys: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        for key, value in merged.items():
            if key in ("host_oses", "core_runtime_modules", "framework_modules"):
                if isinstance(value, str) or not isinstance(value, (list, tuple)):
                    raise ValueError(f"{key} must be a list of strings")
                kwargs[key] = tuple(str(v) for v in value)
            elif key == "sdk_stub_modules":
                if not isinstance(value, Mapping):
                    raise ValueError("sdk_stub_modules must be a mapping")
                kwargs[key] = {str(k): str(v) for k, v in value.items()}
            else:
                kwargs[key] = str(value)
        return cls(**kwargs)
