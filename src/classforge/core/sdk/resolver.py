"""SDK version resolution.

Maps a module's ``sdk_version`` selector and ``no_standard_libs`` flag to the
module names that form its bootclasspath, plus the implicit framework
classpath it receives.

Selector table
--------------
===================  ==========================  ====================
Selector             Bootclasspath               Framework classpath
===================  ==========================  ====================
unset / ``""``       core runtime modules        framework modules
``N`` (numeric)      ``<prebuilt_sdk_prefix>N``  --
``current``          public stub module          --
``system_current``   system stub module          --
``test_current``     test stub module            --
no_standard_libs     sentinel ``""``             --
host variant         --                          --
===================  ==========================  ====================

Host variants win over everything else, then the opt-out flag, then the
selector. Only the default selector exposes the platform's internal
framework modules on the classpath.
"""

from __future__ import annotations

from collections.abc import Container
from dataclasses import dataclass
from enum import Enum

from classforge.config import BuildConfig
from classforge.core.modules.models import Module
from classforge.exceptions import UnknownSdkVersionError

NO_BOOTCLASSPATH = '""'
"""Sentinel bootclasspath entry meaning "compile with no implicit bootclasspath".

Rendered literally in the ``-bootclasspath`` flag, never tracked as an
upstream build dependency.
"""


class SdkSpecKind(Enum):
    """The mutually exclusive SDK configurations."""

    DEFAULT = "default"
    NUMBERED = "numbered"
    CURRENT = "current"
    SYSTEM_CURRENT = "system_current"
    TEST_CURRENT = "test_current"
    NO_STANDARD_LIBS = "no_standard_libs"
    HOST = "host"


_NAMED_SELECTORS = {
    "current": SdkSpecKind.CURRENT,
    "system_current": SdkSpecKind.SYSTEM_CURRENT,
    "test_current": SdkSpecKind.TEST_CURRENT,
}


@dataclass(frozen=True)
class SdkSpec:
    """A parsed SDK selector.

    Attributes:
        kind: Which configuration applies.
        version: The numeric API level for ``NUMBERED`` specs, else None.
        raw: The selector as declared (None if unset).
    """

    kind: SdkSpecKind
    version: int | None = None
    raw: str | None = None


@dataclass(frozen=True)
class SdkResolution:
    """The standard-library contribution of an SDK spec.

    Attributes:
        spec: The spec this resolution was computed for.
        bootclasspath: Module names (or the sentinel) in bootclasspath order.
        framework_classpath: Module names implicitly prepended to the
            classpath. Empty for every non-default spec.
    """

    spec: SdkSpec
    bootclasspath: tuple[str, ...] = ()
    framework_classpath: tuple[str, ...] = ()

    @property
    def has_sentinel(self) -> bool:
        return NO_BOOTCLASSPATH in self.bootclasspath


def parse_sdk_version(
    module: str, sdk_version: str | None, no_standard_libs: bool, host: bool
) -> SdkSpec:
    """Classify a selector into an ``SdkSpec``.

    Raises:
        UnknownSdkVersionError: If the selector is neither empty, numeric,
            nor one of the named selectors. Host variants never raise since
            they ignore the selector.
    """
    if host:
        return SdkSpec(SdkSpecKind.HOST, raw=sdk_version)
    if no_standard_libs:
        return SdkSpec(SdkSpecKind.NO_STANDARD_LIBS, raw=sdk_version)
    if sdk_version is None or sdk_version == "":
        return SdkSpec(SdkSpecKind.DEFAULT, raw=sdk_version)
    if sdk_version in _NAMED_SELECTORS:
        return SdkSpec(_NAMED_SELECTORS[sdk_version], raw=sdk_version)
    if sdk_version.isascii() and sdk_version.isdigit():
        return SdkSpec(SdkSpecKind.NUMBERED, version=int(sdk_version), raw=sdk_version)
    raise UnknownSdkVersionError(module, sdk_version, "unrecognized selector")


class SdkVersionResolver:
    """Resolves SDK selectors against the build's registered SDK modules.

    Args:
        config: The build context naming the standard-library modules.
        prebuilt_sdks: Names of registered prebuilt SDK modules (on the
            device variant). A numeric selector ``N`` is valid only when
            ``<prebuilt_sdk_prefix>N`` is in this set.
    """

    def __init__(self, config: BuildConfig, prebuilt_sdks: Container[str]) -> None:
        self._config = config
        self._prebuilt_sdks = prebuilt_sdks

    def prebuilt_sdk_name(self, version: int) -> str:
        return f"{self._config.prebuilt_sdk_prefix}{version}"

    def resolve(self, module: Module) -> SdkResolution:
        """Return the bootclasspath and framework classpath names for ``module``.

        Raises:
            UnknownSdkVersionError: If the selector is unrecognized or names
                a numbered SDK with no registered prebuilt.
        """
        props = module.properties
        spec = parse_sdk_version(
            module.name,
            props.sdk_version,
            props.opts_out_of_standard_libs,
            module.variant.is_host,
        )
        config = self._config

        if spec.kind is SdkSpecKind.HOST:
            return SdkResolution(spec)
        if spec.kind is SdkSpecKind.NO_STANDARD_LIBS:
            return SdkResolution(spec, bootclasspath=(NO_BOOTCLASSPATH,))
        if spec.kind is SdkSpecKind.DEFAULT:
            return SdkResolution(
                spec,
                bootclasspath=tuple(config.core_runtime_modules),
                framework_classpath=tuple(config.framework_modules),
            )
        if spec.version is not None:
            name = self.prebuilt_sdk_name(spec.version)
            if name not in self._prebuilt_sdks:
                raise UnknownSdkVersionError(
                    module.name, spec.raw or "", f"no prebuilt SDK module {name!r}"
                )
            return SdkResolution(spec, bootclasspath=(name,))

        stub = config.sdk_stub_modules.get(spec.kind.value)
        if stub is None:
            raise UnknownSdkVersionError(
                module.name, spec.raw or "", "no stub module configured"
            )
        return SdkResolution(spec, bootclasspath=(stub,))
