"""SDK selector parsing and bootclasspath selection."""

from classforge.core.sdk.resolver import (
    NO_BOOTCLASSPATH,
    SdkResolution,
    SdkSpec,
    SdkSpecKind,
    SdkVersionResolver,
    parse_sdk_version,
)

__all__ = [
    "NO_BOOTCLASSPATH",
    "SdkResolution",
    "SdkSpec",
    "SdkSpecKind",
    "SdkVersionResolver",
    "parse_sdk_version",
]
