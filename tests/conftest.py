"""Shared fixtures for classforge tests.

``plan_modules`` mirrors a typical platform tree: the core runtime, the
framework libraries and the SDK stubs are declared as ``java_library``
modules with ``no_standard_libs``, and a prebuilt SDK ``sdk_v14`` is
registered, so test modules only need to declare what they exercise.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest

from classforge.config import BuildConfig
from classforge.core.modules.models import ModuleDeclaration
from classforge.core.pipeline import BuildPlan, BuildPlanner
from classforge.loader import parse_declarations

BUILD_ROOT = os.path.join(os.sep, "tmp", "classforge_test")

STANDARD_LIBRARIES = (
    "core-oj",
    "core-libart",
    "framework",
    "ext",
    "okhttp",
    "android_stubs_current",
    "android_system_stubs_current",
    "android_test_stubs_current",
)


def standard_entries() -> list[dict[str, Any]]:
    """Raw declarations of the platform modules every test tree carries."""
    entries: list[dict[str, Any]] = [
        {"kind": "java_library", "name": name, "srcs": ["a.java"], "no_standard_libs": True}
        for name in STANDARD_LIBRARIES
    ]
    entries.append({"kind": "android_prebuilt_sdk", "name": "sdk_v14", "jars": ["sdk_v14.jar"]})
    return entries


@pytest.fixture
def config() -> BuildConfig:
    """A build context with a fixed build root, host OS and separator."""
    return BuildConfig(build_root=BUILD_ROOT, host_oses=("linux",), path_separator=":")


@pytest.fixture
def intermediate(config: BuildConfig) -> Callable[..., str]:
    """Return ``f(name, variant="android_common", jar=<combined>)`` -> path."""

    def _path(name: str, variant: str = "android_common", jar: str | None = None) -> str:
        return os.path.join(
            BUILD_ROOT, ".intermediates", name, variant, jar or config.combined_jar_name
        )

    return _path


@pytest.fixture
def declare() -> Callable[[list[dict[str, Any]]], list[ModuleDeclaration]]:
    """Return ``f(entries)`` -> declarations, with the platform modules appended."""

    def _declare(entries: list[dict[str, Any]]) -> list[ModuleDeclaration]:
        return parse_declarations(list(entries) + standard_entries())

    return _declare


@pytest.fixture
def plan_modules(
    config: BuildConfig,
    declare: Callable[[list[dict[str, Any]]], list[ModuleDeclaration]],
) -> Callable[[list[dict[str, Any]]], BuildPlan]:
    """Return ``f(entries)`` -> BuildPlan for the entries plus platform modules."""

    def _plan(entries: list[dict[str, Any]]) -> BuildPlan:
        return BuildPlanner(config).plan(declare(entries))

    return _plan
