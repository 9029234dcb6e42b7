"""Shared fixtures for CLI tests: declaration documents on disk."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

PLATFORM_MODULES = """\
  - {kind: java_library, name: core-oj, srcs: [a.java], no_standard_libs: true}
  - {kind: java_library, name: core-libart, srcs: [a.java], no_standard_libs: true}
  - {kind: java_library, name: ext, srcs: [a.java], no_standard_libs: true}
  - {kind: java_library, name: framework, srcs: [a.java], no_standard_libs: true}
  - {kind: java_library, name: okhttp, srcs: [a.java], no_standard_libs: true}
  - {kind: android_prebuilt_sdk, name: sdk_v14, jars: [sdk_v14.jar]}
"""


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def modules_file(tmp_path: Path) -> Path:
    """A valid document: foo depends on bar (shared) and baz (static)."""
    path = tmp_path / "Modules.yaml"
    path.write_text(
        "config:\n"
        "  build_root: out\n"
        "  host_oses: [linux]\n"
        "  path_separator: ':'\n"
        "modules:\n"
        "  - {kind: java_library, name: foo, srcs: [a.java], libs: [bar], static_libs: [baz]}\n"
        "  - {kind: java_library, name: bar, srcs: [b.java], host_supported: true}\n"
        "  - {kind: java_import, name: baz, jars: [baz.jar]}\n"
        + PLATFORM_MODULES,
        encoding="utf-8",
    )
    return path


@pytest.fixture
def broken_file(tmp_path: Path) -> Path:
    """A document with two independent resolution errors."""
    path = tmp_path / "Broken.yaml"
    path.write_text(
        "config:\n"
        "  host_oses: [linux]\n"
        "modules:\n"
        "  - {kind: java_library, name: foo, srcs: [a.java], libs: [missing]}\n"
        "  - {kind: java_library, name: qux, srcs: [q.java], sdk_version: '99'}\n"
        + PLATFORM_MODULES,
        encoding="utf-8",
    )
    return path
