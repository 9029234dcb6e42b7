"""Tests for the YAML declaration loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from classforge.core.modules import ModuleKind
from classforge.exceptions import BuildAbortedError, ModuleDeclarationError
from classforge.loader import load, loads, parse_declarations


class TestParseDeclarations:
    def test_kinds_dispatched(self) -> None:
        decls = parse_declarations([
            {"kind": "java_library", "name": "foo"},
            {"kind": "java_import", "name": "bar", "jars": ["bar.jar"]},
        ])
        assert [d.kind for d in decls] == [ModuleKind.SOURCE_LIBRARY, ModuleKind.PREBUILT_IMPORT]

    def test_all_bad_entries_reported(self) -> None:
        with pytest.raises(BuildAbortedError) as excinfo:
            parse_declarations([
                {"name": "no-kind"},
                "not a mapping",
                {"kind": "nope", "name": "x"},
                {"kind": "java_library", "name": "ok"},
            ])
        assert len(excinfo.value.errors) == 3
        assert all(isinstance(e, ModuleDeclarationError) for e in excinfo.value.errors)

    def test_input_not_mutated(self) -> None:
        entry = {"kind": "java_library", "name": "foo"}
        parse_declarations([entry])
        assert entry["kind"] == "java_library"


class TestLoads:
    def test_bare_list(self) -> None:
        doc = loads("- {kind: java_library, name: foo, srcs: [a.java]}\n")
        assert [d.name for d in doc.declarations] == ["foo"]
        assert doc.config == {}

    def test_config_and_modules(self) -> None:
        doc = loads(
            "config:\n"
            "  build_root: out\n"
            "  host_oses: [darwin]\n"
            "modules:\n"
            "  - kind: java_library\n"
            "    name: foo\n"
            "    sdk_version: 14\n"
        )
        assert doc.declarations[0].properties.sdk_version == "14"
        config = doc.build_config()
        assert config.build_root == "out"
        assert config.host_oses == ("darwin",)
        assert doc.build_config(build_root="x").build_root == "x"

    def test_empty(self) -> None:
        assert loads("").declarations == []

    @pytest.mark.parametrize(
        "text",
        [
            "just a string\n",
            "extra: 1\nmodules: []\n",
            "config: [1]\n",
            "modules: {a: 1}\n",
            "modules: [unclosed\n",
        ],
    )
    def test_bad_shape(self, text: str) -> None:
        with pytest.raises(ModuleDeclarationError):
            loads(text)

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "Modules.yaml"
        path.write_text("- {kind: java_defaults, name: d}\n", encoding="utf-8")
        assert load(path).declarations[0].is_defaults
