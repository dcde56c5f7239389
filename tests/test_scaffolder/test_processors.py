"""Tests for the content and path processors."""

from __future__ import annotations

from pathlib import Path

import pytest

from bq_modgen.scaffolder.errors import TransformError
from bq_modgen.scaffolder.processors import (
    JavaPackageProcessor,
    JinjaTemplateProcessor,
    ModuleNamePathProcessor,
    ModuleProviderProcessor,
    RenameProcessor,
)
from bq_modgen.scaffolder.template import TemplateHandle


pytestmark = pytest.mark.unit


def _handle(path: str | Path, content=None, binary: bool = False) -> TemplateHandle:
    return TemplateHandle(str(path), Path(path), content, binary)


class TestJinjaTemplateProcessor:
    def test_expands_dotted_keys(self, make_properties):
        handle = _handle("/out/A.java", "package {{ java_package }};\n")
        result = JinjaTemplateProcessor()(handle, make_properties())
        assert result.content == "package com.acme;\n"

    def test_missing_keys_expand_to_empty(self, make_properties):
        handle = _handle("/out/a.txt", "[{{ no_such_key }}]")
        assert JinjaTemplateProcessor()(handle, make_properties()).content == "[]"

    def test_boolean_flags_drive_blocks(self, make_properties):
        handle = _handle("/out/a.txt", "{% if bq_di %}di{% else %}legacy{% endif %}")
        assert JinjaTemplateProcessor()(handle, make_properties(bq__di=True)).content == "di"
        assert JinjaTemplateProcessor()(handle, make_properties(bq__di=False)).content == "legacy"

    def test_keeps_trailing_newline(self, make_properties):
        handle = _handle("/out/a.txt", "x\n")
        assert JinjaTemplateProcessor()(handle, make_properties()).content == "x\n"

    def test_binary_passthrough(self, make_properties):
        handle = _handle("/out/a.bin", b"{{ java_package }}", binary=True)
        assert JinjaTemplateProcessor()(handle, make_properties()) is handle

    def test_syntax_error_is_transform_error(self, make_properties):
        handle = _handle("/out/a.txt", "{% if %}")
        with pytest.raises(TransformError):
            JinjaTemplateProcessor()(handle, make_properties())

    def test_does_not_mutate_input(self, make_properties):
        handle = _handle("/out/a.txt", "{{ project_name }}")
        JinjaTemplateProcessor()(handle, make_properties())
        assert handle.content == "{{ project_name }}"


class TestJavaPackageProcessor:
    def test_relocates_example_dir(self, make_properties):
        handle = _handle("/out/demo/src/main/java/example/MyModule.java")
        result = JavaPackageProcessor()(handle, make_properties(java__package="com.acme.core"))
        assert result.output_path == Path("/out/demo/src/main/java/com/acme/core/MyModule.java")

    def test_only_last_example_segment(self, make_properties):
        handle = _handle("/example/demo/src/main/java/example/A.java")
        result = JavaPackageProcessor()(handle, make_properties())
        assert result.output_path == Path("/example/demo/src/main/java/com/acme/A.java")

    def test_untouched_without_example(self, make_properties):
        handle = _handle("/out/demo/pom.xml")
        assert JavaPackageProcessor()(handle, make_properties()) is handle

    def test_file_named_example_untouched(self, make_properties):
        handle = _handle("/out/demo/example")
        assert JavaPackageProcessor()(handle, make_properties()) is handle


class TestModuleNamePathProcessor:
    def test_renames(self, make_properties):
        handle = _handle("/out/MyModuleProviderTest.java")
        result = ModuleNamePathProcessor()(handle, make_properties(module__name="MyDemo"))
        assert result.output_path == Path("/out/MyDemoModuleProviderTest.java")

    def test_untouched_when_no_placeholder(self, make_properties):
        handle = _handle("/out/pom.xml")
        assert ModuleNamePathProcessor()(handle, make_properties()) is handle

    def test_requires_module_name(self, make_properties):
        with pytest.raises(TransformError):
            ModuleNamePathProcessor()(_handle("/out/MyModule.java"), make_properties(module__name=""))


class TestModuleProviderProcessor:
    def test_fully_qualified_provider(self, make_properties):
        handle = _handle("/out/io.bootique.BQModuleProvider", "example.MyModuleProvider\n")
        result = ModuleProviderProcessor()(handle, make_properties())
        assert result.content == "com.acme.DemoModuleProvider\n"

    def test_default_package(self, make_properties):
        handle = _handle("/out/io.bootique.BQModuleProvider", "")
        result = ModuleProviderProcessor()(handle, make_properties(java__package=""))
        assert result.content == "DemoModuleProvider\n"


class TestRenameProcessor:
    def test_rename_keeps_directory(self, make_properties):
        result = RenameProcessor(".gitignore")(_handle("/out/demo/gitignore", "x"), make_properties())
        assert result.output_path == Path("/out/demo/.gitignore")
        assert result.content == "x"
