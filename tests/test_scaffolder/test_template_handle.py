"""Tests for TemplateHandle and NameComponents value objects."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest
from pydantic import ValidationError

from bq_modgen.scaffolder.components import DEFAULT_VERSION, NameComponents
from bq_modgen.scaffolder.template import TemplateHandle


pytestmark = pytest.mark.unit


class TestTemplateHandle:
    def test_with_path_returns_new_handle(self):
        handle = TemplateHandle("pom.xml", Path("/out/pom.xml"), "x")
        moved = handle.with_path("/out/other.xml")
        assert moved.output_path == Path("/out/other.xml")
        assert handle.output_path == Path("/out/pom.xml")
        assert moved.content == "x"

    def test_with_content_returns_new_handle(self):
        handle = TemplateHandle("pom.xml", Path("/out/pom.xml"), "x")
        changed = handle.with_content("y")
        assert changed.content == "y"
        assert handle.content == "x"

    def test_frozen(self):
        handle = TemplateHandle("pom.xml", Path("/out/pom.xml"), "x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            handle.content = "y"  # type: ignore[misc]

    def test_output_path_coerced(self):
        handle = TemplateHandle("a", "/out/a")  # type: ignore[arg-type]
        assert isinstance(handle.output_path, Path)

    def test_binary_rejects_text(self):
        with pytest.raises(TypeError):
            TemplateHandle("a", Path("/a"), "text", binary=True)

    def test_text_rejects_bytes(self):
        with pytest.raises(TypeError):
            TemplateHandle("a", Path("/a"), b"bytes")


class TestNameComponents:
    def test_module_name_title_cases(self):
        assert NameComponents(namespace="com.acme", name="demo").module_name == "Demo"
        assert NameComponents(namespace="com.acme", name="my-demo").module_name == "MyDemo"

    def test_java_package_is_namespace(self):
        assert NameComponents(namespace="com.acme", name="demo").java_package == "com.acme"

    def test_parse_full(self):
        c = NameComponents.parse("com.acme:demo:1.0")
        assert (c.namespace, c.name, c.version) == ("com.acme", "demo", "1.0")

    def test_parse_default_version(self):
        assert NameComponents.parse("com.acme:demo").version == DEFAULT_VERSION

    @pytest.mark.parametrize(
        "value",
        ["demo", "com.acme:", ":demo", "com.acme:demo:1:2", "com-acme:demo", "com.acme:Demo", "com.acme:.."],
    )
    def test_parse_rejects(self, value):
        with pytest.raises(ValueError):
            NameComponents.parse(value)

    def test_parse_reports_plain_message(self):
        with pytest.raises(ValueError, match=r"^Invalid group 'com-acme'"):
            NameComponents.parse("com-acme:demo")

    @pytest.mark.parametrize("name", ["../x", "a/b", "..", ".hidden", "Demo", "a b"])
    def test_constructor_rejects_unsafe_names(self, name):
        with pytest.raises(ValidationError):
            NameComponents(namespace="com.acme", name=name)

    @pytest.mark.parametrize("namespace", ["com-acme", "com..acme", "1com", "com/acme"])
    def test_constructor_rejects_bad_groups(self, namespace):
        with pytest.raises(ValidationError):
            NameComponents(namespace=namespace, name="demo")

    def test_frozen(self):
        c = NameComponents(namespace="com.acme", name="demo")
        with pytest.raises(ValidationError):
            c.name = "other"  # type: ignore[misc]

    def test_str(self):
        assert str(NameComponents(namespace="a.b", name="c", version="1")) == "a.b:c:1"
