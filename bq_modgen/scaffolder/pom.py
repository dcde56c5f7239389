"""Maven POM support: reading parent coordinates and declaring child modules.

``PomParser`` extracts ``groupId``/``artifactId``/``version`` from an existing
``pom.xml``.  ``ParentPomProcessor`` adds a ``<module>`` entry for the newly
generated module to that file.

The parent POM belongs to the user, so the processor never re-serialises the
XML tree.  ``xml.etree.ElementTree`` is only used to validate the document and
answer questions about it; the edit itself is a text insertion at offsets
found by a small tag scanner, which leaves every other byte untouched.
"""

from __future__ import annotations

import codecs
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from .components import NameComponents
from .errors import PomParseError, TransformError
from .properties import PropertySet
from .template import TemplateHandle

# Top-level elements after which a new <modules> block may be placed.
_COORDINATE_TAGS = ("groupId", "artifactId", "version", "packaging", "name", "description", "url")

# Sections a new <modules> block must precede.
_SECTION_TAGS = ("properties", "dependencyManagement", "dependencies", "build")

_DEFAULT_INDENT = "    "


# ---------------------------------------------------------------------------
# ElementTree helpers
# ---------------------------------------------------------------------------

def _local(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tag names."""
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _child(el: ET.Element, name: str) -> ET.Element | None:
    """Find a direct child by local name, with or without the Maven namespace."""
    for child in el:
        if _local(child.tag) == name:
            return child
    return None


def _child_text(el: ET.Element | None, name: str) -> str:
    if el is None:
        return ""
    child = _child(el, name)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


# ---------------------------------------------------------------------------
# Parent coordinates
# ---------------------------------------------------------------------------


class PomParser:
    """Reads the coordinates of an existing POM.

    ``groupId`` and ``version`` fall back to the ``<parent>`` section when the
    POM inherits them, as Maven itself does.
    """

    def parse(self, path: str | Path) -> NameComponents:
        pom_path = Path(path)
        try:
            root = ET.parse(pom_path).getroot()
        except ET.ParseError as exc:
            raise PomParseError(pom_path, f"malformed XML ({exc})") from exc
        except OSError as exc:
            raise PomParseError(pom_path, exc.strerror or str(exc)) from exc
        return self.parse_element(root, pom_path)

    def parse_element(self, root: ET.Element, source: str | Path = "pom.xml") -> NameComponents:
        if _local(root.tag) != "project":
            raise PomParseError(source, f"root element is <{_local(root.tag)}>, expected <project>")

        parent = _child(root, "parent")
        artifact_id = _child_text(root, "artifactId")
        group_id = _child_text(root, "groupId") or _child_text(parent, "groupId")
        version = _child_text(root, "version") or _child_text(parent, "version")

        if not artifact_id:
            raise PomParseError(source, "missing <artifactId>")
        if not group_id:
            raise PomParseError(source, "missing <groupId>")
        if not version:
            raise PomParseError(source, "missing <version>")
        # Parent coordinates may use any form Maven accepts, e.g. "com.my-org".
        return NameComponents.model_construct(
            namespace=group_id, name=artifact_id, version=version
        )


# ---------------------------------------------------------------------------
# Tag scanner
# ---------------------------------------------------------------------------

_TOKEN_RE = re.compile(
    r"""
    (?P<comment><!--.*?-->)
  | (?P<cdata><!\[CDATA\[.*?\]\]>)
  | (?P<pi><\?.*?\?>)
  | (?P<decl><![^>]*>)
  | (?P<end></(?P<end_name>[^\s>]+)\s*>)
  | (?P<start><(?P<start_name>[^\s/>!?]+)(?:"[^"]*"|'[^']*'|[^'">])*?(?P<empty>/?)>)
    """,
    re.DOTALL | re.VERBOSE,
)


@dataclass
class _Element:
    name: str
    depth: int
    start: int
    start_end: int
    end_start: int = -1
    end: int = -1
    empty: bool = False
    parent: "_Element | None" = None


def _scan(text: str) -> list[_Element]:
    """Return every element of *text* in document order with tag offsets."""
    elements: list[_Element] = []
    stack: list[_Element] = []
    for match in _TOKEN_RE.finditer(text):
        if match.group("start"):
            name = match.group("start_name").split(":")[-1]
            el = _Element(
                name=name,
                depth=len(stack),
                start=match.start(),
                start_end=match.end(),
                empty=bool(match.group("empty")),
                parent=stack[-1] if stack else None,
            )
            elements.append(el)
            if el.empty:
                el.end_start = el.end = match.end()
            else:
                stack.append(el)
        elif match.group("end"):
            name = match.group("end_name").split(":")[-1]
            if not stack or stack[-1].name != name:
                raise ValueError(f"unexpected </{name}> at offset {match.start()}")
            el = stack.pop()
            el.end_start = match.start()
            el.end = match.end()
    if stack:
        raise ValueError(f"unclosed <{stack[-1].name}>")
    return elements


def _line_indent(text: str, offset: int) -> str | None:
    """Whitespace preceding *offset* on its line, or None if other text precedes it."""
    line_start = text.rfind("\n", 0, offset) + 1
    prefix = text[line_start:offset]
    if prefix.strip(" \t"):
        return None
    return prefix


def _blank_line_after(text: str, offset: int) -> bool:
    return re.match(r"[ \t]*\r?\n[ \t]*\r?\n", text[offset:]) is not None


def _blank_line_before(text: str, offset: int) -> bool:
    return re.search(r"\r?\n[ \t]*\r?\n[ \t]*$", text[:offset]) is not None


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

_BOMS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)

_XML_ENCODING_RE = re.compile(rb"""^<\?xml[^>]*?encoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")


def _detect_encoding(raw: bytes) -> tuple[str, bytes]:
    """Return ``(encoding, bom)`` for an XML document."""
    for bom, encoding in _BOMS:
        if raw.startswith(bom):
            return encoding, bom
    match = _XML_ENCODING_RE.match(raw)
    encoding = match.group(1).decode("ascii") if match else "utf-8"
    codecs.lookup(encoding)
    return encoding, b""


# ---------------------------------------------------------------------------
# Parent POM rewriter
# ---------------------------------------------------------------------------


class ParentPomProcessor:
    """Declares the generated module in the parent POM's ``<modules>``.

    * Existing entry for the module: content is returned unchanged.
    * Existing ``<modules>``: a ``<module>`` is appended after the last entry
      using its indentation.
    * No ``<modules>``: a new block is inserted after the project
      coordinates, ahead of properties, dependencies and build sections.

    The result keeps the original encoding, byte order mark and line
    separators.
    """

    def __call__(self, template: TemplateHandle, properties: PropertySet) -> TemplateHandle:
        module = properties.get_string("project.name")
        if not module:
            raise TransformError(template.output_path, "property 'project.name' is not set")

        raw = template.content
        if raw is None:
            raise TransformError(template.output_path, "parent descriptor is empty")
        if isinstance(raw, str):
            raw = raw.encode("utf-8")

        try:
            encoding, bom = _detect_encoding(raw)
            text = raw[len(bom):].decode(encoding)
        except (LookupError, UnicodeDecodeError) as exc:
            raise TransformError(template.output_path, f"cannot decode descriptor ({exc})") from exc

        try:
            root = ET.fromstring(raw)
        except ET.ParseError as exc:
            raise TransformError(template.output_path, f"malformed XML ({exc})") from exc
        if _local(root.tag) != "project":
            raise TransformError(
                template.output_path,
                f"root element is <{_local(root.tag)}>, not a Maven <project>",
            )

        if module in _declared_modules(root):
            return template

        try:
            updated = add_module(text, module)
        except ValueError as exc:
            raise TransformError(template.output_path, str(exc)) from exc

        return template.with_content(bom + updated.encode(encoding))


def _declared_modules(root: ET.Element) -> list[str]:
    modules = _child(root, "modules")
    if modules is None:
        return []
    return [
        _normalize_module((m.text or "").strip())
        for m in modules
        if _local(m.tag) == "module"
    ]


def _normalize_module(value: str) -> str:
    """``./demo/`` and ``demo`` refer to the same module directory."""
    value = value.replace("\\", "/").rstrip("/")
    while value.startswith("./"):
        value = value[2:]
    return value


def add_module(text: str, module: str) -> str:
    """Return *text* with ``<module>{module}</module>`` added to ``<modules>``.

    Raises:
        ValueError: If the document structure cannot be scanned.
    """
    elements = _scan(text)
    project = next((el for el in elements if el.depth == 0), None)
    if project is None or project.name != "project":
        raise ValueError("no <project> element found")
    if project.empty:
        raise ValueError("<project> element is empty")

    newline = "\r\n" if "\r\n" in text else "\n"
    top_level = [el for el in elements if el.parent is project]
    project_indent = _line_indent(text, project.start) or ""
    unit = _indent_unit(text, top_level, project_indent)
    entry = f"<module>{module}</module>"

    modules = next((el for el in top_level if el.name == "modules"), None)
    if modules is not None:
        modules_indent = _line_indent(text, modules.start)
        if modules_indent is None:
            modules_indent = project_indent + unit
        child_indent = modules_indent + unit

        if modules.empty:
            block = (
                f"<modules>{newline}{child_indent}{entry}{newline}{modules_indent}</modules>"
            )
            return text[:modules.start] + block + text[modules.end:]

        children = [el for el in elements if el.parent is modules and el.name == "module"]
        if children:
            last = children[-1]
            indent = _line_indent(text, last.start)
            if indent is None:
                indent = child_indent
            separator = newline * 2 if _blank_line_before(text, last.start) else newline
            return text[:last.end] + separator + indent + entry + text[last.end:]

        inner = text[modules.start_end:modules.end_start]
        if not inner.strip():
            return (
                text[:modules.start_end]
                + newline + child_indent + entry + newline + modules_indent
                + text[modules.end_start:]
            )
        insert_at = modules.start_end + len(inner.rstrip())
        return text[:insert_at] + newline + child_indent + entry + text[insert_at:]

    boundary = next((el for el in top_level if el.name in _SECTION_TAGS), None)
    anchors = [
        el for el in top_level
        if el.name in _COORDINATE_TAGS and (boundary is None or el.start < boundary.start)
    ]
    if anchors:
        anchor_end = anchors[-1].end
        indent = _line_indent(text, anchors[-1].start)
        if indent is None:
            indent = project_indent + unit
    else:
        anchor_end = project.start_end
        indent = project_indent + unit

    block = (
        f"{indent}<modules>{newline}"
        f"{indent}{unit}{entry}{newline}"
        f"{indent}</modules>"
    )
    separator = newline * 2 if anchors and _blank_line_after(text, anchor_end) else newline
    return text[:anchor_end] + separator + block + text[anchor_end:]


def _indent_unit(text: str, top_level: list[_Element], project_indent: str) -> str:
    """Guess one indentation step from the first indented top-level element."""
    for el in top_level:
        indent = _line_indent(text, el.start)
        if indent and len(indent) > len(project_indent) and indent.startswith(project_indent):
            return indent[len(project_indent):]
    return _DEFAULT_INDENT
