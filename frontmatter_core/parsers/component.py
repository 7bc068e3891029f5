"""Shallow extraction of props and child components from ``.astro`` sources.

Two prop declaration forms are recognised inside the frontmatter script::

    export interface Props { title: string; count?: number }
    const { title = "Hello", published = false } = Astro.props;

Child components are the capitalised opening tags in the markup body. This is
pattern matching, not parsing: anything unrecognised yields empty results.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Set, Tuple

from ..fs import read_text
from ..models import Field, FieldType
from .base import split_frontmatter

_INTERFACE_PATTERN = re.compile(r"export\s+interface\s+Props\s*\{(.*?)\}", re.DOTALL)
_INTERFACE_LINE_PATTERN = re.compile(r"^([A-Za-z_]\w*)\s*(\?)?\s*:\s*(.+?)\s*[;,]?$", re.DOTALL)
_DESTRUCTURE_PATTERN = re.compile(
    r"const\s*\{\s*(.*?)\s*\}\s*=\s*Astro\.props\s*;?", re.DOTALL
)
_DESTRUCTURE_ENTRY_PATTERN = re.compile(r"^([A-Za-z_]\w*)\s*(?:=\s*(.+))?$", re.DOTALL)
_TAG_PATTERN = re.compile(r"<([A-Z][A-Za-z0-9_]*)\b")
_NUMBER_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")
_QUOTED_PATTERN = re.compile(r"^([\"'])(.*)\1$", re.DOTALL)

_DIRECT_TYPES = {"string", "number", "boolean"}


@dataclass(frozen=True)
class ComponentParseResult:
    exported_props: List[Field] = field(default_factory=list)
    used_components: List[str] = field(default_factory=list)


def parse_component_file(path: Path) -> ComponentParseResult:
    return parse_component_source(read_text(path))


def parse_component_source(text: str) -> ComponentParseResult:
    """Return the declared props and used component names for one component file."""
    split = split_frontmatter(text)
    script = split.frontmatter or ""

    declared = extract_interface_props(script) + extract_destructured_props(script)
    seen: Set[str] = set()
    props: List[Field] = []
    for prop in declared:
        if prop.key in seen:
            continue
        seen.add(prop.key)
        props.append(prop)

    return ComponentParseResult(
        exported_props=props,
        used_components=extract_used_components(split.body),
    )


def extract_interface_props(script: str) -> List[Field]:
    match = _INTERFACE_PATTERN.search(script)
    if match is None:
        return []

    props: List[Field] = []
    for line in _interface_members(match.group(1)):
        member = _INTERFACE_LINE_PATTERN.match(line)
        if member is None:
            continue
        key, optional, raw_type = member.groups()
        raw_type = raw_type.strip()
        props.append(
            Field(
                key=key,
                type=map_type_annotation(raw_type),
                required=not optional,
                raw_type=raw_type,
                source="astro",
            )
        )
    return props


def _interface_members(body: str) -> List[str]:
    members: List[str] = []
    for line in body.splitlines():
        for chunk in line.split(";"):
            chunk = chunk.strip()
            if chunk and not chunk.startswith(("//", "/*", "*")):
                members.append(chunk)
    return members


def extract_destructured_props(script: str) -> List[Field]:
    match = _DESTRUCTURE_PATTERN.search(script)
    if match is None:
        return []

    props: List[Field] = []
    for part in match.group(1).split(","):
        part = part.strip()
        if not part:
            continue
        entry = _DESTRUCTURE_ENTRY_PATTERN.match(part)
        if entry is None:
            continue
        key, raw_default = entry.groups()
        if raw_default is None:
            props.append(Field(key=key, type="unknown", required=False, source="astro"))
            continue
        value, value_type = parse_literal(raw_default)
        props.append(
            Field(key=key, type=value_type, required=False, default=value, source="astro")
        )
    return props


def extract_used_components(markup: str) -> List[str]:
    """Distinct capitalised tag names in first-seen order."""
    names: List[str] = []
    seen: Set[str] = set()
    for match in _TAG_PATTERN.finditer(markup):
        name = match.group(1)
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names


def map_type_annotation(raw_type: str) -> FieldType:
    compact = re.sub(r"\s+", "", raw_type)
    if compact in _DIRECT_TYPES:
        return compact  # type: ignore[return-value]
    return "unknown"


def parse_literal(raw: str) -> Tuple[Any, FieldType]:
    """Interpret a default value literal and return ``(value, field_type)``.

    Unrecognised expressions are kept verbatim with type ``unknown``.
    """
    value = raw.strip().rstrip(",").strip()

    quoted = _QUOTED_PATTERN.match(value)
    if quoted is not None:
        return quoted.group(2), "string"
    if value == "true":
        return True, "boolean"
    if value == "false":
        return False, "boolean"
    if _NUMBER_PATTERN.match(value):
        return (float(value) if "." in value else int(value)), "number"
    if value == "null":
        return None, "unknown"
    return value, "unknown"


__all__ = [
    "ComponentParseResult",
    "extract_destructured_props",
    "extract_interface_props",
    "extract_used_components",
    "map_type_annotation",
    "parse_component_file",
    "parse_component_source",
    "parse_literal",
]
