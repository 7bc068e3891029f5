"""Markdown pages: YAML frontmatter decoded into inferred fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set

from ..fs import read_text
from ..models import Field, FieldType
from .base import load_document, split_frontmatter


@dataclass(frozen=True)
class MarkdownParseResult:
    frontmatter: Dict[str, Any] = field(default_factory=dict)
    fields: List[Field] = field(default_factory=list)
    body: str = ""


def parse_markdown_file(path: Path) -> MarkdownParseResult:
    return parse_markdown(read_text(path), path=path)


def parse_markdown(text: str, *, path: Optional[Path] = None) -> MarkdownParseResult:
    """Split ``text`` and infer one optional field per top-level frontmatter key.

    Raises DocumentDecodeError when the frontmatter is not valid YAML.
    """
    split = split_frontmatter(text)
    decoded = (
        load_document(split.frontmatter, path=path, string_keys=True) if split.frontmatter else None
    )
    frontmatter = _as_mapping(decoded)
    return MarkdownParseResult(
        frontmatter=frontmatter,
        fields=infer_fields(frontmatter),
        body=split.body,
    )


def _as_mapping(decoded: Any) -> Dict[str, Any]:
    if not isinstance(decoded, Mapping):
        return {}
    mapping: Dict[str, Any] = {}
    for key, value in decoded.items():
        # StringKeyLoader already yields text keys; empty ones cannot name a field.
        if not key:
            continue
        mapping[str(key)] = value
    return mapping


def infer_fields(frontmatter: Mapping[str, Any]) -> List[Field]:
    fields: List[Field] = []
    seen: Set[str] = set()
    for key, value in frontmatter.items():
        if not key or key in seen:
            continue
        seen.add(key)
        fields.append(Field(key=key, type=infer_value_type(value), required=False, source="markdown"))
    return fields


def infer_value_type(value: Any) -> FieldType:
    # bool is a subclass of int, so it is checked first.
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    return "unknown"


__all__ = [
    "MarkdownParseResult",
    "infer_fields",
    "infer_value_type",
    "parse_markdown",
    "parse_markdown_file",
]
