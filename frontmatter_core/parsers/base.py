"""Shared helpers for source-file parsers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Both fences are whole "---" lines; the block between them may be empty.
_FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)(.*)\Z", re.DOTALL
)


class DocumentDecodeError(ValueError):
    """Raised when a YAML document (frontmatter or dataset) cannot be decoded."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class StringKeyLoader(yaml.SafeLoader):
    """SafeLoader that keeps mapping keys as their source text.

    ``1:`` and ``true:`` stay two keys (``"1"`` and ``"true"``) instead of
    collapsing because ``True == 1``.
    """

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> Dict[str, Any]:
        self.flatten_mapping(node)
        mapping: Dict[str, Any] = {}
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                key = key_node.value
            else:
                key = str(self.construct_object(key_node, deep=True))
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


@dataclass(frozen=True)
class FrontmatterSplit:
    """A source file divided into its frontmatter block and body."""

    frontmatter: Optional[str]
    body: str

    @property
    def has_frontmatter(self) -> bool:
        return self.frontmatter is not None


def split_frontmatter(text: str) -> FrontmatterSplit:
    """Split ``text`` into frontmatter and body; the body is everything when no block exists."""
    match = _FRONTMATTER_PATTERN.match(text)
    if match is None:
        return FrontmatterSplit(frontmatter=None, body=text)
    return FrontmatterSplit(frontmatter=match.group(1) or "", body=match.group(2))


def load_document(
    text: str, *, path: Optional[Path] = None, string_keys: bool = False
) -> Any:
    """Decode one YAML document, raising DocumentDecodeError on syntax errors."""
    loader = StringKeyLoader if string_keys else yaml.SafeLoader
    try:
        return yaml.load(text, Loader=loader)  # noqa: S506 - both loaders are safe
    except yaml.YAMLError as exc:
        where = f"{path}: " if path is not None else ""
        raise DocumentDecodeError(f"{where}{exc}", path=path) from exc


__all__ = [
    "DocumentDecodeError",
    "FrontmatterSplit",
    "StringKeyLoader",
    "load_document",
    "split_frontmatter",
]
