"""Standalone YAML datasets, decoded as opaque documents."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..fs import read_text
from .base import load_document


@dataclass(frozen=True)
class DatasetParseResult:
    data: Any


def parse_dataset_file(path: Path) -> DatasetParseResult:
    return parse_dataset(read_text(path), path=path)


def parse_dataset(text: str, *, path: Optional[Path] = None) -> DatasetParseResult:
    """Decode the whole document; an empty file decodes to ``None``."""
    return DatasetParseResult(data=load_document(text, path=path))


__all__ = ["DatasetParseResult", "parse_dataset", "parse_dataset_file"]
