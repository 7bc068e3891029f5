"""Intermediate representation shared across frontmatter components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

SCHEMA_VERSION = 2

FieldType = Literal["string", "number", "boolean", "unknown"]
FieldSource = Literal["astro", "markdown", "yaml"]
PageSourceType = Literal["astro", "markdown"]


class _NoDefault:
    """Marker for a field that declares no default (distinct from a ``null`` default)."""

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class Field:
    """One declared or inferred content attribute."""

    key: str
    type: FieldType
    required: bool
    default: Any = NO_DEFAULT
    raw_type: Optional[str] = None
    source: Optional[FieldSource] = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "key": self.key,
            "type": self.type,
            "required": self.required,
        }
        if self.has_default:
            payload["default"] = self.default
        if self.raw_type is not None:
            payload["rawType"] = self.raw_type
        if self.source is not None:
            payload["source"] = self.source
        return payload


@dataclass(frozen=True)
class PageModel:
    """A routable page discovered under ``src/pages``."""

    id: str
    file: str
    route: str
    components: List[str] = field(default_factory=list)
    fields: List[Field] = field(default_factory=list)
    source_type: Optional[PageSourceType] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "route": self.route,
            "file": self.file,
            "components": list(self.components),
            "fields": [item.to_dict() for item in self.fields],
        }
        if self.source_type is not None:
            payload["sourceType"] = self.source_type
        return payload


@dataclass(frozen=True)
class ComponentModel:
    """Declared props contract of a reusable component."""

    id: str
    file: str
    exported_props: List[Field] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "file": self.file,
            "exportedProps": [item.to_dict() for item in self.exported_props],
        }


@dataclass(frozen=True)
class DatasetModel:
    """Standalone structured data file under ``src/data``."""

    id: str
    file: str
    data: Any
    hash: str
    format: str = "yaml"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "file": self.file,
            "format": self.format,
            "data": self.data,
            "hash": self.hash,
        }


@dataclass(frozen=True)
class ProjectInfo:
    root: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"root": self.root, "name": self.name}


@dataclass(frozen=True)
class Build:
    """Full IR snapshot produced by one scan."""

    generated_at: int
    project: ProjectInfo
    pages: List[PageModel] = field(default_factory=list)
    components_index: Dict[str, ComponentModel] = field(default_factory=dict)
    datasets: List[DatasetModel] = field(default_factory=list)
    schema_version: int = SCHEMA_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schemaVersion": self.schema_version,
            "generatedAt": self.generated_at,
            "project": self.project.to_dict(),
            "pages": [page.to_dict() for page in self.pages],
            "componentsIndex": {
                key: component.to_dict() for key, component in self.components_index.items()
            },
            "datasets": [dataset.to_dict() for dataset in self.datasets],
        }


@dataclass(frozen=True)
class Manifest:
    """Content fingerprints for every tracked file."""

    generated_at: int
    project: ProjectInfo
    files: Dict[str, str] = field(default_factory=dict)
    schema_version: int = SCHEMA_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schemaVersion": self.schema_version,
            "generatedAt": self.generated_at,
            "project": self.project.to_dict(),
            "files": dict(self.files),
        }


@dataclass(frozen=True)
class ScanError:
    """Flattened, human-readable scan or validation defect."""

    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


@dataclass(frozen=True)
class ScanResult:
    manifest: Manifest
    build: Build
    errors: List[ScanError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
