"""Extract pages, components and datasets from a source tree into a versioned IR."""

from .models import (
    NO_DEFAULT,
    SCHEMA_VERSION,
    Build,
    ComponentModel,
    DatasetModel,
    Field,
    Manifest,
    PageModel,
    ProjectInfo,
    ScanError,
    ScanResult,
)
from .parsers import DocumentDecodeError
from .scanner import Scanner, scan
from .validators import check_component_references, validate_build

__all__ = [
    "NO_DEFAULT",
    "SCHEMA_VERSION",
    "Build",
    "ComponentModel",
    "DatasetModel",
    "DocumentDecodeError",
    "Field",
    "Manifest",
    "PageModel",
    "ProjectInfo",
    "ScanError",
    "ScanResult",
    "Scanner",
    "check_component_references",
    "scan",
    "validate_build",
]
