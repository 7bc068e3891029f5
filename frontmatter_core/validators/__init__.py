"""Validation of assembled and persisted Build documents."""

from .build import DATASET_FORMAT, PAGE_SOURCE_TYPES, validate_build
from .references import check_component_references

__all__ = [
    "DATASET_FORMAT",
    "PAGE_SOURCE_TYPES",
    "check_component_references",
    "validate_build",
]
