"""Structural validation of Build documents.

Works on a freshly assembled :class:`~frontmatter_core.models.Build` and on a
mapping loaded from a persisted ``build.json`` alike, so the scan and the
standalone ``validate`` command share one rule set.
"""

from __future__ import annotations

from typing import Any, List, Mapping

from ..models import SCHEMA_VERSION, Build

PAGE_SOURCE_TYPES = ("astro", "markdown")
DATASET_FORMAT = "yaml"


def validate_build(build: Any) -> List[str]:
    """Return every structural defect found in ``build``; an empty list means valid."""
    if isinstance(build, Build):
        build = build.to_dict()
    if not isinstance(build, Mapping):
        return ["Build is not an object."]

    errors: List[str] = []

    schema_version = build.get("schemaVersion")
    if isinstance(schema_version, bool) or schema_version != SCHEMA_VERSION:
        errors.append(f"Unsupported schemaVersion: {_show(schema_version)}")

    project = build.get("project")
    project = project if isinstance(project, Mapping) else {}
    if not project.get("root"):
        errors.append("Missing project.root")
    if not project.get("name"):
        errors.append("Missing project.name")

    pages = build.get("pages")
    components = build.get("componentsIndex")
    datasets = build.get("datasets")

    if not isinstance(pages, list):
        errors.append("pages must be an array")
    if not isinstance(components, Mapping):
        errors.append("componentsIndex must be an object")
    if not isinstance(datasets, list):
        errors.append("datasets must be an array")

    if isinstance(pages, list):
        for page in pages:
            errors.extend(_validate_page(page))
    if isinstance(components, Mapping):
        for key, component in components.items():
            errors.extend(_validate_component(key, component))
    if isinstance(datasets, list):
        for dataset in datasets:
            errors.extend(_validate_dataset(dataset))

    return errors


def _validate_page(page: Any) -> List[str]:
    if not isinstance(page, Mapping):
        return [f"Page is not an object: {_show(page)}"]

    errors: List[str] = []
    label = f"Page({_show(page.get('id') or '?')})"
    if not page.get("id"):
        errors.append("Page missing id")
    if not page.get("file"):
        errors.append(f"{label} missing file")
    if not page.get("route"):
        errors.append(f"{label} missing route")

    source_type = page.get("sourceType")
    if source_type is not None and source_type not in PAGE_SOURCE_TYPES:
        errors.append(f"{label} invalid sourceType: {_show(source_type)}")

    fields = page.get("fields")
    if isinstance(fields, list):
        errors.extend(_validate_fields(label, fields))
    else:
        errors.append(f"{label} fields must be an array")
    return errors


def _validate_component(key: Any, component: Any) -> List[str]:
    label = f"Component({_show(key)})"
    if not isinstance(component, Mapping):
        return [f"{label} is not an object"]

    errors: List[str] = []
    if not component.get("file"):
        errors.append(f"{label} missing file")
    elif component.get("file") != key:
        errors.append(f"{label} file does not match its index key: {_show(component.get('file'))}")

    props = component.get("exportedProps")
    if isinstance(props, list):
        errors.extend(_validate_fields(label, props))
    else:
        errors.append(f"{label} exportedProps must be an array")
    return errors


def _validate_fields(owner: str, fields: List[Any]) -> List[str]:
    errors: List[str] = []
    seen: set[str] = set()
    for item in fields:
        if not isinstance(item, Mapping):
            errors.append(f"{owner} field is not an object: {_show(item)}")
            continue
        key = item.get("key")
        name = _show(key or "?")
        if not key:
            errors.append(f"{owner} field missing key")
        elif not isinstance(key, str):
            errors.append(f"{owner} field({name}) key must be a string")
        elif key in seen:
            errors.append(f"{owner} duplicate field key: {name}")
        else:
            seen.add(key)
        if not item.get("type"):
            errors.append(f"{owner} field({name}) missing type")
        if not isinstance(item.get("required"), bool):
            errors.append(f"{owner} field({name}) required must be boolean")
    return errors


def _validate_dataset(dataset: Any) -> List[str]:
    if not isinstance(dataset, Mapping):
        return [f"Dataset is not an object: {_show(dataset)}"]

    errors: List[str] = []
    label = f"Dataset({_show(dataset.get('id') or '?')})"
    if not dataset.get("id"):
        errors.append("Dataset missing id")
    if not dataset.get("file"):
        errors.append(f"{label} missing file")
    if "data" not in dataset:
        errors.append(f"{label} missing data")
    if dataset.get("format") != DATASET_FORMAT:
        errors.append(f"{label} unsupported format: {_show(dataset.get('format'))}")
    digest = dataset.get("hash")
    if not isinstance(digest, str) or not digest:
        errors.append(f"{label} missing hash")
    return errors


def _show(value: Any) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, (dict, list)):
        return type(value).__name__
    return str(value)


__all__ = ["DATASET_FORMAT", "PAGE_SOURCE_TYPES", "validate_build"]
