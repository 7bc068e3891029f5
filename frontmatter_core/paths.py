"""Path classification and route inference for project source files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal, Optional

ContentKind = Literal["astro", "markdown", "yaml"]

COMPONENT_SUFFIX = ".astro"
MARKDOWN_SUFFIXES = (".md", ".mdoc", ".markdown")
DATASET_SUFFIXES = (".yml", ".yaml")

COMPONENTS_DIR = "src/components"

_PAGES_SEGMENT = "/src/pages/"
_DATA_SEGMENT = "/src/data/"
_SRC_SEGMENT = "/src/"

_PAGE_SUFFIX_PATTERN = re.compile(r"\.(astro|md|mdoc|markdown)$", re.IGNORECASE)
_DATASET_SUFFIX_PATTERN = re.compile(r"\.(yaml|yml)$", re.IGNORECASE)


def normalize(path: str | Path) -> str:
    """Return ``path`` as a string with forward slashes only."""
    return str(path).replace("\\", "/")


def relative_to_root(root: str | Path, path: str | Path) -> str:
    """Return the project-relative form of ``path``; unrelated paths come back normalized."""
    base = normalize(root).rstrip("/")
    target = normalize(path)
    if target == base:
        return ""
    if target.startswith(f"{base}/"):
        return target[len(base) + 1 :]
    return target


def is_component_source(path: str | Path) -> bool:
    return normalize(path).lower().endswith(COMPONENT_SUFFIX)


def is_markdown(path: str | Path) -> bool:
    return normalize(path).lower().endswith(MARKDOWN_SUFFIXES)


def is_dataset(path: str | Path) -> bool:
    return normalize(path).lower().endswith(DATASET_SUFFIXES)


def content_kind(path: str | Path) -> Optional[ContentKind]:
    """Return the content kind for ``path`` or ``None`` when it is not tracked."""
    if is_component_source(path):
        return "astro"
    if is_markdown(path):
        return "markdown"
    if is_dataset(path):
        return "yaml"
    return None


def is_tracked(path: str | Path) -> bool:
    return content_kind(path) is not None


def should_ignore(path: str | Path) -> bool:
    """True when any segment is private (``_drafts``) or hidden (``.cache``)."""
    return any(
        segment.startswith(("_", ".")) for segment in normalize(path).split("/") if segment
    )


def _anchored(path: str | Path) -> str:
    text = normalize(path)
    return text if text.startswith("/") else f"/{text}"


def is_under_src(path: str | Path) -> bool:
    return _SRC_SEGMENT in _anchored(path)


def is_under_pages(path: str | Path) -> bool:
    return _PAGES_SEGMENT in _anchored(path)


def is_under_data(path: str | Path) -> bool:
    return _DATA_SEGMENT in _anchored(path)


def is_page(path: str | Path) -> bool:
    return is_under_pages(path) and (is_component_source(path) or is_markdown(path))


def infer_route(path: str | Path) -> str:
    """Map a page file to its URL route.

    ``src/pages/index.astro`` -> ``/``, ``src/pages/about.md`` -> ``/about``,
    ``src/pages/blog/index.mdoc`` -> ``/blog``. Paths without a ``src/pages/``
    segment map to ``/``.
    """
    anchored = _anchored(path)
    index = anchored.find(_PAGES_SEGMENT)
    if index == -1:
        return "/"

    remainder = _PAGE_SUFFIX_PATTERN.sub("", anchored[index + len(_PAGES_SEGMENT) :])
    if remainder == "index":
        return "/"
    if remainder.endswith("/index"):
        remainder = remainder[: -len("/index")]
    return f"/{remainder}"


def dataset_id(path: str | Path) -> str:
    """Return the dataset identifier: the basename without its YAML suffix."""
    name = normalize(path).rstrip("/").split("/")[-1] or normalize(path)
    return _DATASET_SUFFIX_PATTERN.sub("", name)


def guess_component_path(name: str) -> str:
    """Best-effort location of a component tag, e.g. ``Hero`` -> ``src/components/Hero.astro``.

    The file is not checked for existence.
    """
    base = name.split(".")[0]
    return f"{COMPONENTS_DIR}/{base}{COMPONENT_SUFFIX}"


def project_name(root: str | Path) -> str:
    return normalize(root).rstrip("/").split("/")[-1] or "project"


__all__ = [
    "COMPONENT_SUFFIX",
    "DATASET_SUFFIXES",
    "MARKDOWN_SUFFIXES",
    "content_kind",
    "dataset_id",
    "guess_component_path",
    "infer_route",
    "is_component_source",
    "is_dataset",
    "is_markdown",
    "is_page",
    "is_tracked",
    "is_under_data",
    "is_under_pages",
    "is_under_src",
    "normalize",
    "project_name",
    "relative_to_root",
    "should_ignore",
]
