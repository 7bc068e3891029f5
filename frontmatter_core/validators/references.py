"""Optional existence check for guessed component references.

Page components are resolved by naming convention only, so a renamed or moved
component leaves a dangling path in the Build. This pass is kept apart from
:func:`~frontmatter_core.validators.build.validate_build` and only runs when
requested.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping

from ..models import Build


def check_component_references(build: Any, root: Path | str) -> List[str]:
    """Report page component paths that match neither an indexed component nor a file."""
    if isinstance(build, Build):
        build = build.to_dict()
    if not isinstance(build, Mapping):
        return []

    root_path = Path(root)
    indexed = build.get("componentsIndex")
    known = set(indexed) if isinstance(indexed, Mapping) else set()
    pages = build.get("pages")

    errors: List[str] = []
    for page in pages if isinstance(pages, list) else []:
        if not isinstance(page, Mapping):
            continue
        components = page.get("components")
        for component in components if isinstance(components, list) else []:
            if not isinstance(component, str) or component in known:
                continue
            if (root_path / component).is_file():
                continue
            errors.append(f"Page({page.get('id') or '?'}) references missing component {component}")
    return errors


__all__ = ["check_component_references"]
