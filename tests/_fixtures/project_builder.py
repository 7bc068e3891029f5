"""Helper utilities for constructing temporary projects in tests."""

from __future__ import annotations

import textwrap
from datetime import UTC, datetime
from pathlib import Path
from typing import Mapping

from frontmatter_core.config import ScanConfig
from frontmatter_core.models import ScanResult
from frontmatter_core.scanner import Scanner

FIXED_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)
FIXED_MILLIS = int(FIXED_TIME.timestamp() * 1000)


def fixed_clock() -> datetime:
    return FIXED_TIME


class ProjectBuilder:
    """Writes files into a throwaway project and scans it with a fixed clock."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "site"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def scan(self, config: ScanConfig | None = None, **kwargs: object) -> ScanResult:
        """Return a fresh scan result for the project."""
        scanner = Scanner(config=config, clock=fixed_clock, **kwargs)  # type: ignore[arg-type]
        return scanner.scan(self.root)

    def path(self) -> Path:
        return self.root


__all__ = ["FIXED_MILLIS", "FIXED_TIME", "ProjectBuilder", "fixed_clock"]
