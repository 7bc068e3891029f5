"""Persistence of scan results into the output directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .fs import read_json, write_json
from .logging import get_logger
from .models import ScanResult

MANIFEST_FILENAME = "manifest.json"
BUILD_FILENAME = "build.json"
ERRORS_FILENAME = "errors.json"

logger = get_logger("output")


@dataclass(frozen=True)
class WrittenOutputs:
    manifest: Path
    build: Path
    errors: Optional[Path] = None


def write_scan_outputs(result: ScanResult, out_dir: Path) -> WrittenOutputs:
    """Write manifest.json and build.json, plus errors.json when the scan reported defects.

    Previous outputs are overwritten; a stale errors.json is removed after a clean scan.
    """
    out_dir = Path(out_dir)
    manifest_path = out_dir / MANIFEST_FILENAME
    build_path = out_dir / BUILD_FILENAME
    errors_path = out_dir / ERRORS_FILENAME

    write_json(manifest_path, result.manifest.to_dict())
    write_json(build_path, result.build.to_dict())
    logger.debug("Wrote %s and %s", manifest_path, build_path)

    if result.errors:
        write_json(errors_path, {"errors": [error.to_dict() for error in result.errors]})
        logger.debug("Wrote %s", errors_path)
        return WrittenOutputs(manifest=manifest_path, build=build_path, errors=errors_path)

    errors_path.unlink(missing_ok=True)
    return WrittenOutputs(manifest=manifest_path, build=build_path)


def read_build(out_dir: Path) -> Any:
    """Load a persisted build.json; raises FileNotFoundError when it is absent."""
    return read_json(Path(out_dir) / BUILD_FILENAME)


__all__ = [
    "BUILD_FILENAME",
    "ERRORS_FILENAME",
    "MANIFEST_FILENAME",
    "WrittenOutputs",
    "read_build",
    "write_scan_outputs",
]
