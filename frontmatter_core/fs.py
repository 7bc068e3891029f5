"""Filesystem primitives: traversal, reads, hashing and JSON persistence."""

from __future__ import annotations

import base64
import datetime as _dt
import hashlib
import json
import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any, Callable, Collection, Iterator, List, Sequence

EXCLUDED_DIRS = frozenset({"node_modules", ".git"})

_HASH_CHUNK = 1024 * 1024


@dataclass(frozen=True)
class IgnoreRule:
    """A gitignore-style pattern taken from ``exclude_paths``."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return not self.directory_only or is_dir
            return rel_path.startswith(f"{self.pattern}/")

        parts = rel_path.split("/")
        # A directory-only rule may match any ancestor of a file, never its basename.
        candidates = parts if (is_dir or not self.directory_only) else parts[:-1]
        return any(fnmatchcase(part, self.pattern) for part in candidates)


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern or pattern.startswith("#"):
        return None

    directory_only = pattern.endswith("/")
    pattern = pattern.rstrip("/")
    anchored = pattern.startswith("/")
    pattern = pattern.lstrip("/")
    if not pattern:
        return None

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def build_ignore_rules(patterns: Sequence[str]) -> List[IgnoreRule]:
    rules: List[IgnoreRule] = []
    for pattern in patterns:
        rule = build_ignore_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def _is_excluded(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


def iter_files(
    root: Path,
    accept: Callable[[str], bool],
    *,
    skip_dir: Callable[[str], bool] | None = None,
    excluded_dirs: Collection[str] = EXCLUDED_DIRS,
    rules: Sequence[IgnoreRule] = (),
) -> Iterator[Path]:
    """Yield files under ``root`` whose relative path satisfies ``accept``.

    Entries are visited in sorted order at every level. ``skip_dir`` receives a
    directory's relative path; pruned directories are never listed.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix() if current != root else ""

        kept: List[str] = []
        for name in sorted(dirnames):
            if name in excluded_dirs:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if skip_dir is not None and skip_dir(rel_path):
                continue
            if _is_excluded(rel_path, True, rules):
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in sorted(filenames):
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _is_excluded(rel_path, False, rules):
                continue
            if accept(rel_path):
                yield current / name


def _raise(error: OSError) -> None:
    raise error


def read_text(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def hash_file(path: Path) -> str:
    """Return the SHA-256 hex digest of the file contents."""
    digest = hashlib.sha256()
    with Path(path).open("rb") as handle:
        for chunk in iter(lambda: handle.read(_HASH_CHUNK), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _json_default(value: Any) -> Any:
    # YAML decodes timestamps into date/datetime objects.
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, (bytes, bytearray)):
        # YAML !!binary; base64 keeps the bytes recoverable.
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _json_key(key: Any) -> Any:
    if key is None or isinstance(key, (str, int, float, bool)):
        return key
    if isinstance(key, (_dt.datetime, _dt.date, _dt.time)):
        return key.isoformat()
    return str(key)


def _with_json_keys(value: Any) -> Any:
    """Rewrite mapping keys json cannot encode (``default=`` never sees keys)."""
    if isinstance(value, dict):
        return {_json_key(key): _with_json_keys(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_with_json_keys(item) for item in value]
    return value


def dumps_json(payload: Any) -> str:
    return (
        json.dumps(_with_json_keys(payload), indent=2, ensure_ascii=False, default=_json_default)
        + "\n"
    )


def write_json(path: Path, payload: Any) -> None:
    """Write ``payload`` as 2-space indented UTF-8 JSON with a trailing newline."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_json(payload), encoding="utf-8")


def read_json(path: Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


__all__ = [
    "EXCLUDED_DIRS",
    "IgnoreRule",
    "build_ignore_rule",
    "build_ignore_rules",
    "dumps_json",
    "hash_file",
    "iter_files",
    "read_json",
    "read_text",
    "write_json",
]
