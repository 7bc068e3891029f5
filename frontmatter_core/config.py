"""Configuration loading for frontmatter scans (.frontmatter.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Sequence

import yaml

CONFIG_FILENAME = ".frontmatter.yml"
DEFAULT_OUT_DIR = ".frontmatter"

DecodeErrorPolicy = Literal["abort", "report"]
_DECODE_POLICIES = ("abort", "report")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScanConfig:
    """Settings read from .frontmatter.yml at the project root."""

    root: Path
    out_dir: str = DEFAULT_OUT_DIR
    exclude_paths: List[str] = field(default_factory=list)
    verify_components: bool = False
    on_decode_error: DecodeErrorPolicy = "abort"

    def resolve_out_dir(self) -> Path:
        """Return the absolute output directory."""
        out = Path(self.out_dir).expanduser()
        return out if out.is_absolute() else (self.root / out).resolve()


def load_config(config_path: Path) -> ScanConfig:
    """Load configuration from a project root or an explicit config file."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ScanConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ScanConfig(root=root)

    out_dir = _as_str(data.get("out_dir"))
    if out_dir:
        config.out_dir = out_dir
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    config.verify_components = _as_bool(data.get("verify_components")) or False

    policy = _as_str(data.get("on_decode_error"))
    if policy is not None and policy.strip().lower() in _DECODE_POLICIES:
        config.on_decode_error = policy.strip().lower()  # type: ignore[assignment]

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "DEFAULT_OUT_DIR", "ScanConfig", "load_config"]
