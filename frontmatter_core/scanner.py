"""Project scanning: walk ``src/``, parse each tracked file and assemble the IR."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar

from .config import ScanConfig, load_config
from .fs import build_ignore_rules, hash_file, iter_files
from .logging import get_logger
from .models import (
    Build,
    ComponentModel,
    DatasetModel,
    Manifest,
    PageModel,
    ProjectInfo,
    ScanError,
    ScanResult,
)
from .parsers import (
    ComponentParseResult,
    DocumentDecodeError,
    parse_component_file,
    parse_dataset_file,
    parse_markdown_file,
)
from .paths import (
    dataset_id,
    guess_component_path,
    infer_route,
    is_component_source,
    is_dataset,
    is_markdown,
    is_page,
    is_tracked,
    is_under_data,
    is_under_src,
    normalize,
    project_name,
    relative_to_root,
    should_ignore,
)
from .validators import check_component_references, validate_build

Clock = Callable[[], datetime]

_T = TypeVar("_T")

logger = get_logger("scanner")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Scanner:
    """Performs one full, sequential scan of a project tree.

    ``clock`` supplies the ``generatedAt`` stamp. When ``config`` is omitted it
    is read from ``.frontmatter.yml`` under the scanned root.
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        clock: Optional[Clock] = None,
        *,
        verify_components: Optional[bool] = None,
    ) -> None:
        self._config = config
        self._clock = clock or _utc_now
        self._verify_components = verify_components

    def scan(
        self, root: str | Path, out_dir: str | Path | None = None, verbose: bool = False
    ) -> ScanResult:
        """Return the manifest, build and defects for the project at ``root``.

        Nothing is written. I/O failures propagate, as do YAML syntax errors
        unless ``on_decode_error`` is ``report``.
        """
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project root not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project root is not a directory: {root}")

        config = self._config or load_config(root_path)
        out_path = Path(out_dir).expanduser().resolve() if out_dir else config.resolve_out_dir()
        trace = logger.info if verbose else logger.debug
        errors: List[ScanError] = []

        tracked = self._collect(root_path, out_path, config)
        src_files = {
            rel: path for rel, path in tracked.items() if is_under_src(rel)
        }

        file_hashes: Dict[str, str] = {}
        for rel, path in src_files.items():
            file_hashes[rel] = hash_file(path)

        parsed_components: Dict[str, ComponentParseResult] = {}
        components_index: Dict[str, ComponentModel] = {}
        for rel, path in src_files.items():
            if not is_component_source(rel):
                continue
            parsed = parse_component_file(path)
            parsed_components[rel] = parsed
            components_index[rel] = ComponentModel(
                id=rel, file=rel, exported_props=list(parsed.exported_props)
            )
            trace("parsed component %s (%d prop(s))", rel, len(parsed.exported_props))

        pages: List[PageModel] = []
        for rel, path in src_files.items():
            if not is_page(rel):
                continue
            route = infer_route(rel)
            if is_component_source(rel):
                parsed = parsed_components[rel]
                pages.append(
                    PageModel(
                        id=rel,
                        file=rel,
                        route=route,
                        components=_resolve_components(parsed.used_components),
                        fields=list(parsed.exported_props),
                        source_type="astro",
                    )
                )
                trace("page astro %s -> %s", rel, route)
            elif is_markdown(rel):
                markdown = self._decode(rel, lambda: parse_markdown_file(path), config, errors)
                if markdown is None:
                    continue
                pages.append(
                    PageModel(
                        id=rel,
                        file=rel,
                        route=route,
                        components=[],
                        fields=list(markdown.fields),
                        source_type="markdown",
                    )
                )
                trace("page markdown %s -> %s", rel, route)

        datasets: List[DatasetModel] = []
        for rel, path in src_files.items():
            if not (is_dataset(rel) and is_under_data(rel)):
                continue
            document = self._decode(rel, lambda: parse_dataset_file(path), config, errors)
            if document is None:
                continue
            identifier = dataset_id(rel)
            datasets.append(
                DatasetModel(id=identifier, file=rel, data=document.data, hash=file_hashes[rel])
            )
            trace("dataset yaml %s -> %s", rel, identifier)

        generated_at = int(self._clock().timestamp() * 1000)
        project = ProjectInfo(root=normalize(root_path), name=project_name(root_path))
        build = Build(
            generated_at=generated_at,
            project=project,
            pages=pages,
            components_index=components_index,
            datasets=datasets,
        )
        manifest = Manifest(generated_at=generated_at, project=project, files=file_hashes)

        errors.extend(ScanError(message) for message in validate_build(build))

        verify = self._verify_components
        if verify is None:
            verify = config.verify_components
        if verify:
            errors.extend(
                ScanError(message) for message in check_component_references(build, root_path)
            )

        logger.info(
            "Scanned %s: %d page(s), %d component(s), %d dataset(s), %d error(s)",
            project.name,
            len(pages),
            len(components_index),
            len(datasets),
            len(errors),
        )
        return ScanResult(manifest=manifest, build=build, errors=errors)

    def _collect(self, root: Path, out_path: Path, config: ScanConfig) -> Dict[str, Path]:
        out_rel = relative_to_root(normalize(root), normalize(out_path))
        rules = build_ignore_rules(config.exclude_paths)

        def _skip_dir(rel: str) -> bool:
            return should_ignore(rel) or rel == out_rel

        def _accept(rel: str) -> bool:
            return not should_ignore(rel) and is_tracked(rel)

        collected: Dict[str, Path] = {}
        for path in iter_files(root, _accept, skip_dir=_skip_dir, rules=rules):
            collected[relative_to_root(normalize(root), normalize(path))] = path
        return collected

    @staticmethod
    def _decode(
        rel: str,
        parse: Callable[[], _T],
        config: ScanConfig,
        errors: List[ScanError],
    ) -> Optional[_T]:
        try:
            return parse()
        except DocumentDecodeError as exc:
            if config.on_decode_error != "report":
                raise
            reason = exc.__cause__ or exc
            logger.warning("Skipping %s: %s", rel, reason)
            errors.append(ScanError(f"Failed to decode {rel}: {reason}"))
            return None


def _resolve_components(names: List[str]) -> List[str]:
    resolved: List[str] = []
    for name in names:
        candidate = guess_component_path(name)
        if candidate not in resolved:
            resolved.append(candidate)
    return resolved


def scan(
    root: str | Path,
    out_dir: str | Path | None = None,
    verbose: bool = False,
    *,
    clock: Optional[Clock] = None,
    config: Optional[ScanConfig] = None,
) -> ScanResult:
    """Run a single scan with a throwaway :class:`Scanner`."""
    return Scanner(config=config, clock=clock).scan(root, out_dir=out_dir, verbose=verbose)


__all__ = ["Clock", "Scanner", "scan"]
