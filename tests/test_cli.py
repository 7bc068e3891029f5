"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from frontmatter_core.cli import _build_parser, main
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_accepts_verbose_before_command() -> None:
    args = _build_parser().parse_args(["--verbose", "scan"])
    assert args.verbose is True
    assert args.command == "scan"


def test_cli_accepts_options_after_command() -> None:
    args = _build_parser().parse_args(["scan", "--root", "site", "--out", "ir", "--verbose"])
    assert args.root == "site"
    assert args.out == "ir"
    assert args.verbose is True
    assert args.verify_components is False


def test_cli_accepts_quiet_short_flag() -> None:
    args = _build_parser().parse_args(["-q", "validate"])
    assert args.quiet is True
    assert args.verbose is False

    args = _build_parser().parse_args(["scan", "-q"])
    assert args.quiet is True


def test_cli_accepts_verify_components_on_export() -> None:
    args = _build_parser().parse_args(["export", "--verify-components"])
    assert args.command == "export"
    assert args.verify_components is True


def test_scan_writes_outputs_and_validate_accepts_them(
    project: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project.write({"src/pages/index.astro": "<h1>Home</h1>\n", "src/data/nav.yaml": "- home\n"})
    root = str(project.path())

    main(["scan", "--root", root, "--quiet"])

    out_dir = project.path() / ".frontmatter"
    assert (out_dir / "manifest.json").exists()
    assert (out_dir / "build.json").exists()
    assert not (out_dir / "errors.json").exists()
    assert "Scan OK" in capsys.readouterr().out

    main(["validate", "--root", root, "--quiet"])
    assert "Build is valid." in capsys.readouterr().out


def test_rescan_ignores_previous_output(project: ProjectBuilder) -> None:
    project.write({"src/pages/index.astro": "<h1 />\n"})
    out_dir = project.path() / "ir"
    out_dir.mkdir()
    (out_dir / "src" / "pages").mkdir(parents=True)
    (out_dir / "src" / "pages" / "stale.astro").write_text("<p />\n", encoding="utf-8")

    main(["scan", "--root", str(project.path()), "--out", str(out_dir), "--quiet"])

    manifest = json.loads((out_dir / "manifest.json").read_text(encoding="utf-8"))
    assert list(manifest["files"]) == ["src/pages/index.astro"]


def test_scan_with_errors_exits_with_status_two(project: ProjectBuilder, tmp_path: Path) -> None:
    project.write({"src/pages/index.astro": "<Missing />\n"})
    out_dir = tmp_path / "out"

    with pytest.raises(SystemExit) as excinfo:
        main(["scan", "--root", str(project.path()), "--out", str(out_dir), "--verify-components", "-q"])

    assert excinfo.value.code == 2
    payload = json.loads((out_dir / "errors.json").read_text(encoding="utf-8"))
    assert len(payload["errors"]) == 1


def test_scan_decode_failure_exits_with_status_one(project: ProjectBuilder) -> None:
    project.write({"src/data/broken.yaml": "a: [1\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["scan", "--root", str(project.path()), "-q"])

    assert excinfo.value.code == 1
    assert not (project.path() / ".frontmatter" / "build.json").exists()


def test_validate_without_build_exits_with_status_two(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["validate", "--root", str(tmp_path), "-q"])

    assert excinfo.value.code == 2


def test_validate_reports_invalid_build(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_dir = tmp_path / ".frontmatter"
    out_dir.mkdir()
    (out_dir / "build.json").write_text(
        json.dumps({"schemaVersion": 1, "project": {"root": "/r", "name": "r"}, "pages": [], "componentsIndex": {}, "datasets": []}),
        encoding="utf-8",
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["validate", "--root", str(tmp_path), "-q"])

    assert excinfo.value.code == 2
    assert "Unsupported schemaVersion: 1" in capsys.readouterr().err
