"""Tests for JSON persistence of scan results."""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

from frontmatter_core.fs import dumps_json, read_json
from frontmatter_core.output import read_build, write_scan_outputs
from tests._fixtures.project_builder import FIXED_MILLIS, ProjectBuilder


def test_write_scan_outputs_writes_manifest_and_build(project: ProjectBuilder, tmp_path: Path) -> None:
    project.write(
        {
            "src/pages/index.astro": "---\nconst { title = \"Home\" } = Astro.props;\n---\n<Hero />\n",
            "src/data/events.yaml": "- name: Launch\n  date: 2024-03-01\n",
        }
    )
    result = project.scan()
    out_dir = tmp_path / "out"

    written = write_scan_outputs(result, out_dir)

    assert written.errors is None
    assert not (out_dir / "errors.json").exists()

    text = (out_dir / "build.json").read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert '\n  "schemaVersion": 2,' in text

    build = read_build(out_dir)
    assert build["generatedAt"] == FIXED_MILLIS
    assert build["pages"][0] == {
        "id": "src/pages/index.astro",
        "route": "/",
        "file": "src/pages/index.astro",
        "components": ["src/components/Hero.astro"],
        "fields": [{"key": "title", "type": "string", "required": False, "default": "Home", "source": "astro"}],
        "sourceType": "astro",
    }
    assert build["datasets"][0]["data"] == [{"name": "Launch", "date": "2024-03-01"}]

    manifest = read_json(out_dir / "manifest.json")
    assert set(manifest) == {"schemaVersion", "generatedAt", "project", "files"}
    assert manifest["files"] == result.manifest.files


def test_errors_file_written_and_cleared(project: ProjectBuilder, tmp_path: Path) -> None:
    project.write({"src/pages/index.astro": "<Missing />\n"})
    out_dir = tmp_path / "out"

    failing = project.scan(verify_components=True)
    written = write_scan_outputs(failing, out_dir)

    assert written.errors == out_dir / "errors.json"
    payload = json.loads(written.errors.read_text(encoding="utf-8"))
    assert payload == {
        "errors": [
            {"message": "Page(src/pages/index.astro) references missing component src/components/Missing.astro"}
        ]
    }

    write_scan_outputs(project.scan(), out_dir)

    assert not (out_dir / "errors.json").exists()


def test_date_keyed_dataset_is_written(project: ProjectBuilder, tmp_path: Path) -> None:
    project.write(
        {
            "src/data/changelog.yaml": "2024-01-01: New year release\n2024-02-01:\n  2024-02-03: patch\n",
            "src/data/blob.yaml": "payload: !!binary aGVsbG8=\n",
        }
    )
    out_dir = tmp_path / "out"

    write_scan_outputs(project.scan(), out_dir)

    datasets = {dataset["id"]: dataset for dataset in read_build(out_dir)["datasets"]}
    assert datasets["changelog"]["data"] == {
        "2024-01-01": "New year release",
        "2024-02-01": {"2024-02-03": "patch"},
    }
    assert datasets["blob"]["data"] == {"payload": "aGVsbG8="}


def test_dumps_json_handles_yaml_values() -> None:
    text = dumps_json({"when": dt.date(2024, 1, 2), "tags": {"b", "a"}, "name": "Café"})

    assert json.loads(text) == {"when": "2024-01-02", "tags": ["a", "b"], "name": "Café"}
    assert "Café" in text
    assert text.endswith("\n")
