"""Tests for traversal and ignore rules in frontmatter_core.fs."""

from __future__ import annotations

from pathlib import Path

from frontmatter_core.fs import build_ignore_rule, build_ignore_rules, hash_file, iter_files


def _touch(root: Path, relative: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(relative, encoding="utf-8")


def test_iter_files_is_sorted_and_prunes(tmp_path: Path) -> None:
    for relative in ["b/2.md", "b/1.md", "a.md", "node_modules/x.md", ".git/y.md", "skip/z.md"]:
        _touch(tmp_path, relative)

    found = [
        path.relative_to(tmp_path).as_posix()
        for path in iter_files(tmp_path, lambda rel: rel.endswith(".md"), skip_dir=lambda rel: rel == "skip")
    ]

    assert found == ["a.md", "b/1.md", "b/2.md"]


def test_ignore_rule_shapes() -> None:
    directory = build_ignore_rule("drafts/")
    assert directory is not None
    assert directory.matches("src/pages/drafts", True)
    assert not directory.matches("src/pages/drafts", False)

    glob = build_ignore_rule("*.tmp.md")
    assert glob is not None and glob.matches("src/pages/a.tmp.md", False)

    anchored = build_ignore_rule("/src/pages/legacy")
    assert anchored is not None and anchored.matches("src/pages/legacy", True)
    assert not anchored.matches("other/src/pages/legacy", True)

    assert build_ignore_rule("   ") is None
    assert build_ignore_rule("# comment") is None
    assert len(build_ignore_rules(["a/", "", "b"])) == 2


def test_hash_file_depends_only_on_content(tmp_path: Path) -> None:
    first = tmp_path / "one.md"
    second = tmp_path / "two.md"
    first.write_bytes(b"same")
    second.write_bytes(b"same")

    assert hash_file(first) == hash_file(second)

    second.write_bytes(b"samf")
    assert hash_file(first) != hash_file(second)
