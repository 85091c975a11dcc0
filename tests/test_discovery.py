"""Test markdown file discovery."""

import os

import pytest
from markpad.discovery import DocumentChoice, find_documents


def touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")


def test_finds_top_level_and_one_level_down(tmp_path):
    touch(tmp_path / "readme.md")
    touch(tmp_path / "notes.txt")
    touch(tmp_path / "docs" / "guide.md")
    touch(tmp_path / "docs" / "image.png")
    touch(tmp_path / "docs" / "deep" / "hidden.md")

    choices = find_documents(str(tmp_path))

    assert choices == [
        DocumentChoice(label="docs/guide.md", path=str(tmp_path / "docs" / "guide.md")),
        DocumentChoice(label="readme.md", path=str(tmp_path / "readme.md")),
    ]


def test_empty_directory(tmp_path):
    assert find_documents(str(tmp_path)) == []


def test_defaults_to_working_directory(tmp_path, monkeypatch):
    touch(tmp_path / "a.md")
    monkeypatch.chdir(tmp_path)
    choices = find_documents()
    assert [c.label for c in choices] == ["a.md"]
    assert os.path.isabs(choices[0].path)


def test_custom_extension(tmp_path):
    touch(tmp_path / "a.md")
    touch(tmp_path / "b.markdown")
    assert [c.label for c in find_documents(str(tmp_path), extension=".markdown")] == ["b.markdown"]


def test_directory_named_like_a_document_is_searched_not_listed(tmp_path):
    touch(tmp_path / "odd.md" / "inner.md")
    assert [c.label for c in find_documents(str(tmp_path))] == ["odd.md/inner.md"]


@pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0,
                    reason="root can read any directory")
def test_unreadable_subdirectory_is_skipped(tmp_path):
    touch(tmp_path / "top.md")
    locked = tmp_path / "locked"
    touch(locked / "secret.md")
    os.chmod(locked, 0o000)
    try:
        assert [c.label for c in find_documents(str(tmp_path))] == ["top.md"]
    finally:
        os.chmod(locked, 0o755)
