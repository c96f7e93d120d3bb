"""Tests for the CLI entrypoint (main.run)."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

import main
from models import Article


def _article(arxiv_id: str) -> Article:
    return Article(
        id=f"http://arxiv.org/abs/{arxiv_id}",
        updated=datetime(2026, 1, 1, tzinfo=UTC),
        published=datetime(2026, 1, 1, tzinfo=UTC),
        title=f"Paper {arxiv_id}",
        abstract="abstract",
        authors=("Author",),
    )


@pytest.fixture(autouse=True)
def fast_debounce(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SUGGEST_DEBOUNCE_MS", "1")
    monkeypatch.delenv("SUGGEST_LIMIT", raising=False)
    monkeypatch.setenv("NOTES_DIR", str(tmp_path))
    monkeypatch.delenv("PAPER_TEMPLATE", raising=False)
    monkeypatch.delenv("TITLE_TEMPLATE", raising=False)


def test_lookup_prints_numbered_suggestions(capsys: pytest.CaptureFixture[str]) -> None:
    search = AsyncMock(return_value=[_article("0001"), _article("0002")])

    with patch("main.search_articles_async", search):
        code = main.run(main.parse_args(["https://arxiv.org/abs/0001v2"]))

    assert code == 0
    search.assert_awaited_once_with("0001v2")
    out = capsys.readouterr().out
    assert "1. Paper 0001 (Author)" in out
    assert "2. Paper 0002 (Author)" in out


def test_lookup_respects_limit(capsys: pytest.CaptureFixture[str]) -> None:
    search = AsyncMock(return_value=[_article("0001"), _article("0002")])

    with patch("main.search_articles_async", search):
        main.run(main.parse_args(["q", "--limit", "1"]))

    out = capsys.readouterr().out
    assert "1. Paper 0001" in out
    assert "Paper 0002" not in out


def test_lookup_no_results(capsys: pytest.CaptureFixture[str]) -> None:
    with patch("main.search_articles_async", AsyncMock(return_value=[])):
        code = main.run(main.parse_args(["quantum gravity"]))

    assert code == 0
    assert "No papers found." in capsys.readouterr().out


def test_empty_query_never_searches(capsys: pytest.CaptureFixture[str]) -> None:
    search = AsyncMock(return_value=[])

    with patch("main.search_articles_async", search):
        main.run(main.parse_args([]))

    search.assert_not_awaited()
    assert "(query cleared)" in capsys.readouterr().out


def test_create_writes_picked_note(tmp_path: Path) -> None:
    search = AsyncMock(return_value=[_article("0001"), _article("0002")])

    with patch("main.search_articles_async", search):
        code = main.run(main.parse_args(["q", "--create", "--pick", "2"]))

    assert code == 0
    assert (tmp_path / "0002.md").exists()


def test_create_dry_run_does_not_write(tmp_path: Path) -> None:
    with patch("main.search_articles_async", AsyncMock(return_value=[_article("0001")])):
        code = main.run(main.parse_args(["q", "--create", "--dry-run"]))

    assert code == 0
    assert not (tmp_path / "0001.md").exists()


def test_create_existing_note_fails(tmp_path: Path) -> None:
    (tmp_path / "0001.md").write_text("existing", encoding="utf-8")

    with patch("main.search_articles_async", AsyncMock(return_value=[_article("0001")])):
        code = main.run(main.parse_args(["q", "--create"]))

    assert code == 1
    assert (tmp_path / "0001.md").read_text(encoding="utf-8") == "existing"


def test_create_with_out_of_range_pick_fails() -> None:
    with patch("main.search_articles_async", AsyncMock(return_value=[_article("0001")])):
        code = main.run(main.parse_args(["q", "--create", "--pick", "3"]))

    assert code == 1
