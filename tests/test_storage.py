"""Tests for the JSON document store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docsite.errors import IndexLoadFailure
from docsite.index.storage import load_documents
from docsite.models import Document


class TestLoadDocuments:
    """Test load_documents function."""

    def test_valid_collection(self, tmp_path: Path) -> None:
        """Should build Document values in file order."""
        source = tmp_path / "docs.json"
        source.write_text(
            json.dumps(
                [
                    {"id": 1, "title": "Intro", "body": "Getting started", "path": "/intro"},
                    {"id": "faq", "title": "FAQ", "body": "Questions", "path": "/faq"},
                ]
            ),
            encoding="utf-8",
        )

        documents = load_documents(source)

        assert documents == (
            Document(id=1, title="Intro", body="Getting started", path="/intro"),
            Document(id="faq", title="FAQ", body="Questions", path="/faq"),
        )

    def test_missing_title_and_body_default_to_empty(self, tmp_path: Path) -> None:
        """Should accept documents without title or body."""
        source = tmp_path / "docs.json"
        source.write_text('[{"id": 7, "path": "/blank"}]', encoding="utf-8")

        (document,) = load_documents(source)

        assert document.title == ""
        assert document.body == ""

    def test_empty_array(self, tmp_path: Path) -> None:
        """Should return an empty tuple for an empty collection."""
        source = tmp_path / "docs.json"
        source.write_text("[]", encoding="utf-8")

        assert load_documents(source) == ()

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should raise IndexLoadFailure for an absent file."""
        with pytest.raises(IndexLoadFailure):
            load_documents(tmp_path / "nope.json")

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            '{"id": 1, "path": "/x"}',
            '[{"title": "no id or path"}]',
            '[{"id": 1, "path": "/x", "body": ["not", "text"]}]',
        ],
    )
    def test_invalid_content(self, tmp_path: Path, content: str) -> None:
        """Should raise IndexLoadFailure for malformed collections."""
        source = tmp_path / "docs.json"
        source.write_text(content, encoding="utf-8")

        with pytest.raises(IndexLoadFailure):
            load_documents(source)

    def test_opaque_ids_kept(self, tmp_path: Path) -> None:
        """Should accept any JSON value as an id and keep it unchanged."""
        source = tmp_path / "docs.json"
        source.write_text(
            json.dumps(
                [
                    {"id": 1, "title": "One", "body": "alpha", "path": "/one"},
                    {"id": 2.5, "title": "Half", "body": "alpha beta", "path": "/half"},
                    {"id": None, "title": "Null", "body": "alpha", "path": "/null"},
                    {"id": "slug", "title": "Slug", "body": "alpha", "path": "/slug"},
                ]
            ),
            encoding="utf-8",
        )

        documents = load_documents(source)

        assert [d.id for d in documents] == [1, 2.5, None, "slug"]
