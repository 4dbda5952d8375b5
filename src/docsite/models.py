"""Core DocSite data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

SNIPPET_CHARS = 140
TRUNCATION_MARKER = "…"


@dataclass(frozen=True, slots=True)
class Document:
    """A searchable page of the documentation site.

    ``id`` is opaque: any JSON value is kept and echoed back unchanged.
    """

    id: Any
    path: str
    title: str = ""
    body: str = ""

    @property
    def haystack(self) -> str:
        """Case-folded text that query terms are matched against."""
        return f"{self.title}\n{self.body}".lower()

    def snippet(self) -> str:
        if len(self.body) > SNIPPET_CHARS:
            return self.body[:SNIPPET_CHARS] + TRUNCATION_MARKER
        return self.body


@dataclass(frozen=True, slots=True)
class ScoredMatch:
    """Document paired with the number of distinct query terms it contains."""

    document: Document
    score: int
    snippet: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.document.id,
            "title": self.document.title,
            "path": self.document.path,
            "snippet": self.snippet,
        }


@dataclass(frozen=True, slots=True)
class SafePath:
    """On-disk location lexically contained in ``root``.

    Only ``docsite.utils.files.resolve_safe_path`` builds these.
    """

    root: Path
    path: Path

    @property
    def relative(self) -> Path:
        return self.path.relative_to(self.root)
