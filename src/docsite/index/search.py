"""Substring-scoring search over an in-memory document snapshot."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from docsite.errors import IndexLoadFailure
from docsite.index.storage import load_documents
from docsite.models import Document, ScoredMatch

LOGGER = logging.getLogger(__name__)

MAX_RESULTS = 8


def tokenize(text: str) -> list[str]:
    """Split on whitespace, lowercase and drop repeated terms."""
    return list(dict.fromkeys(text.lower().split()))


class DocumentIndex:
    """Holds the current document snapshot and answers term queries.

    The snapshot is a tuple that is replaced wholesale by ``load``; queries
    read the reference once, so they always see a complete collection.
    """

    def __init__(self, documents: tuple[Document, ...] = ()) -> None:
        self._documents: tuple[Document, ...] = tuple(documents)
        self._source: Path | None = None

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def documents(self) -> tuple[Document, ...]:
        return self._documents

    @property
    def source(self) -> Path | None:
        return self._source

    def load(self, source: Path) -> None:
        """Replace the snapshot with the collection stored at ``source``.

        A missing or corrupt source leaves the index empty; no error is raised.
        """
        self._source = Path(source)
        try:
            documents = load_documents(self._source)
        except IndexLoadFailure as exc:
            LOGGER.warning("Search index unavailable, serving no documents: %s", exc)
            documents = ()
        self._documents = documents
        LOGGER.info("Loaded %d documents into the search index", len(documents))

    def reload(self) -> None:
        if self._source is None:
            raise RuntimeError("reload() called before load()")
        self.load(self._source)

    def query(self, text: str, *, limit: int = MAX_RESULTS) -> List[ScoredMatch]:
        if not text or not text.strip():
            return []

        terms = tokenize(text)
        documents = self._documents
        matches: List[ScoredMatch] = []
        for document in documents:
            haystack = document.haystack
            score = sum(1 for term in terms if term in haystack)
            if score:
                matches.append(ScoredMatch(document, score, document.snippet()))

        # sort() is stable: equal scores keep collection order.
        matches.sort(key=lambda match: match.score, reverse=True)
        return matches[:limit]
