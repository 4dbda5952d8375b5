"""JSON document store backing the search index."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from docsite.errors import IndexLoadFailure
from docsite.models import Document

LOGGER = logging.getLogger(__name__)

_DOCUMENTS = TypeAdapter(list[Document])


def load_documents(source: Path) -> tuple[Document, ...]:
    """Deserialize a JSON array of ``{id, title, body, path}`` objects.

    Raises:
        IndexLoadFailure: the file is missing, unreadable, not JSON, or an
            entry does not have the document shape.
    """
    try:
        raw = Path(source).read_bytes()
    except OSError as exc:
        raise IndexLoadFailure(f"cannot read {source}: {exc.strerror}") from exc

    try:
        documents = _DOCUMENTS.validate_json(raw)
    except ValidationError as exc:
        raise IndexLoadFailure(
            f"invalid document collection in {source}: {exc.error_count()} error(s)"
        ) from exc

    LOGGER.debug("Deserialized %d documents from %s", len(documents), source)
    return tuple(documents)
