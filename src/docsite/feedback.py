"""Append-only JSON log of reader feedback."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from docsite.errors import ServerError

LOGGER = logging.getLogger(__name__)


def build_entry(payload: Any, client_ip: str | None) -> dict[str, Any]:
    """Stamp a submission with its receive time and client address."""
    entry = dict(payload) if isinstance(payload, dict) else {"payload": payload}
    entry["time"] = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    entry["ip"] = client_ip
    return entry


class FeedbackLog:
    """JSON array file that grows by one entry per submission.

    The file and its parent directory are created on first use. Appends
    are serialized so concurrent submissions never drop an entry.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = asyncio.Lock()

    async def read_entries(self) -> list[Any]:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as handle:
                raw = await handle.read()
        except FileNotFoundError:
            return []
        try:
            entries = json.loads(raw) if raw.strip() else []
        except ValueError as exc:
            LOGGER.error("Feedback log %s is corrupt: %s", self.path, exc)
            raise ServerError() from exc
        if not isinstance(entries, list):
            LOGGER.error("Feedback log %s does not hold a JSON array", self.path)
            raise ServerError()
        return entries

    async def append(self, entry: dict[str, Any]) -> int:
        """Append ``entry`` and return the new number of entries."""
        async with self._lock:
            try:
                await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
                entries = await self.read_entries()
                entries.append(entry)
                async with aiofiles.open(self.path, "w", encoding="utf-8") as handle:
                    await handle.write(json.dumps(entries, indent=2, ensure_ascii=False))
            except OSError as exc:
                LOGGER.error("Unable to write feedback log %s: %s", self.path, exc)
                raise ServerError() from exc
        LOGGER.debug("Recorded feedback entry #%d", len(entries))
        return len(entries)
