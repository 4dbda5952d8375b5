"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PORT = 3000
MAX_BODY_BYTES = 1_000_000


@dataclass(slots=True)
class AppConfig:
    root_dir: Path | None = None
    docs_path: Path = Path("data/docs.json")
    feedback_path: Path = Path("data/feedback.json")
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    max_body_bytes: int = MAX_BODY_BYTES
    allowed_dirs: tuple[str, ...] = ("assets", "data")
    public_files: tuple[str, ...] = ("index.html",)
    entry_document: str = "index.html"

    def __post_init__(self) -> None:
        if self.root_dir is None:
            self.root_dir = Path.cwd()
        # Containment checks compare normalized absolute segments.
        self.root_dir = Path(os.path.abspath(self.root_dir))

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config honouring ``DOCSITE_ROOT`` and ``PORT``."""
        root = os.environ.get("DOCSITE_ROOT")
        port = os.environ.get("PORT")
        return cls(
            root_dir=Path(root) if root else None,
            port=int(port) if port else DEFAULT_PORT,
        )

    def resolve_path(self, path: Path) -> Path:
        if Path(path).is_absolute():
            return Path(path)
        return Path(self.root_dir) / path

    @property
    def resolved_docs_path(self) -> Path:
        return self.resolve_path(self.docs_path)

    @property
    def resolved_feedback_path(self) -> Path:
        return self.resolve_path(self.feedback_path)
