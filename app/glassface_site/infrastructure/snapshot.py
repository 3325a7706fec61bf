from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from glassface_site.core.content_errors import SnapshotReadError


class LocalSnapshot:
    """Project documents bundled with the build as a JSON array."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read_documents(self) -> list[dict[str, Any]]:
        try:
            raw_bytes = self.path.read_bytes()
        except OSError as exc:
            raise SnapshotReadError(f"Cannot read snapshot {self.path}: {exc}") from exc
        try:
            documents = json.loads(raw_bytes.decode("utf-8"))
        except ValueError as exc:
            # UnicodeDecodeError and JSONDecodeError are both ValueError.
            raise SnapshotReadError(f"Snapshot {self.path} is not valid UTF-8 JSON: {exc}") from exc
        if not isinstance(documents, list):
            raise SnapshotReadError(f"Snapshot {self.path} must contain a JSON array.")
        return [item for item in documents if isinstance(item, dict)]
