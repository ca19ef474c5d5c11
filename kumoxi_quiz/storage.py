"""
storage.py
======================

Local key-value persistence (the browser-localStorage equivalent).

Contract used by the rest of the package:
    get(key)        -> Optional[str]
    set(key, value) -> None
    delete(key)     -> None

JsonFileStore keeps every key in a single JSON object on disk:

{
  "kumoxi_quiz_leaderboard": "[{\"name\": \"Ana\", ...}]"
}

Values are opaque strings; callers serialise their own payloads.
Writes go to a temp file in the same directory and are swapped in with
os.replace, so readers only ever see the old or the new file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


# ----------------------------------------------------------------------
#  In-memory store
# ----------------------------------------------------------------------
class MemoryStore:
    """Process-local store. Used by tests and as a throwaway fallback."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


# ----------------------------------------------------------------------
#  JSON file store
# ----------------------------------------------------------------------
class JsonFileStore:
    """
    Key-value store backed by one JSON file.

    The file is re-read on every get() and before every write, so several
    app sessions (browser tabs) sharing the same file see each other's
    writes on their next read.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

    # ------------------------------------------------------------------
    # File handling
    # ------------------------------------------------------------------
    def _read_all(self) -> Dict[str, str]:
        """Missing or unreadable file -> empty store."""
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable store file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Store file {self.path} is not a JSON object; ignoring it")
            return {}
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
