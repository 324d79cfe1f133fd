"""Calculation history store.

Keeps the most recent calculations in a small JSON file so they can be
listed and recalled from the CLI and the desktop app. Entries are stored
newest first:

    {"id", "timestamp", "mode", "label", "inputs", "summary"}
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from compeff_pro.core.config import _NumpyEncoder

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "COMPEFF_HOME"
DEFAULT_MAX_ENTRIES = 50


def default_history_path() -> Path:
    """``$COMPEFF_HOME/history.json``, else ``~/.compeff_pro/history.json``."""
    home = os.environ.get(HOME_ENV_VAR)
    base = Path(home) if home else Path.home() / ".compeff_pro"
    return base / "history.json"


class HistoryStore:
    """JSON-backed list of recent calculations.

    Args:
        path: History file; defaults to :func:`default_history_path`.
        max_entries: Oldest entries beyond this count are dropped on add.
    """

    def __init__(self, path: str | Path | None = None, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.path = Path(path) if path is not None else default_history_path()
        self.max_entries = max_entries

    def _read(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            logger.warning("History file %s is corrupt (%s); starting empty", self.path, exc)
            return []
        if not isinstance(data, list):
            logger.warning("History file %s has unexpected content; starting empty", self.path)
            return []
        return data

    def _write(self, entries: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(entries, f, indent=2, cls=_NumpyEncoder, ensure_ascii=False)

    def add(
        self,
        mode: str,
        label: str,
        inputs: dict[str, Any],
        summary: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Record a calculation and return the new entry."""
        entry = {
            "id": uuid.uuid4().hex[:12],
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "mode": mode,
            "label": label,
            "inputs": inputs,
            "summary": summary or {},
        }
        entries = [entry] + self._read()
        self._write(entries[: self.max_entries])
        logger.info("History entry %s added: %s", entry["id"], label)
        return entry

    def list(self, mode: str | None = None) -> list[dict[str, Any]]:
        """Entries newest first, optionally only those of *mode*."""
        entries = self._read()
        if mode is not None:
            entries = [e for e in entries if e.get("mode") == mode]
        return entries

    def get(self, entry_id: str) -> dict[str, Any]:
        """Entry by id.

        Raises:
            KeyError: If no entry has this id.
        """
        for entry in self._read():
            if entry.get("id") == entry_id:
                return entry
        raise KeyError(f"No history entry with id '{entry_id}'")

    def delete(self, entry_id: str) -> bool:
        """Remove an entry; returns False if it did not exist."""
        entries = self._read()
        kept = [e for e in entries if e.get("id") != entry_id]
        if len(kept) == len(entries):
            return False
        self._write(kept)
        return True

    def clear(self) -> int:
        """Remove every entry; returns how many were removed."""
        count = len(self._read())
        self._write([])
        logger.info("History cleared (%d entries)", count)
        return count

    def __len__(self) -> int:
        return len(self._read())
