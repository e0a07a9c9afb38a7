"""Lokale Persistenz: Key-Value-Datei und API-Key-Ablage."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

API_KEY_ITEM = "key"


class LocalStorage:
    """Dauerhafter Key-Value-Speicher in einer JSON-Datei.

    Eine fehlende Datei gilt als leerer Speicher. Lese- und Schreibfehler
    werden nicht abgefangen.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._save(data)

    # ------------------------------------------------------------------
    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError(f"Ungültiger Speicherinhalt in {self.path}")
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=4)
        logger.debug("Speicher %s geschrieben", self.path)


class CredentialStore:
    """Verwaltet genau einen Redmine API-Key."""

    def __init__(self, storage: LocalStorage) -> None:
        self.storage = storage

    def get(self) -> Optional[str]:
        return self.storage.get_item(API_KEY_ITEM)

    def set(self, key: str) -> None:
        self.storage.set_item(API_KEY_ITEM, key)

    def remove(self) -> None:
        self.storage.remove_item(API_KEY_ITEM)


__all__ = ["API_KEY_ITEM", "CredentialStore", "LocalStorage"]
