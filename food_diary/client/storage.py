# -*- coding: utf-8 -*-
"""Client — JSON-file key/value store holding the bearer token and cached user."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class LocalStorage:
    """String key/value storage persisted to a single JSON file.

    Values are strings, like browser local storage; structured values are stored
    JSON-encoded by the caller. A missing or unreadable file reads as empty.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable client storage %s: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


def set_auth_token(storage: LocalStorage, token: Optional[str]) -> None:
    if token:
        storage.set_item(TOKEN_KEY, token)
    else:
        storage.remove_item(TOKEN_KEY)


def get_auth_token(storage: LocalStorage) -> Optional[str]:
    return storage.get_item(TOKEN_KEY)


def set_user(storage: LocalStorage, user: Dict[str, Any]) -> None:
    storage.set_item(USER_KEY, json.dumps(user, ensure_ascii=False))


def get_user(storage: LocalStorage) -> Optional[Dict[str, Any]]:
    raw = storage.get_item(USER_KEY)
    if not raw:
        return None
    try:
        user = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return user if isinstance(user, dict) else None


def clear_auth(storage: LocalStorage) -> None:
    storage.remove_item(TOKEN_KEY)
    storage.remove_item(USER_KEY)
