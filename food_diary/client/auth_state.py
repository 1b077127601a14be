# -*- coding: utf-8 -*-
"""Client — in-memory auth state mirrored from local storage."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .storage import LocalStorage, clear_auth, get_auth_token, get_user, set_auth_token, set_user


class AuthState:
    def __init__(self, storage: LocalStorage) -> None:
        self.storage = storage
        self.user: Optional[Dict[str, Any]] = None
        self.is_authenticated = False
        self.is_loading = True

    def load(self) -> None:
        """Restore the session from storage; both token and user must be present."""
        token = get_auth_token(self.storage)
        user = get_user(self.storage)
        if token and user:
            self.user = user
            self.is_authenticated = True
        self.is_loading = False

    def login(self, token: str, user: Dict[str, Any]) -> None:
        set_auth_token(self.storage, token)
        set_user(self.storage, user)
        self.user = user
        self.is_authenticated = True

    def logout(self) -> None:
        clear_auth(self.storage)
        self.user = None
        self.is_authenticated = False

    def update_user(self, user: Dict[str, Any]) -> None:
        set_user(self.storage, user)
        self.user = user

    @property
    def token(self) -> Optional[str]:
        return get_auth_token(self.storage)
