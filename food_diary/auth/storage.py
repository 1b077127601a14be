# -*- coding: utf-8 -*-
"""Auth — DB storage helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..app_db import db_conn
from ..config import settings


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def get_user_by_username(username: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE username = ?", (username.strip(),)).fetchone()
        return dict(row) if row else None


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (email.lower().strip(),)).fetchone()
        return dict(row) if row else None


def get_user_by_id(user_id: int) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None


def create_user(*, username: str, email: str, password_hash: str) -> Dict[str, Any]:
    now = _utc_now()
    username_norm = username.strip()
    email_norm = email.lower().strip()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            """
            INSERT INTO users (username, email, password_hash, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (username_norm, email_norm, password_hash, now, now),
        )
        user_id = int(cur.lastrowid)
    return {
        "id": user_id,
        "username": username_norm,
        "email": email_norm,
        "password_hash": password_hash,
        "created_at": now,
        "updated_at": now,
    }
