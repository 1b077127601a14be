# -*- coding: utf-8 -*-
"""Food records — DB storage helpers.

Deletion is soft: rows keep a `deleted_at` timestamp and are hidden from every query.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from ..app_db import db_conn
from ..config import settings
from .models import FoodRecord

_LIVE = "deleted_at IS NULL"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _to_record(row) -> FoodRecord:
    data = dict(row)
    data.pop("deleted_at", None)
    return FoodRecord.model_validate(data)


def create_record(
    *,
    user_id: int,
    date: str,
    meal_type: str,
    food_items: str,
    notes: str = "",
) -> FoodRecord:
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            """
            INSERT INTO food_records (user_id, date, meal_type, food_items, notes, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (user_id, date, meal_type, food_items, notes or "", now, now),
        )
        record_id = int(cur.lastrowid)
    return FoodRecord(
        id=record_id,
        user_id=user_id,
        date=date,
        meal_type=meal_type,
        food_items=food_items,
        notes=notes or "",
        created_at=now,
        updated_at=now,
    )


def list_records(
    user_id: int,
    *,
    date: Optional[str] = None,
    month: Optional[str] = None,
) -> List[FoodRecord]:
    """List a user's records, newest day first.

    `date` (YYYY-MM-DD) wins over `month` (YYYY-MM); with neither, everything is returned.
    """
    sql = f"SELECT * FROM food_records WHERE user_id = ? AND {_LIVE}"
    params: list = [user_id]
    if date:
        sql += " AND date = ?"
        params.append(date)
    elif month:
        sql += " AND date LIKE ?"
        params.append(f"{month}-%")
    sql += " ORDER BY date DESC, created_at DESC, id DESC"

    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
        return [_to_record(r) for r in rows]


def get_record(user_id: int, record_id: int) -> Optional[FoodRecord]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            f"SELECT * FROM food_records WHERE id = ? AND user_id = ? AND {_LIVE}",
            (record_id, user_id),
        ).fetchone()
        return _to_record(row) if row else None


def update_record(
    user_id: int,
    record_id: int,
    *,
    date: str,
    meal_type: str,
    food_items: str,
    notes: str = "",
) -> Optional[FoodRecord]:
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            f"""
            UPDATE food_records
            SET date = ?, meal_type = ?, food_items = ?, notes = ?, updated_at = ?
            WHERE id = ? AND user_id = ? AND {_LIVE}
            """,
            (date, meal_type, food_items, notes or "", now, record_id, user_id),
        )
        if cur.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM food_records WHERE id = ?", (record_id,)).fetchone()
        return _to_record(row)


def delete_record(user_id: int, record_id: int) -> bool:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            f"UPDATE food_records SET deleted_at = ? WHERE id = ? AND user_id = ? AND {_LIVE}",
            (_utc_now(), record_id, user_id),
        )
        return cur.rowcount > 0
