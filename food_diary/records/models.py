# -*- coding: utf-8 -*-
"""Food records — Pydantic models."""

from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

# ASCII digits only: str.isdigit() also accepts e.g. superscripts, which int() rejects.
_DAY = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_MONTH_KEY = re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])")


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


def parse_day(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string; raises ValueError otherwise."""
    if not isinstance(value, str) or not _DAY.fullmatch(value):
        raise ValueError("date must be formatted as YYYY-MM-DD")
    return date.fromisoformat(value)


def is_month_key(value: str) -> bool:
    return bool(_MONTH_KEY.fullmatch(value))


class FoodRecordRequest(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    meal_type: MealType
    food_items: str = Field(..., min_length=1, max_length=4000)
    notes: Optional[str] = Field("", max_length=2000)

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        parse_day(value)
        return value

    @field_validator("food_items")
    @classmethod
    def _check_food_items(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("food_items must not be blank")
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def _coerce_notes(cls, value: object) -> str:
        if value is None:
            return ""
        return value  # type: ignore[return-value]


class FoodRecord(BaseModel):
    id: int
    user_id: int
    date: str
    meal_type: MealType
    food_items: str
    notes: str = ""
    created_at: str
    updated_at: str
