# -*- coding: utf-8 -*-
"""Client — registration and food record form state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from .http import ApiError, AuthAPI, FoodAPI

MIN_PASSWORD_LENGTH = 6
MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")

REGISTER_FALLBACK_ERROR = "Registration failed, please try again"
SAVE_FALLBACK_ERROR = "Save failed, please try again"
REGISTER_SUCCESS = "Registration successful! Please log in."


def _error_message(exc: ApiError, fallback: str) -> str:
    # Only a server-provided envelope message is shown verbatim.
    if isinstance(exc.payload, dict) and exc.payload.get("message"):
        return str(exc.payload["message"])
    return fallback


@dataclass
class RegisterForm:
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    error: str = ""
    success: str = ""
    is_loading: bool = False

    def set_field(self, name: str, value: str) -> None:
        setattr(self, name, value)
        self.error = ""
        self.success = ""

    def validate(self) -> Optional[str]:
        if self.password != self.confirm_password:
            return "Passwords do not match"
        if len(self.password) < MIN_PASSWORD_LENGTH:
            return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        return None

    def payload(self) -> Dict[str, str]:
        return {"username": self.username, "email": self.email, "password": self.password}

    def submit(self, auth_api: AuthAPI) -> bool:
        """Validate and register. True means the caller should move on to login."""
        problem = self.validate()
        if problem:
            self.error = problem
            return False

        self.is_loading = True
        self.error = ""
        try:
            auth_api.register(self.payload())
        except ApiError as exc:
            self.error = _error_message(exc, REGISTER_FALLBACK_ERROR)
            return False
        finally:
            self.is_loading = False
        self.success = REGISTER_SUCCESS
        return True


@dataclass
class FoodRecordForm:
    date: str
    meal_type: str = "breakfast"
    food_items: str = ""
    notes: str = ""
    record_id: Optional[int] = None
    error: str = ""
    is_loading: bool = False

    @classmethod
    def for_new(cls, selected: date) -> "FoodRecordForm":
        return cls(date=selected.isoformat())

    @classmethod
    def for_record(cls, record: Dict[str, Any]) -> "FoodRecordForm":
        return cls(
            date=record["date"],
            meal_type=record["meal_type"],
            food_items=record["food_items"],
            notes=record.get("notes") or "",
            record_id=record["id"],
        )

    @property
    def is_edit(self) -> bool:
        return self.record_id is not None

    def payload(self) -> Dict[str, str]:
        return {
            "date": self.date,
            "meal_type": self.meal_type,
            "food_items": self.food_items,
            "notes": self.notes,
        }

    def submit(self, food_api: FoodAPI) -> bool:
        self.is_loading = True
        self.error = ""
        try:
            if self.record_id is not None:
                food_api.update_record(self.record_id, self.payload())
            else:
                food_api.create_record(self.payload())
        except ApiError as exc:
            self.error = _error_message(exc, SAVE_FALLBACK_ERROR)
            return False
        finally:
            self.is_loading = False
        return True
