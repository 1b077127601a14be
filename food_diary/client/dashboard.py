# -*- coding: utf-8 -*-
"""Client — dashboard controller: displayed month, selected day, the month's records."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from .forms import FoodRecordForm
from .http import ApiError, FoodAPI
from .month_view import CalendarDay, build_month_grid, month_key, records_for_date, shift_month

logger = logging.getLogger(__name__)

FETCH_ERROR = "Failed to load food records"
DELETE_ERROR = "Failed to delete record"


class Dashboard:
    def __init__(self, food_api: FoodAPI, *, today: Optional[date] = None) -> None:
        self.food_api = food_api
        self.today = today or date.today()
        self.year = self.today.year
        self.month = self.today.month
        self.selected_date = self.today
        self.records: List[Dict[str, Any]] = []
        self.form: Optional[FoodRecordForm] = None
        self.error = ""
        self.is_loading = False

    @property
    def month_key(self) -> str:
        return month_key(self.year, self.month)

    def fetch_records(self) -> None:
        self.is_loading = True
        try:
            body = self.food_api.get_records(month=self.month_key)
            self.records = list(body.get("data") or [])
        except ApiError as exc:
            logger.error("Fetching records for %s failed: %s", self.month_key, exc)
            self.error = FETCH_ERROR
        finally:
            self.is_loading = False

    def grid(self) -> List[List[CalendarDay]]:
        return build_month_grid(
            self.year, self.month, self.records, selected=self.selected_date, today=self.today
        )

    def records_for_selected(self) -> List[Dict[str, Any]]:
        return records_for_date(self.records, self.selected_date)

    def select_date(self, day: date) -> None:
        self.selected_date = day
        self.form = None

    def go_to_month(self, year: int, month: int) -> None:
        self.year, self.month = year, month
        self.fetch_records()

    def prev_month(self) -> None:
        self.go_to_month(*shift_month(self.year, self.month, -1))

    def next_month(self) -> None:
        self.go_to_month(*shift_month(self.year, self.month, 1))

    def open_add_form(self) -> FoodRecordForm:
        self.form = FoodRecordForm.for_new(self.selected_date)
        return self.form

    def open_edit_form(self, record: Dict[str, Any]) -> FoodRecordForm:
        self.form = FoodRecordForm.for_record(record)
        return self.form

    def close_form(self) -> None:
        self.form = None

    def save_form(self) -> bool:
        """Submit the open form; on success close it and refetch the month."""
        if self.form is None:
            return False
        if not self.form.submit(self.food_api):
            return False
        self.close_form()
        self.fetch_records()
        return True

    def delete_record(self, record_id: int) -> bool:
        try:
            self.food_api.delete_record(record_id)
        except ApiError as exc:
            logger.error("Deleting record %s failed: %s", record_id, exc)
            self.error = DELETE_ERROR
            return False
        self.fetch_records()
        return True

    def dismiss_error(self) -> None:
        self.error = ""
