# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sqlite3
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient


class TestFoodRecordsApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="food-diary-test-"))
        os.environ["FOOD_DIARY_DATA_ROOT"] = str(cls._tmp)
        os.environ["FOOD_DIARY_DB_PATH"] = str(cls._tmp / "food_diary.db")
        os.environ["FOOD_DIARY_JWT_SECRET"] = "test-secret"

        for name in list(sys.modules.keys()):
            if name == "food_diary" or name.startswith("food_diary."):
                sys.modules.pop(name, None)

        from food_diary.api import app  # noqa: WPS433

        cls.client = TestClient(app)
        cls.alice = cls._auth_headers("alice")
        cls.mallory = cls._auth_headers("mallory")

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        shutil.rmtree(cls._tmp, ignore_errors=True)

    @classmethod
    def _auth_headers(cls, username: str) -> dict:
        cls.client.post(
            "/api/register",
            json={"username": username, "email": f"{username}@example.com", "password": "secret1"},
        )
        resp = cls.client.post("/api/login", json={"username": username, "password": "secret1"})
        return {"Authorization": f"Bearer {resp.json()['data']['token']}"}

    def _create(self, headers: dict, **overrides) -> dict:
        body = {"date": "2026-10-19", "meal_type": "lunch", "food_items": "rice, tofu", "notes": ""}
        body.update(overrides)
        resp = self.client.post("/api/food-records", json=body, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["data"]

    def _list(self, headers: dict, **params) -> list:
        resp = self.client.get("/api/food-records", params=params, headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["data"]

    def test_requires_auth(self) -> None:
        resp = self.client.get("/api/food-records")
        self.assertEqual(resp.status_code, 401)
        resp = self.client.post("/api/food-records", json={})
        self.assertEqual(resp.status_code, 401)

    def test_storage_failure_during_auth_uses_envelope(self) -> None:
        failing = mock.patch(
            "food_diary.api.get_current_user_from_request",
            side_effect=sqlite3.OperationalError("database is locked"),
        )
        with failing:
            resp = self.client.get("/api/food-records", headers=self.alice)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"status": "error", "message": "Internal storage error"})

    def test_create_returns_record(self) -> None:
        record = self._create(self.alice, date="2026-03-02", meal_type="breakfast", notes=None)
        self.assertEqual(record["date"], "2026-03-02")
        self.assertEqual(record["meal_type"], "breakfast")
        self.assertEqual(record["notes"], "")
        self.assertIn("created_at", record)
        self.assertIn("updated_at", record)

    def test_create_validation(self) -> None:
        bad_bodies = [
            {"date": "2026-13-01", "meal_type": "lunch", "food_items": "x"},
            {"date": "19/10/2026", "meal_type": "lunch", "food_items": "x"},
            {"date": "2026-10-19", "meal_type": "brunch", "food_items": "x"},
            {"date": "2026-10-19", "meal_type": "lunch", "food_items": ""},
            {"date": "2026-10-19", "meal_type": "lunch", "food_items": "   "},
            {"meal_type": "lunch", "food_items": "x"},
        ]
        for body in bad_bodies:
            resp = self.client.post("/api/food-records", json=body, headers=self.alice)
            self.assertEqual(resp.status_code, 400, body)
            self.assertEqual(resp.json()["status"], "error")

    def test_filters_and_ordering(self) -> None:
        first = self._create(self.alice, date="2025-07-10", meal_type="breakfast")
        second = self._create(self.alice, date="2025-07-10", meal_type="dinner")
        later = self._create(self.alice, date="2025-07-21", meal_type="snack")
        self._create(self.alice, date="2025-08-01")

        july = self._list(self.alice, month="2025-07")
        self.assertEqual([r["id"] for r in july], [later["id"], second["id"], first["id"]])

        day = self._list(self.alice, date="2025-07-10")
        self.assertEqual({r["id"] for r in day}, {first["id"], second["id"]})

        # date wins over month
        day = self._list(self.alice, date="2025-07-21", month="2025-08")
        self.assertEqual([r["id"] for r in day], [later["id"]])

        everything = self._list(self.alice)
        dates = [r["date"] for r in everything]
        self.assertEqual(dates, sorted(dates, reverse=True))

    def test_bad_filters(self) -> None:
        resp = self.client.get("/api/food-records", params={"month": "2025-7"}, headers=self.alice)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/food-records", params={"date": "2025-02-30"}, headers=self.alice)
        self.assertEqual(resp.status_code, 400)
        # Non-ASCII digits pass str.isdigit() but are not valid filters.
        for params in ({"month": "2026-²1"}, {"month": "２０２６-10"}, {"date": "2026-10-1²"}):
            resp = self.client.get("/api/food-records", params=params, headers=self.alice)
            self.assertEqual(resp.status_code, 400, params)
            self.assertEqual(resp.json()["status"], "error")

    def test_update(self) -> None:
        record = self._create(self.alice, date="2024-01-05")
        resp = self.client.put(
            f"/api/food-records/{record['id']}",
            json={"date": "2024-01-06", "meal_type": "dinner", "food_items": "noodles", "notes": "spicy"},
            headers=self.alice,
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["id"], record["id"])
        self.assertEqual(data["date"], "2024-01-06")
        self.assertEqual(data["meal_type"], "dinner")
        self.assertEqual(data["notes"], "spicy")
        self.assertEqual(self._list(self.alice, date="2024-01-05"), [])

    def test_invalid_record_id(self) -> None:
        body = {"date": "2024-01-06", "meal_type": "dinner", "food_items": "noodles"}
        for raw in ("abc", "0", "-1", "²", "１", "99999999999999999999999"):
            resp = self.client.put(f"/api/food-records/{raw}", json=body, headers=self.alice)
            self.assertEqual(resp.status_code, 400)
            self.assertEqual(resp.json()["message"], "Invalid record ID")
        resp = self.client.delete("/api/food-records/abc", headers=self.alice)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/food-records/²", headers=self.alice)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Invalid record ID")

    def test_other_users_records_are_not_found(self) -> None:
        record = self._create(self.alice, date="2023-05-05")
        body = {"date": "2023-05-05", "meal_type": "lunch", "food_items": "stolen"}

        resp = self.client.put(f"/api/food-records/{record['id']}", json=body, headers=self.mallory)
        self.assertEqual(resp.status_code, 404)
        resp = self.client.delete(f"/api/food-records/{record['id']}", headers=self.mallory)
        self.assertEqual(resp.status_code, 404)
        resp = self.client.get(f"/api/food-records/{record['id']}", headers=self.mallory)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(self._list(self.mallory, date="2023-05-05"), [])

        still_there = self._list(self.alice, date="2023-05-05")
        self.assertEqual(still_there[0]["food_items"], "rice, tofu")

    def test_delete_hides_record(self) -> None:
        record = self._create(self.alice, date="2022-02-02")
        resp = self.client.delete(f"/api/food-records/{record['id']}", headers=self.alice)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "success", "message": "Food record deleted successfully"})

        self.assertEqual(self._list(self.alice, date="2022-02-02"), [])
        resp = self.client.delete(f"/api/food-records/{record['id']}", headers=self.alice)
        self.assertEqual(resp.status_code, 404)
        resp = self.client.put(
            f"/api/food-records/{record['id']}",
            json={"date": "2022-02-02", "meal_type": "lunch", "food_items": "again"},
            headers=self.alice,
        )
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()
