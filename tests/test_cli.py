# -*- coding: utf-8 -*-

from __future__ import annotations

import contextlib
import io
import shutil
import tempfile
import unittest
from datetime import date
from pathlib import Path
from unittest import mock

import httpx

from food_diary.client import cli as cli_module
from food_diary.client.cli import build_parser, main, render_calendar
from food_diary.client.month_view import build_month_grid
from food_diary.client.storage import LocalStorage, get_auth_token, set_auth_token, set_user


class TestRenderCalendar(unittest.TestCase):
    def test_layout(self) -> None:
        records = [{"id": i, "date": "2026-10-19", "meal_type": "lunch", "food_items": "x"} for i in range(4)]
        weeks = build_month_grid(2026, 10, records, today=date(2026, 10, 19))
        text = render_calendar(weeks, 2026, 10)
        lines = text.splitlines()

        self.assertEqual(len(lines), 8)
        self.assertEqual(lines[0].strip(), "October 2026")
        self.assertTrue(lines[1].startswith("Sun"))
        self.assertTrue(lines[2].startswith("(27)"))
        self.assertIn("[19]***+1", text)


class TestCliArgs(unittest.TestCase):
    def _run(self, argv: list[str]) -> tuple[int, str]:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_no_command_prints_help(self) -> None:
        code, out = self._run([])
        self.assertEqual(code, 0)
        self.assertIn("food-diary", out)

    def test_invalid_month(self) -> None:
        code, out = self._run(["calendar", "--month", "2026-13"])
        self.assertEqual(code, 1)
        self.assertIn("invalid month", out)

    def test_add_requires_known_meal(self) -> None:
        parser = build_parser()
        with self.assertRaises(SystemExit), contextlib.redirect_stderr(io.StringIO()):
            parser.parse_args(["add", "--food", "x", "--meal", "brunch"])
        args = parser.parse_args(["add", "--food", "x"])
        self.assertEqual(args.meal, "breakfast")


class TestCliUnauthorized(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="food-diary-cli-"))
        self.storage_path = self._tmp / "storage.json"

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def _run(self, argv: list[str], message: str) -> tuple[int, str]:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"status": "error", "message": message})

        real_client = cli_module.ApiClient

        def factory(storage, **kwargs):
            return real_client(storage, client=httpx.Client(transport=httpx.MockTransport(handler)), **kwargs)

        base = ["--storage", str(self.storage_path), "--base-url", "http://diary.test/api"]
        out = io.StringIO()
        with mock.patch.object(cli_module, "ApiClient", factory), contextlib.redirect_stdout(out):
            code = main(base + argv)
        return code, out.getvalue()

    def test_wrong_password_is_not_reported_as_expired_session(self) -> None:
        code, out = self._run(
            ["login", "--username", "alice", "--password", "wrong"],
            "Invalid username or password",
        )
        self.assertEqual(code, 1)
        self.assertIn("Invalid username or password", out)
        self.assertNotIn("session has expired", out)

    def test_rejected_token_reports_expired_session(self) -> None:
        storage = LocalStorage(self.storage_path)
        set_auth_token(storage, "stale-token")
        set_user(storage, {"user_id": 1, "username": "alice", "email": "alice@example.com"})

        code, out = self._run(["whoami"], "Invalid or expired token")
        self.assertEqual(code, 1)
        self.assertIn("session has expired", out)
        self.assertIsNone(get_auth_token(storage))


if __name__ == "__main__":
    unittest.main()
