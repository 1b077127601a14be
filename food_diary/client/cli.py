# -*- coding: utf-8 -*-
"""
Terminal front end for the food diary.

Usage:
    food-diary register --username alice --email alice@example.com
    food-diary login --username alice
    food-diary calendar [--month 2026-10]
    food-diary day [--date 2026-10-19]
    food-diary add --meal lunch --food "rice, tofu" [--date 2026-10-19] [--notes ...]
    food-diary edit <id> [--date ...] [--meal ...] [--food ...] [--notes ...]
    food-diary delete <id>
    food-diary whoami | logout
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..config import settings
from ..records.models import is_month_key, parse_day
from .auth_state import AuthState
from .dashboard import Dashboard
from .forms import MEAL_TYPES, FoodRecordForm, RegisterForm
from .http import ApiClient, ApiError, AuthAPI, FoodAPI
from .month_view import WEEKDAY_LABELS, CalendarDay, month_title
from .storage import LocalStorage

CELL_WIDTH = 7


def _notify_unauthorized() -> None:
    print("Your session has expired. Run 'food-diary login' to sign in again.")


def _ignore_unauthorized() -> None:
    pass


def _make_client(
    args: argparse.Namespace,
    on_unauthorized: Callable[[], None] = _notify_unauthorized,
) -> ApiClient:
    storage = LocalStorage(Path(args.storage) if args.storage else settings.client_storage_path)
    return ApiClient(storage, base_url=args.base_url, on_unauthorized=on_unauthorized)


def _require_login(state: AuthState) -> bool:
    state.load()
    if not state.is_authenticated:
        print("Not logged in. Run 'food-diary login' first.")
        return False
    return True


def _parse_date_arg(value: Optional[str]) -> date:
    if not value:
        return date.today()
    try:
        return parse_day(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from exc


def _format_record(record: Dict[str, Any]) -> str:
    line = f"  #{record['id']:<5} {record['meal_type']:<10} {record['food_items']}"
    if record.get("notes"):
        line += f"\n         notes: {record['notes']}"
    return line


def _format_cell(day: CalendarDay) -> str:
    label = f"{day.date.day:>2}" if day.is_current_month else f"({day.date.day})"
    marks = ""
    if day.records:
        marks = "*" * len(day.indicators)
        if day.overflow:
            marks += f"+{day.overflow}"
    if day.is_today:
        label = f"[{label.strip()}]"
    return f"{label}{marks}".ljust(CELL_WIDTH)


def render_calendar(weeks: List[List[CalendarDay]], year: int, month: int) -> str:
    lines = [month_title(year, month).center(CELL_WIDTH * 7).rstrip()]
    lines.append("".join(label.ljust(CELL_WIDTH) for label in WEEKDAY_LABELS).rstrip())
    for week in weeks:
        lines.append("".join(_format_cell(day) for day in week).rstrip())
    return "\n".join(lines)


def cmd_register(args: argparse.Namespace) -> int:
    """Create an account."""
    password = args.password or getpass.getpass("Password: ")
    confirm = args.password or getpass.getpass("Confirm password: ")
    form = RegisterForm(username=args.username, email=args.email, password=password, confirm_password=confirm)
    with _make_client(args) as client:
        if not form.submit(AuthAPI(client)):
            print(f"Error: {form.error}")
            return 1
    print(form.success)
    return 0


def cmd_login(args: argparse.Namespace) -> int:
    """Log in and store the bearer token."""
    password = args.password or getpass.getpass("Password: ")
    # A 401 here means bad credentials, not an expired session.
    with _make_client(args, on_unauthorized=_ignore_unauthorized) as client:
        try:
            body = AuthAPI(client).login({"username": args.username, "password": password})
        except ApiError as exc:
            print(f"Error: {exc.message}")
            return 1
        data = body.get("data") or {}
        user = {k: data.get(k) for k in ("user_id", "username", "email")}
        AuthState(client.storage).login(data["token"], user)
    print(f"Logged in as {user['username']}")
    return 0


def cmd_logout(args: argparse.Namespace) -> int:
    """Forget the stored token."""
    with _make_client(args) as client:
        AuthState(client.storage).logout()
    print("Logged out")
    return 0


def cmd_whoami(args: argparse.Namespace) -> int:
    """Show the profile of the logged-in user."""
    with _make_client(args) as client:
        state = AuthState(client.storage)
        if not _require_login(state):
            return 1
        try:
            profile = AuthAPI(client).get_profile().get("data") or {}
        except ApiError as exc:
            print(f"Error: {exc.message}")
            return 1
        state.update_user(profile)
    print(f"{profile.get('username')} <{profile.get('email')}> (id {profile.get('user_id')})")
    return 0


def cmd_calendar(args: argparse.Namespace) -> int:
    """Print the month grid with meal markers."""
    if args.month and not is_month_key(args.month):
        print(f"Error: invalid month '{args.month}', expected YYYY-MM")
        return 1
    with _make_client(args) as client:
        if not _require_login(AuthState(client.storage)):
            return 1
        board = Dashboard(FoodAPI(client))
        if args.month:
            board.go_to_month(int(args.month[:4]), int(args.month[5:]))
        else:
            board.fetch_records()
        if board.error:
            print(f"Error: {board.error}")
            return 1
        print(render_calendar(board.grid(), board.year, board.month))
        print(f"{len(board.records)} record(s) this month")
    return 0


def cmd_day(args: argparse.Namespace) -> int:
    """List the records of one day."""
    day = _parse_date_arg(args.date)
    with _make_client(args) as client:
        if not _require_login(AuthState(client.storage)):
            return 1
        try:
            records = FoodAPI(client).get_records(date=day.isoformat()).get("data") or []
        except ApiError as exc:
            print(f"Error: {exc.message}")
            return 1
    print(day.isoformat())
    if not records:
        print("  No food records for this day yet.")
    for record in records:
        print(_format_record(record))
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    """Add a food record."""
    day = _parse_date_arg(args.date)
    form = FoodRecordForm.for_new(day)
    form.meal_type = args.meal
    form.food_items = args.food
    form.notes = args.notes or ""
    with _make_client(args) as client:
        if not _require_login(AuthState(client.storage)):
            return 1
        if not form.submit(FoodAPI(client)):
            print(f"Error: {form.error}")
            return 1
    print(f"Added {form.meal_type} on {form.date}")
    return 0


def cmd_edit(args: argparse.Namespace) -> int:
    """Edit an existing food record."""
    with _make_client(args) as client:
        if not _require_login(AuthState(client.storage)):
            return 1
        food_api = FoodAPI(client)
        try:
            record = food_api.get_record(args.id).get("data") or {}
        except ApiError as exc:
            print(f"Error: {exc.message}")
            return 1
        form = FoodRecordForm.for_record(record)
        if args.date:
            form.date = _parse_date_arg(args.date).isoformat()
        if args.meal:
            form.meal_type = args.meal
        if args.food:
            form.food_items = args.food
        if args.notes is not None:
            form.notes = args.notes
        if not form.submit(food_api):
            print(f"Error: {form.error}")
            return 1
    print(f"Updated record #{args.id}")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Delete a food record."""
    with _make_client(args) as client:
        if not _require_login(AuthState(client.storage)):
            return 1
        try:
            FoodAPI(client).delete_record(args.id)
        except ApiError as exc:
            print(f"Error: {exc.message}")
            return 1
    print(f"Deleted record #{args.id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="food-diary",
        description="Food diary client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--base-url", help=f"API base URL (default: {settings.api_base_url})")
    parser.add_argument("--storage", help="Path of the client token store")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    register_parser = subparsers.add_parser("register", help="Create an account")
    register_parser.add_argument("--username", required=True)
    register_parser.add_argument("--email", required=True)
    register_parser.add_argument("--password", help="Prompted when omitted")

    login_parser = subparsers.add_parser("login", help="Log in")
    login_parser.add_argument("--username", required=True)
    login_parser.add_argument("--password", help="Prompted when omitted")

    subparsers.add_parser("logout", help="Log out")
    subparsers.add_parser("whoami", help="Show current user")

    calendar_parser = subparsers.add_parser("calendar", help="Show a month")
    calendar_parser.add_argument("--month", help="YYYY-MM (default: current month)")

    day_parser = subparsers.add_parser("day", help="Show one day's records")
    day_parser.add_argument("--date", help="YYYY-MM-DD (default: today)")

    add_parser = subparsers.add_parser("add", help="Add a record")
    add_parser.add_argument("--date", help="YYYY-MM-DD (default: today)")
    add_parser.add_argument("--meal", choices=MEAL_TYPES, default="breakfast")
    add_parser.add_argument("--food", required=True, help="What you ate")
    add_parser.add_argument("--notes")

    edit_parser = subparsers.add_parser("edit", help="Edit a record")
    edit_parser.add_argument("id", type=int)
    edit_parser.add_argument("--date")
    edit_parser.add_argument("--meal", choices=MEAL_TYPES)
    edit_parser.add_argument("--food")
    edit_parser.add_argument("--notes")

    delete_parser = subparsers.add_parser("delete", help="Delete a record")
    delete_parser.add_argument("id", type=int)

    return parser


_COMMANDS = {
    "register": cmd_register,
    "login": cmd_login,
    "logout": cmd_logout,
    "whoami": cmd_whoami,
    "calendar": cmd_calendar,
    "day": cmd_day,
    "add": cmd_add,
    "edit": cmd_edit,
    "delete": cmd_delete,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        return _COMMANDS[args.command](args)
    except argparse.ArgumentTypeError as exc:
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
