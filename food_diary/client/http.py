# -*- coding: utf-8 -*-
"""Client — httpx wrapper for the food diary REST API.

Every request carries `Authorization: Bearer <token>` when the storage holds a token.
A 401 response wipes the stored token/user and fires the `on_unauthorized` hook
(the "go back to the login screen" signal) before the error is raised.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from ..config import settings
from .storage import LocalStorage, clear_auth, get_auth_token

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Failed API call. `status_code` is None when the server was never reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def unauthorized(self) -> bool:
        return self.status_code == 401


def _default_on_unauthorized() -> None:
    logger.info("Session is no longer valid; log in again")


class ApiClient:
    def __init__(
        self,
        storage: LocalStorage,
        *,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.storage = storage
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = client or httpx.Client(
            timeout=timeout if timeout is not None else settings.http_timeout,
            follow_redirects=True,
        )
        self.on_unauthorized = on_unauthorized or _default_on_unauthorized

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = get_auth_token(self.storage)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the decoded response envelope."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        clean_params = {k: v for k, v in (params or {}).items() if v not in (None, "")}
        try:
            resp = self._client.request(
                method,
                url,
                json=json,
                params=clean_params or None,
                headers=self._headers(),
            )
        except httpx.RequestError as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise ApiError(f"Could not reach the server: {exc}") from exc

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code == 401:
            clear_auth(self.storage)
            self.on_unauthorized()

        if resp.status_code >= 400:
            message = None
            if isinstance(body, dict):
                message = body.get("message")
            raise ApiError(message or f"HTTP {resp.status_code}", status_code=resp.status_code, payload=body)

        if not isinstance(body, dict):
            raise ApiError("Unexpected response from server", status_code=resp.status_code, payload=body)
        return body

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: Any) -> Dict[str, Any]:
        return self.request("POST", path, json=data)

    def put(self, path: str, data: Any) -> Dict[str, Any]:
        return self.request("PUT", path, json=data)

    def delete(self, path: str) -> Dict[str, Any]:
        return self.request("DELETE", path)


class AuthAPI:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post("/register", user_data)

    def login(self, credentials: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post("/login", credentials)

    def get_profile(self) -> Dict[str, Any]:
        return self.api.get("/profile")


class FoodAPI:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def create_record(self, record_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post("/food-records", record_data)

    def get_records(self, *, month: Optional[str] = None, date: Optional[str] = None) -> Dict[str, Any]:
        return self.api.get("/food-records", params={"month": month, "date": date})

    def get_record(self, record_id: int) -> Dict[str, Any]:
        return self.api.get(f"/food-records/{record_id}")

    def update_record(self, record_id: int, record_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put(f"/food-records/{record_id}", record_data)

    def delete_record(self, record_id: int) -> Dict[str, Any]:
        return self.api.delete(f"/food-records/{record_id}")
