# -*- coding: utf-8 -*-
"""Auth — password hashing + JWT + FastAPI helpers."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi import Depends, HTTPException, Request

from ..config import settings
from .storage import get_user_by_id

logger = logging.getLogger(__name__)

# Password hashing (stdlib pbkdf2_hmac).
_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000

_BEARER_PREFIX = "Bearer "


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac(_PBKDF2_ALG, password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"pbkdf2_{_PBKDF2_ALG}${_PBKDF2_ITERATIONS}${_b64url_encode(salt)}${_b64url_encode(dk)}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, iter_s, salt_b64, dk_b64 = password_hash.split("$", 3)
        if not scheme.startswith("pbkdf2_"):
            return False
        alg = scheme.split("_", 1)[1]
        iterations = int(iter_s)
        salt = _b64url_decode(salt_b64)
        expected = _b64url_decode(dk_b64)
        actual = hashlib.pbkdf2_hmac(alg, password.encode("utf-8"), salt, iterations)
        return hmac.compare_digest(actual, expected)
    except (ValueError, TypeError):
        return False


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(*, user_id: int, username: str) -> str:
    now = _utc_now()
    exp = now + timedelta(hours=int(settings.token_ttl_hours))
    payload = {
        "sub": str(user_id),
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return _jwt_encode(payload, settings.jwt_secret)


def decode_token(token: str) -> Dict[str, Any]:
    try:
        payload = _jwt_decode(token, settings.jwt_secret)
    except Exception as exc:
        raise HTTPException(status_code=401, detail="Invalid authentication token") from exc
    exp = int(payload.get("exp") or 0)
    if exp and exp < int(_utc_now().timestamp()):
        raise HTTPException(status_code=401, detail="Authentication token expired")
    return payload


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + pad).encode("ascii"))


def _jwt_encode(payload: Dict[str, Any], secret: str) -> str:
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64url_encode(json.dumps(header, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))
    payload_b64 = _b64url_encode(json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    sig = hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()
    return f"{header_b64}.{payload_b64}.{_b64url_encode(sig)}"


def _jwt_decode(token: str, secret: str) -> Dict[str, Any]:
    parts = token.split(".")
    if len(parts) != 3:
        raise ValueError("invalid token")
    header_b64, payload_b64, sig_b64 = parts
    header = json.loads(_b64url_decode(header_b64).decode("utf-8"))
    if not isinstance(header, dict) or header.get("alg") != "HS256":
        raise ValueError("unsupported algorithm")
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    expected_sig = hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()
    actual_sig = _b64url_decode(sig_b64)
    if not hmac.compare_digest(expected_sig, actual_sig):
        raise ValueError("bad signature")
    payload = json.loads(_b64url_decode(payload_b64).decode("utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("bad payload")
    return payload


def get_token_from_request(request: Request) -> str:
    auth = request.headers.get("authorization") or ""
    if not auth:
        raise HTTPException(status_code=401, detail="Authentication token required")
    if not auth.startswith(_BEARER_PREFIX):
        raise HTTPException(status_code=401, detail="Invalid authentication token format")
    token = auth[len(_BEARER_PREFIX):].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Invalid authentication token format")
    return token


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    # If middleware already authenticated, reuse it.
    user = getattr(request.state, "user", None)
    if user:
        return user

    token = get_token_from_request(request)
    payload = decode_token(token)
    try:
        user_id = int(payload.get("sub") or 0)
    except (TypeError, ValueError):
        user_id = 0
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid authentication token")

    user_row = get_user_by_id(user_id)
    if not user_row:
        logger.warning("Token for unknown user id=%s rejected", user_id)
        raise HTTPException(status_code=401, detail="Invalid authentication token")

    # Cache on request for downstream handlers.
    request.state.user = user_row
    return user_row


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user
