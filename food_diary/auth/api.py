# -*- coding: utf-8 -*-
"""Auth — API endpoints."""

from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException

from .. import responses
from .models import LoginData, LoginRequest, RegisterRequest, UserPublic
from .security import create_access_token, get_current_user, hash_password, verify_password
from .storage import create_user, get_user_by_email, get_user_by_id, get_user_by_username

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


def _user_public(row: dict) -> UserPublic:
    return UserPublic(user_id=row["id"], username=row["username"], email=row["email"])


@router.post("/register", status_code=201, summary="Register a new user")
def register(request: RegisterRequest):
    if get_user_by_username(request.username):
        raise HTTPException(status_code=409, detail="Username already exists")
    if get_user_by_email(request.email):
        raise HTTPException(status_code=409, detail="Email already registered")

    password_hash = hash_password(request.password)
    try:
        user = create_user(username=request.username, email=request.email, password_hash=password_hash)
    except sqlite3.IntegrityError as exc:
        # Lost a race against a concurrent registration with the same username/email.
        raise HTTPException(status_code=409, detail="Username or email already registered") from exc

    logger.info("Registered user id=%s username=%s", user["id"], user["username"])
    return responses.success("User registered successfully", _user_public(user).model_dump(), status_code=201)


@router.post("/login", summary="Login")
def login(request: LoginRequest):
    user = get_user_by_username(request.username)
    if not user or not verify_password(request.password, user["password_hash"]):
        logger.warning("Failed login for username=%s", request.username)
        raise HTTPException(status_code=401, detail="Invalid username or password")

    token = create_access_token(user_id=user["id"], username=user["username"])
    data = LoginData(token=token, **_user_public(user).model_dump())
    logger.info("User id=%s logged in", user["id"])
    return responses.success("Login successful", data.model_dump())


@router.get("/profile", summary="Get current user")
def profile(user: dict = Depends(get_current_user)):
    row = get_user_by_id(user["id"])
    if not row:
        raise HTTPException(status_code=404, detail="User not found")
    return responses.success("Profile retrieved successfully", _user_public(row).model_dump())
