# -*- coding: utf-8 -*-
"""Food records — API endpoints."""

from __future__ import annotations

import logging
import re

from fastapi import APIRouter, Depends, HTTPException, Query

from .. import responses
from ..auth.security import get_current_user
from .models import FoodRecordRequest, is_month_key, parse_day
from .storage import create_record, delete_record, get_record, list_records, update_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/food-records", tags=["Food records"])

_RECORD_ID = re.compile(r"[0-9]{1,18}")


def _parse_record_id(raw: str) -> int:
    if not _RECORD_ID.fullmatch(raw) or int(raw) <= 0:
        raise HTTPException(status_code=400, detail="Invalid record ID")
    return int(raw)


@router.post("", status_code=201, summary="Create a food record")
def create(request: FoodRecordRequest, user: dict = Depends(get_current_user)):
    record = create_record(
        user_id=user["id"],
        date=request.date,
        meal_type=request.meal_type.value,
        food_items=request.food_items,
        notes=request.notes or "",
    )
    logger.info("User id=%s created food record id=%s on %s", user["id"], record.id, record.date)
    return responses.success("Food record created successfully", record.model_dump(mode="json"), status_code=201)


@router.get("", summary="List food records")
def list_(
    date: str | None = Query(default=None, description="YYYY-MM-DD"),
    month: str | None = Query(default=None, description="YYYY-MM"),
    user: dict = Depends(get_current_user),
):
    if date:
        try:
            parse_day(date)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail="date must be formatted as YYYY-MM-DD") from exc
    elif month and not is_month_key(month):
        raise HTTPException(status_code=400, detail="month must be formatted as YYYY-MM")

    records = list_records(user["id"], date=date or None, month=month or None)
    data = [r.model_dump(mode="json") for r in records]
    return responses.success("Food records retrieved successfully", data)


@router.put("/{record_id}", summary="Update a food record")
def update(record_id: str, request: FoodRecordRequest, user: dict = Depends(get_current_user)):
    rid = _parse_record_id(record_id)
    record = update_record(
        user["id"],
        rid,
        date=request.date,
        meal_type=request.meal_type.value,
        food_items=request.food_items,
        notes=request.notes or "",
    )
    if record is None:
        raise HTTPException(status_code=404, detail="Food record not found")
    logger.info("User id=%s updated food record id=%s", user["id"], rid)
    return responses.success("Food record updated successfully", record.model_dump(mode="json"))


@router.get("/{record_id}", summary="Get a single food record")
def get(record_id: str, user: dict = Depends(get_current_user)):
    rid = _parse_record_id(record_id)
    record = get_record(user["id"], rid)
    if record is None:
        raise HTTPException(status_code=404, detail="Food record not found")
    return responses.success("Food record retrieved successfully", record.model_dump(mode="json"))


@router.delete("/{record_id}", summary="Delete a food record")
def delete(record_id: str, user: dict = Depends(get_current_user)):
    rid = _parse_record_id(record_id)
    if not delete_record(user["id"], rid):
        raise HTTPException(status_code=404, detail="Food record not found")
    logger.info("User id=%s deleted food record id=%s", user["id"], rid)
    return responses.success("Food record deleted successfully")
