from __future__ import annotations

"""Schema constants and Pydantic models for Parquet-backed grade rows."""

from datetime import datetime, timezone
from typing import Literal, Optional

import pandas as pd
from pandas.api.types import CategoricalDtype
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from mrtutor.grading.feedback import SCHEMA

# --- Constants ---

CATEGORIES = {category for category, _ in SCHEMA}
ITEMS = {item for _, items in SCHEMA for item, _ in items}
# rubric item -> category
ITEM_CATEGORY = {item: category for category, items in SCHEMA for item, _ in items}


def _cat_dtype(categories: set[str]) -> CategoricalDtype:
    return CategoricalDtype(categories=sorted(categories), ordered=False)


DTYPES = {
    "session_id": "string",
    # timezone-aware UTC timestamps
    "session_start": pd.DatetimeTZDtype(tz="UTC"),
    "learner_id": "string",
    "category": _cat_dtype(CATEGORIES),
    "item": _cat_dtype(ITEMS),
    "correct": "UInt8",
    "points": "float32",
    "max_points": "float32",
}

META_DTYPES = {
    "session_id": "string",
    "session_start": pd.DatetimeTZDtype(tz="UTC"),
    "learner_id": "string",
    "app_version": "string",
    "resistor_num_bands": "UInt8",
    "nominal_resistance": "float64",
    "tolerance": "float32",
    "total_points": "float32",
}


def _to_utc(v: datetime) -> datetime:
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


# --- Pydantic models ---

class GradeRow(BaseModel):
    """One rubric item of one graded session."""

    session_id: str
    session_start: datetime
    learner_id: str
    category: Literal[tuple(CATEGORIES)]  # type: ignore[valid-type]
    item: Literal[tuple(ITEMS)]  # type: ignore[valid-type]
    correct: int = Field(ge=0, le=4)
    points: float = Field(ge=0)
    max_points: float = Field(ge=0)

    @field_validator("max_points")
    @classmethod
    def _points_le_max(cls, v: float, info: ValidationInfo) -> float:
        points = info.data.get("points")
        if points is not None and points > v:
            raise ValueError("points must be <= max_points")
        return v

    @field_validator("item")
    @classmethod
    def _item_in_category(cls, v: str, info: ValidationInfo) -> str:
        category = info.data.get("category")
        if category is not None and ITEM_CATEGORY[v] != category:
            raise ValueError(f"item {v} does not belong to category {category}")
        return v

    @field_validator("session_start")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        return _to_utc(v)


class SessionMeta(BaseModel):
    session_id: str
    session_start: datetime
    learner_id: str
    app_version: Optional[str] = None
    resistor_num_bands: Optional[int] = Field(default=None, ge=4, le=5)
    nominal_resistance: Optional[float] = Field(default=None, gt=0)
    tolerance: Optional[float] = Field(default=None, gt=0, lt=1)
    total_points: Optional[float] = Field(default=None, ge=0)

    @field_validator("session_start")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        return _to_utc(v)
