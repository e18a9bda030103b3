from __future__ import annotations

"""Parquet-backed store for graded sessions using pandas + pyarrow.

Unit of data: (session × rubric item) rows, plus one metadata row per
session.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import pandas as pd

from mrtutor.grading.feedback import Feedback

from .schema import DTYPES, ITEM_CATEGORY, ITEMS, META_DTYPES, GradeRow, SessionMeta

DATA_FILE = "grade_rows.parquet"
META_FILE = "sessions.parquet"


def _empty_df(dtypes: dict) -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in dtypes.items()})


def init_store(data_dir: Path) -> None:
    """Ensure data directory and empty Parquet files with correct schema exist."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    rows_path = data_dir / DATA_FILE
    meta_path = data_dir / META_FILE
    if not rows_path.exists():
        _empty_df(DTYPES).to_parquet(rows_path, engine="pyarrow", compression="zstd")
    if not meta_path.exists():
        _empty_df(META_DTYPES).to_parquet(meta_path, engine="pyarrow", compression="zstd")


def rows_from_feedback(
    feedback: Feedback,
    *,
    session_id: str,
    session_start: datetime,
    learner_id: str,
) -> list[GradeRow]:
    """One GradeRow per rubric leaf, in rubric order."""
    rows: list[GradeRow] = []
    for path, node in feedback.root.leaves():
        _, _, item = path.rpartition(".")
        rows.append(
            GradeRow(
                session_id=session_id,
                session_start=session_start,
                learner_id=learner_id,
                category=ITEM_CATEGORY[item],
                item=item,
                correct=node.correct,
                points=node.points,
                max_points=node.max_points,
            )
        )
    return rows


def validate_records(records: list[GradeRow]) -> pd.DataFrame:
    """Validate a list of GradeRow and return a DataFrame with proper dtypes.

    - Enforces categories, items, tiers and point bounds via Pydantic.
    - Returns a pandas DataFrame with categorical and unsigned integer dtypes.
    """
    if not isinstance(records, list):
        raise TypeError("records must be a list[GradeRow]")
    rows = [r if isinstance(r, GradeRow) else GradeRow.model_validate(r) for r in records]
    df = pd.DataFrame([r.model_dump() for r in rows], columns=list(DTYPES.keys()))
    return _fix_dtypes(df)


def _fix_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    for col, dt in DTYPES.items():
        if col not in df.columns:
            df[col] = pd.NA
        df[col] = df[col].astype(dt)
    return df[list(DTYPES.keys())]


def append_grade_rows(df_new: pd.DataFrame, data_path: Path) -> None:
    """Append rows to the grade_rows table.

    - Reads existing, concatenates, fixes dtypes, removes exact duplicates, and writes back.
    - Uses pyarrow with zstd compression.
    """
    f = Path(data_path) / DATA_FILE
    if f.exists():
        df_old = _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
    else:
        df_old = _empty_df(DTYPES)
    df_new = _fix_dtypes(df_new.copy())
    if df_old.empty:
        combined = df_new
    else:
        combined = _fix_dtypes(pd.concat([df_old, df_new], ignore_index=True))
    combined = combined.drop_duplicates()  # exact duplicate rows only
    combined.to_parquet(f, engine="pyarrow", compression="zstd", index=False)


def upsert_session_meta(meta: SessionMeta, data_path: Path) -> None:
    """Insert or update a single session metadata row keyed by session_id."""
    f = Path(data_path) / META_FILE
    row = SessionMeta.model_validate(meta).model_dump()
    df_new = pd.DataFrame([row]).astype(META_DTYPES)
    if f.exists():
        df = pd.read_parquet(f, engine="pyarrow")
        # drop any existing with same session_id
        if "session_id" in df.columns and not df.empty:
            df = df[df["session_id"].astype("string") != row["session_id"]]
        df = df_new if df.empty else pd.concat([df.astype(META_DTYPES), df_new], ignore_index=True)
    else:
        df = df_new
    df.to_parquet(f, engine="pyarrow", compression="zstd", index=False)


def load_meta(data_path: Path) -> pd.DataFrame:
    f = Path(data_path) / META_FILE
    if not f.exists():
        return _empty_df(META_DTYPES)
    return pd.read_parquet(f, engine="pyarrow").astype(META_DTYPES)


def load_all(data_path: Path) -> pd.DataFrame:
    """Load all grade rows, ensuring dtypes, and compute convenience columns.

    Adds:
    - score: float32 = points / max_points
    - tier_ratio: float32 = correct / 4
    """
    f = Path(data_path) / DATA_FILE
    if not f.exists():
        return _empty_df(DTYPES).assign(score=pd.Series(dtype="float32"), tier_ratio=pd.Series(dtype="float32"))
    df = _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
    m = df["max_points"].astype("float32").where(df["max_points"] > 0, other=1.0)
    df["score"] = (df["points"].astype("float32") / m).astype("float32")
    df["tier_ratio"] = (df["correct"].astype("float32") / 4.0).astype("float32")
    return df


def query_trend(df: pd.DataFrame, *, item: str, learner_id: Optional[str] = None) -> pd.DataFrame:
    """Filter rows for one rubric item (optionally one learner) and sort by session_start."""
    if item not in ITEMS:
        raise ValueError(f"Unknown item: {item}")
    mask = df["item"].astype("string") == item
    if learner_id is not None:
        mask &= df["learner_id"].astype("string") == learner_id
    return df[mask].sort_values("session_start").reset_index(drop=True)


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, date_format="iso")


def session_start_from_ms(ms: Optional[int]) -> datetime:
    """UTC datetime from an activity-log millisecond timestamp; now if missing."""
    if ms is None:
        return datetime.now(timezone.utc)
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)
