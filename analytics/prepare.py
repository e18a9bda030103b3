from __future__ import annotations

"""Read stored grade rows into an analysis-ready frame."""

from pathlib import Path
from typing import Optional

import pandas as pd

from .config import AnalyticsConfig
from .metrics import compute_metrics


def load_and_prepare(parquet_path: Path, cfg: AnalyticsConfig, learner_id: Optional[str] = None) -> pd.DataFrame:
    """Grade rows with metrics, optionally for a single learner.

    'category' and 'item' come back categorical, rows are in try order
    (session_start, then session_id) and 'session_idx' numbers the tries
    0..n-1 within the returned frame.
    """
    df = pd.read_parquet(parquet_path, engine="pyarrow")
    if learner_id is not None:
        df = df[df["learner_id"].astype("string") == learner_id]
    df = df.astype({"category": "category", "item": "category"})
    df = df.sort_values(["session_start", "session_id"], kind="stable")

    df = compute_metrics(df, cfg)
    df["session_idx"] = pd.factorize(df["session_id"])[0]
    return df.reset_index(drop=True)
