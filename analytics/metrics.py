from __future__ import annotations

"""Metric computations for per-row analytics."""

import numpy as np
import pandas as pd
from .config import AnalyticsConfig


def compute_metrics(df: pd.DataFrame, cfg: AnalyticsConfig) -> pd.DataFrame:
    """Compute score, tier ratio, composite mark and mastery flag.

    Returns a copy with added columns:
    - score, tier_ratio, mark, mastered
    """
    out = df.copy()
    # Avoid divide by zero; every rubric item has a positive maximum by construction
    m = out["max_points"].astype("float32").where(out["max_points"] > 0, other=1.0)
    out["score"] = (out["points"].astype("float32") / m).astype("float32")
    out["tier_ratio"] = (out["correct"].astype("float32") / 4.0).astype("float32")

    w = np.float32(cfg.score_weight)
    mark = w * out["score"].to_numpy(dtype="float32") + (np.float32(1.0) - w) * out["tier_ratio"].to_numpy(dtype="float32")
    out["mark"] = pd.Series(np.clip(mark, 0, 1), index=out.index, dtype="float32")
    out["mastered"] = out["mark"] >= np.float32(cfg.mastery_threshold)
    return out


def session_totals(df: pd.DataFrame) -> pd.DataFrame:
    """Points per session: one row per (session_id, learner_id) with total and percent."""
    g = df.groupby(["session_id", "learner_id"], observed=True, sort=False)
    totals = g.agg(
        session_start=("session_start", "first"),
        points=("points", "sum"),
        max_points=("max_points", "sum"),
    ).reset_index()
    m = totals["max_points"].astype("float32").where(totals["max_points"] > 0, other=1.0)
    totals["percent"] = (100.0 * totals["points"].astype("float32") / m).astype("float32")
    return totals.sort_values("session_start", kind="stable").reset_index(drop=True)
