from __future__ import annotations

"""Analytics configuration (hyperparameters) using Pydantic."""

from pydantic import BaseModel, Field


class AnalyticsConfig(BaseModel):
    """Hyperparameters for analytics computations and smoothing.

    - score_weight: share of the mark taken from points; the rest comes from the tier
    - mastery_threshold: mark at or above which an item counts as mastered
    - smoothing_span: EWMA span in sessions (>1)
    """

    score_weight: float = Field(0.7, ge=0, le=1)
    mastery_threshold: float = Field(0.9, gt=0, le=1)
    smoothing_span: int = Field(5, gt=1)
