from __future__ import annotations

"""Session report: per-category totals from a graded feedback tree."""

import json
from pathlib import Path
from typing import Dict

from ..grading.feedback import TIER_NAMES, Feedback


def summarize_feedback(feedback: Feedback) -> Dict:
    """Plain dict of points per category and per rubric item."""
    summary: Dict = {
        "points": feedback.get_points(),
        "max_points": feedback.get_max_points(),
        "categories": {},
    }
    for name, category in feedback.root.children.items():
        items = {}
        for item_name, item in category.children.items():
            items[item_name] = {
                "points": item.points,
                "max_points": item.max_points,
                "correct": item.correct,
                "feedback": [m.title for m in item.feedbacks],
            }
        summary["categories"][name] = {
            "points": category.get_points(),
            "max_points": category.get_max_points(),
            "items": items,
        }
    return summary


def write_stats(summary: Dict, path: str) -> None:
    """Write the summary as JSON to path."""
    p = Path(path)
    with p.open("w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)


def _pts(x: float) -> str:
    return f"{x:g}"


def format_summary(summary: Dict) -> str:
    """Return a human-readable summary of a graded session."""
    lines = [f"Total: {_pts(summary.get('points', 0))}/{_pts(summary.get('max_points', 0))} points"]
    for name, cat in summary.get("categories", {}).items():
        lines.append(f"{name}: {_pts(cat['points'])}/{_pts(cat['max_points'])}")
        for item_name, item in cat.get("items", {}).items():
            tier = TIER_NAMES.get(item.get("correct", 0), "?")
            line = f"  {item_name}: {_pts(item['points'])}/{_pts(item['max_points'])} ({tier})"
            titles = item.get("feedback") or []
            if titles:
                line += " - " + "; ".join(titles)
            lines.append(line)
    return "\n".join(lines)
