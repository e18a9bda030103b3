from __future__ import annotations

"""Durable JSON persistence of graded tries, keyed by learner.

Schema (v1):
{
  "schema": 1,
  "learners": {
    "<learner id>": {
      "sessions": [ {ts, points, max_points, session, feedback}, ... ]
    }
  }
}

Notes:
- New entries are prepended (newest first).
- ``session`` is the full activity-log session, so a try can be re-graded.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from ..app.explain import warn
from ..grading.feedback import Feedback
from ..log.activity_log import Session

SCHEMA_VERSION = 1


def _empty() -> Dict[str, Any]:
    return {"schema": SCHEMA_VERSION, "learners": {}}


def _load(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return _empty()
    raw_text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        data = None
    if not isinstance(data, dict) or int(data.get("schema", 0)) != SCHEMA_VERSION:
        # Keep the unreadable file next to the new one
        backup_name = f"{p.stem}.backup-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}{p.suffix}"
        p.with_name(backup_name).write_text(raw_text, encoding="utf-8")
        warn(f"Results file {p} has an unknown format; moved it to {backup_name}.")
        return _empty()
    data.setdefault("learners", {})
    return data


def _save(path: str, data: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def save_session(path: str, learner_id: str, session: Session, feedback: Feedback) -> Dict[str, Any]:
    """Prepend one graded try to the learner's history and return the stored entry."""
    data = _load(path)
    learner = data["learners"].setdefault(str(learner_id), {"sessions": []})
    entry = {
        "ts": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M"),
        "points": feedback.get_points(),
        "max_points": feedback.get_max_points(),
        "session": session.to_json(),
        "feedback": feedback.to_json(),
    }
    learner.setdefault("sessions", []).insert(0, entry)
    _save(path, data)
    return entry


def load_sessions(path: str, learner_id: str) -> List[Session]:
    """Stored sessions for a learner, newest first; empty if none."""
    data = _load(path)
    learner = data["learners"].get(str(learner_id)) or {}
    return [Session.from_json(e["session"]) for e in learner.get("sessions", []) if "session" in e]
