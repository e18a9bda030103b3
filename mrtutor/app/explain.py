from __future__ import annotations

"""Minimal tracing helpers (Explain Mode).

Enable with the --explain CLI flag (or ``explain: true`` in config) and emit
terse, readable lines while a try is logged, parsed and graded.
"""

import json
from typing import Any, Dict

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    data = payload or {}
    # keep it short; one line JSON
    print(f"[EXPLAIN] {event} :: {json.dumps(data, separators=(',', ':'), default=str, ensure_ascii=False)}")


def warn(message: str) -> None:
    """Always-on warning line, independent of Explain Mode."""
    print(f"WARNING: {message}")
