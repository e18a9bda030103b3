from .schema import CATEGORIES, ITEMS, ITEM_CATEGORY, DTYPES, GradeRow, SessionMeta
from .store import (
    init_store,
    validate_records,
    append_grade_rows,
    upsert_session_meta,
    load_meta,
    load_all,
    query_trend,
    export_ndjson,
    rows_from_feedback,
    session_start_from_ms,
)

__all__ = [
    "CATEGORIES",
    "ITEMS",
    "ITEM_CATEGORY",
    "DTYPES",
    "GradeRow",
    "SessionMeta",
    "init_store",
    "validate_records",
    "append_grade_rows",
    "upsert_session_meta",
    "load_meta",
    "load_all",
    "query_trend",
    "export_ndjson",
    "rows_from_feedback",
    "session_start_from_ms",
]
