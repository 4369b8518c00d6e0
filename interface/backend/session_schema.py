# interface/backend/session_schema.py

from typing import Any, Optional, TypedDict


class SessionExport(TypedDict):
    dataset: str
    group_variable: str
    symbol: Optional[str]
    state: str
    error: Optional[str]
    comparison: Optional[dict[str, Any]]
