"""Storage layer for fanlog - single-connection SQLite access"""

from fanlog.storage.sqlite_helper import SQLiteHelper, StoreState, get_sqlite_helper

__all__ = [
    "SQLiteHelper",
    "StoreState",
    "get_sqlite_helper",
]
