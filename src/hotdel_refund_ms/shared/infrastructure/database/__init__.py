"""Database infrastructure module."""

from hotdel_refund_ms.shared.infrastructure.database.connection import (
    Base,
    close_db,
    init_db,
    session_scope,
)

__all__ = ["Base", "close_db", "init_db", "session_scope"]
