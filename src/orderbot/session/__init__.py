"""
Session Layer

Per-conversation language preference.
"""

from orderbot.session.session_store import (
    SessionStore,
    RedisSessionStore,
    build_session_store,
)

__all__ = ["SessionStore", "RedisSessionStore", "build_session_store"]
