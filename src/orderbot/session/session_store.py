"""
Session Store

Per-conversation display-language preference.

Two implementations share one contract (get_language / set_language / clear):
- SessionStore: process-lifetime dict, lost on restart (the default)
- RedisSessionStore: Redis-backed, selected when REDIS_URL is configured

The store is passed into the update handlers and the dispatcher rather than
imported as a global, so each test builds its own.

Constraints:
- At most one language per conversation identifier
- Plain string values only (no pickles)
"""

import logging
import threading
import time
from typing import Dict, Optional, Tuple

import redis

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "lang:"


class SessionStore:
    """In-memory language store with optional TTL."""

    def __init__(self, default_language: str = "ru", ttl_seconds: int = 0):
        self.default_language = default_language
        self.ttl_seconds = ttl_seconds
        self._languages: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get_language(self, chat_id) -> str:
        """Return the conversation's language, or the default if unset/expired."""
        key = str(chat_id)
        with self._lock:
            entry = self._languages.get(key)
            if entry is None:
                return self.default_language
            language, stored_at = entry
            if self.ttl_seconds and time.time() - stored_at > self.ttl_seconds:
                del self._languages[key]
                return self.default_language
            return language

    def set_language(self, chat_id, language: str) -> None:
        with self._lock:
            self._languages[str(chat_id)] = (language, time.time())

    def clear(self, chat_id) -> None:
        with self._lock:
            self._languages.pop(str(chat_id), None)


class RedisSessionStore(SessionStore):
    """
    Redis-backed language store.

    Read/write failures are logged and fall back to the in-memory copy held by
    the parent class, so a Redis outage degrades to per-process state instead
    of failing the handler.
    """

    def __init__(
        self,
        redis_url: str,
        default_language: str = "ru",
        ttl_seconds: int = 0,
        client: Optional["redis.Redis"] = None,
    ):
        super().__init__(default_language=default_language, ttl_seconds=ttl_seconds)
        self._redis = client or redis.from_url(redis_url)

    def _key(self, chat_id) -> str:
        return f"{SESSION_KEY_PREFIX}{chat_id}"

    def get_language(self, chat_id) -> str:
        try:
            raw = self._redis.get(self._key(chat_id))
        except redis.RedisError as e:
            logger.warning(f"Redis read failed for chat {chat_id}: {e}")
            return super().get_language(chat_id)
        if not raw:
            return self.default_language
        return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)

    def set_language(self, chat_id, language: str) -> None:
        super().set_language(chat_id, language)
        try:
            if self.ttl_seconds:
                self._redis.setex(self._key(chat_id), self.ttl_seconds, language)
            else:
                self._redis.set(self._key(chat_id), language)
        except redis.RedisError as e:
            logger.warning(f"Redis write failed for chat {chat_id}: {e}")

    def clear(self, chat_id) -> None:
        super().clear(chat_id)
        try:
            self._redis.delete(self._key(chat_id))
        except redis.RedisError as e:
            logger.warning(f"Redis delete failed for chat {chat_id}: {e}")


def build_session_store(config) -> SessionStore:
    """Pick the Redis store when REDIS_URL is set, the in-memory store otherwise."""
    if config.REDIS_URL:
        logger.info("Using Redis session store")
        return RedisSessionStore(
            config.REDIS_URL,
            default_language=config.DEFAULT_LANGUAGE,
            ttl_seconds=config.SESSION_TTL_SECONDS,
        )
    return SessionStore(
        default_language=config.DEFAULT_LANGUAGE,
        ttl_seconds=config.SESSION_TTL_SECONDS,
    )
