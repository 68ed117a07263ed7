from unittest.mock import Mock, patch

import redis

from orderbot.config import BotConfig
from orderbot.session import RedisSessionStore, SessionStore, build_session_store


class TestSessionStore:

    def test_default_language(self):
        assert SessionStore(default_language="uz").get_language("1") == "uz"

    def test_one_language_per_conversation(self):
        store = SessionStore()
        store.set_language(1, "en")
        store.set_language("1", "uz")
        assert store.get_language(1) == "uz"
        assert store.get_language("2") == "ru"

    def test_clear(self):
        store = SessionStore()
        store.set_language("1", "en")
        store.clear("1")
        assert store.get_language("1") == "ru"

    def test_ttl_expiry(self):
        store = SessionStore(ttl_seconds=60)
        with patch("orderbot.session.session_store.time.time", return_value=1000.0):
            store.set_language("1", "en")
        with patch("orderbot.session.session_store.time.time", return_value=1030.0):
            assert store.get_language("1") == "en"
        with patch("orderbot.session.session_store.time.time", return_value=1061.0):
            assert store.get_language("1") == "ru"


class TestRedisSessionStore:

    def test_reads_and_writes_redis(self):
        client = Mock()
        client.get.return_value = b"en"
        store = RedisSessionStore("redis://localhost", client=client)

        store.set_language("7", "en")

        client.set.assert_called_once_with("lang:7", "en")
        assert store.get_language("7") == "en"
        client.get.assert_called_once_with("lang:7")

    def test_ttl_uses_setex(self):
        client = Mock()
        RedisSessionStore("redis://localhost", ttl_seconds=3600, client=client).set_language("7", "uz")
        client.setex.assert_called_once_with("lang:7", 3600, "uz")

    def test_missing_key_returns_default(self):
        client = Mock()
        client.get.return_value = None
        assert RedisSessionStore("redis://x", default_language="uz", client=client).get_language("7") == "uz"

    def test_redis_outage_falls_back_to_memory(self):
        client = Mock()
        client.set.side_effect = redis.ConnectionError("down")
        client.get.side_effect = redis.ConnectionError("down")
        store = RedisSessionStore("redis://localhost", client=client)

        store.set_language("7", "en")

        assert store.get_language("7") == "en"

    def test_build_session_store(self):
        assert type(build_session_store(BotConfig(REDIS_URL=""))) is SessionStore
        with patch("orderbot.session.session_store.redis.from_url") as from_url:
            store = build_session_store(BotConfig(REDIS_URL="redis://cache:6379/0", SESSION_TTL_SECONDS=10))
        assert isinstance(store, RedisSessionStore)
        assert store.ttl_seconds == 10
        from_url.assert_called_once_with("redis://cache:6379/0")
