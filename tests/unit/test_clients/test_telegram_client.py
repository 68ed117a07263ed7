import json

import httpx
import pytest

from orderbot.clients import TelegramClient
from orderbot.config import BotConfig
from orderbot.errors import ChannelSendFailure, ChannelUnavailable


def make_client(config, handler):
    return TelegramClient(config, transport=httpx.MockTransport(handler))


class TestTelegramClient:

    def test_send_message(self, config):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True, "result": {"message_id": 42}})

        client = make_client(config, handler)
        markup = {"inline_keyboard": [[{"text": "x", "callback_data": "y"}]]}

        assert client.send_message("1001", "hi", reply_markup=markup) == 42
        assert seen["url"] == "https://api.telegram.test/bot123:abc/sendMessage"
        assert seen["body"] == {
            "chat_id": "1001",
            "text": "hi",
            "parse_mode": "Markdown",
            "reply_markup": markup,
        }

    def test_api_error_raises_send_failure(self, config):
        client = make_client(config, lambda r: httpx.Response(
            403, json={"ok": False, "description": "Forbidden: bot was blocked by the user"}
        ))
        with pytest.raises(ChannelSendFailure) as exc_info:
            client.send_message("2002", "hi")
        assert "blocked" in exc_info.value.description

    def test_network_error_raises_send_failure(self, config):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ChannelSendFailure) as exc_info:
            make_client(config, handler).answer_callback("cb")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_edit_not_modified_is_success(self, config):
        client = make_client(config, lambda r: httpx.Response(
            400, json={"ok": False, "description": "Bad Request: message is not modified"}
        ))
        client.edit_message("1001", 5, "same text")

    def test_edit_other_error_raises(self, config):
        client = make_client(config, lambda r: httpx.Response(
            400, json={"ok": False, "description": "Bad Request: message to edit not found"}
        ))
        with pytest.raises(ChannelSendFailure):
            client.edit_message("1001", 5, "text")

    def test_edit_without_markup_clears_keyboard(self, config):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"ok": True, "result": True})

        make_client(config, handler).edit_message("1001", 5, "done")
        assert bodies[0]["reply_markup"] == {"inline_keyboard": []}

    def test_answer_callback_alert(self, config):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"ok": True, "result": True})

        make_client(config, handler).answer_callback("cb", text="nope", show_alert=True)
        assert bodies[0] == {"callback_query_id": "cb", "text": "nope", "show_alert": True}

    def test_get_updates(self, config):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"ok": True, "result": [{"update_id": 3}]})

        assert make_client(config, handler).get_updates(3, 30) == [{"update_id": 3}]
        assert bodies[0]["offset"] == 3
        assert bodies[0]["timeout"] == 30

    def test_get_updates_failure_is_unavailable(self, config):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ChannelUnavailable):
            make_client(config, handler).get_updates(0, 30)

    def test_unconfigured_bot_is_noop(self):
        """Without a real token no request is made"""
        def handler(request):
            raise AssertionError("no request expected")

        client = make_client(BotConfig(BOT_TOKEN="YOUR_NEW_BOT_TOKEN_HERE"), handler)

        assert client.send_message("1", "hi") is None
        assert client.get_updates(0, 30) == []
        client.edit_message("1", 2, "x")
        client.answer_callback("cb")
