from orderbot.events import ActionEvent, IgnoredEvent, MessageEvent, parse_update
from orderbot.payloads import (
    LanguageChangePayload,
    StatusChangePayload,
    encode_status_payload,
    parse_payload,
)


class TestParsePayload:

    def test_status(self):
        assert parse_payload("setstatus:42:cooking") == StatusChangePayload("42", "cooking")

    def test_status_missing_parts(self):
        assert parse_payload("setstatus:") == StatusChangePayload("", "")
        assert parse_payload("setstatus:42") == StatusChangePayload("42", "")

    def test_language(self):
        assert parse_payload("set_lang_uz") == LanguageChangePayload("uz")

    def test_other_shapes(self):
        assert parse_payload("") is None
        assert parse_payload(None) is None
        assert parse_payload("buy:1") is None

    def test_encode_fits_callback_limit(self):
        assert len(encode_status_payload(99999999999, "out_for_delivery").encode()) <= 64


class TestParseUpdate:

    def test_callback(self):
        event = parse_update({
            "update_id": 5,
            "callback_query": {
                "id": "cb1",
                "from": {"id": 1001},
                "data": "setstatus:7:preparing",
                "message": {"message_id": 55, "chat": {"id": 1001}},
            },
        })
        assert event == ActionEvent(
            update_id=5,
            callback_id="cb1",
            chat_id="1001",
            message_id=55,
            data="setstatus:7:preparing",
            from_id="1001",
        )

    def test_callback_without_message_uses_sender(self):
        event = parse_update({"update_id": 6, "callback_query": {"id": "cb", "from": {"id": 9}, "data": "x"}})
        assert isinstance(event, ActionEvent)
        assert event.chat_id == "9"
        assert event.message_id is None

    def test_text_message(self):
        event = parse_update({
            "update_id": 7,
            "message": {"chat": {"id": 2002}, "from": {"first_name": "Aziz"}, "text": "/start"},
        })
        assert event == MessageEvent(update_id=7, chat_id="2002", text="/start", first_name="Aziz")

    def test_non_text_message_ignored(self):
        event = parse_update({"update_id": 8, "message": {"chat": {"id": 1}, "sticker": {}}})
        assert isinstance(event, IgnoredEvent)

    def test_malformed_ignored(self):
        assert isinstance(parse_update({"update_id": 9, "message": {"text": "hi"}}), IgnoredEvent)
        assert isinstance(parse_update({"update_id": 10, "edited_message": {}}), IgnoredEvent)
        assert isinstance(parse_update(None), IgnoredEvent)
