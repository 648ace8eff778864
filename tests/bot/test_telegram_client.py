"""Unit tests for the Telegram Bot API client."""

from unittest.mock import Mock

import pytest
import requests

from src.bot.telegram_client import TelegramClient, TelegramError, chunk_message

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def session() -> Mock:
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session) -> TelegramClient:
    return TelegramClient(token="123:abc", session=session, timeout=10)


def _ok(make_response, result):
    return make_response(200, {"ok": True, "result": result})


# ---------------------------------------------------------------------------
# API calls
# ---------------------------------------------------------------------------


class TestApiCalls:
    def test_get_me(self, client, session, make_response):
        session.request.return_value = _ok(make_response, {"id": 1, "username": "signal_bot"})

        assert client.get_me()["username"] == "signal_bot"
        method, url = session.request.call_args[0]
        assert method == "GET"
        assert url == "https://api.telegram.org/bot123:abc/getMe"

    def test_get_updates_long_poll(self, client, session, make_response):
        session.request.return_value = _ok(make_response, [{"update_id": 5}])

        updates = client.get_updates(offset=5, timeout=30)

        assert updates == [{"update_id": 5}]
        kwargs = session.request.call_args[1]
        assert kwargs["params"]["offset"] == 5
        assert kwargs["params"]["timeout"] == 30
        assert kwargs["timeout"] == 40

    def test_get_updates_without_offset(self, client, session, make_response):
        session.request.return_value = _ok(make_response, [])

        client.get_updates()

        assert "offset" not in session.request.call_args[1]["params"]

    def test_send_message(self, client, session, make_response):
        session.request.return_value = _ok(make_response, {"message_id": 9})

        client.send_message(-100123, "hello")

        method, url = session.request.call_args[0]
        assert method == "POST"
        assert url.endswith("/sendMessage")
        assert session.request.call_args[1]["json"] == {"chat_id": -100123, "text": "hello"}

    def test_long_message_split(self, client, session, make_response):
        session.request.return_value = _ok(make_response, {"message_id": 9})

        sent = client.send_message(1, "x" * 5000)

        assert len(sent) == 2
        assert session.request.call_count == 2


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_not_ok(self, client, session, make_response):
        session.request.return_value = make_response(
            400, {"ok": False, "description": "Bad Request: chat not found"}
        )

        with pytest.raises(TelegramError, match="chat not found"):
            client.send_message(-1, "hi")

    def test_transport_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TelegramError, match="request failed"):
            client.get_me()

    def test_invalid_json(self, client, session, make_response):
        response = make_response(502)
        response.json.side_effect = ValueError("no json")
        session.request.return_value = response

        with pytest.raises(TelegramError, match="invalid JSON"):
            client.get_me()

    def test_non_object_payload(self, client, session, make_response):
        session.request.return_value = make_response(200, [])

        with pytest.raises(TelegramError, match="unexpected payload"):
            client.get_me()


# ---------------------------------------------------------------------------
# Session and chunking
# ---------------------------------------------------------------------------


class TestSession:
    def test_retries_only_gets(self):
        client = TelegramClient(token="123:abc")

        adapter = client._session.get_adapter("https://api.telegram.org")
        retry = adapter.max_retries
        assert retry.total == 3
        assert 503 in retry.status_forcelist
        assert "POST" not in retry.allowed_methods


class TestChunkMessage:
    def test_short_text_untouched(self):
        assert chunk_message("hello") == ["hello"]

    def test_prefers_newlines(self):
        text = "a" * 6 + "\n" + "b" * 6

        assert chunk_message(text, limit=10) == ["aaaaaa", "\nbbbbbb"]

    def test_hard_split_without_newline(self):
        parts = chunk_message("x" * 25, limit=10)

        assert parts == ["x" * 10, "x" * 10, "x" * 5]
        assert "".join(parts) == "x" * 25
