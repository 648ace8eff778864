"""Minimal Telegram Bot API client.

API Reference:
    Base URL: https://api.telegram.org/bot{token}
    getMe:       GET  /getMe
    getUpdates:  GET  /getUpdates?offset=N&timeout=S   (long polling)
    sendMessage: POST /sendMessage {"chat_id": ..., "text": ...}
    Every response is {"ok": bool, "result": ..., "description": str}.

Only GET requests are retried on transient 5xx errors; a failed sendMessage
surfaces immediately as TelegramError so the caller can report it.
"""

from pathlib import Path
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.shared.config import Config
from src.shared.utils import setup_logger

MAX_MESSAGE_LENGTH = 4096


class TelegramError(Exception):
    """A Telegram API call failed."""


def chunk_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """Split text into Telegram-sized parts, preferring newline boundaries."""
    if len(text) <= limit:
        return [text]
    parts: list[str] = []
    start = 0
    while start < len(text):
        end = min(start + limit, len(text))
        newline = text.rfind("\n", start, end)
        if end == len(text) or newline <= start:
            newline = end
        parts.append(text[start:newline])
        start = newline
    return parts


class TelegramClient:
    """Thin wrapper over the Telegram Bot HTTP API."""

    API_BASE = "https://api.telegram.org"
    MAX_RETRIES = 3

    def __init__(
        self,
        token: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
        log_file: Path | None = None,
    ) -> None:
        self._token = token or Config.TELEGRAM_TOKEN
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT
        self._session = session or self._build_session()
        self.logger = setup_logger(self.__class__.__name__, log_file)

    def _url(self, method: str) -> str:
        return f"{self.API_BASE}/bot{self._token}/{method}"

    def get_me(self) -> dict:
        """Bot account info; used to verify the token at startup."""
        return self._call("GET", "getMe")

    def get_updates(self, offset: int | None = None, timeout: int = 0) -> list[dict]:
        """Fetch pending updates, long polling for up to `timeout` seconds."""
        params: dict[str, Any] = {"timeout": timeout, "allowed_updates": '["message", "channel_post"]'}
        if offset is not None:
            params["offset"] = offset
        result = self._call("GET", "getUpdates", params=params, read_timeout=self.timeout + timeout)
        return list(result or [])

    def send_message(self, chat_id: int | str, text: str) -> list[dict]:
        """Send text to a chat, split into several messages if too long."""
        sent = []
        for part in chunk_message(text):
            sent.append(self._call("POST", "sendMessage", json={"chat_id": chat_id, "text": part}))
        self.logger.info("Message sent to chat %s (%d part(s))", chat_id, len(sent))
        return sent

    def _call(
        self,
        http_method: str,
        method: str,
        params: dict | None = None,
        json: dict | None = None,
        read_timeout: float | None = None,
    ) -> Any:
        try:
            response = self._session.request(
                http_method,
                self._url(method),
                params=params,
                json=json,
                timeout=read_timeout or self.timeout,
            )
            payload = response.json()
        except requests.RequestException as exc:
            raise TelegramError(f"Telegram {method} request failed: {exc}") from exc
        except ValueError as exc:
            raise TelegramError(f"Telegram {method} returned invalid JSON") from exc

        if not isinstance(payload, dict):
            raise TelegramError(f"Telegram {method} returned unexpected payload")
        if not payload.get("ok"):
            description = payload.get("description", f"HTTP {response.status_code}")
            raise TelegramError(f"Telegram {method} failed: {description}")
        return payload.get("result")

    def _build_session(self) -> requests.Session:
        """Build a requests Session that retries idempotent GETs on 5xx."""
        session = requests.Session()
        retry = Retry(
            total=self.MAX_RETRIES,
            backoff_factor=1.0,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        return session
