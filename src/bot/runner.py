"""Long-polling loop feeding Telegram updates to the command router."""

import time
from pathlib import Path

from src.bot.commands import CommandRouter
from src.bot.telegram_client import TelegramClient, TelegramError
from src.shared.config import Config
from src.shared.utils import setup_logger


class BotRunner:
    """Polls getUpdates and dispatches each message exactly once."""

    ERROR_BACKOFF = 5.0  # seconds to wait after a polling error

    def __init__(
        self,
        client: TelegramClient,
        router: CommandRouter,
        poll_timeout: int | None = None,
        log_file: Path | None = None,
    ) -> None:
        self.client = client
        self.router = router
        self.poll_timeout = poll_timeout if poll_timeout is not None else Config.POLL_TIMEOUT
        self.logger = setup_logger(self.__class__.__name__, log_file)
        self._offset: int | None = None

    @property
    def offset(self) -> int | None:
        return self._offset

    def poll_once(self) -> int:
        """Fetch and handle one batch of updates. Returns the number handled.

        Raises:
            TelegramError: If getUpdates fails.
        """
        updates = self.client.get_updates(offset=self._offset, timeout=self.poll_timeout)
        for update in updates:
            try:
                self._offset = int(update["update_id"]) + 1
            except (KeyError, TypeError, ValueError):
                self.logger.warning("Skipping malformed update: %r", update)
                continue
            message = update.get("message") or update.get("channel_post")
            if message:
                self.router.dispatch(message)
        return len(updates)

    def run_forever(self) -> None:
        """Poll until interrupted; polling errors are logged and retried."""
        self.logger.info("Bot is running (commands: %s)", ", ".join(self.router.commands))
        while True:
            try:
                self.poll_once()
            except TelegramError as exc:
                self.logger.error("Polling error: %s", exc)
                time.sleep(self.ERROR_BACKOFF)
            except Exception:
                self.logger.exception("Unexpected error while handling updates")
                time.sleep(self.ERROR_BACKOFF)
