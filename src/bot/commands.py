"""Chat command handling.

Supported commands (an optional @botname suffix is ignored):

    /analyze [symbol]     analysis for one symbol (default BTC), posted to the channel
    /bestopportunity      best symbol of the universe, posted to the channel (alias /best)
    /testchat             test message to the channel

Every handler reports back to the invoking chat. Nothing raised inside a
handler escapes dispatch(): failures are logged and turned into a reply.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from src.analysis.pipeline import SignalPipeline
from src.bot.formatter import format_analysis, format_best_opportunity
from src.bot.telegram_client import TelegramClient, TelegramError
from src.market.symbols import normalize_symbol
from src.shared.utils import setup_logger


@dataclass(frozen=True)
class Command:
    name: str
    argument: str | None
    chat_id: int | str


def parse_command(message: dict) -> Command | None:
    """Extract a slash command from a Telegram message dict."""
    text = (message.get("text") or "").strip()
    chat_id = (message.get("chat") or {}).get("id")
    if not text.startswith("/") or chat_id is None:
        return None

    head, _, rest = text.partition(" ")
    name = head[1:].split("@", 1)[0].lower()
    argument = rest.strip() or None
    return Command(name=name, argument=argument, chat_id=chat_id)


class CommandRouter:
    """Routes parsed commands to handlers that deliver via Telegram."""

    def __init__(
        self,
        client: TelegramClient,
        pipeline: SignalPipeline,
        channel_id: int | str,
        log_file: Path | None = None,
    ) -> None:
        self.client = client
        self.pipeline = pipeline
        self.channel_id = channel_id
        self.logger = setup_logger(self.__class__.__name__, log_file)
        self._handlers: dict[str, Callable[[Command], None]] = {
            "analyze": self.handle_analyze,
            "bestopportunity": self.handle_best_opportunity,
            "best": self.handle_best_opportunity,
            "testchat": self.handle_test_chat,
        }

    @property
    def commands(self) -> list[str]:
        return sorted(self._handlers)

    def dispatch(self, message: dict) -> bool:
        """Handle one incoming message. Returns True if it was a known command."""
        command = parse_command(message)
        if command is None:
            return False
        handler = self._handlers.get(command.name)
        if handler is None:
            return False

        self.logger.info("Processing /%s from chat %s", command.name, command.chat_id)
        try:
            handler(command)
        except Exception as exc:
            self.logger.exception("Command /%s failed", command.name)
            self._reply(command, f"Error processing /{command.name}: {exc}")
        return True

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def handle_analyze(self, command: Command) -> None:
        symbol = normalize_symbol(command.argument)
        analysis = self.pipeline.analyze(symbol)
        if analysis is None:
            self._reply(command, f"No market data available for {symbol}. Try again later.")
            return

        self._deliver(
            command,
            format_analysis(analysis),
            success="Futures analysis sent to group!",
            failure="Error sending analysis",
        )

    def handle_best_opportunity(self, command: Command) -> None:
        analysis = self.pipeline.best_opportunity()
        if analysis is None:
            self._reply(command, "No opportunities found due to data issues.")
            return

        self._deliver(
            command,
            format_best_opportunity(analysis),
            success="Best opportunity sent to group!",
            failure="Error sending opportunity",
        )

    def handle_test_chat(self, command: Command) -> None:
        try:
            self.client.send_message(self.channel_id, "Test message from bot")
        except TelegramError as exc:
            self.logger.error("Testchat failed for CHAT_ID %s: %s", self.channel_id, exc)
            self._reply(command, f"Failed to send test message to CHAT_ID {self.channel_id}: {exc}")
            return
        self._reply(command, f"Test message sent to CHAT_ID {self.channel_id}")

    # ------------------------------------------------------------------
    # Delivery helpers
    # ------------------------------------------------------------------

    def _deliver(self, command: Command, text: str, success: str, failure: str) -> None:
        try:
            self.client.send_message(self.channel_id, text)
        except TelegramError as exc:
            self.logger.error("Error sending message to CHAT_ID %s: %s", self.channel_id, exc)
            self._reply(
                command,
                f"{failure}. Verify CHAT_ID ({self.channel_id}) and bot permissions.",
            )
            return
        self._reply(command, success)

    def _reply(self, command: Command, text: str) -> None:
        try:
            self.client.send_message(command.chat_id, text)
        except TelegramError as exc:
            self.logger.error("Could not reply to chat %s: %s", command.chat_id, exc)
