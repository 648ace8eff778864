"""Telegram delivery - API client, message formatting, commands and polling."""

from src.bot.commands import Command, CommandRouter, parse_command
from src.bot.runner import BotRunner
from src.bot.telegram_client import TelegramClient, TelegramError

__all__ = [
    "BotRunner",
    "Command",
    "CommandRouter",
    "TelegramClient",
    "TelegramError",
    "parse_command",
]
