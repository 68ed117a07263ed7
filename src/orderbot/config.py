"""
Orderbot Configuration

Centralized configuration for the bot, the ingestion loop and the dispatch worker.
All settings can be overridden via environment variables; .env and .env.local
files in the working directory are loaded first (.env.local overrides .env).
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

TOKEN_PLACEHOLDER = "YOUR_NEW_BOT_TOKEN_HERE"


def load_env_files(root: Optional[Path] = None) -> None:
    """
    Load .env then .env.local from the given directory (cwd by default).

    Existing environment variables win over .env; .env.local overrides both.
    """
    root = root or Path.cwd()
    env_file = root / ".env"
    env_local_file = root / ".env.local"

    if env_file.exists():
        load_dotenv(env_file, override=False)
    if env_local_file.exists():
        load_dotenv(env_local_file, override=True)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from e


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be a number, got {raw!r}") from e


class BotConfig:
    """
    Central configuration for orderbot.

    Values are read when the instance is created, so tests can set environment
    variables (or pass overrides) and build a fresh config.

    Example:
        >>> config = BotConfig(BOT_TOKEN="123:abc", ADMIN_TELEGRAM_ID="42")
        >>> config.is_bot_configured()
        True
    """

    SUPPORTED_MODES = ("polling", "webhook")

    def __init__(self, **overrides):
        # ====================================================================
        # Telegram
        # ====================================================================
        self.BOT_TOKEN: str = os.getenv("BOT_TOKEN", "")
        self.ADMIN_TELEGRAM_ID: str = os.getenv("ADMIN_TELEGRAM_ID", "")
        self.WEBAPP_URL: str = os.getenv("WEBAPP_URL", "")
        self.TELEGRAM_API_BASE: str = os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org")
        self.REQUEST_TIMEOUT_SECONDS: float = _env_float("REQUEST_TIMEOUT_SECONDS", 10.0)

        # ====================================================================
        # Ingestion loop
        # ====================================================================
        self.POLL_TIMEOUT_SECONDS: int = _env_int("POLL_TIMEOUT_SECONDS", 30)
        self.POLL_RETRY_DELAY_SECONDS: float = _env_float("POLL_RETRY_DELAY_SECONDS", 5.0)
        self.BOT_MODE: str = os.getenv("BOT_MODE", "polling").lower()
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = _env_int("PORT", 3002)

        # ====================================================================
        # Notifications and sessions
        # ====================================================================
        self.DEFAULT_LANGUAGE: str = os.getenv("DEFAULT_LANGUAGE", "ru")
        self.DISPATCH_QUEUE_SIZE: int = _env_int("DISPATCH_QUEUE_SIZE", 100)
        self.REDIS_URL: str = os.getenv("REDIS_URL", "")
        self.SESSION_TTL_SECONDS: int = _env_int("SESSION_TTL_SECONDS", 0)

        # ====================================================================
        # Storage
        # ====================================================================
        self.ORDERS_TABLE: str = os.getenv("ORDERS_TABLE", "")
        self.AWS_REGION: str = os.getenv("AWS_REGION", "eu-west-2")

        # ====================================================================
        # Logging
        # ====================================================================
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown config setting: {key}")
            setattr(self, key, value)

        if self.BOT_MODE not in self.SUPPORTED_MODES:
            raise ValueError(
                f"BOT_MODE must be one of {self.SUPPORTED_MODES}, got {self.BOT_MODE!r}"
            )

    def is_bot_configured(self) -> bool:
        """True when a real bot token is present."""
        return bool(self.BOT_TOKEN) and self.BOT_TOKEN != TOKEN_PLACEHOLDER

    @property
    def api_url(self) -> str:
        """Bot API base URL including the token path segment."""
        return f"{self.TELEGRAM_API_BASE.rstrip('/')}/bot{self.BOT_TOKEN}"

    def is_operator(self, chat_id) -> bool:
        """True when chat_id is the configured operator identity."""
        return bool(self.ADMIN_TELEGRAM_ID) and str(chat_id) == str(self.ADMIN_TELEGRAM_ID)
