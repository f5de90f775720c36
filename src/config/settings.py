"""
Dice Poker - Application Settings

Loads configuration from environment variables using Pydantic Settings and
applies the configured log level.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    supabase_url: str
    supabase_anon_key: str

    # Ledger
    session_table: str = "dice_poker_sessions"
    rpc_prefix: str = "dice_poker_"
    default_session_id: str = "main"
    ledger_timeout: float = 10.0

    # Currency
    amount_decimals: int = 18
    currency_symbol: str = "ETH"

    # Application
    audit_log_dir: Path | None = Path("logs")
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Apply log level from settings; DEBUG wins when debug is on."""
    level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
