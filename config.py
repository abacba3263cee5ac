"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field


def _env_seconds(name: str, default_ms: int) -> float:
    """Read a millisecond duration from the environment, in seconds."""
    return int(os.getenv(name, str(default_ms))) / 1000


@dataclass(frozen=True)
class PokerConfig:
    """Texas Hold'em table settings."""

    ante: int = field(default_factory=lambda: int(os.getenv("POKER_ANTE", "20")))
    # Added to the pot when dealing the flop, the turn and the river
    street_bets: tuple[int, int, int] = (50, 100, 200)
    opponent_name: str = "Poker Bot"


@dataclass(frozen=True)
class BlackjackConfig:
    """Blackjack table settings."""

    dealer_stands_on: int = 17
    dealer_draw_delay: float = field(
        default_factory=lambda: _env_seconds("DEALER_DRAW_DELAY_MS", 600)
    )
    opponent_name: str = "Dealer"


@dataclass(frozen=True)
class PacingConfig:
    """Card reveal pacing for presentation sinks."""

    reveal_delay: float = field(
        default_factory=lambda: _env_seconds("REVEAL_DELAY_MS", 300)
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    format: str = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
    datefmt: str = "%H:%M:%S"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    poker: PokerConfig = field(default_factory=PokerConfig)
    blackjack: BlackjackConfig = field(default_factory=BlackjackConfig)
    pacing: PacingConfig = field(default_factory=PacingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def configure_logging(app_config: AppConfig | None = None) -> None:
    """Call once at program start."""
    app_config = app_config or config
    level = "DEBUG" if app_config.debug else app_config.logging.level
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=app_config.logging.format,
        datefmt=app_config.logging.datefmt,
    )


# Global configuration instance
config = AppConfig()
