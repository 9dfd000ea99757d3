"""Configuration management for farm alerts."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
else:
    # Fall back to template for defaults
    template_path = Path(__file__).parent.parent / ".env.template"
    if template_path.exists():
        load_dotenv(template_path)


class Config:
    """Application configuration."""

    LOG_LEVEL: str = os.getenv("FARM_ALERTS_LOG_LEVEL", "INFO").upper()

    # Alerts view defaults (table opens newest first)
    DEFAULT_SORT_FIELD: str = os.getenv("FARM_ALERTS_DEFAULT_SORT_FIELD", "timestamp")
    DEFAULT_SORT_DIRECTION: str = os.getenv("FARM_ALERTS_DEFAULT_SORT_DIRECTION", "desc")

    # Notification preference defaults
    DELIVERY_METHOD: str = os.getenv("FARM_ALERTS_DELIVERY_METHOD", "in-app")
    EMAIL_SUMMARY_FREQUENCY: str = os.getenv("FARM_ALERTS_EMAIL_SUMMARY_FREQUENCY", "daily")

    # Below this age an alert shows "Nh ago" instead of a day count
    RECENT_HOURS: int = int(os.getenv("FARM_ALERTS_RECENT_HOURS", "24"))


config = Config()


def setup_logging(level: str | None = None) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
