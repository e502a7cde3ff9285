"""Configuration for the finance tracker.

Paths and display settings, each overridable through an environment
variable.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("TRACKER_DATA_DIR", _PROJECT_ROOT / "data")).resolve()

LOG_LEVEL = os.getenv("TRACKER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

CURRENCY_SYMBOL = os.getenv("TRACKER_CURRENCY_SYMBOL", "₹")

CATEGORY_ICONS = {
    "food": "🍔",
    "transport": "🚗",
    "entertainment": "🎬",
    "shopping": "🛍️",
    "bills": "💡",
    "salary": "💼",
    "freelance": "💻",
    "other": "📌",
}


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)


def format_currency(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"
