"""
Stockkeeper configuration.

Usage in settings.py:
    STOCKKEEPER = {
        "DEFAULT_PAGE_SIZE": 20,
        "MAX_PAGE_SIZE": 100,
        "STRICT_THRESHOLDS": False,
        "DEFAULT_WAREHOUSE": "MAIN",
        "CONFLICT_RETRIES": 3,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class StockkeeperSettings:
    """Stockkeeper configuration settings."""

    # Movement history pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Reject max < min and reorder point > max on threshold updates
    STRICT_THRESHOLDS: bool = False

    # Location stored on newly created stock accounts
    DEFAULT_WAREHOUSE: str = "MAIN"

    # Attempts used by retry_on_conflict()
    CONFLICT_RETRIES: int = 3


def get_stockkeeper_settings() -> StockkeeperSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOCKKEEPER", {})
    return StockkeeperSettings(**{
        k: v for k, v in user_settings.items()
        if k in StockkeeperSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_stockkeeper_settings(), name)


stockkeeper_settings = _LazySettings()
