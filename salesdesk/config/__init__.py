"""Configuration module."""

from salesdesk.config.logging import configure_logging, estimation_context, get_logger
from salesdesk.config.settings import (
    CodeSettings,
    CompanySettings,
    PricingSettings,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "PricingSettings",
    "CodeSettings",
    "CompanySettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "estimation_context",
]
