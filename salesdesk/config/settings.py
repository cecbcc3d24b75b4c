"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingSettings(BaseSettings):
    """Pricing defaults applied to new and reloaded estimations."""

    model_config = SettingsConfigDict(env_prefix="PRICING_")

    default_gst_percent: float = 18.0
    default_discount_percent: float = 0.0

    # Used when a legacy record's gst percent cannot be back-solved
    legacy_gst_percent: float = 18.0

    amount_decimals: int = 2


class CodeSettings(BaseSettings):
    """Prefixes for generated product codes and reference numbers."""

    model_config = SettingsConfigDict(env_prefix="CODES_")

    standard_prefix: str = "SBI-SP"
    custom_prefix: str = "SBI-CP"
    addon_prefix: str = "SBI-AP"
    reference_prefix: str = "SBI-PI"
    code_width: int = 3


class CompanySettings(BaseSettings):
    """Issuing company block printed on quotations and persisted with them."""

    model_config = SettingsConfigDict(env_prefix="COMPANY_")

    name: str = "SRI BRAMHA INDUSTRIES"
    subtitle: str = "COMMERCIAL KITCHEN & BAKERY EQUIPMENTS"
    gstin: str = "33AVTPS8228G1Z0"
    tagline: str = "Quality With Integrity"
    address_street: str = "Near Reliance Market, Opp to SIT Hostel, Thanjavur-Trichy Main Rd,"
    address_area: str = "Ariyamangalam Area, Trichy - 620010"
    contact_sales: str = "98636 99922, 98424 71388"
    contact_service: str = "95781 71388"
    website: str = "www.sribramhaindustries.in"
    email: str = "bramhaindustries@gmail.com"
    factory_address: str = (
        "SRI BRAMHA INDUSTRIES, T.S. No. 214/5-B Thanjavur-Trichy Main road, "
        "Opposite to Navalur road, Pudukudi North Village (PO), Sengipatti (VIA), "
        "Thanjavur - 613402"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Salesdesk Estimation Engine"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool | None = None  # None: JSON outside development

    # Sub-settings
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    codes: CodeSettings = Field(default_factory=CodeSettings)
    company: CompanySettings = Field(default_factory=CompanySettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
