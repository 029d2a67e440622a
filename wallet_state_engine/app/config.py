"""Config file."""
from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # PROJECT
    project_name: str = Field("wallet-state-engine", alias="PROJECT_NAME")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # STORE
    store_snapshot_path: str | None = Field(None, alias="STORE_SNAPSHOT_PATH")
    default_colorway: str = Field("dark", alias="DEFAULT_COLORWAY")

    # CHAINS / BALANCES
    default_native_decimals: int = Field(18, alias="DEFAULT_NATIVE_DECIMALS", ge=0)
    collapsed_balance_count: int = Field(4, alias="COLLAPSED_BALANCE_COUNT", ge=0)
    high_value_threshold_usd: Decimal = Field(Decimal("10000"), alias="HIGH_VALUE_THRESHOLD_USD")
    hot_signer_types: list[str] = Field(default_factory=lambda: ["ring", "seed"], alias="HOT_SIGNER_TYPES")

    # FEES
    fee_warning_threshold_usd: Decimal = Field(Decimal("50"), alias="FEE_WARNING_THRESHOLD_USD")
    fee_display_precision: int = Field(6, alias="FEE_DISPLAY_PRECISION", ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


settings: Settings = Settings()
