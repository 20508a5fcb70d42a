"""Configuration management for the Paybox Direct client."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_URL = "https://preprod-ppps.paybox.com/PPPS.php"
PROD_URL = "https://ppps.paybox.com/PPPS.php"
PROD_FALLBACK_URL = "https://ppps1.paybox.com/PPPS.php"


class PayboxSettings(BaseSettings):
    """
    Session settings shared by every Paybox request.

    Loaded from keyword arguments or ``PAYBOX_*`` environment variables
    (e.g. ``PAYBOX_SITE``, ``PAYBOX_IS_PROD``). Instances are immutable and
    are handed explicitly to clients and processors.
    """

    # Contract identifiers, see your Paybox contract
    site: int = Field(ge=0, le=9_999_999, description="Site number (SITE)")
    rank: int = Field(ge=0, le=99, description="Rank number (RANG)")
    login: str = Field(default="", description="Back-office login")
    password: str = Field(default="", description="Shared secret sent as CLE")

    is_prod: bool = Field(default=True, description="False to use the preprod server")
    ref_prefix: str = Field(
        default="",
        description="Prefix applied to all references, including subscriber IDs",
    )
    version: int = Field(
        default=104,
        ge=0,
        le=99_999,
        description="Protocol version, 103 for Paybox Direct, 104 for Direct Plus",
    )
    activity: int | None = Field(
        default=None, ge=0, le=999, description="Activity code (ACTIVITE)"
    )
    bank: str | None = Field(
        default=None, description="Acquirer override (ACQUEREUR)"
    )

    # Endpoints
    dev_url: str = Field(default=DEV_URL, description="Preprod endpoint")
    prod_url: str = Field(default=PROD_URL, description="Primary production endpoint")
    prod_fallback_url: str = Field(
        default=PROD_FALLBACK_URL, description="Fallback production endpoint"
    )

    # Transport
    timeout_seconds: float = Field(default=10.0, gt=0, description="HTTP timeout")
    failover_delay_seconds: float = Field(
        default=1.0, ge=0, description="Wait before trying the fallback endpoint"
    )
    debit_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Wait between a subscriber creation and its follow-up debit",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAYBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )
