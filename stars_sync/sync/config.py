"""Configuration for the sync engine."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SyncConfig(BaseSettings):
    """Settings that tune how a reconciliation run behaves."""

    model_config = SettingsConfigDict(
        env_prefix="SYNC_",
        case_sensitive=False,
        extra="ignore",
    )

    mutation_concurrency: int = Field(
        default=1,
        ge=1,
        le=20,
        description="Maximum concurrent create/archive calls (1 = sequential)",
    )
    strict_records: bool = Field(
        default=True,
        description="Abort the page fetch on a malformed row instead of skipping it",
    )
    dry_run: bool = Field(
        default=False,
        description="Compute and log the plan without creating or archiving pages",
    )
