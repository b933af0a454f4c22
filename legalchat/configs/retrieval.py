"""
Retrieval and diagnostic configuration.

Dependencies: pydantic_settings
System role: Result-count defaults for balanced retrieval, probe codes for diagnostics
"""

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Settings for balanced multi-jurisdiction retrieval."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    top_k: int = Field(default=15, description="Chunks returned to the answer composer")
    per_jurisdiction_fetch: int = Field(
        default=10,
        description="Base candidates fetched per jurisdiction for multi-jurisdiction queries",
    )
    max_fetch: int = Field(default=50, description="Cap on the widened fetch size")
    min_candidates: int = Field(default=10, description="Floor on raw candidates for multi-jurisdiction queries")


class DiagnosticSettings(BaseSettings):
    """Settings for the connectivity report."""

    model_config = SettingsConfigDict(
        env_prefix="DIAGNOSTIC_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    iso_codes: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["CH", "AT", "DE"],
        description="Jurisdictions probed for per-code document counts",
    )
    recent_blob_limit: int = Field(default=10, description="Blob names listed in the storage section")

    @field_validator("iso_codes", mode="before")
    @classmethod
    def split_codes(cls, value):
        """Accept comma-separated env values."""
        if isinstance(value, str):
            return [code.strip().upper() for code in value.split(",") if code.strip()]
        return value
