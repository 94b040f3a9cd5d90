"""Application configuration helpers."""

from __future__ import annotations

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Load configuration from environment variables or `.env`."""

    table_name: str = Field(..., alias="TABLE_NAME", min_length=1)
    aws_region: str = Field("us-west-2", alias="AWS_REGION")
    aws_profile: str | None = Field(None, alias="AWS_PROFILE")
    endpoint_url: HttpUrl | None = Field(None, alias="DYNAMODB_ENDPOINT_URL")
    record_count: int = Field(100, alias="RECORD_COUNT", ge=0)
    partition_key_modulus: int = Field(10, alias="PARTITION_KEY_MODULUS", ge=1)
    batch_size: int = Field(25, alias="BATCH_SIZE", ge=1, le=25)
    condition_expression: str = Field(
        "attribute_not_exists(other_column)",
        alias="CONDITION_EXPRESSION",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def endpoint(self) -> str | None:
        if not self.endpoint_url:
            return None
        return str(self.endpoint_url).rstrip("/")
