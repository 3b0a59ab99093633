from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.services.eligibility import BottlingCriteria


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    jwt_secret_key: SecretStr
    jwt_algorithm: str = "HS256"
    jwt_access_token_expires_minutes: int = 60
    jwt_issuer: str | None = None
    jwt_audience: str | None = None
    # CORS
    cors_allow_origins: str = "*"
    # Bottling gates
    bottling_min_volume_gal: Decimal = Decimal("10")
    # TTB report
    report_rounding_digits: int = 2

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @field_validator("bottling_min_volume_gal")
    @classmethod
    def ensure_non_negative_volume(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("bottling_min_volume_gal must not be negative")
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        if isinstance(self.cors_allow_origins, str):
            return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]
        return self.cors_allow_origins

    def bottling_criteria(self) -> BottlingCriteria:
        return BottlingCriteria(min_volume_gallons=self.bottling_min_volume_gal)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
