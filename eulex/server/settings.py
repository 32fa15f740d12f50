from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from eulex.ingest.fetch import DEFAULT_MAX_BYTES, DEFAULT_TIMEOUT_SECONDS

load_dotenv(override=False)


DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseModel):
    """Runtime configuration for the FastAPI server."""

    environment: str = Field(default_factory=lambda: os.getenv("ENVIRONMENT", "dev"))
    fetch_timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("FETCH_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)))
    )
    max_document_bytes: int = Field(
        default_factory=lambda: int(os.getenv("MAX_DOCUMENT_BYTES", str(DEFAULT_MAX_BYTES)))
    )
    cors_origins: List[str] = Field(default_factory=lambda: os.getenv("CORS_ORIGINS", ""))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    model_config = {
        "frozen": True,
        "validate_default": True,
    }

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> List[str]:
        if value is None:
            return list(DEFAULT_CORS_ORIGINS)
        if isinstance(value, str):
            if not value.strip():
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return list(value)

    @field_validator("fetch_timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("FETCH_TIMEOUT_SECONDS must be positive")
        return value

    @field_validator("max_document_bytes")
    @classmethod
    def _positive_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("MAX_DOCUMENT_BYTES must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL '{value}'")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance for FastAPI dependency injection."""

    return Settings()


__all__ = ["DEFAULT_CORS_ORIGINS", "Settings", "get_settings"]
