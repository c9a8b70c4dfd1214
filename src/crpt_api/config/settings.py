from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.enums import TimeUnit
from .urls import DEFAULT_DOCUMENTS_CREATE_URL


class AppConfig(BaseSettings):
    """Application configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the CRPT_API_ prefix
    (or a .env file in the working directory). For example:
        - CRPT_API_API_TOKEN=xxx
        - CRPT_API_ENDPOINT_URL=https://ismp.crpt.ru/api/v3/lk/documents/create
        - CRPT_API_TIME_UNIT=SECONDS
        - CRPT_API_REQUEST_LIMIT=10

    Alternatively, settings can be provided programmatically when creating the client:
        client = CrptApiClient(TimeUnit.SECONDS, 10, api_token="xxx")
    """

    model_config = SettingsConfigDict(
        env_prefix="CRPT_API_",
        env_file=".env",
        case_sensitive=False,
        extra="forbid",
    )

    endpoint_url: str = Field(
        default=DEFAULT_DOCUMENTS_CREATE_URL,
        description="Document create endpoint that every admitted call is POSTed to",
    )

    api_token: Optional[str] = Field(
        default=None,
        description="Bearer credential sent in the Authorization header",
    )

    category_tag: str = Field(
        default="clothes",
        min_length=1,
        description="Product group sent in the 'pg' header",
    )

    time_unit: TimeUnit = Field(
        default=TimeUnit.SECONDS,
        description="Rate window length (one unit)",
    )

    request_limit: int = Field(
        default=10,
        gt=0,
        description="Maximum admissions per rate window",
    )

    max_in_flight: int = Field(
        default=10000,
        ge=1,
        description="Maximum calls inside the gate at once; further calls get HTTP 429",
    )

    release_workers: int = Field(
        default=1,
        ge=1,
        description="Worker threads servicing scheduled permit releases",
    )

    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="HTTP timeout for the document create request",
    )
