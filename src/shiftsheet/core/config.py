"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class SearchConfig(BaseSettings):
    """Transcript search index (OpenSearch behind AWS SigV4) configuration."""

    model_config = {"env_prefix": "SHIFTSHEET_SEARCH_"}

    endpoint: str = ""
    region: str = "us-east-1"
    service: str = "es"
    index_template: str = "{namespace}_sia_transcript_details"
    timestamp_field: str = "processed_on"
    agent_field: str = "request.agent"
    max_results: int = 1000
    timeout: float = 30.0


class SheetsConfig(BaseSettings):
    """Google Sheets target configuration."""

    model_config = {"env_prefix": "SHIFTSHEET_SHEETS_"}

    spreadsheet_id: str = ""
    sheet_name: str = "Sheet1"
    credentials_file: str = ""  # service-account JSON
    merge_mode: Literal["append", "refresh"] = "append"


class ShiftConfig(BaseSettings):
    """Work shift window, expressed in local time at a fixed UTC offset."""

    model_config = {"env_prefix": "SHIFTSHEET_SHIFT_"}

    utc_offset_minutes: int = 330  # +05:30
    day_start_hour: int = 9
    day_end_hour: int = 21

    @model_validator(mode="after")
    def _check_window(self) -> ShiftConfig:
        if not 0 <= self.day_start_hour < self.day_end_hour <= 24:
            raise ValueError(
                f"invalid shift window: day_start_hour={self.day_start_hour}, "
                f"day_end_hour={self.day_end_hour}"
            )
        return self


class ExportConfig(BaseSettings):
    """Export run behaviour."""

    model_config = {"env_prefix": "SHIFTSHEET_EXPORT_"}

    processed_by_fallback: str = "Unknown"
    row_limit: int | None = None  # keep only the newest N rows per run
    agent_allow_list: list[str] | None = None


class AuthConfig(BaseSettings):
    """HTTP basic auth for the /api routes. Disabled unless both are set."""

    model_config = {"env_prefix": "SHIFTSHEET_AUTH_"}

    username: str = ""
    password: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.username and self.password)


class CorsConfig(BaseSettings):
    """Cross-origin access for the browser export form."""

    model_config = {"env_prefix": "SHIFTSHEET_CORS_"}

    allow_origins: list[str] = ["*"]
    allow_credentials: bool = False


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "SHIFTSHEET_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    default_namespace: str = "qa"

    # Sub-configs read (and validate) the environment when AppSettings is built.
    search: SearchConfig = Field(default_factory=SearchConfig)
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)
    shift: ShiftConfig = Field(default_factory=ShiftConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
