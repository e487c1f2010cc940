"""Application settings loaded from the environment and an optional .env file."""

from pathlib import Path
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

DEFAULT_FIXTURES_DIR = Path(__file__).resolve().parent.parent / "testdata"


class Settings(BaseSettings):
    """Settings for the departure board, overridable with MBTA_BOARD_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="MBTA_BOARD_",
        env_file=".env",
        extra="ignore",
    )

    # MBTA API
    mbta_api_key: Optional[str] = Field(None, description="Optional MBTA v3 API key")
    mbta_base_url: str = Field(
        "https://api-v3.mbta.com/",
        description="Base URL of the MBTA v3 API",
    )
    request_timeout_seconds: float = Field(10.0, gt=0, description="HTTP timeout per request")
    include_relationships: List[str] = Field(
        default_factory=lambda: ["route", "stop", "trip", "schedule"],
        description="Related entities embedded in the predictions response",
    )
    sort_key: Optional[str] = Field("departure_time", description="Upstream sort key")

    # Extraction
    commuter_rail_route_type: int = Field(2, description="Route type code for commuter rail")
    filter_commuter_rail: bool = Field(True, description="Only keep commuter rail routes")
    require_status: bool = Field(False, description="Skip predictions without a status")
    direction_filter: Optional[Literal["Outbound", "Inbound"]] = Field(
        None,
        description="Only keep trips heading this way",
    )

    # Boards
    north_station_stop_id: str = Field("place-north")
    south_station_stop_id: str = Field("place-sstat")
    fixtures_dir: Path = Field(DEFAULT_FIXTURES_DIR, description="Canned API responses")

    # Logging
    log_level: str = Field("INFO")
    log_json: bool = Field(False)

    # Dashboard
    dashboard_host: str = Field("0.0.0.0")
    dashboard_port: int = Field(8000)
    environment: str = Field("development")

    @field_validator("direction_filter", mode="before")
    @classmethod
    def blank_direction_means_unfiltered(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one the logging module knows."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


settings = Settings()
