"""Application configuration and settings management."""

from pathlib import Path
from typing import Annotated, Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FETCHROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "FetchRoute API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for run outputs.")
    log_level: str = Field(default="INFO", description="Root logging level applied by create_app().")

    average_speed_kmh: float = Field(
        default=30.0,
        gt=0.0,
        description="Assumed constant urban travel speed used to estimate travel time.",
    )
    default_duration_minutes: int = Field(
        default=60,
        ge=1,
        description="Appointment duration used when a record does not carry one.",
    )
    max_stops_per_route: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound on stops accepted per optimization call (None disables the cap).",
    )

    default_start_name: str = "Home/Office"
    default_start_address: str = "Default Location"
    default_start_latitude: float = Field(default=37.7749, ge=-90.0, le=90.0)
    default_start_longitude: float = Field(default=-122.4194, ge=-180.0, le=180.0)

    # raw env text goes straight to _split_origins
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:8081",
            "http://127.0.0.1:8081",
            "http://localhost:19006",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _resolve_data_root(cls, value: Any) -> Path:
        return Path(value).expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> tuple[str, ...]:
        """Accept a JSON array or a comma-separated list from the environment."""
        if isinstance(value, str):
            text = value.strip()
            try:
                value = json.loads(text) if text.startswith("[") else text.split(",")
            except json.JSONDecodeError:
                value = text.split(",")
        if not isinstance(value, (list, tuple)):
            return tuple()
        return tuple(str(origin).strip() for origin in value if str(origin).strip())


settings = Settings()
