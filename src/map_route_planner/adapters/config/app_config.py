"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# TOML section -> settings that section may override
TOML_SECTIONS: dict[str, tuple[str, ...]] = {
    "routing": (
        "osrm_base_url",
        "osrm_profile",
        "routing_timeout_seconds",
        "include_active_modes",
    ),
    "poi": (
        "overpass_url",
        "overpass_query_timeout_seconds",
        "overpass_min_delay_seconds",
        "poi_fetch_timeout_seconds",
        "include_extended_categories",
    ),
    "search": (
        "nominatim_base_url",
        "nominatim_user_agent",
        "nominatim_min_delay_seconds",
        "search_result_limit",
    ),
    "markers": ("marker_api_url",),
}


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Routing (OSRM)
    osrm_base_url: str = Field(
        default="https://router.project-osrm.org", description="Base URL of the OSRM server"
    )
    osrm_profile: str = Field(default="driving", description="OSRM profile: driving, walking or cycling")
    routing_timeout_seconds: float = Field(
        default=10.0, description="Timeout for a single routing request in seconds"
    )
    include_active_modes: bool = Field(
        default=False,
        description="Offer walking and cycling estimates for every route",
    )

    # Points of interest (Overpass)
    overpass_url: str = Field(
        default="https://overpass-api.de/api/interpreter",
        description="Overpass API interpreter endpoint",
    )
    overpass_query_timeout_seconds: int = Field(
        default=25, description="Server-side timeout embedded in Overpass queries"
    )
    overpass_min_delay_seconds: float = Field(
        default=1.0, description="Minimum delay between Overpass requests in seconds"
    )
    poi_fetch_timeout_seconds: float = Field(
        default=10.0,
        description="Client-side deadline after which a POI fetch is cancelled",
    )
    include_extended_categories: bool = Field(
        default=False,
        description="Also load restaurants, banks, fuel, hotels and places of worship at high zoom",
    )

    # Place search (Nominatim)
    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org", description="Base URL of Nominatim"
    )
    nominatim_user_agent: str = Field(
        default="map-route-planner/0.1",
        description="User-Agent sent to Nominatim (its usage policy requires one)",
    )
    nominatim_min_delay_seconds: float = Field(
        default=1.0, description="Minimum delay between Nominatim requests in seconds"
    )
    search_result_limit: int = Field(
        default=5, description="Maximum number of local and of place search results"
    )

    # Marker persistence
    marker_api_url: str = Field(
        default="http://localhost:3000/api/markers",
        description="Marker resource of the persistence collaborator",
    )

    log_level: str = Field(default="INFO", description="Log level name")

    config_file: str | None = Field(
        default=None,
        description="Optional TOML file with [routing], [poi], [search] and [markers] overrides",
    )

    @field_validator("osrm_profile")
    @classmethod
    def validate_osrm_profile(cls, v: str) -> str:
        """Validate the profile is one OSRM serves."""
        if v.lower() not in ("driving", "walking", "cycling"):
            raise ValueError("osrm_profile must be either 'driving', 'walking', or 'cycling'")
        return v.lower()

    @field_validator(
        "routing_timeout_seconds",
        "poi_fetch_timeout_seconds",
        "overpass_query_timeout_seconds",
    )
    @classmethod
    def validate_positive_timeout(cls, v: float) -> float:
        """Validate timeouts are positive."""
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("search_result_limit")
    @classmethod
    def validate_search_result_limit(cls, v: int) -> int:
        """Validate the result limit is at least one."""
        if v < 1:
            raise ValueError("search_result_limit must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level is a known level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    def _load_toml_data(self) -> dict[str, Any]:
        if not self.config_file:
            raise ValueError("config_file must be set to load TOML overrides")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def load_toml_overrides(self) -> "AppConfig":
        """Apply settings from the TOML file's sections onto this config.

        Unknown keys inside a known section are ignored.

        Returns:
            self, for chaining.
        """
        toml_data = self._load_toml_data()
        for section, keys in TOML_SECTIONS.items():
            values = toml_data.get(section, {})
            for key in keys:
                if key in values:
                    setattr(self, key, values[key])
        return self
