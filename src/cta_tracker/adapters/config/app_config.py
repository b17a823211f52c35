"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BUS_ROUTES = "3,4,6,9,12,20,22,29,36,66,146,147,151"
DEFAULT_TRAIN_ROUTES = "red,blue,brn,g,org,p,pink,y"


def _split_routes(value: str) -> list[str]:
    return [route.strip() for route in value.split(",") if route.strip()]


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=5000, description="Port to bind the server to")
    environment: str = Field(
        default="development",
        description="Deployment mode: 'development' or 'production'",
    )
    cors_allow_origins: str = Field(
        default="*", description="Comma-separated list of origins allowed by CORS"
    )
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of requests allowed per IP address per minute",
    )

    # Upstream credentials (server-side only, except the browser key)
    cta_train_key: SecretStr | None = Field(default=None, description="CTA Train Tracker key")
    cta_bus_key: SecretStr | None = Field(default=None, description="CTA Bus Tracker key")
    google_maps_api_key_browser: str | None = Field(
        default=None,
        description="Browser-restricted Google Maps key; the only key ever sent to clients",
    )
    google_maps_api_key_server: SecretStr | None = Field(
        default=None, description="Server-side Google Maps Platform key"
    )

    # Upstream behaviour
    upstream_timeout_seconds: float = Field(
        default=10.0, description="Timeout for each upstream request in seconds"
    )

    # Nearby aggregation
    nearby_search_radius_meters: int = Field(
        default=800, description="Radius of the places search around the reference point"
    )
    nearby_keyword: str | None = Field(
        default=None, description="Optional keyword filter for the places search"
    )
    nearby_place_type: str = Field(
        default="transit_station", description="Google place type used for station search"
    )
    bus_radius_km: float = Field(default=1.2, description="Bus proximity radius in km")
    train_radius_km: float = Field(default=1.5, description="Train proximity radius in km")
    tracked_bus_routes: str = Field(
        default=DEFAULT_BUS_ROUTES,
        description="Comma-separated bus routes polled for nearby vehicles",
    )
    tracked_train_routes: str = Field(
        default=DEFAULT_TRAIN_ROUTES,
        description="Comma-separated train routes polled for nearby vehicles",
    )

    # Display refresh / arrivals
    refresh_interval_seconds: int = Field(
        default=30, description="Interval between nearby refreshes in seconds"
    )
    max_stop_arrivals: int = Field(
        default=3, description="Number of upcoming arrivals shown per stop"
    )
    timezone: str = Field(
        default="America/Chicago",
        description="Timezone of CTA timestamps (IANA timezone name)",
    )

    # TOML config file with additional [[stops]] for arrival lookups
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file extending the stop table",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is either 'development' or 'production'."""
        if v.lower() not in ("development", "production"):
            raise ValueError("environment must be either 'development' or 'production'")
        return v.lower()

    @field_validator("nearby_search_radius_meters")
    @classmethod
    def validate_search_radius(cls, v: int) -> int:
        """Validate the search radius is positive."""
        if v <= 0:
            raise ValueError("nearby_search_radius_meters must be positive")
        return v

    @field_validator("bus_radius_km", "train_radius_km", "upstream_timeout_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate radii and timeouts are positive."""
        if v <= 0:
            raise ValueError("radius and timeout values must be positive")
        return v

    @field_validator("max_stop_arrivals")
    @classmethod
    def validate_max_stop_arrivals(cls, v: int) -> int:
        """Validate between 1 and 3 arrivals are requested."""
        if not 1 <= v <= 3:
            raise ValueError("max_stop_arrivals must be between 1 and 3")
        return v

    @property
    def is_production(self) -> bool:
        """Whether the service runs in production mode."""
        return self.environment == "production"

    @property
    def bus_routes(self) -> list[str]:
        """Tracked bus routes as a list."""
        return _split_routes(self.tracked_bus_routes)

    @property
    def train_routes(self) -> list[str]:
        """Tracked train routes as a list."""
        return _split_routes(self.tracked_train_routes)

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return _split_routes(self.cors_allow_origins)

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load stops configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def get_stops_config(self) -> list[dict[str, Any]]:
        """Parse and return additional stops as a list of dicts from the TOML file.

        Returns an empty list when no config file is set.
        """
        if not self.config_file:
            return []

        toml_data = self._load_toml_data()
        stops = toml_data.get("stops", [])
        if not isinstance(stops, list):
            raise ValueError("TOML config 'stops' must be a list")
        return [s for s in stops if isinstance(s, dict)]
