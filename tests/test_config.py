"""Tests for configuration adapter."""

from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest

from cta_tracker.adapters.config import AppConfig, StopTableLoader
from cta_tracker.domain.models.stop_table import DEFAULT_STOPS

CONFIG_ENV_VARS = (
    "HOST",
    "PORT",
    "ENVIRONMENT",
    "CTA_TRAIN_KEY",
    "CTA_BUS_KEY",
    "GOOGLE_MAPS_API_KEY_BROWSER",
    "GOOGLE_MAPS_API_KEY_SERVER",
    "TRACKED_BUS_ROUTES",
    "TRACKED_TRAIN_ROUTES",
    "CORS_ALLOW_ORIGINS",
    "CONFIG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure settings from the surrounding shell do not leak into tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write_toml(content: str) -> str:
    with NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
        f.write(content)
        return f.name


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    config = AppConfig(_env_file=None)

    assert config.host == "0.0.0.0"
    assert config.port == 5000
    assert config.environment == "development"
    assert config.is_production is False
    assert config.bus_radius_km == 1.2
    assert config.train_radius_km == 1.5
    assert config.nearby_search_radius_meters == 800
    assert config.refresh_interval_seconds == 30
    assert config.max_stop_arrivals == 3
    assert config.cta_train_key is None
    assert config.train_routes == ["red", "blue", "brn", "g", "org", "p", "pink", "y"]


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("ENVIRONMENT", "Production")
    monkeypatch.setenv("CTA_TRAIN_KEY", "train-secret")
    monkeypatch.setenv("TRACKED_BUS_ROUTES", " 22, 36 ,,151")

    config = AppConfig(_env_file=None)

    assert config.host == "127.0.0.1"
    assert config.port == 9000
    assert config.environment == "production"
    assert config.is_production is True
    assert config.cta_train_key is not None
    assert config.cta_train_key.get_secret_value() == "train-secret"
    assert config.bus_routes == ["22", "36", "151"]


def test_config_does_not_expose_secrets_in_repr(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given a server-side key, when rendering the config, then the key is masked."""
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY_SERVER", "server-secret")

    config = AppConfig(_env_file=None)

    assert "server-secret" not in repr(config)


def test_config_validates_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an unknown environment, when loading config, then validation error is raised."""
    monkeypatch.setenv("ENVIRONMENT", "staging")

    with pytest.raises(ValueError, match="environment must be either"):
        AppConfig(_env_file=None)


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("bus_radius_km", 0),
        ("train_radius_km", -1.5),
        ("upstream_timeout_seconds", 0),
        ("nearby_search_radius_meters", 0),
        ("max_stop_arrivals", 4),
        ("max_stop_arrivals", 0),
    ],
)
def test_config_rejects_out_of_range_values(field: str, value: float) -> None:
    """Given a non-positive radius or too many arrivals, when loading config, then it fails."""
    with pytest.raises(ValueError):
        AppConfig(_env_file=None, **{field: value})


def test_config_splits_cors_origins() -> None:
    """Given several CORS origins, when reading them, then a list is returned."""
    config = AppConfig(_env_file=None, cors_allow_origins="https://a.example, https://b.example")

    assert config.cors_origins == ["https://a.example", "https://b.example"]


def test_config_parses_stops_config_from_toml() -> None:
    """Given valid TOML config file, when loading config, then it can be parsed."""
    temp_path = _write_toml(
        """
[[stops]]
name = "Washington/Wabash"
stop_id = 41700
"""
    )

    try:
        config = AppConfig(_env_file=None, config_file=temp_path)
        parsed = config.get_stops_config()
        assert parsed == [{"name": "Washington/Wabash", "stop_id": 41700}]
    finally:
        Path(temp_path).unlink()


def test_config_returns_no_stops_when_config_file_not_set() -> None:
    """Given config_file is None, when reading stops, then an empty list is returned."""
    config = AppConfig(_env_file=None, config_file=None)

    assert config.get_stops_config() == []


def test_config_raises_error_when_file_not_found() -> None:
    """Given non-existent config file, when loading config, then FileNotFoundError is raised."""
    config = AppConfig(_env_file=None, config_file="nonexistent.toml")

    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        config.get_stops_config()


def test_config_raises_error_when_stops_is_not_a_list() -> None:
    """Given 'stops' as a table instead of an array, when reading stops, then ValueError is raised."""
    temp_path = _write_toml('[stops]\nname = "Clark/Lake"\n')

    try:
        config = AppConfig(_env_file=None, config_file=temp_path)
        with pytest.raises(ValueError, match="must be a list"):
            config.get_stops_config()
    finally:
        Path(temp_path).unlink()


class TestStopTableLoader:
    """Tests for building the stop table from defaults and TOML."""

    def test_when_no_config_file_then_defaults_are_used(self) -> None:
        """Given no config file, when loading, then the built-in stops are returned."""
        table = StopTableLoader.load(AppConfig(_env_file=None))

        assert dict(table.stops) == DEFAULT_STOPS
        assert table.get_stop_id("Clark/Lake") == 30112

    def test_when_stops_configured_then_added_and_overridden(self) -> None:
        """Given new and existing names, when loading, then both apply on top of defaults."""
        temp_path = _write_toml(
            """
[[stops]]
name = "Washington/Wabash"
stop_id = 41700

[[stops]]
name = "Roosevelt"
stop_id = "30080"
"""
        )

        try:
            table = StopTableLoader.load(AppConfig(_env_file=None, config_file=temp_path))
        finally:
            Path(temp_path).unlink()

        assert table.get_stop_id("Washington/Wabash") == 41700
        assert table.get_stop_id("Roosevelt") == 30080
        assert "Clark/Lake" in table
        assert len(table) == len(DEFAULT_STOPS) + 1

    def test_when_stop_invalid_then_skipped(self) -> None:
        """Given entries without a name or numeric id, when loading, then they are skipped."""
        temp_path = _write_toml(
            """
[[stops]]
stop_id = 41700

[[stops]]
name = "Nowhere"
stop_id = "abc"
"""
        )

        try:
            table = StopTableLoader.load(AppConfig(_env_file=None, config_file=temp_path))
        finally:
            Path(temp_path).unlink()

        assert "Nowhere" not in table
        assert len(table) == len(DEFAULT_STOPS)
