"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError

from blogsearch.core.config import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.search_page_size == 5
    assert settings.search_debounce_ms == 400
    assert settings.search_debounce_seconds == pytest.approx(0.4)
    assert settings.telemetry_enabled is False


@pytest.mark.parametrize(
    "overrides",
    [
        {"search_page_size": 0},
        {"search_page_size": 51},
        {"search_debounce_ms": -1},
        {"search_page_size": 10, "search_max_page_size": 5},
        {"telemetry_exporter": "jaeger"},
        {"telemetry_exporter": "otlp"},
    ],
)
def test_invalid_settings_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_otlp_with_endpoint_accepted() -> None:
    settings = Settings(
        _env_file=None,
        telemetry_exporter="otlp",
        telemetry_otlp_endpoint="http://localhost:4317",
    )
    assert settings.telemetry_exporter == "otlp"



def test_cors_origins_are_split_and_trimmed() -> None:
    settings = Settings(_env_file=None, allowed_origins=" https://a.example , ,https://b.example")
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_search_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEARCH_PAGE_SIZE", "9")
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "250")
    settings = Settings(_env_file=None)
    assert settings.search_page_size == 9
    assert settings.search_debounce_seconds == pytest.approx(0.25)
