from __future__ import annotations

import pytest

from core.settings import DEFAULT_API_URL, DEFAULT_USER_AGENT, Settings


def test_defaults() -> None:
    settings = Settings.from_env({})
    assert settings.api_url == DEFAULT_API_URL
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.timeout_seconds == 30.0
    assert settings.value_markers == ("값", "value")
    assert settings.category_markers == ("MBTI", "유형", "type")
    assert settings.log_level == "INFO"


def test_overrides() -> None:
    settings = Settings.from_env(
        {
            "PYTHAGRAPH_API_URL": "http://localhost:8080/export",
            "PYTHAGRAPH_USER_AGENT": "test-agent/1.0",
            "PYTHAGRAPH_TIMEOUT_SECONDS": "5.5",
            "PYTHAGRAPH_VALUE_MARKERS": " ratio , share ,,",
            "PYTHAGRAPH_CATEGORY_MARKERS": "kind",
            "PYTHAGRAPH_LOG_LEVEL": "debug",
        }
    )
    assert settings.api_url == "http://localhost:8080/export"
    assert settings.user_agent == "test-agent/1.0"
    assert settings.timeout_seconds == 5.5
    assert settings.value_markers == ("ratio", "share")
    assert settings.category_markers == ("kind",)
    assert settings.log_level == "DEBUG"


def test_zero_timeout_disables_it() -> None:
    assert Settings.from_env({"PYTHAGRAPH_TIMEOUT_SECONDS": "0"}).timeout_seconds is None


def test_blank_markers_keep_defaults() -> None:
    settings = Settings.from_env({"PYTHAGRAPH_VALUE_MARKERS": " , "})
    assert settings.value_markers == ("값", "value")


@pytest.mark.parametrize("raw", ["soon", "-1"])
def test_invalid_timeout(raw: str) -> None:
    with pytest.raises(ValueError, match="PYTHAGRAPH_TIMEOUT_SECONDS"):
        Settings.from_env({"PYTHAGRAPH_TIMEOUT_SECONDS": raw})
