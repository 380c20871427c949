import importlib
import logging

import pytest

from tennis_league import config


@pytest.mark.parametrize(
    "raw, expected",
    [(None, "set_based"), ("", "set_based"), (" Win-3-Loss-1 ", "win_3_loss_1"), ("set based", "set_based")],
)
def test_canon_scoring_system(raw, expected):
    assert config.canon_scoring_system(raw) == expected


def test_canon_season():
    assert config._canon_season(None) is None
    assert config._canon_season("   ") is None
    assert config._canon_season(" Verano 2025 ") == "Verano 2025"


def test_parse_bool(monkeypatch, caplog):
    monkeypatch.setenv("SEASON_FALLBACK", "off")
    assert config._parse_bool("SEASON_FALLBACK", True) is False

    monkeypatch.setenv("SEASON_FALLBACK", "Yes")
    assert config._parse_bool("SEASON_FALLBACK", False) is True

    monkeypatch.setenv("SEASON_FALLBACK", "maybe")
    with caplog.at_level(logging.WARNING):
        assert config._parse_bool("SEASON_FALLBACK", True) is True
    assert "not a valid boolean" in caplog.text

    monkeypatch.delenv("SEASON_FALLBACK")
    assert config._parse_bool("SEASON_FALLBACK", True) is True


def test_parse_log_level(caplog):
    assert config._parse_log_level(None) == "INFO"
    assert config._parse_log_level("debug") == "DEBUG"
    with caplog.at_level(logging.WARNING):
        assert config._parse_log_level("chatty") == "INFO"
    assert "not a known level" in caplog.text


def test_module_reads_environment(monkeypatch):
    monkeypatch.setenv("SCORING_SYSTEM", "Win-3-Loss-0")
    monkeypatch.setenv("DEFAULT_SEASON", " invierno-2025 ")
    monkeypatch.setenv("SEASON_FALLBACK", "0")
    monkeypatch.setenv("LOG_LEVEL", "warning")
    try:
        importlib.reload(config)
        assert config.SCORING_SYSTEM == "win_3_loss_0"
        assert config.DEFAULT_SEASON == "invierno-2025"
        assert config.SEASON_FALLBACK is False
        assert config.LOG_LEVEL == "WARNING"
    finally:
        monkeypatch.undo()
        importlib.reload(config)
