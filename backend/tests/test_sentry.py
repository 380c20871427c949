import logging

from tennis_league.utils import sentry


def test_init_sentry_without_dsn(monkeypatch):
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    calls = []
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kwargs: calls.append(kwargs))

    assert sentry.init_sentry() is False
    assert calls == []


def test_init_sentry_with_dsn(monkeypatch):
    monkeypatch.setenv("SENTRY_DSN", "https://public@example.invalid/1")
    monkeypatch.setenv("SENTRY_ENVIRONMENT", " staging ")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.25")
    calls = []
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kwargs: calls.append(kwargs))

    assert sentry.init_sentry() is True
    (kwargs,) = calls
    assert kwargs["dsn"] == "https://public@example.invalid/1"
    assert kwargs["environment"] == "staging"
    assert kwargs["traces_sample_rate"] == 0.25
    assert len(kwargs["integrations"]) == 1


def test_sample_rate_parsing(monkeypatch, caplog):
    monkeypatch.delenv("SENTRY_TRACES_SAMPLE_RATE", raising=False)
    assert sentry._parse_sample_rate("SENTRY_TRACES_SAMPLE_RATE", 0.1) == 0.1

    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "lots")
    with caplog.at_level(logging.WARNING):
        assert sentry._parse_sample_rate("SENTRY_TRACES_SAMPLE_RATE") == 0.0
    assert "not a valid float" in caplog.text

    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "1.5")
    assert sentry._parse_sample_rate("SENTRY_TRACES_SAMPLE_RATE", 0.2) == 0.2
