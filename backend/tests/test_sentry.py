from pinpoint.utils import sentry


def test_skips_without_dsn(monkeypatch):
    monkeypatch.setattr(sentry.config, "SENTRY_DSN", None)
    calls = []
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kw: calls.append(kw))
    assert sentry.init_sentry() is False
    assert calls == []


def test_initialises_with_config(monkeypatch):
    calls = []
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kw: calls.append(kw))
    monkeypatch.setattr(sentry.config, "SENTRY_ENVIRONMENT", "staging")
    monkeypatch.setattr(sentry.config, "SENTRY_TRACES_SAMPLE_RATE", 0.25)

    assert sentry.init_sentry("https://key@example.ingest.sentry.io/1") is True
    (kwargs,) = calls
    assert kwargs["environment"] == "staging"
    assert kwargs["traces_sample_rate"] == 0.25
