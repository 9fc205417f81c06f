import importlib
import os
import sys

import pytest


def _cleanup_app_modules():
    for module in [
        name for name in sys.modules if name == "pinpoint" or name.startswith("pinpoint.")
    ]:
        sys.modules.pop(module, None)


@pytest.fixture(autouse=True)
def app_import_isolation(monkeypatch):
    app_path = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    saved = {
        name: module
        for name, module in sys.modules.items()
        if name == "pinpoint" or name.startswith("pinpoint.")
    }
    _cleanup_app_modules()
    monkeypatch.syspath_prepend(app_path)
    try:
        yield
    finally:
        _cleanup_app_modules()
        sys.modules.update(saved)


def test_rejects_wildcard_origin(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "*")
    monkeypatch.setenv("ALLOW_CREDENTIALS", "true")
    with pytest.raises(ValueError):
        importlib.import_module("pinpoint.main")


def test_requires_allowed_origins(monkeypatch):
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    monkeypatch.delenv("ALLOW_CREDENTIALS", raising=False)
    with pytest.raises(ValueError):
        importlib.import_module("pinpoint.main")


def test_blank_origins_are_rejected(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", " , ")
    with pytest.raises(ValueError):
        importlib.import_module("pinpoint.main")


def test_preflight_allows_configured_origin(monkeypatch):
    from fastapi.testclient import TestClient

    monkeypatch.setenv("ALLOWED_ORIGINS", "https://lanes.example.com")
    monkeypatch.setenv("ALLOW_CREDENTIALS", "false")
    main = importlib.import_module("pinpoint.main")

    client = TestClient(main.app)
    resp = client.options(
        "/healthz",
        headers={
            "Origin": "https://lanes.example.com",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "https://lanes.example.com"
