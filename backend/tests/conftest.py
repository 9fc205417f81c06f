import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# main.py refuses to import without an explicit CORS allow-list.
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:5173")
os.environ.setdefault("ALLOW_CREDENTIALS", "false")

from pinpoint.scoring.frames import frames_from_throws  # noqa: E402
from pinpoint.scoring.pin_entry import PinEntrySession  # noqa: E402

@pytest.fixture()
def make_frames():
    """Build frames from a list of per-frame throw lists."""
    return frames_from_throws

@pytest.fixture()
def entry_session():
    return PinEntrySession()

@pytest.fixture()
def api_client():
    """TestClient for the full app with a private session store."""
    from fastapi.testclient import TestClient

    from pinpoint.cache import TTLCache
    from pinpoint.main import app
    from pinpoint.routers.sessions import get_session_store

    store = TTLCache(ttl_seconds=60)
    app.dependency_overrides[get_session_store] = lambda: store
    with TestClient(app) as client:
        yield client, store
    app.dependency_overrides.clear()
