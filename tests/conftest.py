import sys
from pathlib import Path

import pytest

# Ensure the `swedefinder` package is importable when running pytest from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from swedefinder.core import config  # noqa: E402

_ENV_VARS = ("GOOGLE_PLACES_API_KEY", "PORT", "PLACES_REQUEST_TIMEOUT", "PLACES_FETCH_DETAILS")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep a developer's .env or shell exports out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
