# tests/conftest.py

import pytest

from app import create_app
from apod_service import AcquisitionConfig
from fakes import SITE


@pytest.fixture
def app():
    flask_app = create_app()
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def site_config():
    return AcquisitionConfig(base_url=SITE)


# ----------------------------------------------------------
# Keep developer credentials out of the tests
# ----------------------------------------------------------
@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("NASA_API_KEY", "CLIENT_NASA_API_KEY", "NASA_CLIENT_API_KEY"):
        monkeypatch.delenv(name, raising=False)
