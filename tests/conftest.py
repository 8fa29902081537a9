import pytest


@pytest.fixture(autouse=True)
def _testing_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
