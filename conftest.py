import pytest


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch):
    monkeypatch.setattr("habitlens.utils.config.config._global_config", None)
