"""Shared fixtures for the deeplxml tests."""

import pytest

from deeplxml.connector.client import TranslationConfig


class FakeTransport:
    """
    Transport double recording every request.

    By default the sent document is echoed back unchanged. A callable
    response receives the request configuration; an exception is raised.
    """

    def __init__(self, response=None):
        self.response = response
        self.configs = []

    @property
    def calls(self) -> int:
        return len(self.configs)

    def get_translation(self, config: TranslationConfig) -> str:
        self.configs.append(config)
        if isinstance(self.response, Exception):
            raise self.response
        if callable(self.response):
            return self.response(config)
        if self.response is None:
            return config.text
        return self.response


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the configuration at an empty temporary location."""
    monkeypatch.setenv("DEEPLXML_CONFIG", str(tmp_path / "config" / "config.json"))
    monkeypatch.delenv("DEEPL_API_KEY", raising=False)


@pytest.fixture
def echo_transport():
    return FakeTransport()


@pytest.fixture
def make_transport():
    return FakeTransport
