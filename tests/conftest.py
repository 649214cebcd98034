from unittest.mock import Mock

import pytest

WEBHOOK = "https://discord.com/api/webhooks/123/abc"


def http_response(status_code=204, text=""):
    return Mock(status_code=status_code, text=text)


@pytest.fixture
def session():
    s = Mock()
    s.post.return_value = http_response(204)
    return s


@pytest.fixture
def webhook_env(monkeypatch):
    monkeypatch.setenv("DISCORD_WEBHOOK_URL", WEBHOOK)
    return WEBHOOK
