import pytest

from rqpush.core.settings import get_settings
from rqpush.notification.defaults import NotificationDefaults

_ENV_VARS = (
    "RQPUSH_ENDPOINT",
    "RQPUSH_SHARED_SECRET",
    "RQPUSH_TIMEOUT_S",
    "RQPUSH_DEFAULTS_PATH",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


@pytest.fixture
def plain_defaults() -> NotificationDefaults:
    """Pass-through templates with a recognisable HTML wrapper."""
    return NotificationDefaults(
        title_template="{{notification}}",
        text_template="{{notification}}",
        html_template="<p>{{notification}}</p>",
        mapping={"lang": "en"},
    )
