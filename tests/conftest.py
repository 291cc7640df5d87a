import pytest
from crpt_api_client.core.config import get_settings

CRPT_ENV_VARS = (
    "CRPT_BASE_URL",
    "CRPT_CREATE_DOCUMENT_PATH",
    "CRPT_AUTH_TOKEN",
    "CRPT_RL_LIMIT",
    "CRPT_RL_PERIOD_S",
    "CRPT_LOG_LEVEL",
    "HTTP_CONNECT_TIMEOUT_S",
    "HTTP_READ_TIMEOUT_S",
)


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch) -> None:
    """
    Run every test against default settings.

    CRPT_* variables from the developer's shell would otherwise point the
    client at a real endpoint or change limiter defaults.
    """
    for name in CRPT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    # Clear cached Settings so env changes take effect
    get_settings.cache_clear()
