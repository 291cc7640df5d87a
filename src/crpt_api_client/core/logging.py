from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "crpt_api_client"


def _get_env_level(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return getattr(logging, value.strip().upper(), default)


def configure_logging() -> None:
    """
    LOG_LEVEL sets the root level, CRPT_LOG_LEVEL overrides it for this package only.

    CRPT_LOG_LEVEL=DEBUG shows limiter waits and window resets while httpx stays at WARNING.
    """
    root_level = _get_env_level("LOG_LEVEL", logging.INFO)

    logging.basicConfig(
        level=root_level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    # Propagated records are filtered by handler level only, so this is enough to let DEBUG through
    logging.getLogger(PACKAGE_LOGGER).setLevel(_get_env_level("CRPT_LOG_LEVEL", logging.NOTSET))

    # httpx logs every request at INFO, the client already does that
    logging.getLogger("httpx").setLevel(logging.WARNING)
