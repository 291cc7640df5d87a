from crpt_api_client.core.logging import configure_logging
from crpt_api_client.services.crpt_api import AsyncCrptApi, CrptApi


def create_api() -> CrptApi:
    configure_logging()
    return CrptApi.from_settings()


def create_async_api() -> AsyncCrptApi:
    configure_logging()
    return AsyncCrptApi.from_settings()
