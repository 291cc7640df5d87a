import os
from dataclasses import dataclass
from functools import lru_cache


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None and value.strip() else default


def _get_env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value is not None and value.strip() else default


def _get_env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value is not None and value.strip() else default


@dataclass(frozen=True)
class Settings:
    crpt_base_url: str
    crpt_create_document_path: str
    crpt_auth_token: str
    connect_timeout_s: float
    read_timeout_s: float
    crpt_rl_limit: int
    crpt_rl_period_s: float

    @property
    def create_document_url(self) -> str:
        return self.crpt_base_url.rstrip("/") + "/" + self.crpt_create_document_path.lstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings(
        crpt_base_url=_get_env("CRPT_BASE_URL", "https://ismp.crpt.ru/api/v3"),
        crpt_create_document_path=_get_env("CRPT_CREATE_DOCUMENT_PATH", "/lk/documents/create"),
        crpt_auth_token=_get_env("CRPT_AUTH_TOKEN", ""),
        connect_timeout_s=_get_env_float("HTTP_CONNECT_TIMEOUT_S", 5.0),
        read_timeout_s=_get_env_float("HTTP_READ_TIMEOUT_S", 10.0),
        crpt_rl_limit=_get_env_int("CRPT_RL_LIMIT", 3),
        crpt_rl_period_s=_get_env_float("CRPT_RL_PERIOD_S", 1.0),
    )
