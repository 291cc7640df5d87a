from __future__ import annotations

import logging
from datetime import timedelta

from crpt_api_client.core.config import get_settings
from crpt_api_client.services.crpt_client import AsyncCrptClient, CreateDocumentResponse, CrptClient
from crpt_api_client.services.documents import Document
from crpt_api_client.services.gated_invoker import AsyncGatedInvoker, GatedInvoker
from crpt_api_client.services.rate_limiter import AsyncFixedWindowRateLimiter, FixedWindowRateLimiter

logger = logging.getLogger(__name__)


class CrptApi:
    """
    Thread-safe CRPT client allowing at most `limit` document submissions per `period`.

    Callers over the limit block in create_document() until the next window.
    The limiter belongs to this instance: share the instance, not a global.
    """

    def __init__(
            self,
            period: float | timedelta,
            limit: int,
            *,
            client: CrptClient | None = None,
    ) -> None:
        self._invoker: GatedInvoker[CreateDocumentResponse] = GatedInvoker(FixedWindowRateLimiter(limit, period))
        self._client = client or CrptClient()

    @classmethod
    def from_settings(cls, *, client: CrptClient | None = None) -> CrptApi:
        settings = get_settings()
        return cls(settings.crpt_rl_period_s, settings.crpt_rl_limit, client=client)

    @property
    def limiter(self) -> FixedWindowRateLimiter:
        return self._invoker.limiter

    def create_document(self, document: Document, signature: str) -> CreateDocumentResponse:
        resp = self._invoker.invoke(lambda: self._client.create_document(document, signature))
        logger.info("Document created successfully doc_id=%s body=%s", document.doc_id, resp.body)
        return resp


class AsyncCrptApi:
    def __init__(
            self,
            period: float | timedelta,
            limit: int,
            *,
            client: AsyncCrptClient | None = None,
    ) -> None:
        self._invoker: AsyncGatedInvoker[CreateDocumentResponse] = AsyncGatedInvoker(
            AsyncFixedWindowRateLimiter(limit, period)
        )
        self._client = client or AsyncCrptClient()

    @classmethod
    def from_settings(cls, *, client: AsyncCrptClient | None = None) -> AsyncCrptApi:
        settings = get_settings()
        return cls(settings.crpt_rl_period_s, settings.crpt_rl_limit, client=client)

    @property
    def limiter(self) -> AsyncFixedWindowRateLimiter:
        return self._invoker.limiter

    async def create_document(self, document: Document, signature: str) -> CreateDocumentResponse:
        resp = await self._invoker.invoke(lambda: self._client.create_document(document, signature))
        logger.info("Document created successfully doc_id=%s body=%s", document.doc_id, resp.body)
        return resp
