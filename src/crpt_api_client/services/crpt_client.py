from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from crpt_api_client.core.config import get_settings
from crpt_api_client.services.documents import CreateDocumentRequest, Document

logger = logging.getLogger(__name__)


class DocumentCreateFailed(RuntimeError):
    """
    CRPT answered with something other than 200. The response body is kept as diagnostic detail.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Failed to create document: status={status_code} body={body}")
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True)
class CreateDocumentResponse:
    status_code: int
    body: str
    data: Any | None


def _parse_response(resp: httpx.Response) -> CreateDocumentResponse:
    logger.info("CRPT create document response: status=%s", resp.status_code)

    if resp.status_code != 200:
        logger.warning("CRPT rejected document: status=%s body=%s", resp.status_code, resp.text)
        raise DocumentCreateFailed(resp.status_code, resp.text)

    try:
        data = resp.json()
    except ValueError:
        # 200 with a non-JSON body is still a success, the body is kept as text
        data = None

    return CreateDocumentResponse(status_code=resp.status_code, body=resp.text, data=data)


class _BaseCrptClient:
    def __init__(self) -> None:
        settings = get_settings()

        self._url = settings.create_document_url
        self._timeout = httpx.Timeout(
            settings.read_timeout_s,
            connect=settings.connect_timeout_s,
        )
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if settings.crpt_auth_token:
            self._headers["Authorization"] = f"Bearer {settings.crpt_auth_token}"

    def _build_payload(self, document: Document, signature: str) -> dict[str, Any]:
        payload = CreateDocumentRequest(description=document, signature=signature).to_payload()
        logger.info(
            "CRPT create document request: %s doc_id=%s doc_type=%s products=%d",
            self._url,
            document.doc_id,
            document.doc_type,
            len(document.products),
        )
        return payload


class CrptClient(_BaseCrptClient):
    """
    Thin client for the CRPT "create document" endpoint.

    Pass an httpx.Client to reuse connections, otherwise one is opened per call.
    """

    def __init__(self, http_client: httpx.Client | None = None) -> None:
        super().__init__()
        self._http_client = http_client

    def create_document(self, document: Document, signature: str) -> CreateDocumentResponse:
        payload = self._build_payload(document, signature)

        # A redirect is an answer, not a success: following it would turn the POST into a GET
        if self._http_client is not None:
            resp = self._http_client.post(
                self._url, json=payload, headers=self._headers, timeout=self._timeout, follow_redirects=False
            )
        else:
            with httpx.Client(headers=self._headers, timeout=self._timeout) as client:
                resp = client.post(self._url, json=payload, follow_redirects=False)

        return _parse_response(resp)


class AsyncCrptClient(_BaseCrptClient):
    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        super().__init__()
        self._http_client = http_client

    async def create_document(self, document: Document, signature: str) -> CreateDocumentResponse:
        payload = self._build_payload(document, signature)

        if self._http_client is not None:
            resp = await self._http_client.post(
                self._url, json=payload, headers=self._headers, timeout=self._timeout, follow_redirects=False
            )
        else:
            async with httpx.AsyncClient(headers=self._headers, timeout=self._timeout) as client:
                resp = await client.post(self._url, json=payload, follow_redirects=False)

        return _parse_response(resp)
