from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    certificate_document: str | None = None
    certificate_document_date: str | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    tnved_code: str | None = None
    uit_code: str | None = None
    uitu_code: str | None = None


class Document(BaseModel):
    """
    Description of a goods introduction document (LP_INTRODUCE_GOODS and friends).

    Field names follow Python style, the wire keys mix camelCase and snake_case
    exactly the way the CRPT endpoint expects them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    participant_inn: str | None = Field(None, alias="participantInn")
    doc_id: str | None = None
    doc_status: str | None = None
    doc_type: str | None = None
    import_request: bool = Field(False, alias="importRequest")
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: str | None = None
    production_type: str | None = None
    products: list[Product] = Field(default_factory=list)
    reg_date: str | None = None
    reg_number: str | None = None


class CreateDocumentRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: Document
    signature: str

    def to_payload(self) -> dict[str, Any]:
        # Unset fields are left out of the body rather than sent as null
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
