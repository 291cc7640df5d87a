import pytest
from pydantic import ValidationError

from crpt_api_client.services.documents import CreateDocumentRequest, Document, Product


def _product() -> Product:
    return Product(
        certificate_document="certDoc",
        certificate_document_date="2023-07-01",
        certificate_document_number="certNum",
        owner_inn="1234567890",
        producer_inn="0987654321",
        production_date="2023-07-01",
        tnved_code="1234",
        uit_code="5678",
        uitu_code="91011",
    )


def test_payload_uses_crpt_wire_keys() -> None:
    document = Document(
        participant_inn="1234567890",
        doc_id="doc123",
        doc_status="NEW",
        doc_type="LP_INTRODUCE_GOODS",
        import_request=True,
        owner_inn="1234567890",
        producer_inn="0987654321",
        production_date="2023-07-01",
        production_type="TYPE",
        products=[_product()],
        reg_date="2023-07-01",
        reg_number="reg123",
    )

    payload = CreateDocumentRequest(description=document, signature="signed-by-tester").to_payload()

    assert payload["signature"] == "signed-by-tester"
    assert payload["description"] == {
        "participantInn": "1234567890",
        "doc_id": "doc123",
        "doc_status": "NEW",
        "doc_type": "LP_INTRODUCE_GOODS",
        "importRequest": True,
        "owner_inn": "1234567890",
        "producer_inn": "0987654321",
        "production_date": "2023-07-01",
        "production_type": "TYPE",
        "products": [
            {
                "certificate_document": "certDoc",
                "certificate_document_date": "2023-07-01",
                "certificate_document_number": "certNum",
                "owner_inn": "1234567890",
                "producer_inn": "0987654321",
                "production_date": "2023-07-01",
                "tnved_code": "1234",
                "uit_code": "5678",
                "uitu_code": "91011",
            }
        ],
        "reg_date": "2023-07-01",
        "reg_number": "reg123",
    }


def test_unset_fields_are_omitted_from_payload() -> None:
    payload = CreateDocumentRequest(description=Document(doc_id="doc1"), signature="s").to_payload()

    assert payload["description"] == {"doc_id": "doc1", "importRequest": False, "products": []}


def test_document_accepts_wire_keys() -> None:
    document = Document.model_validate({"participantInn": "111", "importRequest": True, "products": [{"uit_code": "u"}]})

    assert document.participant_inn == "111"
    assert document.import_request is True
    assert document.products[0].uit_code == "u"


def test_document_is_immutable() -> None:
    document = Document(doc_id="doc1")

    with pytest.raises(ValidationError):
        document.doc_id = "doc2"
