from __future__ import annotations

import json

from crpt_api.core.domain.models import Document
from crpt_api.infra.schemas import DocumentPayload


def test_wire_payload_uses_api_field_names(document):
    wire = DocumentPayload.from_domain(document).to_wire()
    assert set(wire) == {
        "description", "doc_id", "doc_status", "doc_type", "importRequest", "owner_inn",
        "producer_inn", "production_date", "production_type", "products", "reg_date", "reg_number",
    }
    assert wire["description"] == {"participantInn": "participantInnValue"}
    assert wire["importRequest"] is True
    assert set(wire["products"][0]) == {
        "certificate_document", "certificate_document_date", "certificate_document_number",
        "owner_inn", "producer_inn", "production_date", "tnved_code", "uit_code", "uitu_code",
    }


def test_wire_payload_formats_dates(document):
    wire = DocumentPayload.from_domain(document).to_wire()
    assert wire["production_date"] == "2024-03-15"
    assert wire["reg_date"] == "2024-03-15"
    assert wire["products"][0]["certificate_document_date"] == "2024-03-15"
    json.dumps(wire)  # must be plain JSON


def test_missing_fields_serialize_as_null():
    wire = DocumentPayload.from_domain(Document(doc_id="1")).to_wire()
    assert wire["reg_date"] is None
    assert wire["products"] == []
    assert wire["description"] == {"participantInn": None}


def test_payload_parses_api_json_back_to_domain(document):
    raw = json.dumps(DocumentPayload.from_domain(document).to_wire())
    parsed = DocumentPayload.model_validate_json(raw).to_domain()
    assert parsed == document
