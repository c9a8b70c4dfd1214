from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..core.domain.models import Document, Product

DATE_FORMAT = "%Y-%m-%d"


class ProductPayload(BaseModel):
	"""One entry of ``products`` in the document create request."""
	certificate_document: Optional[str] = None
	certificate_document_date: Optional[date] = None
	certificate_document_number: Optional[str] = None
	owner_inn: Optional[str] = None
	producer_inn: Optional[str] = None
	production_date: Optional[date] = None
	tnved_code: Optional[str] = None
	uit_code: Optional[str] = None
	uitu_code: Optional[str] = None

	@field_serializer("certificate_document_date", "production_date", when_used="json")
	def _format_date(self, value: Optional[date]) -> Optional[str]:
		return value.strftime(DATE_FORMAT) if value else None

	@classmethod
	def from_domain(cls, product: Product) -> "ProductPayload":
		return cls(
			certificate_document=product.certificate_document,
			certificate_document_date=product.certificate_document_date,
			certificate_document_number=product.certificate_document_number,
			owner_inn=product.owner_inn,
			producer_inn=product.producer_inn,
			production_date=product.production_date,
			tnved_code=product.tnved_code,
			uit_code=product.uit_code,
			uitu_code=product.uitu_code,
		)

	def to_domain(self) -> Product:
		return Product(**self.model_dump())


class DescriptionPayload(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	participant_inn: Optional[str] = Field(default=None, alias="participantInn")


class DocumentPayload(BaseModel):
	"""Body of the document create request, field names as the API expects them."""
	model_config = ConfigDict(populate_by_name=True)

	description: DescriptionPayload = Field(default_factory=DescriptionPayload)
	doc_id: Optional[str] = None
	doc_status: Optional[str] = None
	doc_type: Optional[str] = None
	import_request: bool = Field(default=False, alias="importRequest")
	owner_inn: Optional[str] = None
	producer_inn: Optional[str] = None
	production_date: Optional[date] = None
	production_type: Optional[str] = None
	products: list[ProductPayload] = Field(default_factory=list)
	reg_date: Optional[date] = None
	reg_number: Optional[str] = None

	@field_serializer("production_date", "reg_date", when_used="json")
	def _format_date(self, value: Optional[date]) -> Optional[str]:
		return value.strftime(DATE_FORMAT) if value else None

	@classmethod
	def from_domain(cls, document: Document) -> "DocumentPayload":
		return cls(
			description=DescriptionPayload(participant_inn=document.participant_inn),
			doc_id=document.doc_id,
			doc_status=document.doc_status,
			doc_type=document.doc_type,
			import_request=document.import_request,
			owner_inn=document.owner_inn,
			producer_inn=document.producer_inn,
			production_date=document.production_date,
			production_type=document.production_type,
			products=[ProductPayload.from_domain(p) for p in document.products],
			reg_date=document.reg_date,
			reg_number=document.reg_number,
		)

	def to_domain(self) -> Document:
		return Document(
			participant_inn=self.description.participant_inn,
			doc_id=self.doc_id,
			doc_status=self.doc_status,
			doc_type=self.doc_type,
			import_request=self.import_request,
			owner_inn=self.owner_inn,
			producer_inn=self.producer_inn,
			production_date=self.production_date,
			production_type=self.production_type,
			products=tuple(p.to_domain() for p in self.products),
			reg_date=self.reg_date,
			reg_number=self.reg_number,
		)

	def to_wire(self) -> dict[str, Any]:
		return self.model_dump(mode="json", by_alias=True)
