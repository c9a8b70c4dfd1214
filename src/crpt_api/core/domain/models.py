from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from .enums import TimeUnit
from .errors import ConfigurationError


def _as_date(value: date | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class RateWindow:
    """Refill cadence of the permit pool: ``duration`` units of ``unit``."""

    unit: TimeUnit
    duration: int = 1

    def __post_init__(self) -> None:
        if self.unit is None:
            raise ConfigurationError("Provided time unit is None!")
        if not isinstance(self.unit, TimeUnit):
            try:
                object.__setattr__(self, "unit", TimeUnit.from_str(str(self.unit)))
            except ValueError as e:
                raise ConfigurationError(f"Unknown time unit: {self.unit!r}") from e
        if self.duration <= 0:
            raise ConfigurationError("Window duration should be positive non-zero integer!")

    @property
    def seconds(self) -> float:
        return self.unit.seconds * self.duration


@dataclass(frozen=True)
class Product:
    certificate_document: Optional[str] = None
    certificate_document_date: Optional[date] = None
    certificate_document_number: Optional[str] = None
    owner_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[date] = None
    tnved_code: Optional[str] = None
    uit_code: Optional[str] = None
    uitu_code: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "certificate_document_date", _as_date(self.certificate_document_date))
        object.__setattr__(self, "production_date", _as_date(self.production_date))


@dataclass(frozen=True)
class Document:
    participant_inn: Optional[str] = None
    doc_id: Optional[str] = None
    doc_status: Optional[str] = None
    doc_type: Optional[str] = None
    import_request: bool = False
    owner_inn: Optional[str] = None
    producer_inn: Optional[str] = None
    production_date: Optional[date] = None
    production_type: Optional[str] = None
    products: tuple[Product, ...] = field(default_factory=tuple)
    reg_date: Optional[date] = None
    reg_number: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "production_date", _as_date(self.production_date))
        object.__setattr__(self, "reg_date", _as_date(self.reg_date))
        object.__setattr__(self, "products", tuple(self.products))
