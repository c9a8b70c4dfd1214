from __future__ import annotations

from datetime import date, datetime

import pytest

from crpt_api.core.domain.enums import TimeUnit
from crpt_api.core.domain.errors import ConfigurationError
from crpt_api.core.domain.models import Document, Product, RateWindow
from crpt_api.core.domain.outcomes import InvalidInput, RejectedByCapacity, Success, TransportFailure


def test_time_unit_seconds():
    assert TimeUnit.SECONDS.seconds == 1.0
    assert TimeUnit.MILLISECONDS.seconds == pytest.approx(0.001)
    assert TimeUnit.MINUTES.seconds == 60.0
    assert TimeUnit.DAYS.seconds == 86400.0


def test_time_unit_from_str_accepts_aliases():
    assert TimeUnit.from_str("seconds") is TimeUnit.SECONDS
    assert TimeUnit.from_str("ms") is TimeUnit.MILLISECONDS
    assert TimeUnit.from_str(" H ") is TimeUnit.HOURS
    with pytest.raises(ValueError):
        TimeUnit.from_str("fortnights")


def test_rate_window_defaults_to_one_unit():
    w = RateWindow(TimeUnit.MINUTES)
    assert w.duration == 1
    assert w.seconds == 60.0


def test_rate_window_coerces_unit_names():
    assert RateWindow("MILLISECONDS", duration=100).seconds == pytest.approx(0.1)


def test_rate_window_rejects_missing_unit():
    with pytest.raises(ConfigurationError):
        RateWindow(None)  # type: ignore[arg-type]


def test_rate_window_rejects_unknown_unit_and_bad_duration():
    with pytest.raises(ConfigurationError):
        RateWindow("WEEKS")  # type: ignore[arg-type]
    with pytest.raises(ConfigurationError):
        RateWindow(TimeUnit.SECONDS, duration=0)


def test_document_truncates_datetimes_to_dates():
    ts = datetime(2024, 3, 15, 13, 45)
    doc = Document(production_date=ts, reg_date=ts, products=[Product(production_date=ts)])
    assert doc.production_date == date(2024, 3, 15)
    assert doc.reg_date == date(2024, 3, 15)
    assert isinstance(doc.products, tuple)
    assert doc.products[0].production_date == date(2024, 3, 15)


def test_outcome_status_codes():
    assert Success(200, "x").ok
    assert not Success(400, "bad").ok
    assert RejectedByCapacity("busy").status_code == 429
    assert InvalidInput("null").status_code == 500
    assert TransportFailure("io").status_code == 500
    assert TransportFailure("io").body == "io"
    assert not RejectedByCapacity("busy").ok
