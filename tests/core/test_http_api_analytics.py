from __future__ import annotations

import csv
import io
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.http_api.contracts import (
    AnalyticsReportHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    analytics_error_response,
    http_status_for,
    map_analytics_error,
)
from core.http_api.handlers import get_analytics_report, get_analytics_report_csv
from core.time.clock import FixedClock
from engines.analytics.errors import InvalidRecord, InvalidWindow
from engines.analytics.records import Customer, ExpenseRecord, SaleRecord
from engines.analytics.services import AnalyticsService
from engines.analytics.store import InMemoryRecordStore


BUSINESS_ID = uuid.uuid5(uuid.NAMESPACE_URL, "ownerlens-http-business")
OTHER_BUSINESS_ID = uuid.uuid5(uuid.NAMESPACE_URL, "ownerlens-http-other-business")
FIXED_NOW = datetime(2024, 2, 1, 9, 30, tzinfo=timezone.utc)
JAN_1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
FEB_1 = datetime(2024, 2, 1, tzinfo=timezone.utc)


class ForeignSaleStore(InMemoryRecordStore):
    def get_sales(self, business_id):
        return (
            SaleRecord(
                sale_id="foreign-1",
                business_id=OTHER_BUSINESS_ID,
                date=JAN_1,
                total="10",
            ),
        )


class UnavailableStore(InMemoryRecordStore):
    def get_sales(self, business_id):
        raise LookupError("sales table missing")


def _seeded_store() -> InMemoryRecordStore:
    store = InMemoryRecordStore()
    store.add(
        Customer(party_id="c1", business_id=BUSINESS_ID, name="Metro Mart"),
        SaleRecord(
            sale_id="s1",
            business_id=BUSINESS_ID,
            date=datetime(2024, 1, 5, tzinfo=timezone.utc),
            total="1000",
            customer_id="c1",
            branch_id="main",
        ),
        SaleRecord(
            sale_id="s2",
            business_id=BUSINESS_ID,
            date=datetime(2024, 1, 28, tzinfo=timezone.utc),
            total="500",
            branch_id="airport",
        ),
        ExpenseRecord(
            expense_id="e1",
            business_id=BUSINESS_ID,
            date=datetime(2024, 1, 9, tzinfo=timezone.utc),
            amount="1000",
            category="Rent",
        ),
    )
    return store


def _build_dependencies(store=None) -> HttpApiDependencies:
    service = AnalyticsService(
        store if store is not None else _seeded_store(),
        clock=FixedClock(FIXED_NOW),
    )
    return HttpApiDependencies(analytics_service=service)


def _request(**overrides) -> AnalyticsReportHttpRequest:
    params = {
        "business_id": BUSINESS_ID,
        "business_type": "retailer",
        "start": JAN_1,
        "end": FEB_1,
    }
    params.update(overrides)
    return AnalyticsReportHttpRequest(**params)


# ── Contracts ────────────────────────────────────────────────

def test_request_requires_uuid_business_id():
    with pytest.raises(ValueError, match="UUID"):
        _request(business_id=str(BUSINESS_ID))


def test_request_requires_business_type():
    with pytest.raises(ValueError, match="business_type"):
        _request(business_type="")


def test_request_requires_start_and_end_together():
    with pytest.raises(ValueError, match="together"):
        _request(end=None)


def test_request_rejects_window_and_range():
    with pytest.raises(ValueError, match="not both"):
        _request(range_preset="last_7_days")


def test_request_without_window_uses_preset():
    request = _request(start=None, end=None, range_preset="last_7_days")
    assert not request.has_explicit_window


def test_error_response_requires_error_body():
    with pytest.raises(ValueError, match="error must be set"):
        HttpApiResponse(ok=False).to_dict()


# ── Error mapping ────────────────────────────────────────────

def test_invalid_record_maps_to_422_with_details():
    payload = analytics_error_response(InvalidRecord("s9", "total", "must not be negative."))
    assert payload["ok"] is False
    assert payload["error"]["code"] == "INVALID_RECORD"
    assert payload["error"]["details"] == {"record_id": "s9", "field": "total"}
    assert http_status_for(payload) == 422


def test_invalid_window_maps_to_400_with_iso_endpoints():
    body = map_analytics_error(InvalidWindow("reversed", start=FEB_1, end=JAN_1))
    assert isinstance(body, HttpApiErrorBody)
    assert body.code == "INVALID_WINDOW"
    assert body.details == {
        "start": "2024-02-01T00:00:00+00:00",
        "end": "2024-01-01T00:00:00+00:00",
    }
    assert http_status_for({"ok": False, "error": body.to_dict()}) == 400


def test_unknown_error_code_maps_to_500():
    assert http_status_for({"ok": False, "error": {"code": "SOMETHING_ELSE"}}) == 500
    assert http_status_for({"ok": True, "data": {}}) == 200


# ── Report handler ───────────────────────────────────────────

def test_report_success_envelope():
    payload = get_analytics_report(_request(), _build_dependencies())
    assert payload["ok"] is True
    assert payload["meta"] == {"generated_at": FIXED_NOW.isoformat()}
    data = payload["data"]
    assert data["business_id"] == str(BUSINESS_ID)
    assert Decimal(data["total_revenue"]) == Decimal("1500")
    assert Decimal(data["net_profit"]) == Decimal("500")
    assert data["top_clients"][0]["name"] == "Metro Mart"


def test_report_branch_scope():
    payload = get_analytics_report(_request(branch_id="airport"), _build_dependencies())
    assert payload["data"]["branch_id"] == "airport"
    assert Decimal(payload["data"]["total_revenue"]) == Decimal("500")


def test_report_range_preset_ends_at_clock():
    payload = get_analytics_report(
        _request(start=None, end=None, range_preset="last_7_days"),
        _build_dependencies(),
    )
    window = payload["data"]["window"]
    assert window["end"] == FIXED_NOW.isoformat()
    assert window["start"] == (FIXED_NOW - timedelta(days=7)).isoformat()


def test_report_defaults_to_thirty_days():
    payload = get_analytics_report(
        _request(start=None, end=None), _build_dependencies()
    )
    assert payload["data"]["window"]["start"] == (FIXED_NOW - timedelta(days=30)).isoformat()


def test_report_reversed_window_is_invalid_window():
    payload = get_analytics_report(_request(start=FEB_1, end=JAN_1), _build_dependencies())
    assert payload["error"]["code"] == "INVALID_WINDOW"
    assert http_status_for(payload) == 400


def test_report_all_time_window_is_invalid_window():
    payload = get_analytics_report(
        _request(start=datetime(1, 1, 1, tzinfo=timezone.utc), end=FEB_1),
        _build_dependencies(),
    )
    assert payload["error"]["code"] == "INVALID_WINDOW"
    assert http_status_for(payload) == 400


def test_report_unknown_preset_is_invalid_window():
    payload = get_analytics_report(
        _request(start=None, end=None, range_preset="last_decade"),
        _build_dependencies(),
    )
    assert payload["error"]["code"] == "INVALID_WINDOW"


def test_report_foreign_record_is_invalid_record():
    payload = get_analytics_report(_request(), _build_dependencies(ForeignSaleStore()))
    assert payload["error"]["code"] == "INVALID_RECORD"
    assert payload["error"]["details"]["record_id"] == "foreign-1"


def test_report_store_failure_is_read_model_error():
    payload = get_analytics_report(_request(), _build_dependencies(UnavailableStore()))
    assert payload["error"]["code"] == "READ_MODEL_ERROR"
    assert payload["error"]["details"] == {"error_type": "LookupError"}
    assert http_status_for(payload) == 503


# ── CSV handler ──────────────────────────────────────────────

def test_csv_export_payload():
    payload = get_analytics_report_csv(_request(), _build_dependencies())
    assert payload["ok"] is True
    export = payload["data"]
    assert export["filename"] == "business-analytics-2024-02-01.csv"
    rows = list(csv.reader(io.StringIO(export["content"])))
    assert len(rows) == export["row_count"]
    assert dict(rows)["Total Sales"] == "1500.00"


def test_csv_export_propagates_errors():
    payload = get_analytics_report_csv(
        _request(start=FEB_1, end=JAN_1), _build_dependencies()
    )
    assert payload["ok"] is False
    assert payload["error"]["code"] == "INVALID_WINDOW"
