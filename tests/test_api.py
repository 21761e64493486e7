"""End-to-end tests for the HTTP API against an in-memory ledger."""

from datetime import datetime

import pytest

from footprint import climate_client, crud, gemini_client
from footprint.ranking import FALLBACK_TIP, TIPS
from footprint.schemas import LedgerRecord


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_factors(client):
    body = client.get("/factors").json()
    assert body["monthly_limit_kg"] == 480
    keys = {f["key"] for f in body["factors"]}
    assert {"electricity", "petrol", "diesel", "natural_gas", "bus", "train", "clothing"} == keys


class TestCalculate:
    def test_empty_request(self, client):
        body = client.post("/calculate", json={}).json()
        assert len(body["footprint"]["breakdown"]) == 6
        assert body["footprint"]["grand_total_kg"] == 0
        assert body["credits"]["credits"] == 480
        assert body["tips"] == [FALLBACK_TIP]

    def test_full_request(self, client):
        payload = {
            "answers": {
                "transport": {"has_vehicle": True, "vehicle_type": "petrol_small", "daily_km": 20, "carpools": True},
                "home_energy": {"household_size": 4, "cooking_fuel": "lpg", "lpg_cylinders_per_year": 8},
            },
            "readings": [
                {"category": "electricity", "quantity": 100, "source": "ocr"},
                {"category": "electricity", "quantity": 50, "source": "ocr"},
            ],
        }
        body = client.post("/calculate", json=payload).json()
        footprint = body["footprint"]
        transport = footprint["breakdown"][0]
        assert transport["daily_kg"] == 1.47
        assert transport["monthly_kg"] == pytest.approx(44.1)
        # 50 kWh x 0.82 / 4 people, the 100 kWh reading was replaced
        assert footprint["direct"]["total_kg"] == pytest.approx(10.25)
        assert len(footprint["direct"]["readings"]) == 1
        assert body["tips"] == [TIPS["transport"], TIPS["home_energy"]]
        assert body["credits"]["is_over"] is False

    def test_negative_numbers_are_clamped(self, client):
        payload = {"answers": {"transport": {"has_vehicle": True, "vehicle_type": "ev_car", "daily_km": -5}}}
        body = client.post("/calculate", json=payload).json()
        assert body["footprint"]["grand_total_kg"] == 0

    def test_non_finite_numbers_count_as_zero(self, client):
        # NaN is not valid JSON for most encoders, so send the raw body
        body = '{"answers": {"transport": {"has_vehicle": true, "vehicle_type": "ev_car", "daily_km": Infinity}},' \
               ' "readings": [{"category": "petrol", "quantity": NaN}, {"category": "clothing", "quantity": 2}]}'
        r = client.post("/calculate", content=body, headers={"Content-Type": "application/json"})
        assert r.status_code == 200
        footprint = r.json()["footprint"]
        assert footprint["breakdown"][0]["daily_kg"] == 0
        assert footprint["grand_total_kg"] == 25.0

    def test_climate_override_is_best_effort(self, client, monkeypatch):
        monkeypatch.setattr(climate_client, "fetch_climate_zone", lambda lat, lon: None)
        payload = {"answers": {"home_energy": {"climate_zone": "moderate"}}, "latitude": 12.97, "longitude": 77.59}
        body = client.post("/calculate", json=payload).json()
        assert body["climate_zone"] == "moderate"

        monkeypatch.setattr(climate_client, "fetch_climate_zone", lambda lat, lon: "hot_dry")
        body = client.post("/calculate", json=payload).json()
        assert body["climate_zone"] == "hot_dry"


def test_climate_endpoint(client, monkeypatch):
    monkeypatch.setattr(climate_client, "fetch_climate_zone", lambda lat, lon: "cold")
    assert client.get("/climate", params={"lat": 34.1, "lon": 77.6}).json() == {"climate_zone": "cold"}


class TestExtract:
    def test_extracted_value(self, client, monkeypatch):
        monkeypatch.setattr(gemini_client, "extract_reading", lambda data, category, mime: 30.0)
        r = client.post("/readings/extract", data={"category": "petrol"},
                        files={"file": ("receipt.jpg", b"jpeg-bytes", "image/jpeg")})
        assert r.status_code == 200
        assert r.json() == {"category": "petrol", "value": 30.0, "emission": 69.3, "unit": "liters"}

    def test_failed_extraction_means_no_reading(self, client, monkeypatch):
        monkeypatch.setattr(gemini_client, "extract_reading", lambda data, category, mime: None)
        r = client.post("/readings/extract", data={"category": "electricity"},
                        files={"file": ("bill.jpg", b"jpeg-bytes", "image/jpeg")})
        assert r.json() == {"category": "electricity", "value": None, "emission": None, "unit": None}

    def test_unsupported_category(self, client):
        r = client.post("/readings/extract", data={"category": "natural_gas"},
                        files={"file": ("bill.jpg", b"jpeg-bytes", "image/jpeg")})
        assert r.status_code == 400


class TestLedger:
    def test_save_and_list(self, client):
        payload = {
            "user_id": "user_1",
            "household_size": 2,
            "readings": [
                {"category": "electricity", "quantity": 200, "source": "ocr"},
                {"category": "clothing", "quantity": 2},
                {"category": "bus", "quantity": 0},
            ],
        }
        r = client.post("/records", json=payload)
        assert r.status_code == 200
        assert r.json()["saved"] == 2

        rows = client.get("/records", params={"user_id": "user_1"}).json()
        by_category = {row["category"]: row for row in rows}
        assert by_category["electricity"]["amount"] == 82.0
        assert by_category["electricity"]["description"] == "200 kWh (OCR)"
        assert by_category["electricity"]["source"] == "ocr"
        assert by_category["clothing"]["description"] == "2 items"
        assert client.get("/records", params={"user_id": "someone_else"}).json() == []

    def test_nothing_to_save(self, client):
        r = client.post("/records", json={"user_id": "user_1", "readings": []})
        assert r.status_code == 400
        assert r.json()["detail"] == "Nothing to save"

    def test_month_filter(self, client, db_session):
        crud.create_records(db_session, "user_2", [
            LedgerRecord(category="petrol", amount=40, source="manual", description="17.3 liters",
                         recorded_at=datetime(2026, 9, 14)),
            LedgerRecord(category="petrol", amount=25, source="manual", description="10.8 liters",
                         recorded_at=datetime(2026, 10, 2)),
        ])
        rows = client.get("/records", params={"user_id": "user_2", "year": 2026, "month": 9}).json()
        assert [r["amount"] for r in rows] == [40]


class TestHistory:
    @pytest.fixture
    def history(self, db_session):
        crud.create_records(db_session, "user_3", [
            LedgerRecord(category="electricity", amount=300, source="ocr", description="366 kWh (OCR)",
                         recorded_at=datetime(2026, 9, 5)),
            LedgerRecord(category="petrol", amount=250, source="manual", description="108 liters",
                         recorded_at=datetime(2026, 9, 18)),
            LedgerRecord(category="clothing", amount=100, source="ocr", description="8 items (OCR)",
                         recorded_at=datetime(2026, 10, 3)),
        ])

    def test_credits(self, client, history):
        body = client.get("/credits", params={"user_id": "user_3"}).json()
        october, september = body["months"]
        assert (october["year"], october["month"], october["credits"]) == (2026, 10, 380)
        assert september["is_over"] is True and september["credits"] == 0
        assert body["total_credits"] == 380

    def test_recommendations(self, client, history):
        body = client.get("/recommendations", params={"user_id": "user_3"}).json()
        assert body["tips"] == [TIPS["home_energy"], TIPS["transport"], TIPS["shopping"]]
        assert [p["category"] for p in body["priorities"][:3]] == ["home_energy", "transport", "shopping"]
        assert body["totals"]["electricity"] == 300

    def test_category_totals_month_window(self, db_session, history):
        assert crud.category_totals(db_session, "user_3", 2026, 9) == {"electricity": 300, "petrol": 250}
        assert list(crud.category_totals(db_session, "user_3")) == ["electricity", "petrol", "clothing"]


class TestMonthSummary:
    @pytest.fixture
    def history(self, db_session):
        crud.create_records(db_session, "user_4", [
            LedgerRecord(category="petrol", amount=250, source="manual", description="108 liters",
                         recorded_at=datetime(2026, 9, 18)),
            LedgerRecord(category="electricity", amount=300, source="ocr", description="366 kWh (OCR)",
                         recorded_at=datetime(2026, 9, 5)),
            LedgerRecord(category="bus", amount=20, source="manual", description="225 km",
                         recorded_at=datetime(2026, 10, 1)),
            LedgerRecord(category="clothing", amount=100, source="ocr", description="8 items (OCR)",
                         recorded_at=datetime(2026, 10, 3)),
        ])

    def test_month_over_budget(self, client, history):
        body = client.get("/summary", params={"user_id": "user_4", "year": 2026, "month": 9}).json()
        assert (body["year"], body["month"]) == (2026, 9)
        assert body["credits"]["total_kg"] == 550
        assert body["credits"]["is_over"] is True
        assert body["credits"]["credits"] == 0
        assert body["credits"]["surplus_kg"] == 70
        assert [(c["category"], c["total_kg"]) for c in body["categories"]] == [
            ("home_energy", 300), ("transport", 250)]
        assert body["tips"] == [TIPS["home_energy"], TIPS["transport"]]

    def test_month_under_budget_ignores_other_months(self, client, history):
        body = client.get("/summary", params={"user_id": "user_4", "year": 2026, "month": 10}).json()
        assert body["credits"]["total_kg"] == 120
        assert body["credits"]["credits"] == 360
        assert body["credits"]["is_over"] is False
        assert body["categories"] == [
            {"category": "shopping", "title": "Electronics & Shopping", "total_kg": 100},
            {"category": "transport", "title": "Transportation", "total_kg": 20},
        ]
        assert body["tips"] == [TIPS["shopping"], TIPS["transport"]]

    def test_empty_month(self, client, history):
        body = client.get("/summary", params={"user_id": "user_4", "year": 2026, "month": 8}).json()
        assert body["credits"]["credits"] == 480
        assert body["categories"] == []
        assert body["tips"] == [FALLBACK_TIP]

    def test_defaults_to_current_month(self, client, db_session):
        crud.create_records(db_session, "user_5", [
            LedgerRecord(category="diesel", amount=40, source="manual", description="14.9 liters"),
        ])
        now = datetime.utcnow()
        body = client.get("/summary", params={"user_id": "user_5"}).json()
        assert (body["year"], body["month"]) == (now.year, now.month)
        assert body["credits"]["total_kg"] == 40
        assert body["categories"][0]["category"] == "transport"

    def test_month_out_of_range(self, client):
        assert client.get("/summary", params={"user_id": "user_4", "year": 2026, "month": 13}).status_code == 422
