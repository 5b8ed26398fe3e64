import pytest

pytestmark = pytest.mark.api


def test_health_ok(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_calculate_with_overage(client):
    resp = client.post(
        "/api/v1/rental-days/calculate",
        json={
            "delivery_datetime": "2024-01-01T10:00:00Z",
            "collection_datetime": "2024-01-02T11:30:00Z",
            "rental_day_hour_tolerance": 1,
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["billed_days"] == 2
    assert body["full_days"] == 1
    assert body["remainder_hours"] == 1.5
    assert body["exceeds_tolerance"] is True
    assert body["formatted_duration"] == "1 day 1 hour 30 minutes"
    assert body["formatted_total"] == "2 days"
    assert body["hour_tolerance"] == 1
    assert "1-hour tolerance" in body["warning"]


def test_calculate_defaults_tolerance(client):
    resp = client.post(
        "/api/v1/rental-days/calculate",
        json={
            "delivery_datetime": "2024-01-01T10:00:00Z",
            "collection_datetime": "2024-01-02T11:00:00Z",
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["hour_tolerance"] == 1
    assert body["exceeds_tolerance"] is False
    assert body["billed_days"] == 1
    assert body["warning"] is None


def test_calculate_respects_offsets(client):
    resp = client.post(
        "/api/v1/rental-days/calculate",
        json={
            "delivery_datetime": "2024-01-01T11:00:00+01:00",
            "collection_datetime": "2024-01-03T10:00:00Z",
            "rental_day_hour_tolerance": 1,
        },
    )

    assert resp.status_code == 200
    assert resp.json()["formatted_duration"] == "2 days"


def test_calculate_inverted_window(client):
    resp = client.post(
        "/api/v1/rental-days/calculate",
        json={
            "delivery_datetime": "2024-01-02T10:00:00Z",
            "collection_datetime": "2024-01-01T10:00:00Z",
            "rental_day_hour_tolerance": 1,
        },
    )

    assert resp.status_code == 422
    assert "precedes delivery" in resp.json()["detail"]


@pytest.mark.parametrize("tolerance", [0, 13])
def test_calculate_invalid_tolerance(client, tolerance):
    resp = client.post(
        "/api/v1/rental-days/calculate",
        json={
            "delivery_datetime": "2024-01-01T10:00:00Z",
            "collection_datetime": "2024-01-02T10:00:00Z",
            "rental_day_hour_tolerance": tolerance,
        },
    )

    assert resp.status_code == 422
    assert "between 1 and 12" in resp.json()["detail"]


def test_quote(client):
    resp = client.post(
        "/api/v1/rental-days/quote",
        json={
            "delivery_datetime": "2024-01-01T10:00:00Z",
            "collection_datetime": "2024-01-04T13:00:00Z",
            "rental_day_hour_tolerance": 2,
            "daily_rate": "199.90",
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["billed_days"] == 4
    assert float(body["rental_amount"]) == 799.60
    assert float(body["extra_day_amount"]) == 199.90
    assert body["currency"] == "CHF"


def test_quote_rejects_negative_rate(client):
    resp = client.post(
        "/api/v1/rental-days/quote",
        json={
            "delivery_datetime": "2024-01-01T10:00:00Z",
            "collection_datetime": "2024-01-02T10:00:00Z",
            "daily_rate": "-5",
        },
    )

    assert resp.status_code == 422


def test_metrics_exposed(client):
    client.post(
        "/api/v1/rental-days/calculate",
        json={
            "delivery_datetime": "2024-01-01T10:00:00Z",
            "collection_datetime": "2024-01-02T10:00:00Z",
        },
    )

    resp = client.get("/metrics")

    assert resp.status_code == 200
    assert "booking_core_rental_days_calculations_total" in resp.text
