from typing import Any, Callable, Dict, Iterator

import pytest
from fastapi.testclient import TestClient

from restaurantiq.api.routes import assessment as assessment_routes
from restaurantiq.config.settings import get_settings
from restaurantiq.main import app
from restaurantiq.schemas import MonthlyData
from restaurantiq.security.guards import reset_rate_limits


@pytest.fixture(name="client")
def client_fixture() -> Iterator[TestClient]:
    reset_rate_limits()
    with TestClient(app) as client:
        yield client
    reset_rate_limits()


@pytest.fixture(name="month_payload")
def month_payload_fixture(make_month: Callable[..., MonthlyData]) -> Callable[..., Dict[str, Any]]:
    def _payload(**overrides: Any) -> Dict[str, Any]:
        return make_month(**overrides).model_dump(mode="json")

    return _payload


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_cost_categories(client: TestClient) -> None:
    response = client.get("/api/cost-categories")

    assert response.status_code == 200
    categories = response.json()
    assert len(categories) == 12
    assert categories[0]["key"] == "food_cost"


def test_dashboard_overview_orders_months(client: TestClient, month_payload) -> None:
    payload = {
        "monthly_data": [
            month_payload(),
            month_payload(month="December", year=2025, revenue=80000),
        ]
    }

    response = client.post("/api/dashboard/overview", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["period"] == "Jan 2026"
    assert body["metrics"]["gross_margin"] == pytest.approx(4)
    assert body["revenue_trend"] == {"direction": "up", "change_percent": pytest.approx(25)}
    assert [point["label"] for point in body["trend"]] == ["Dec 2025", "Jan 2026"]
    assert len(body["weekly"]) == 4


def test_dashboard_overview_without_data(client: TestClient) -> None:
    response = client.post("/api/dashboard/overview", json={"monthly_data": []})

    assert response.status_code == 200
    assert response.json()["metrics"] is None


def test_duplicate_months_are_rejected(client: TestClient, month_payload) -> None:
    payload = {"monthly_data": [month_payload(), month_payload(revenue=1)]}

    response = client.post("/api/costs/analysis", json=payload)

    assert response.status_code == 400
    assert "Duplicate" in response.json()["detail"]


def test_invalid_month_name(client: TestClient, month_payload) -> None:
    payload = {"monthly_data": [month_payload() | {"month": "Smarch"}]}

    response = client.post("/api/dashboard/overview", json=payload)

    assert response.status_code == 422


def test_recommendations_endpoint(client: TestClient, month_payload) -> None:
    response = client.post("/api/recommendations", json={"monthly_data": [month_payload()]})

    assert response.status_code == 200
    body = response.json()
    assert body["total_saving"] == 15580
    assert body["high_impact_count"] == 3


def test_simulator_requires_data(client: TestClient) -> None:
    response = client.post("/api/simulator", json={"monthly_data": []})

    assert response.status_code == 400


def test_simulator_applies_scenario(client: TestClient, month_payload) -> None:
    payload = {"monthly_data": [month_payload()], "scenario": {"food_cost_change": 10}}

    response = client.post("/api/simulator", json=payload)

    assert response.status_code == 200
    assert response.json()["new_profit"] == pytest.approx(500)


def test_simulator_rejects_out_of_range_scenario(client: TestClient, month_payload) -> None:
    payload = {"monthly_data": [month_payload()], "scenario": {"cover_change": 50}}

    response = client.post("/api/simulator", json=payload)

    assert response.status_code == 422


def test_promotion_simulation_for_unknown_item(client: TestClient) -> None:
    payload = {
        "menu_items": [{"id": 1, "restaurant_id": 1, "name": "Wrap", "selling_price": 12}],
        "menu_item_id": 42,
    }

    response = client.post("/api/promotions/simulate", json=payload)

    assert response.status_code == 404


def test_promotion_simulation_uses_menu_average(client: TestClient) -> None:
    response = client.post("/api/promotions/simulate", json={"discount_percent": 10})

    assert response.status_code == 200
    body = response.json()
    assert body["basis"]["source"] == "menu_average"
    assert body["basis"]["original_price"] == pytest.approx(15)
    assert len(body["scenarios"]) == 6


def test_supplier_risk_endpoint(client: TestClient) -> None:
    payload = {
        "suppliers": [{"id": 1, "restaurant_id": 1, "name": "Fresh Fields"}],
        "ingredients": [
            {"id": 1, "restaurant_id": 1, "name": "Tomatoes", "current_price": 2.8},
            {"id": 2, "restaurant_id": 1, "name": "Saffron", "current_price": 30},
        ],
        "supplier_ingredients": [{"supplier_id": 1, "ingredient_id": 1, "unit_price": 2.8}],
    }

    response = client.post("/api/suppliers/risk", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert [entry["name"] for entry in body["single_source"]] == ["Tomatoes"]
    assert [entry["name"] for entry in body["no_supplier"]] == ["Saffron"]


def test_quick_assessment_endpoint(client: TestClient) -> None:
    response = client.post("/api/assessment", json={})

    assert response.status_code == 200
    assert response.json()["total_cost_percent"] == pytest.approx(90)


def test_import_template_download(client: TestClient) -> None:
    response = client.get("/api/import/suppliers/template")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]
    assert response.text == "name,contactInfo,category\n"


def test_import_unknown_kind(client: TestClient) -> None:
    response = client.get("/api/import/staff/template")

    assert response.status_code == 422


def test_import_upload(client: TestClient) -> None:
    content = b"Supplier Name,contact,category\nFresh Fields,orders@freshfields.co.uk,produce\n,,\n"

    response = client.post(
        "/api/import/suppliers",
        files={"file": ("suppliers.csv", content, "text/csv")},
        data={"mapping": '{"name": "Supplier Name"}', "restaurant_id": "3"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["imported"] == 1
    assert body["records"][0]["name"] == "Fresh Fields"
    assert body["records"][0]["restaurant_id"] == 3
    assert body["records"][0]["contact_info"] == "orders@freshfields.co.uk"


def test_import_rejects_bad_mapping_json(client: TestClient) -> None:
    response = client.post(
        "/api/import/suppliers",
        files={"file": ("suppliers.csv", b"name\nFresh Fields\n", "text/csv")},
        data={"mapping": "not json"},
    )

    assert response.status_code == 400


def test_import_rejects_empty_file(client: TestClient) -> None:
    response = client.post(
        "/api/import/ingredients",
        files={"file": ("ingredients.csv", b"", "text/csv")},
    )

    assert response.status_code == 400


def test_import_rejects_cross_origin_upload(client: TestClient) -> None:
    response = client.post(
        "/api/import/suppliers",
        files={"file": ("suppliers.csv", b"name\nFresh Fields\n", "text/csv")},
        headers={"Origin": "https://evil.example"},
    )

    assert response.status_code == 403


def test_import_upload_is_rate_limited(client: TestClient) -> None:
    files = {"file": ("suppliers.csv", b"name\nFresh Fields\n", "text/csv")}
    statuses = [client.post("/api/import/suppliers", files=files).status_code for _ in range(21)]

    assert statuses[:20] == [200] * 20
    assert statuses[20] == 429


def test_demo_dataset(client: TestClient) -> None:
    response = client.get("/api/demo/dataset")

    assert response.status_code == 200
    body = response.json()
    assert body["restaurant"]["name"] == "The Golden Fork"
    assert len(body["monthly_data"]) == 6


def test_demo_insights(client: TestClient) -> None:
    response = client.get("/api/demo/insights")

    assert response.status_code == 200
    body = response.json()
    assert body["overview"]["period"] == "Feb 2026"
    assert body["supplier_risk"]["single_source"]
    assert body["menu_costing"]["items"]


def test_import_rejects_oversized_upload(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESTAURANTIQ_MAX_UPLOAD_BYTES", "16")
    get_settings.cache_clear()
    try:
        response = client.post(
            "/api/import/suppliers",
            files={"file": ("suppliers.csv", b"name\nFresh Fields Wholesale\n", "text/csv")},
        )
    finally:
        monkeypatch.delenv("RESTAURANTIQ_MAX_UPLOAD_BYTES")
        get_settings.cache_clear()

    assert response.status_code == 413


def test_import_reports_non_finite_price(client: TestClient) -> None:
    response = client.post(
        "/api/import/ingredients",
        files={"file": ("ingredients.csv", b"name,currentPrice\nSaffron,inf\n", "text/csv")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["imported"] == 0
    assert body["rejected"][0]["row"] == 2


def test_unexpected_errors_return_generic_500(monkeypatch: pytest.MonkeyPatch) -> None:
    def _explode(*_args: Any, **_kwargs: Any) -> None:
        raise RuntimeError("database on fire")

    monkeypatch.setattr(assessment_routes, "assess", _explode)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.post("/api/assessment", json={})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal Server Error"}
