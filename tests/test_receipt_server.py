from pathlib import Path

from fastapi.testclient import TestClient

from receiptparse.runtime.receipt_server import app

client = TestClient(app)


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_returns_structured_receipt(costco_discount_receipt: str) -> None:
    response = client.post("/parse", json={"text": costco_discount_receipt})

    assert response.status_code == 200
    payload = response.json()
    assert payload["storeName"] == "Costco Wholesale"
    assert payload["totalAmount"] == 63.97
    assert [item["name"] for item in payload["items"]] == ["HUG PU 3T-4T", "IRIS BIN"]


def test_parse_empty_text() -> None:
    response = client.post("/parse", json={"text": ""})

    assert response.status_code == 200
    assert response.json()["items"] == []


def test_parse_requires_text_field() -> None:
    response = client.post("/parse", json={})

    assert response.status_code == 422


def test_parse_reports_broken_store_rules(isolated_config: Path) -> None:
    (isolated_config / "store_rules.toml").write_text('[[rules]]\nname = "X"\npattern = "(["\n', encoding="utf-8")

    response = client.post("/parse", json={"text": "COSTCO"})

    assert response.status_code == 500
    assert response.json()["status"] == "error"
