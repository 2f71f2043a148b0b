"""
HTTP layer: routing, status codes, error mapping and authentication.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from jose import jwt

from jewelbox.config import settings
from tests.conftest import TEST_USER_ID


def _create_item(client, name="Ring", abbreviation="rg"):
    resp = client.post("/api/items", json={"name": name, "abbreviation": abbreviation})
    assert resp.status_code == 201, resp.text
    return resp.json()


def _create_unit(client, item_id, **fields):
    body = {"item_id": item_id, "net_weight": "10", "wasteage_percentage": "5", "ratti": "4"}
    body.update(fields)
    resp = client.post("/api/inventory", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _token(sub, secret=None, **claims):
    payload = {
        "sub": str(sub),
        "aud": "authenticated",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        **claims,
    }
    return jwt.encode(payload, secret or settings.SUPABASE_JWT_SECRET, algorithm="HS256")


class TestHealthAndAuth:

    def test_health(self, anon_client):
        resp = anon_client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}

    def test_missing_token(self, anon_client):
        resp = anon_client.get("/api/items")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Not authenticated"

    def test_bad_signature(self, anon_client):
        headers = {"Authorization": f"Bearer {_token(uuid4(), secret='wrong-secret')}"}
        assert anon_client.get("/api/items", headers=headers).status_code == 401

    def test_non_uuid_subject(self, anon_client):
        headers = {"Authorization": f"Bearer {_token('not-a-uuid')}"}
        assert anon_client.get("/api/items", headers=headers).status_code == 401

    def test_valid_token_stamps_principal(self, anon_client):
        user_id = uuid4()
        headers = {"Authorization": f"Bearer {_token(user_id)}"}
        resp = anon_client.post("/api/items", json={"name": "Chain"}, headers=headers)
        assert resp.status_code == 201, resp.text
        assert resp.json()["user_id"] == str(user_id)


class TestInventoryApi:

    def test_create_get_and_list(self, client):
        item = _create_item(client)
        unit = _create_unit(client, item["id"])
        assert unit["tag_number"] == "T000001"
        assert unit["status"] == "available"
        assert Decimal(unit["total_weight"]) == Decimal("10.500")
        assert Decimal(unit["pure_gold"]) == Decimal("9.583")
        assert unit["item"]["abbreviation"] == "RG"
        assert unit["user_id"] == str(TEST_USER_ID)

        assert client.get(f"/api/inventory/{unit['id']}").json()["tag_number"] == "T000001"
        assert client.get("/api/inventory/tag/T000001").json()["id"] == unit["id"]

        listing = client.get("/api/inventory", params={"search": "rg", "status": "available"}).json()
        assert listing["total"] == 1
        assert [u["id"] for u in client.get("/api/inventory/available").json()] == [unit["id"]]

    def test_zero_net_weight_is_422(self, client):
        item = _create_item(client)
        resp = client.post("/api/inventory", json={"item_id": item["id"], "net_weight": 0})
        assert resp.status_code == 422
        assert resp.json()["field"] == "net_weight"

    def test_boolean_karat_is_422(self, client):
        item = _create_item(client)
        resp = client.post("/api/inventory", json={"item_id": item["id"], "net_weight": "1", "karat": True})
        assert resp.status_code == 422
        assert client.get("/api/inventory").json()["total"] == 0

    def test_derived_fields_rejected(self, client):
        item = _create_item(client)
        resp = client.post(
            "/api/inventory", json={"item_id": item["id"], "net_weight": "1", "total_weight": "5"},
        )
        assert resp.status_code == 422

    def test_unknown_id_is_404(self, client):
        assert client.get(f"/api/inventory/{uuid4()}").status_code == 404
        assert client.get("/api/inventory/tag/T404404").status_code == 404

    def test_unknown_status_filter_is_422(self, client):
        assert client.get("/api/inventory", params={"status": "melted"}).status_code == 422

    def test_update_then_sold_is_409(self, client):
        item = _create_item(client)
        unit = _create_unit(client, item["id"])
        resp = client.put(f"/api/inventory/{unit['id']}", json={"net_weight": "20"})
        assert resp.status_code == 200
        assert Decimal(resp.json()["total_weight"]) == Decimal("21.000")

        sale = client.post(
            "/api/sales",
            json={"customer_name": "Asha", "items": [{"inventory_id": unit["id"], "price": "500"}]},
        )
        assert sale.status_code == 201, sale.text

        resp = client.put(f"/api/inventory/{unit['id']}", json={"description": "late edit"})
        assert resp.status_code == 409
        assert client.get(f"/api/inventory/{unit['id']}").json()["description"] is None

    def test_preview_tolerates_blank_inputs(self, client):
        resp = client.post(
            "/api/inventory/preview",
            json={"net_weight": "10", "wasteage_percentage": "", "polish_weight": "0.2", "ratti": "abc"},
        )
        assert resp.status_code == 200
        assert Decimal(resp.json()["total_weight"]) == Decimal("10.200")
        assert Decimal(resp.json()["pure_gold"]) == Decimal("10.000")

    def test_image_upload(self, client, blob_store):
        resp = client.post(
            "/api/inventory/images",
            files={"file": ("front.png", b"\x89PNG-data", "image/png")},
        )
        assert resp.status_code == 201, resp.text
        body = resp.json()
        assert body["name"] == "front.png"
        assert body["size"] == len(b"\x89PNG-data")
        assert body["url"].startswith("https://storage.test/images/inventory/")
        assert len(blob_store.uploads) == 1

    def test_image_upload_rejects_non_image(self, client, blob_store):
        resp = client.post(
            "/api/inventory/images",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        assert resp.status_code == 422
        assert blob_store.uploads == []

    def test_tag_pdf(self, client):
        item = _create_item(client)
        unit = _create_unit(client, item["id"])
        resp = client.get(f"/api/inventory/{unit['id']}/tag.pdf")
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert resp.content.startswith(b"%PDF")


class TestSalesApi:

    def test_sale_flow(self, client):
        item = _create_item(client)
        a = _create_unit(client, item["id"])
        b = _create_unit(client, item["id"])
        resp = client.post(
            "/api/sales",
            json={
                "customer_name": "Meera",
                "customer_phone": "98450",
                "notes": "gift, wrap",
                "items": [
                    {"inventory_id": a["id"], "price": "100.00"},
                    {"inventory_id": b["id"], "price": "250.50"},
                ],
            },
        )
        assert resp.status_code == 201, resp.text
        sale = resp.json()
        assert Decimal(sale["total_amount"]) == Decimal("350.50")
        assert sale["item_count"] == 2
        assert sale["invoice_number"].startswith("INV-")
        assert sale["line_items"][0]["inventory_unit"]["status"] == "sold"

        assert client.get(f"/api/sales/{sale['id']}").json()["invoice_number"] == sale["invoice_number"]
        listing = client.get("/api/sales", params={"search": "meera"}).json()
        assert listing["total"] == 1

        summary = client.get("/api/sales/summary").json()
        assert Decimal(summary["total_revenue"]) == Decimal("350.50")
        assert summary["total_items"] == 2

        export = client.get("/api/sales/export")
        assert export.status_code == 200
        assert export.headers["content-type"].startswith("text/csv")
        assert "attachment" in export.headers["content-disposition"]
        assert "gift; wrap" in export.text

        pdf = client.get(f"/api/sales/{sale['id']}/invoice.pdf")
        assert pdf.status_code == 200
        assert pdf.content.startswith(b"%PDF")

    def test_double_sell_is_409_and_changes_nothing(self, client):
        item = _create_item(client)
        a = _create_unit(client, item["id"])
        b = _create_unit(client, item["id"])
        first = client.post(
            "/api/sales", json={"customer_name": "X", "items": [{"inventory_id": a["id"], "price": 1}]},
        )
        assert first.status_code == 201
        second = client.post(
            "/api/sales",
            json={
                "customer_name": "Y",
                "items": [{"inventory_id": b["id"], "price": 1}, {"inventory_id": a["id"], "price": 1}],
            },
        )
        assert second.status_code == 409
        assert client.get(f"/api/inventory/{b['id']}").json()["status"] == "available"
        assert client.get("/api/sales").json()["total"] == 1

    def test_missing_customer_is_422(self, client):
        item = _create_item(client)
        a = _create_unit(client, item["id"])
        resp = client.post("/api/sales", json={"items": [{"inventory_id": a["id"], "price": 10}]})
        assert resp.status_code == 422
        assert resp.json()["field"] == "customer_name"

    def test_unknown_sale_is_404(self, client):
        assert client.get(f"/api/sales/{uuid4()}").status_code == 404


class TestCatalogExpenseApi:

    def test_items(self, client):
        item = _create_item(client, name="Necklace", abbreviation="nk")
        resp = client.put(f"/api/items/{item['id']}", json={"name": "Long necklace"})
        assert resp.json() == {**resp.json(), "name": "Long necklace", "abbreviation": "NK"}
        assert [i["name"] for i in client.get("/api/items").json()] == ["Long necklace"]
        assert client.get(f"/api/items/{uuid4()}").status_code == 404

    def test_category_restrict_delete(self, client):
        cat = client.post("/api/categories", json={"name": "Rent"}).json()
        expense = client.post(
            "/api/expenses",
            json={"description": "June", "amount": "1000", "category_id": cat["id"], "expense_date": "2026-06-01"},
        )
        assert expense.status_code == 201, expense.text
        assert expense.json()["category"]["name"] == "Rent"

        assert client.delete(f"/api/categories/{cat['id']}").status_code == 409
        assert client.delete(f"/api/expenses/{expense.json()['id']}").status_code == 204
        assert client.delete(f"/api/categories/{cat['id']}").status_code == 204
        assert client.get("/api/categories").json() == []

    def test_expense_summary_and_export(self, client):
        client.post("/api/expenses", json={"description": "Tea", "amount": "20", "expense_date": "2026-06-30"})
        client.post("/api/expenses", json={"description": "Gas", "amount": "30", "expense_date": "2026-05-21"})
        summary = client.get("/api/expenses/summary", params={"on": "2026-06-30"}).json()
        assert Decimal(summary["today"]) == Decimal("20")
        assert Decimal(summary["three_months"]) == Decimal("50")

        export = client.get("/api/expenses/export")
        lines = export.text.splitlines()
        assert lines[0] == "Date,Description,Category,Amount"
        assert lines[1] == "2026-06-30,Tea,Uncategorized,20.00"

    def test_invalid_amount_is_422(self, client):
        resp = client.post("/api/expenses", json={"description": "x", "amount": "0"})
        assert resp.status_code == 422


class TestGoldRateApi:

    def test_record_and_latest(self, client):
        empty = client.get("/api/gold-rates/latest").json()
        assert empty == {"snapshot": None, "karat_rates": []}

        resp = client.post("/api/gold-rates", json={"rate_24k": "6000"})
        assert resp.status_code == 201
        rates = {r["karat"]: Decimal(r["rate"]) for r in resp.json()["karat_rates"]}
        assert rates[22] == Decimal("5500.00")

        latest = client.get("/api/gold-rates/latest").json()
        assert Decimal(latest["snapshot"]["rate_24k"]) == Decimal("6000")
        assert len(latest["karat_rates"]) == 24
        assert len(client.get("/api/gold-rates").json()) == 1

    def test_zero_rate_is_422(self, client):
        assert client.post("/api/gold-rates", json={"rate_24k": "0"}).status_code == 422
