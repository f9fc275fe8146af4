# tests/test_products.py
import pytest

from app.database import new_id


def _list(client, **params):
    resp = client.get("/api/products/", params=params)
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_list_empty_catalog(client):
    assert _list(client) == {"payload": [], "total": 0}


def test_list_populates_category_and_supplier(client, make_product, category, supplier):
    make_product(name="Desk Lamp")
    body = _list(client)
    assert body["total"] == 1
    item = body["payload"][0]
    assert item["category"]["_id"] == category["_id"]
    assert item["category"]["name"] == "Lighting"
    assert item["supplier"]["name"] == "Acme Supply"
    assert item["price"] == pytest.approx(25.0)


def test_filter_by_category_only(client, make_product, make_category):
    other = make_category(name="Furniture")
    make_product(name="Desk Lamp")
    make_product(name="Chair", categoryId=other["_id"])
    make_product(name="Table", categoryId=other["_id"])

    body = _list(client, category=other["_id"])
    assert body["total"] == 2
    assert all(p["categoryId"] == other["_id"] for p in body["payload"])


def test_filter_by_supplier(client, make_product, make_supplier):
    other = make_supplier(name="Globex")
    make_product(name="Desk Lamp")
    make_product(name="Pendant", supplierId=other["_id"])

    body = _list(client, sup=other["_id"])
    assert [p["name"] for p in body["payload"]] == ["Pendant"]


def test_name_filter_is_case_sensitive_substring(client, make_product):
    make_product(name="Desk Lamp")
    make_product(name="Lamp Shade")
    make_product(name="Rug")

    assert _list(client, product="Lamp")["total"] == 2
    assert _list(client, product="amp S")["total"] == 1
    assert _list(client, product="lamp")["total"] == 0


def test_stock_range_holds_with_other_ranges(client, make_product):
    make_product(name="A", stock=5, price=100, discount=10)
    make_product(name="B", stock=50, price=100, discount=10)
    make_product(name="C", stock=5, price=1, discount=10)
    make_product(name="D", stock=8, price=100, discount=40)

    body = _list(client, stockStart=1, stockEnd=10)
    assert sorted(p["name"] for p in body["payload"]) == ["A", "C", "D"]

    # the discount range must not replace the stock range
    body = _list(client, stockStart=1, stockEnd=10, discountStart=5, discountEnd=20)
    assert sorted(p["name"] for p in body["payload"]) == ["A", "C"]
    assert all(1 <= p["stock"] <= 10 for p in body["payload"])

    body = _list(client, stockStart=1, stockEnd=10, priceStart=50, discountEnd=20)
    assert [p["name"] for p in body["payload"]] == ["A"]


def test_open_ended_ranges(client, make_product):
    make_product(name="Cheap", price=5)
    make_product(name="Mid", price=50)
    make_product(name="Dear", price=500)

    assert _list(client, priceStart=50)["total"] == 2
    assert _list(client, priceEnd=50)["total"] == 2
    assert _list(client, discountStart=0, discountEnd=0)["total"] == 3


def test_pagination_defaults_and_total(client, make_product):
    for i in range(12):
        make_product(name=f"Item {i:02d}")

    body = _list(client)
    assert len(body["payload"]) == 10
    assert body["total"] == 12

    body = _list(client, skip=10)
    assert [p["name"] for p in body["payload"]] == ["Item 10", "Item 11"]
    assert body["total"] == 12

    body = _list(client, limit=5, skip=3)
    assert len(body["payload"]) <= 5
    assert body["payload"][0]["name"] == "Item 03"


def test_list_rejects_bad_query_values(client):
    resp = client.get("/api/products/", params={"limit": 1000})
    assert resp.status_code == 400
    resp = client.get("/api/products/", params={"stockStart": "lots"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["provider"] == "pydantic"
    assert body["errors"][0]["field"] == "stockStart"


def test_list_rejects_invalid_name_pattern(client, make_product):
    make_product()
    resp = client.get("/api/products/", params={"product": "("})
    assert resp.status_code == 400
    assert resp.json()["provider"] == "store"


def test_create_then_find_by_name(client, product_payload):
    resp = client.post("/api/products/", json=product_payload(name="Arc Floor Lamp"))
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["ok"] is True
    created = body["result"]
    assert created["_id"]
    assert created["category"]["name"] == "Lighting"

    found = _list(client, product="Arc Floor")
    assert [p["_id"] for p in found["payload"]] == [created["_id"]]


def test_discount_boundary(client, product_payload):
    resp = client.post("/api/products/", json=product_payload(discount=50))
    assert resp.status_code == 201, resp.text

    resp = client.post("/api/products/", json=product_payload(discount=51))
    assert resp.status_code == 400
    body = resp.json()
    assert body["type"] == "ValidationError"
    assert [e["field"] for e in body["errors"]] == ["discount"]


def test_create_requires_positive_price_and_name(client, product_payload):
    payload = product_payload(price=0)
    del payload["name"]
    resp = client.post("/api/products/", json=payload)
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["errors"]}
    assert fields == {"name", "price"}


def test_create_rejects_unknown_references(client, product_payload):
    resp = client.post("/api/products/", json=product_payload(categoryId=new_id()))
    assert resp.status_code == 400
    body = resp.json()
    assert body["provider"] == "catalog"
    assert [e["field"] for e in body["errors"]] == ["categoryId"]

    resp = client.post("/api/products/", json=product_payload(supplierId="nope"))
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "supplierId"
    assert _list(client)["total"] == 0


def test_get_by_id(client, make_product):
    product = make_product(name="Wall Sconce")
    resp = client.get(f"/api/products/{product['_id']}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Wall Sconce"

    resp = client.get(f"/api/products/{new_id()}")
    assert resp.status_code == 404


def test_patch_updates_fields(client, make_product):
    product = make_product(name="Desk Lamp", discount=0)
    resp = client.patch(f"/api/products/{product['_id']}", json={"discount": 30, "description": "On sale"})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["ok"] is True
    assert body["result"]["discount"] == pytest.approx(30)

    fetched = client.get(f"/api/products/{product['_id']}").json()
    assert fetched["description"] == "On sale"
    assert fetched["name"] == "Desk Lamp"


def test_patch_validates_partial_payload(client, make_product):
    product = make_product()
    pid = product["_id"]
    assert client.patch(f"/api/products/{pid}", json={"price": -1}).status_code == 400
    assert client.patch(f"/api/products/{pid}", json={"discount": 51}).status_code == 400
    assert client.patch(f"/api/products/{pid}", json={"name": None}).status_code == 400
    assert client.patch(f"/api/products/{pid}", json={"colour": "red"}).status_code == 400
    assert client.patch(f"/api/products/{pid}", json={"categoryId": new_id()}).status_code == 400


def test_patch_missing_product_is_not_found(client):
    resp = client.patch(f"/api/products/{new_id()}", json={"stock": 3})
    assert resp.status_code == 404
    assert resp.json()["ok"] is False


def test_delete_product(client, make_product):
    product = make_product(name="Old Lamp")
    resp = client.delete(f"/api/products/{product['_id']}")
    assert resp.status_code == 200
    assert resp.json()["result"]["name"] == "Old Lamp"
    assert _list(client)["total"] == 0

    resp = client.delete(f"/api/products/{product['_id']}")
    assert resp.status_code == 410


def test_delete_rejects_malformed_id(client):
    resp = client.delete("/api/products/not-an-id")
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "id"


def test_dangling_reference_is_listed_without_population(client, make_product, category):
    make_product(name="Orphan")
    assert client.delete(f"/api/categories/{category['_id']}").status_code == 200
    item = _list(client)["payload"][0]
    assert item["categoryId"] == category["_id"]
    assert item["category"] is None


def test_security_headers(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_create_keeps_missing_value_markers(client, product_payload):
    resp = client.post("/api/products/", json=product_payload(name="NA", description="null"))
    assert resp.status_code == 201, resp.text
    created = resp.json()["result"]
    assert created["name"] == "NA"
    assert created["description"] == "null"

    found = _list(client, product="NA")
    assert [p["_id"] for p in found["payload"]] == [created["_id"]]
    assert found["payload"][0]["description"] == "null"

    fetched = client.get(f"/api/products/{created['_id']}").json()
    assert fetched["name"] == "NA"


def test_patch_unknown_id_wins_over_invalid_body(client, make_product):
    resp = client.patch(f"/api/products/{new_id()}", json={"discount": 99})
    assert resp.status_code == 404
    assert resp.json()["ok"] is False

    product = make_product()
    resp = client.patch(f"/api/products/{product['_id']}", json={"discount": 99})
    assert resp.status_code == 400
    body = resp.json()
    assert body["provider"] == "pydantic"
    assert [e["field"] for e in body["errors"]] == ["discount"]


def test_name_fragment_length_is_capped(client, make_product):
    make_product()
    resp = client.get("/api/products/", params={"product": "(a+)+$" + "a" * 100})
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "product"
    assert client.get("/api/products/", params={"product": "a" * 100}).status_code == 200
