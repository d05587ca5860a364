"""Tests for /v1/product routes."""
from unittest.mock import patch

import pytest
from sqlalchemy.exc import DataError
from sqlalchemy.orm import Session

from webapp.models.image import Image
from webapp.models.product import Product


def test_create_product_sets_owner(client, owner, valid_product, db):
    account, headers = owner
    resp = client.post("/v1/product", json=valid_product, headers=headers)
    assert resp.status_code == 201

    data = resp.get_json()
    assert data["owner_user_id"] == account.id
    assert data["quantity"] == 50
    assert db.session.query(Product).filter_by(owner_user_id=account.id).count() == 1


def test_create_product_quantity_out_of_range(client, owner, valid_product, db):
    _, headers = owner
    resp = client.post(
        "/v1/product", json=dict(valid_product, quantity=150), headers=headers
    )
    assert resp.status_code == 400
    assert db.session.query(Product).count() == 0


@pytest.mark.parametrize("quantity", [-1, 101, 2.5])
def test_create_product_rejects_bad_quantities(client, owner, valid_product, quantity):
    _, headers = owner
    resp = client.post(
        "/v1/product", json=dict(valid_product, quantity=quantity), headers=headers
    )
    assert resp.status_code == 400


def test_create_product_requires_auth(client, valid_product):
    assert client.post("/v1/product", json=valid_product).status_code == 401


def test_create_product_unknown_field(client, owner, valid_product):
    _, headers = owner
    resp = client.post(
        "/v1/product", json=dict(valid_product, owner_user_id=99), headers=headers
    )
    assert resp.status_code == 400


def test_get_product_is_public(client, product):
    resp = client.get(f"/v1/product/{product['id']}")
    assert resp.status_code == 200
    assert resp.get_json()["sku"] == "S"


def test_get_product_rejects_credentials_query_and_body(client, product, owner):
    _, headers = owner
    url = f"/v1/product/{product['id']}"
    assert client.get(url, headers=headers).status_code == 400
    assert client.get(url + "?verbose=1").status_code == 400
    assert client.get(url, data="x").status_code == 400


def test_get_missing_product(client):
    assert client.get("/v1/product/9999").status_code == 404
    assert client.get("/v1/product/abc").status_code == 400


def test_list_products(client, product):
    resp = client.get("/v1/product")
    assert resp.status_code == 200
    assert [p["id"] for p in resp.get_json()] == [product["id"]]


def test_replace_product(client, owner, product, valid_product, db):
    _, headers = owner
    replacement = dict(valid_product, name="Renamed", quantity=0)
    resp = client.put(f"/v1/product/{product['id']}", json=replacement, headers=headers)
    assert resp.status_code == 204

    stored = db.session.get(Product, product["id"])
    assert stored.name == "Renamed"
    assert stored.quantity == 0
    assert stored.date_last_updated.isoformat() >= product["date_last_updated"]


def test_replace_requires_every_field(client, owner, product):
    _, headers = owner
    resp = client.put(
        f"/v1/product/{product['id']}", json={"name": "Only"}, headers=headers
    )
    assert resp.status_code == 400


def test_patch_product(client, owner, product, db):
    _, headers = owner
    resp = client.patch(
        f"/v1/product/{product['id']}", json={"quantity": 7}, headers=headers
    )
    assert resp.status_code == 204

    stored = db.session.get(Product, product["id"])
    assert stored.quantity == 7
    assert stored.name == "X"


def test_patch_by_non_owner_forbidden(client, product, stranger):
    _, stranger_headers = stranger
    resp = client.patch(
        f"/v1/product/{product['id']}", json={"quantity": 7}, headers=stranger_headers
    )
    assert resp.status_code == 403


def test_patch_missing_product_is_not_found_for_non_owner(client, product, stranger):
    _, stranger_headers = stranger
    resp = client.patch("/v1/product/9999", json={"quantity": 7}, headers=stranger_headers)
    assert resp.status_code == 404


def test_patch_cannot_change_owner(client, owner, product, stranger, db):
    _, headers = owner
    stranger_account, _ = stranger
    resp = client.patch(
        f"/v1/product/{product['id']}",
        json={"owner_user_id": stranger_account.id},
        headers=headers,
    )
    assert resp.status_code == 400
    assert db.session.get(Product, product["id"]).owner_user_id == product["owner_user_id"]


def test_delete_missing_product_as_non_owner_is_not_found(client, product, stranger):
    _, stranger_headers = stranger
    assert client.delete("/v1/product/9999", headers=stranger_headers).status_code == 404


def test_delete_by_non_owner_forbidden(client, product, stranger, db):
    _, stranger_headers = stranger
    resp = client.delete(f"/v1/product/{product['id']}", headers=stranger_headers)
    assert resp.status_code == 403
    assert db.session.get(Product, product["id"]) is not None


def test_delete_product_removes_images_first(client, owner, product, db, services, caplog):
    _, headers = owner
    services.repository.create(
        Image(product_id=product["id"], file_name="a.png", s3_bucket_path="1/1/a.png")
    )

    resp = client.delete(f"/v1/product/{product['id']}", headers=headers)
    assert resp.status_code == 204
    assert db.session.get(Product, product["id"]) is None
    assert db.session.query(Image).filter_by(product_id=product["id"]).count() == 0
    assert "1/1/a.png" in caplog.text


def test_delete_product_rejects_body(client, owner, product):
    _, headers = owner
    resp = client.delete(f"/v1/product/{product['id']}", data="x", headers=headers)
    assert resp.status_code == 400


def test_unsupported_product_methods(client, product):
    assert client.options(f"/v1/product/{product['id']}").status_code == 405
    assert client.head(f"/v1/product/{product['id']}").status_code == 405
    assert client.options("/v1/product").status_code == 405
    assert client.delete("/v1/product").status_code == 405


def test_long_text_fields_are_stored(client, owner, valid_product, db):
    _, headers = owner
    long_product = dict(valid_product, name="N" * 300, description="D" * 5000)
    resp = client.post("/v1/product", json=long_product, headers=headers)
    assert resp.status_code == 201
    assert db.session.get(Product, resp.get_json()["id"]).name == "N" * 300


def test_value_rejected_by_database_is_bad_request(client, owner, valid_product):
    _, headers = owner
    too_long = DataError(
        "INSERT", {}, Exception("value too long for type character varying(255)")
    )
    with patch.object(Session, "commit", side_effect=too_long):
        resp = client.post(
            "/v1/product", json=dict(valid_product, name="N" * 300), headers=headers
        )
    assert resp.status_code == 400


def test_deeply_nested_body_is_bad_request(client, owner):
    _, headers = owner
    body = "[" * 200000 + "]" * 200000
    resp = client.post(
        "/v1/product", data=body, content_type="application/json", headers=headers
    )
    assert resp.status_code == 400
