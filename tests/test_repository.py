"""Tests for repository error classification."""
from unittest.mock import patch

import pytest
from sqlalchemy.exc import DataError, OperationalError
from sqlalchemy.orm import Session

from webapp.errors import (
    Malformed,
    StoreError,
    StoreUnavailable,
    from_store_error,
)
from webapp.models.account import Account
from webapp.models.image import Image
from webapp.models.product import Product


def account(username="repo@example.com"):
    return Account(first_name="R", last_name="Epo", username=username, password="hash")


def test_create_and_find(services):
    repo = services.repository
    created = repo.create(account())

    assert repo.find(Account, created.id) is created
    assert repo.find_by(Account, username="repo@example.com") is created
    assert repo.find_all(Account) == [created]
    assert repo.find(Account, 999) is None


def test_constraint_violation_is_classified(services):
    repo = services.repository
    repo.create(account())

    with pytest.raises(StoreError) as excinfo:
        repo.create(account())
    assert excinfo.value.is_constraint
    assert isinstance(from_store_error(excinfo.value), Malformed)

    # session is usable again after the rollback
    assert len(repo.find_all(Account)) == 1


def test_connectivity_failure_is_classified(services):
    repo = services.repository
    boom = OperationalError("SELECT", {}, Exception("connection refused"))
    with patch.object(Session, "get", side_effect=boom):
        with pytest.raises(StoreError) as excinfo:
            repo.find(Account, 1)
    assert excinfo.value.kind == StoreError.CONNECTIVITY
    assert isinstance(from_store_error(excinfo.value), StoreUnavailable)


def test_update_and_delete_where(services):
    repo = services.repository
    owner = repo.create(account())
    product = repo.create(
        Product(
            name="A", description="B", sku="C", manufacturer="D",
            quantity=1, owner_user_id=owner.id,
        )
    )
    repo.update(product, {"quantity": 2})
    assert repo.find(Product, product.id).quantity == 2

    for name in ("a.png", "b.png"):
        repo.create(Image(product_id=product.id, file_name=name, s3_bucket_path=name))
    assert len(repo.find_all_by(Image, product_id=product.id)) == 2

    assert repo.delete_where(Image, "product_id", product.id) == 2
    assert repo.find_all_by(Image, product_id=product.id) == []

    repo.delete(product)
    assert repo.find(Product, product.id) is None


def test_rejected_value_is_classified_as_constraint(services):
    repo = services.repository
    too_long = DataError(
        "INSERT", {}, Exception("value too long for type character varying(255)")
    )
    with patch.object(Session, "flush", side_effect=too_long):
        with pytest.raises(StoreError) as excinfo:
            repo.create(account())
    assert excinfo.value.is_constraint
    assert isinstance(from_store_error(excinfo.value), Malformed)
