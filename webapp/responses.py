"""Outcome → response mapping and the outward representation of records."""
from dataclasses import dataclass
from typing import Any

from flask import jsonify


@dataclass(frozen=True)
class Outcome:
    status: int
    body: Any = None

    @classmethod
    def ok(cls, body):
        return cls(200, body)

    @classmethod
    def created(cls, body):
        return cls(201, body)

    @classmethod
    def no_content(cls):
        return cls(204)


def to_response(outcome):
    if outcome.body is None:
        return "", outcome.status
    return jsonify(outcome.body), outcome.status


def error_response(err):
    """Errors go out with an empty body; 401s advertise Basic auth."""
    headers = {}
    if err.status == 401:
        headers["WWW-Authenticate"] = "Basic"
    return "", err.status, headers


def _timestamp(value):
    return value.isoformat() if value is not None else None


def serialize_account(account):
    # password hash is never serialized
    return {
        "id": account.id,
        "first_name": account.first_name,
        "last_name": account.last_name,
        "username": account.username,
        "account_created": _timestamp(account.account_created),
        "account_updated": _timestamp(account.account_updated),
    }


def serialize_product(product):
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "sku": product.sku,
        "manufacturer": product.manufacturer,
        "quantity": product.quantity,
        "date_added": _timestamp(product.date_added),
        "date_last_updated": _timestamp(product.date_last_updated),
        "owner_user_id": product.owner_user_id,
    }


def serialize_image(image):
    return {
        "image_id": image.image_id,
        "product_id": image.product_id,
        "file_name": image.file_name,
        "date_created": _timestamp(image.date_created),
        "s3_bucket_path": image.s3_bucket_path,
    }
