"""Request validation.

Pure functions over an ``InboundRequest``. Each either returns the decoded,
typed payload or raises ``Malformed`` with the reason the request was
rejected. Nothing here touches the database or the blob store.
"""
import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple

from webapp.errors import Malformed, Reason

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ID_RE = re.compile(r"[0-9]+")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 12

QUANTITY_MIN = 0
QUANTITY_MAX = 100

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png"})
UPLOAD_FIELD = "file"


@dataclass(frozen=True)
class Upload:
    field_name: str
    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class InboundRequest:
    """The parts of an HTTP request the validators look at."""

    query: Mapping[str, str] = field(default_factory=dict)
    content_length: int = 0
    chunked: bool = False
    credentials: Optional[Tuple[str, str]] = None
    has_authorization: bool = False
    body: bytes = b""
    files: Tuple[Upload, ...] = ()

    @property
    def has_body(self):
        return self.content_length > 0 or self.chunked


# ---------------------------------------------------------------------------
# Decoded payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AccountRegistration:
    first_name: str
    last_name: str
    username: str
    password: str


@dataclass(frozen=True)
class AccountUpdate:
    first_name: str
    last_name: str
    password: str


class ProductField(str, Enum):
    NAME = "name"
    DESCRIPTION = "description"
    SKU = "sku"
    MANUFACTURER = "manufacturer"
    QUANTITY = "quantity"


@dataclass(frozen=True)
class ProductChange:
    """One validated field of a partial product update."""

    field: ProductField
    value: object


@dataclass(frozen=True)
class ProductPatch:
    changes: Tuple[ProductChange, ...]

    def as_fields(self):
        return {change.field.value: change.value for change in self.changes}


@dataclass(frozen=True)
class ProductDraft:
    name: str
    description: str
    sku: str
    manufacturer: str
    quantity: int

    def as_fields(self):
        return {f.value: getattr(self, f.value) for f in ProductField}


# ---------------------------------------------------------------------------
# Per-field rules
# ---------------------------------------------------------------------------

def _text(name, value):
    if not isinstance(value, str):
        raise Malformed(Reason.INVALID_VALUE, f"{name} must be a string")
    if not value.strip():
        raise Malformed(Reason.INVALID_VALUE, f"{name} must not be empty")
    return value


def _quantity(name, value):
    # bool is an int subclass and floats never count, even 50.0
    if type(value) is not int:
        raise Malformed(Reason.INVALID_VALUE, f"{name} must be an integer")
    if not QUANTITY_MIN <= value <= QUANTITY_MAX:
        raise Malformed(
            Reason.OUT_OF_RANGE, f"{name} must be within [{QUANTITY_MIN}, {QUANTITY_MAX}]"
        )
    return value


def _password(name, value):
    _text(name, value)
    if not PASSWORD_MIN_LENGTH <= len(value) <= PASSWORD_MAX_LENGTH:
        raise Malformed(
            Reason.INVALID_VALUE,
            f"{name} must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters",
        )
    return value


def _email(name, value):
    _text(name, value)
    normalized = value.lower()
    if not EMAIL_RE.match(normalized):
        raise Malformed(Reason.INVALID_EMAIL, value)
    return normalized


PRODUCT_RULES = {
    ProductField.NAME: _text,
    ProductField.DESCRIPTION: _text,
    ProductField.SKU: _text,
    ProductField.MANUFACTURER: _text,
    ProductField.QUANTITY: _quantity,
}

REGISTRATION_RULES = {
    "first_name": _text,
    "last_name": _text,
    "username": _email,
    "password": _password,
}

ACCOUNT_UPDATE_RULES = {
    "first_name": _text,
    "last_name": _text,
    "password": _password,
}


# ---------------------------------------------------------------------------
# Request shape
# ---------------------------------------------------------------------------

def parse_id(raw):
    """Path identifiers must be plain non-negative integers."""
    if not isinstance(raw, str) or not ID_RE.fullmatch(raw):
        raise Malformed(Reason.INVALID_ID, repr(raw))
    return int(raw)


def check_read(req, anonymous=True):
    """Reads carry no query string, no body and, when anonymous, no credentials."""
    if req.query:
        raise Malformed(Reason.QUERY_STRING)
    if req.has_body:
        raise Malformed(Reason.BODY_PRESENT)
    if anonymous and req.has_authorization:
        raise Malformed(Reason.CREDENTIALS_PRESENT)


def check_write(req, anonymous=False):
    if req.query:
        raise Malformed(Reason.QUERY_STRING)
    if not req.has_body:
        raise Malformed(Reason.BODY_MISSING)
    if anonymous and req.has_authorization:
        raise Malformed(Reason.CREDENTIALS_PRESENT)


def decode_object(req):
    try:
        payload = json.loads(req.body)
    except (TypeError, ValueError, RecursionError):
        raise Malformed(Reason.INVALID_JSON)
    if not isinstance(payload, dict):
        raise Malformed(Reason.INVALID_JSON, "expected an object")
    return payload


def _reject_unknown(payload, known):
    unknown = sorted(set(payload) - set(known))
    if unknown:
        raise Malformed(Reason.UNKNOWN_FIELD, ", ".join(unknown))


def _require_all(payload, rules):
    values = {}
    for name, rule in rules.items():
        if name not in payload or payload[name] is None:
            raise Malformed(Reason.MISSING_FIELD, name)
        values[name] = rule(name, payload[name])
    return values


# ---------------------------------------------------------------------------
# Operation validators
# ---------------------------------------------------------------------------

def validate_registration(req):
    check_write(req, anonymous=True)
    payload = decode_object(req)
    _reject_unknown(payload, REGISTRATION_RULES)
    return AccountRegistration(**_require_all(payload, REGISTRATION_RULES))


def validate_account_update(req):
    check_write(req)
    payload = decode_object(req)
    _reject_unknown(payload, ACCOUNT_UPDATE_RULES)
    return AccountUpdate(**_require_all(payload, ACCOUNT_UPDATE_RULES))


def validate_product(req):
    """Create and replace: every product field is required."""
    check_write(req)
    payload = decode_object(req)
    _reject_unknown(payload, [f.value for f in ProductField])
    rules = {f.value: rule for f, rule in PRODUCT_RULES.items()}
    return ProductDraft(**_require_all(payload, rules))


def validate_product_patch(req):
    """Patch: any non-empty subset of the product fields."""
    check_write(req)
    payload = decode_object(req)
    _reject_unknown(payload, [f.value for f in ProductField])
    if not payload:
        raise Malformed(Reason.MISSING_FIELD, "no fields to update")

    changes = []
    for name, value in payload.items():
        product_field = ProductField(name)
        rule = PRODUCT_RULES[product_field]
        changes.append(ProductChange(product_field, rule(name, value)))
    return ProductPatch(tuple(changes))


def validate_upload(req):
    """Exactly one image under the ``file`` field, of an allowed type."""
    if req.query:
        raise Malformed(Reason.QUERY_STRING)
    if len(req.files) != 1:
        raise Malformed(Reason.FILE_MISSING, f"{len(req.files)} files attached")

    upload = req.files[0]
    if upload.field_name != UPLOAD_FIELD or not upload.filename:
        raise Malformed(Reason.FILE_MISSING)
    if upload.content_type not in ALLOWED_IMAGE_TYPES:
        raise Malformed(Reason.FILE_TYPE, upload.content_type)
    return upload
