"""API error taxonomy.

Every error carries the HTTP status it maps to. Orchestrators raise these;
the app-level error handler turns them into empty-bodied responses.
"""
from enum import Enum


class Reason(str, Enum):
    """Why a request was classified as malformed."""

    QUERY_STRING = "query_string"
    BODY_PRESENT = "body_present"
    BODY_MISSING = "body_missing"
    CREDENTIALS_PRESENT = "credentials_present"
    INVALID_JSON = "invalid_json"
    UNKNOWN_FIELD = "unknown_field"
    MISSING_FIELD = "missing_field"
    INVALID_VALUE = "invalid_value"
    OUT_OF_RANGE = "out_of_range"
    INVALID_EMAIL = "invalid_email"
    INVALID_ID = "invalid_id"
    DUPLICATE = "duplicate"
    CONSTRAINT = "constraint"
    FILE_MISSING = "file_missing"
    FILE_TYPE = "file_type"


class ApiError(Exception):
    status = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__name__)


class Malformed(ApiError):
    status = 400

    def __init__(self, reason, detail=None):
        self.reason = Reason(reason)
        self.detail = detail
        message = self.reason.value if detail is None else f"{self.reason.value}: {detail}"
        super().__init__(message)


class Unauthenticated(ApiError):
    status = 401


class Forbidden(ApiError):
    status = 403


class NotFound(ApiError):
    status = 404


class MethodNotSupported(ApiError):
    status = 405


class StoreUnavailable(ApiError):
    status = 503


# Collaborator-level errors. These never reach the HTTP layer directly.


class StoreError(Exception):
    """Relational store failure, classified as constraint or connectivity."""

    CONSTRAINT = "constraint"
    CONNECTIVITY = "connectivity"

    def __init__(self, kind, message=""):
        self.kind = kind
        super().__init__(message or kind)

    @property
    def is_constraint(self):
        return self.kind == self.CONSTRAINT


class BlobStoreError(Exception):
    """Blob store put/delete failure."""


class NotificationError(Exception):
    """Notification publish failure."""


def from_store_error(err):
    """Translate a repository error into the API error it surfaces as."""
    if err.is_constraint:
        return Malformed(Reason.CONSTRAINT, str(err))
    return StoreUnavailable(str(err))
