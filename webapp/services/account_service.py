import logging
from datetime import datetime, timezone

from webapp.errors import (
    Malformed,
    NotificationError,
    Reason,
    StoreError,
    from_store_error,
)
from webapp.models.account import Account
from webapp.responses import Outcome, serialize_account
from webapp.services import validation

logger = logging.getLogger(__name__)


class AccountService:
    """Registration, self-read and self-update of accounts."""

    def __init__(self, repository, hasher, notifier, authorizer):
        self.repository = repository
        self.hasher = hasher
        self.notifier = notifier
        self.authorizer = authorizer

    def create(self, req):
        registration = validation.validate_registration(req)

        try:
            existing = self.repository.find_by(
                Account, username=registration.username
            )
            if existing is not None:
                raise Malformed(Reason.DUPLICATE, registration.username)

            account = self.repository.create(
                Account(
                    first_name=registration.first_name,
                    last_name=registration.last_name,
                    username=registration.username,
                    password=self.hasher.hash(registration.password),
                )
            )
        except StoreError as e:
            raise from_store_error(e) from e

        logger.info("Registered account %d for %s", account.id, account.username)
        self._notify_registration(account)
        return Outcome.created(serialize_account(account))

    def _notify_registration(self, account):
        """Best effort: a failed publish never fails the registration."""
        event = {"email": account.username, "first_name": account.first_name}
        try:
            self.notifier.publish(event)
        except NotificationError:
            logger.exception(
                "Registration notification for %s failed", account.username
            )
        else:
            logger.info("Published registration message for %s", account.username)

    def get(self, req, raw_account_id):
        principal = self.authorizer.authenticate(req.credentials)
        account_id = validation.parse_id(raw_account_id)
        validation.check_read(req, anonymous=False)
        self.authorizer.require_self(principal, account_id)
        return Outcome.ok(serialize_account(principal))

    def update(self, req, raw_account_id):
        principal = self.authorizer.authenticate(req.credentials)
        account_id = validation.parse_id(raw_account_id)
        update = validation.validate_account_update(req)
        self.authorizer.require_self(principal, account_id)

        try:
            self.repository.update(
                principal,
                {
                    "first_name": update.first_name,
                    "last_name": update.last_name,
                    "password": self.hasher.hash(update.password),
                    "account_updated": datetime.now(timezone.utc),
                },
            )
        except StoreError as e:
            raise from_store_error(e) from e
        return Outcome.no_content()
