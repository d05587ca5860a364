"""Principal resolution and ownership checks."""
import logging

from webapp.errors import Forbidden, StoreError, Unauthenticated, from_store_error
from webapp.models.account import Account

logger = logging.getLogger(__name__)


class Authorizer:
    def __init__(self, repository, hasher):
        self.repository = repository
        self.hasher = hasher

    def authenticate(self, credentials):
        """Resolve the account behind a (username, password) pair.

        Usernames are matched case-insensitively since they are stored
        lowercased at registration.
        """
        if not credentials:
            raise Unauthenticated("credentials required")

        username, password = credentials
        if not username or password is None:
            raise Unauthenticated("credentials required")

        try:
            account = self.repository.find_by(Account, username=username.lower())
        except StoreError as e:
            raise from_store_error(e) from e
        if account is None:
            logger.info("Cannot find user: %s", username)
            raise Unauthenticated("unknown user")
        if not self.hasher.verify(password, account.password):
            logger.info("Password does not match for user: %s", username)
            raise Unauthenticated("bad password")
        return account

    @staticmethod
    def require_self(principal, account_id):
        if principal.id != account_id:
            raise Forbidden(f"account {principal.id} cannot access account {account_id}")

    @staticmethod
    def require_owner(principal, product):
        """Only call once ``product`` is known to exist."""
        if not product.is_owned_by(principal):
            raise Forbidden(
                f"account {principal.id} does not own product {product.id}"
            )
