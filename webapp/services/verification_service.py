"""Email verification tokens.

Tokens are issued by the notification consumer into a DynamoDB table keyed
by email; this side only looks them up and discards them once used.
"""
import logging
import time
from dataclasses import dataclass

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class VerificationError(Exception):
    """The verification link is missing, wrong or expired."""


@dataclass
class VerificationToken:
    email: str
    token: str
    ttl: int

    def expired(self, now=None):
        return self.ttl < (now if now is not None else time.time())


class DynamoVerificationStore:
    def __init__(self, table):
        self.table = table

    def lookup(self, email):
        item = self.table.get_item(Key={"email": email}).get("Item")
        if not item:
            return None
        return VerificationToken(
            email=item["email"], token=item["token"], ttl=int(item["ttl"])
        )

    def discard(self, email):
        self.table.delete_item(Key={"email": email})


class DisabledVerificationStore:
    def lookup(self, email):
        return None

    def discard(self, email):
        pass


def build_verification_store(config):
    if not config["DDB_VERIFY_TABLE"]:
        logger.warning("DDB_VERIFY_TABLE not set, email verification disabled")
        return DisabledVerificationStore()
    dynamodb = boto3.resource("dynamodb", region_name=config["AWS_REGION"])
    return DynamoVerificationStore(dynamodb.Table(config["DDB_VERIFY_TABLE"]))


def verify_email(store, email, token, now=None):
    """Consume a verification token. Raises VerificationError on any mismatch."""
    if not email or not token:
        raise VerificationError("Email and token are required.")

    try:
        record = store.lookup(email)
    except (BotoCoreError, ClientError) as e:
        logger.error("Verification lookup failed for %s: %s", email, e)
        raise VerificationError("Invalid or expired verification link.") from e

    if record is None:
        logger.warning("Verification attempt for unknown email: %s", email)
        raise VerificationError("Invalid or expired verification link.")
    if record.token != token:
        logger.warning("Invalid token for email: %s", email)
        raise VerificationError("Invalid or expired verification link.")
    if record.expired(now):
        logger.warning("Expired token for email: %s", email)
        raise VerificationError(
            "Verification link has expired. Please register again."
        )

    try:
        store.discard(email)
    except (BotoCoreError, ClientError):
        logger.exception("Failed to discard verification token for %s", email)

    logger.info("Successfully verified email: %s", email)
    return record
