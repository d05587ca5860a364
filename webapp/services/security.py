"""Credential hashing (argon2)."""
from argon2 import PasswordHasher, exceptions as argon_exc


class CredentialHasher:
    def __init__(self, time_cost=3, memory_cost=65536, parallelism=4):
        self._ph = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    @classmethod
    def from_config(cls, config):
        return cls(
            time_cost=config["PASSWORD_HASH_TIME_COST"],
            memory_cost=config["PASSWORD_HASH_MEMORY_COST"],
            parallelism=config["PASSWORD_HASH_PARALLELISM"],
        )

    def hash(self, plaintext: str) -> str:
        return self._ph.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        if not digest:
            return False
        try:
            return self._ph.verify(digest, plaintext)
        except (
            argon_exc.VerifyMismatchError,
            argon_exc.VerificationError,
            argon_exc.InvalidHash,
        ):
            return False
