from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError


class PasswordManager:
    """
    One-way salted password hashing using Argon2id
    (resistant to GPU cracking and side-channel attacks).

    Hashes are self-describing: salt and cost parameters are encoded in the
    stored string, so verification never needs the config that produced them.
    """

    def __init__(self, config):
        self.ph = PasswordHasher(
            time_cost=config.ARGON2_TIME_COST,
            memory_cost=config.ARGON2_MEMORY_COST,
            parallelism=config.ARGON2_PARALLELISM,
            hash_len=config.ARGON2_HASH_LENGTH,
            salt_len=config.ARGON2_SALT_LENGTH,
        )
        self._dummy_hash = None

    def hash_password(self, password: str) -> str:
        return self.ph.hash(password)

    def verify_password(self, hash: str, password: str) -> bool:
        try:
            return self.ph.verify(hash, password)
        except VerificationError:
            # VerifyMismatchError included
            return False
        except InvalidHashError:
            return False

    def burn_verification(self, password: str) -> None:
        """
        Run a verification that cannot succeed.
        Used when no account matches so that a failed login costs the same
        whether or not the email exists.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.ph.hash("not-a-real-password")
        self.verify_password(self._dummy_hash, password)
