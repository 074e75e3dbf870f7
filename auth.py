"""
Account Module
User registration, credential checks and profile management.
"""

import logging
from typing import Dict, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from models import User
from crypto import PasswordManager
from errors import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from utils import Validator

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('name', 'photo', 'phone', 'bio')


class AccountService:
    """
    Account operations over the user store.

    Every operation validates its input before touching the store and raises
    an AccountError subclass on failure; nothing is written on a failed call.
    """

    def __init__(self, db_session: DBSession, config, passwords: PasswordManager = None):
        self.db = db_session
        self.config = config
        self.passwords = passwords or PasswordManager(config)

    def register_user(self, name: str, email: str, password: str) -> User:
        """
        Register new user.

        Checks:
        - All fields present
        - Password minimum length
        - Email uniqueness (advisory lookup, then the store's unique index)
        """
        Validator.require("Please fill in all required fields", name, email, password)

        if not Validator.validate_password(password, self.config.PASSWORD_MIN_LENGTH):
            raise ValidationError(
                f"Password must be up to {self.config.PASSWORD_MIN_LENGTH} characters"
            )

        # Check if user already exists
        if self._find_by_email(email):
            raise ConflictError("Email has already been registered")

        user = User(
            name=name,
            email=email,
            password_hash=self.passwords.hash_password(password),
        )
        self.db.add(user)

        try:
            self._commit()
        except IntegrityError:
            # Lost a race against a concurrent registration
            self.db.rollback()
            raise ConflictError("Email has already been registered")

        logger.info(f"Registered user {user.id}")
        return user

    def authenticate_user(self, email: str, password: str) -> User:
        """
        Check credentials.
        Unknown email and wrong password fail identically, in content and
        (roughly) in time, to prevent account enumeration.
        """
        Validator.require("Please add email and password", email, password)

        user = self._find_by_email(email)

        if not user:
            self.passwords.burn_verification(password)
            logger.warning("Failed login: unknown email")
            raise AuthenticationError("Invalid email or password")

        if not self.passwords.verify_password(user.password_hash, password):
            logger.warning(f"Failed login for user {user.id}: invalid password")
            raise AuthenticationError("Invalid email or password")

        logger.info(f"User {user.id} logged in")
        return user

    def get_user(self, caller_id: str) -> User:
        user = self.db.get(User, caller_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, caller_id: str, fields: Dict) -> User:
        """
        Update name/photo/phone/bio. Absent or empty values keep the current
        value; any other non-string value is rejected before anything changes.
        Email cannot be changed here: it is re-set to itself.
        """
        user = self.get_user(caller_id)

        changes = {}
        for field in PROFILE_FIELDS:
            value = Validator.optional_string(fields.get(field))
            if value is not None:
                changes[field] = value

        user.email = user.email
        for field, value in changes.items():
            setattr(user, field, value)

        self._commit()
        return user

    def change_password(
        self,
        caller_id: str,
        old_password: Optional[str],
        new_password: Optional[str]
    ) -> None:
        """Replace the password hash after verifying the current password"""
        user = self.db.get(User, caller_id)
        if not user:
            raise NotFoundError("User not found, please signup")

        Validator.require("Please add old and new password", old_password, new_password)

        if not self.passwords.verify_password(user.password_hash, old_password):
            logger.warning(f"Password change for user {user.id}: old password mismatch")
            raise AuthenticationError("Old password is incorrect")

        user.password_hash = self.passwords.hash_password(new_password)
        self._commit()

        logger.info(f"Password changed for user {user.id}")

    def _find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def _commit(self):
        """Commit, turning store failures into InternalError"""
        try:
            self.db.commit()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Store write failed")
            raise InternalError() from e
