"""
Error taxonomy for account operations.

Every failure carries the HTTP status it is reported with, so the HTTP layer
only has to serialise it. Client-fault categories share status 400.
"""


class AccountError(Exception):
    """Base class for failures reported back to the client."""

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(AccountError):
    """Missing or malformed input."""
    default_message = "Invalid user data"


class ConflictError(AccountError):
    """Email already used by another account."""
    default_message = "Email has already been registered"


class NotFoundError(AccountError):
    """Referenced account does not exist."""
    default_message = "User not found"


class AuthenticationError(AccountError):
    """Credentials do not match."""
    default_message = "Invalid email or password"


class NotAuthorizedError(AccountError):
    """Missing, invalid or expired session token on a protected route."""
    status_code = 401
    default_message = "Not authorized, please login"


class InternalError(AccountError):
    """Store or infrastructure failure. Detail stays in the server log."""
    status_code = 500
    default_message = "Internal server error"
