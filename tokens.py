import jwt
import datetime


class TokenError(Exception):
    """Raised when a session token is malformed, tampered with or expired."""


class TokenService:
    """
    Signed, time-limited session tokens (JWT, HS256).
    Nothing is stored server-side: validity is signature + expiry only.
    """

    def __init__(self, config):
        self.secret_key = config.JWT_SECRET_KEY
        self.algorithm = config.JWT_ALGORITHM
        self.lifetime = config.TOKEN_LIFETIME

    def create_token(self, user_id: str) -> str:
        now = datetime.datetime.now(datetime.timezone.utc)
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> str:
        """
        Verify signature and expiry.

        Returns:
            The account identifier the token was issued for.

        Raises:
            TokenError: if the token cannot be trusted.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenError("Token expired")
        except jwt.InvalidTokenError:
            raise TokenError("Invalid token")

        return payload["sub"]
