from functools import wraps
from flask import current_app, request
from errors import NotAuthorizedError
from tokens import TokenService, TokenError
import logging

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Cookie side of the session: the signed token travels in an HTTP-only
    cookie, set on register/login and cleared on logout.
    """

    def __init__(self, config, token_service: TokenService = None):
        self.config = config
        self.tokens = token_service or TokenService(config)

    def set_session_cookie(self, response, token: str):
        # max_age also emits a matching Expires attribute
        response.set_cookie(
            self.config.COOKIE_NAME, token,
            max_age=self.config.COOKIE_MAX_AGE,
            path=self.config.COOKIE_PATH,
            httponly=self.config.COOKIE_HTTPONLY,
            secure=self.config.COOKIE_SECURE,
            samesite=self.config.COOKIE_SAMESITE,
        )

    def clear_session_cookie(self, response):
        response.set_cookie(
            self.config.COOKIE_NAME, '',
            expires=0,
            path=self.config.COOKIE_PATH,
            httponly=self.config.COOKIE_HTTPONLY,
            secure=self.config.COOKIE_SECURE,
            samesite=self.config.COOKIE_SAMESITE,
        )

    def get_token(self, req) -> str:
        return req.cookies.get(self.config.COOKIE_NAME)

    def authenticate(self, req) -> str:
        """
        Resolve the caller's account id from the session cookie.

        Raises:
            NotAuthorizedError: cookie missing, tampered with or expired.
        """
        token = self.get_token(req)
        if not token:
            raise NotAuthorizedError()

        try:
            return self.tokens.verify_token(token)
        except TokenError as e:
            logger.warning(f"Rejected session token from {req.remote_addr}: {e}")
            raise NotAuthorizedError()

    def is_authenticated(self, req) -> bool:
        """
        Session status check. Never raises: a missing, tampered or expired
        token all report False.
        """
        token = self.get_token(req)
        if not token:
            return False

        try:
            self.tokens.verify_token(token)
        except TokenError as e:
            logger.debug(f"Session status with unusable token: {e}")
            return False
        return True


def get_session_manager() -> SessionManager:
    return current_app.extensions['session_manager']


def login_required(view):
    """
    Decorator for route handlers that require an authenticated user.
    The resolved account id is passed to the view as `caller_id`.
    """
    @wraps(view)
    def wrapped(*args, **kwargs):
        kwargs['caller_id'] = get_session_manager().authenticate(request)
        return view(*args, **kwargs)
    return wrapped
