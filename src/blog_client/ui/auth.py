from __future__ import annotations

import logging

from blog_client.api.client import BlogClient
from blog_client.api.errors import BlogApiError, HttpStatusError
from blog_client.session import Session


logger = logging.getLogger(__name__)


def _message(exc: BlogApiError | ValueError, default: str) -> str:
    if isinstance(exc, HttpStatusError):
        return exc.server_message or default
    if isinstance(exc, BlogApiError):
        return exc.message or default
    return str(exc) or default


class LoginForm:
    def __init__(self, client: BlogClient, session: Session) -> None:
        self.client = client
        self.session = session
        self.loading = False
        self.error: str | None = None

    def submit(self, email: str, password: str) -> bool:
        self.error = None
        self.loading = True
        try:
            result = self.client.login(email, password)
        except BlogApiError as e:
            logger.warning("login failed: %s", e.message)
            self.error = _message(e, "Login failed")
            return False
        finally:
            self.loading = False

        self.session.login(result, self.client.cookies)
        logger.info("logged in as %s", result.username)
        return True


class RegisterForm:
    def __init__(self, client: BlogClient) -> None:
        self.client = client
        self.loading = False
        self.success = False
        self.error: str | None = None

    def submit(self, username: str, email: str, password: str) -> bool:
        self.error = None
        self.success = False
        self.loading = True
        try:
            self.client.register(username, email, password)
        except (BlogApiError, ValueError) as e:
            logger.warning("registration failed: %s", e)
            self.error = _message(e, "Registration failed")
            return False
        finally:
            self.loading = False

        self.success = True
        return True
