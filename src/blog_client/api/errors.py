from __future__ import annotations


class BlogApiError(Exception):
    """Base class for every failure talking to the blog API."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(BlogApiError):
    pass


class HttpStatusError(BlogApiError):
    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message or f"Error {status_code}")
        self.status_code = status_code
        self.server_message = message


class MalformedResponseError(BlogApiError):
    pass
