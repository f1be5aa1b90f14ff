from __future__ import annotations

import logging
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from blog_client.api.errors import HttpStatusError, MalformedResponseError, TransportError
from blog_client.config import BLOG_API_URL, BLOG_REQUEST_TIMEOUT
from blog_client.schema import Comment, LoginResult, Post


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _require_text(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{field} must not be empty")
    return value


class BlogClient:
    """
    Blocking client for the blog REST API:
    - Posts:    /posts, /posts/<id>
    - Comments: /comments, /comments/<id>, /comments/post/<post_id>
    - Authors:  /authors/login, /authors/register

    Every failure is raised as a ``BlogApiError`` subclass.
    """

    def __init__(
        self,
        base_url: str = BLOG_API_URL,
        *,
        cookies: Mapping[str, str] | None = None,
        timeout: float = BLOG_REQUEST_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url,
            headers={"Accept": "application/json"},
            cookies=dict(cookies or {}),
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> BlogClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def cookies(self) -> dict[str, str]:
        return {cookie.name: cookie.value or "" for cookie in self._http.cookies.jar}

    # ---------------------------
    # Transport
    # ---------------------------

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            resp = self._http.request(method, path, json=payload)
        except httpx.TransportError as e:
            logger.warning("request error: %s %s: %s", method, path, e)
            raise TransportError(f"Could not reach the server: {e}") from e

        if not resp.is_success:
            message = None
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("message"):
                message = str(body["message"])
            logger.warning("http %s: %s %s", resp.status_code, method, path)
            raise HttpStatusError(resp.status_code, message)
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {resp.request.url.path} is not JSON") from e

    @classmethod
    def _parse(cls, resp: httpx.Response, model: type[ModelT]) -> ModelT:
        try:
            return model.model_validate(cls._json(resp))
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected {model.__name__} payload: {e}") from e

    @classmethod
    def _parse_list(cls, resp: httpx.Response, model: type[ModelT]) -> list[ModelT]:
        data = cls._json(resp)
        if not isinstance(data, list):
            raise MalformedResponseError(f"Expected a list of {model.__name__} records")
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected {model.__name__} payload: {e}") from e

    @classmethod
    def _parse_optional(cls, resp: httpx.Response, model: type[ModelT]) -> ModelT | None:
        if not resp.content or "json" not in resp.headers.get("content-type", ""):
            return None
        return cls._parse(resp, model)

    # ---------------------------
    # Posts
    # ---------------------------

    def list_posts(self) -> list[Post]:
        return self._parse_list(self._request("GET", "/posts"), Post)

    def create_post(self, title: str, content: str) -> Post | None:
        payload = {"title": _require_text(title, "title"), "content": _require_text(content, "content")}
        return self._parse_optional(self._request("POST", "/posts", payload), Post)

    def update_post(self, post_id: int, title: str, content: str) -> Post | None:
        payload = {"title": _require_text(title, "title"), "content": _require_text(content, "content")}
        return self._parse_optional(self._request("PUT", f"/posts/{post_id}", payload), Post)

    def delete_post(self, post_id: int) -> None:
        self._request("DELETE", f"/posts/{post_id}")

    # ---------------------------
    # Comments
    # ---------------------------

    def list_comments(self, post_id: int) -> list[Comment]:
        return self._parse_list(self._request("GET", f"/comments/post/{post_id}"), Comment)

    def create_comment(
        self,
        post_id: int,
        content: str,
        parent_id: int | None = None,
        author_name: str | None = None,
    ) -> Comment | None:
        payload = {
            "postId": post_id,
            "parentId": parent_id,
            "authorName": author_name,
            "content": _require_text(content, "content"),
        }
        return self._parse_optional(self._request("POST", "/comments", payload), Comment)

    def update_comment(self, comment_id: int, content: str) -> Comment | None:
        payload = {"content": _require_text(content, "content")}
        return self._parse_optional(self._request("PUT", f"/comments/{comment_id}", payload), Comment)

    def delete_comment(self, comment_id: int) -> None:
        self._request("DELETE", f"/comments/{comment_id}")

    # ---------------------------
    # Authors
    # ---------------------------

    def login(self, email: str, password: str) -> LoginResult:
        resp = self._request("POST", "/authors/login", {"email": email, "password": password})
        return self._parse(resp, LoginResult)

    def register(self, username: str, email: str, password: str) -> None:
        payload = {"username": _require_text(username, "username"), "email": email, "password": password}
        self._request("POST", "/authors/register", payload)
