from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Iterator

import httpx
import pytest

from blog_client.api.client import BlogClient
from blog_client.schema import LoginResult
from blog_client.session import Session


NOW = datetime(2024, 5, 1, 12, 10, tzinfo=timezone.utc)
FIXTURES = Path(__file__).parent / "fixtures"


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


class FakeBlogApi:
    """In-memory stand-in for the blog REST API, served through httpx.MockTransport."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now
        self.posts: list[dict[str, Any]] = []
        self.comments: list[dict[str, Any]] = []
        self.users: dict[str, dict[str, str]] = {
            "alice@example.com": {"username": "Alice", "password": "secret"},
        }
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self._next_id = 100

    def add_post(self, post_id: int, title: str, author: str, minutes_ago: float, content: str = "body") -> None:
        self.posts.append(
            {
                "id": post_id,
                "title": title,
                "content": content,
                "authorName": author,
                "createdAt": _iso(self.now - timedelta(minutes=minutes_ago)),
            }
        )

    def add_comment(
        self,
        comment_id: int,
        post_id: int,
        parent_id: int | None,
        author: str,
        minutes_ago: float,
        content: str = "text",
    ) -> None:
        self.comments.append(
            {
                "id": comment_id,
                "postId": post_id,
                "parentId": parent_id,
                "content": content,
                "authorName": author,
                "createdAt": _iso(self.now - timedelta(minutes=minutes_ago)),
            }
        )

    def load_comments(self, name: str) -> None:
        self.comments.extend(json.loads((FIXTURES / name).read_text(encoding="utf-8")))

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "Server exploded"})

        method = request.method
        parts = [p for p in request.url.path.split("/") if p]
        body = json.loads(request.content) if request.content else {}

        if parts == ["posts"] and method == "GET":
            return httpx.Response(200, json=self.posts)
        if parts == ["posts"] and method == "POST":
            post = {
                "id": self._new_id(),
                "title": body["title"],
                "content": body["content"],
                "authorName": "Alice",
                "createdAt": _iso(self.now),
            }
            self.posts.append(post)
            return httpx.Response(201, json=post)
        if len(parts) == 2 and parts[0] == "posts":
            return self._mutate(self.posts, int(parts[1]), method, body)

        if len(parts) == 3 and parts[:2] == ["comments", "post"] and method == "GET":
            post_id = int(parts[2])
            return httpx.Response(200, json=[c for c in self.comments if c["postId"] == post_id])
        if parts == ["comments"] and method == "POST":
            comment = {
                "id": self._new_id(),
                "postId": body["postId"],
                "parentId": body["parentId"],
                "content": body["content"],
                "authorName": body["authorName"],
                "createdAt": _iso(self.now),
            }
            self.comments.append(comment)
            return httpx.Response(201, json=comment)
        if len(parts) == 2 and parts[0] == "comments":
            return self._mutate(self.comments, int(parts[1]), method, body)

        if parts == ["authors", "login"]:
            user = self.users.get(body.get("email"))
            if user is None or user["password"] != body.get("password"):
                return httpx.Response(401, json={"message": "Invalid credentials"})
            return httpx.Response(
                200,
                json={"username": user["username"], "id": 8},
                headers={"Set-Cookie": "sid=abc123; Path=/"},
            )
        if parts == ["authors", "register"]:
            if body["email"] in self.users:
                return httpx.Response(409, json={"message": "Email already registered"})
            self.users[body["email"]] = {"username": body["username"], "password": body["password"]}
            return httpx.Response(201, json={"username": body["username"]})

        return httpx.Response(404)

    def _mutate(self, items: list[dict[str, Any]], item_id: int, method: str, body: dict[str, Any]) -> httpx.Response:
        item = next((i for i in items if i["id"] == item_id), None)
        if item is None:
            return httpx.Response(404, json={"message": "Not found"})
        if method == "PUT":
            item.update(body)
            return httpx.Response(200, json=item)
        if method == "DELETE":
            items.remove(item)
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def api() -> FakeBlogApi:
    return FakeBlogApi()


@pytest.fixture
def client(api: FakeBlogApi) -> Iterator[BlogClient]:
    blog_client = BlogClient("http://blog.test", transport=httpx.MockTransport(api.handler))
    yield blog_client
    blog_client.close()


@pytest.fixture
def session(tmp_path: Path) -> Session:
    return Session(tmp_path / "session.json")


@pytest.fixture
def alice_session(session: Session) -> Session:
    session.login(LoginResult(username="Alice"))
    return session
