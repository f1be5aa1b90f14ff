from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Post(ApiModel):
    id: int
    title: str
    content: str
    author_name: str | None = Field(default=None, alias="authorName")
    created_at: datetime | None = Field(default=None, alias="createdAt")


class Comment(ApiModel):
    id: int
    post_id: int = Field(alias="postId")
    parent_id: int | None = Field(default=None, alias="parentId")
    content: str
    author_name: str | None = Field(default=None, alias="authorName")
    created_at: datetime | None = Field(default=None, alias="createdAt")


class CommentNode(Comment):
    children: list[CommentNode] = Field(default_factory=list)


class LoginResult(ApiModel):
    username: str


class SessionState(BaseModel):
    username: str | None = None
    cookies: dict[str, str] = Field(default_factory=dict)
