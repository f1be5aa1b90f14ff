from __future__ import annotations

from datetime import datetime
from typing import Iterable

from blog_client.schema import CommentNode, Post
from blog_client.threads.permissions import can_modify_record
from blog_client.threads.tree import iter_preorder


DIVIDER = "-" * 60
INDENT = "  "
EDITABLE_MARK = "[editable]"


def author_label(author_name: str | None, viewer: str | None) -> str:
    return author_name or viewer or "U"


def _timestamp(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value is not None else ""


def render_post(post: Post, viewer: str | None, now: datetime | None = None) -> str:
    header = f"#{post.id} {post.title}"
    meta = " ".join(
        part
        for part in (
            f"by {post.author_name}" if post.author_name else "",
            _timestamp(post.created_at),
            EDITABLE_MARK if can_modify_record(post, viewer, now) else "",
        )
        if part
    )
    lines = [header]
    if meta:
        lines.append(meta)
    lines.append("")
    lines.append(post.content)
    return "\n".join(lines)


def render_thread(roots: Iterable[CommentNode], viewer: str | None, now: datetime | None = None) -> str:
    lines: list[str] = []
    for depth, node in iter_preorder(roots):
        prefix = INDENT * depth
        label = author_label(node.author_name, viewer)
        mark = f" {EDITABLE_MARK}" if can_modify_record(node, viewer, now) else ""
        lines.append(f"{prefix}#{node.id} {label}{mark}")
        for text_line in node.content.splitlines() or [""]:
            lines.append(f"{prefix}{INDENT}{text_line}")
    if not lines:
        return "No comments yet."
    return "\n".join(lines)


def render_posts(posts: Iterable[Post], viewer: str | None, now: datetime | None = None) -> str:
    blocks = [render_post(post, viewer, now) for post in posts]
    if not blocks:
        return "No posts yet."
    return f"\n{DIVIDER}\n".join(blocks)
