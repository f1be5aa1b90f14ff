from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from blog_client.api.client import BlogClient
from blog_client.api.errors import BlogApiError
from blog_client.schema import Comment, CommentNode, Post
from blog_client.session import Session
from blog_client.threads.permissions import can_modify_record
from blog_client.threads.tree import build_comment_tree, find_unreachable, flatten_tree
from blog_client.ui.modes import (
    EntityKey,
    Editing,
    ModeTable,
    Replying,
    comment_key,
    post_key,
)


logger = logging.getLogger(__name__)

ANONYMOUS_AUTHOR = "User"
NOT_ELIGIBLE = "Only the author can change this, and only within 15 minutes of posting."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostsPage:
    """State and actions behind the posts view.

    Every action returns True on success. On failure it returns False and
    leaves a readable message in ``error``; nothing is retried.
    """

    def __init__(
        self,
        client: BlogClient,
        session: Session,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.client = client
        self.session = session
        self._clock = clock

        self.posts: list[Post] = []
        self.comments: dict[int, list[CommentNode]] = {}
        self.expanded_post_id: int | None = None
        self.modes = ModeTable()
        self.loading_posts = False
        self.loading_comments = False
        self.error: str | None = None

    @property
    def viewer(self) -> str | None:
        return self.session.viewer

    def now(self) -> datetime:
        return self._clock()

    def can_modify(self, record: Post | Comment) -> bool:
        return can_modify_record(record, self.viewer, self.now())

    def find_post(self, post_id: int) -> Post | None:
        return next((post for post in self.posts if post.id == post_id), None)

    def find_comment(self, comment_id: int) -> CommentNode | None:
        for roots in self.comments.values():
            for node in flatten_tree(roots):
                if node.id == comment_id:
                    return node
        return None

    def _fail(self, action: str, exc: BlogApiError | ValueError) -> bool:
        message = exc.message if isinstance(exc, BlogApiError) else str(exc)
        logger.error("%s failed: %s", action, message)
        self.error = f"{action} failed: {message}"
        return False

    def _refuse(self, message: str) -> bool:
        logger.info("refused: %s", message)
        self.error = message
        return False

    # ---------------------------
    # Loading
    # ---------------------------

    def refresh_posts(self) -> bool:
        self.error = None
        self.loading_posts = True
        try:
            self.posts = self.client.list_posts()
        except BlogApiError as e:
            return self._fail("Loading posts", e)
        finally:
            self.loading_posts = False
        return True

    def refresh_comments(self, post_id: int) -> bool:
        try:
            flat = self.client.list_comments(post_id)
        except BlogApiError as e:
            return self._fail("Loading comments", e)

        dropped = find_unreachable(flat)
        if dropped:
            logger.warning(
                "post %s: %d comment(s) have no reachable parent and are hidden: %s",
                post_id,
                len(dropped),
                [c.id for c in dropped],
            )
        self.comments[post_id] = build_comment_tree(flat)
        return True

    def toggle(self, post_id: int) -> bool:
        if self.expanded_post_id == post_id:
            self.expanded_post_id = None
            return True

        self.error = None
        self.expanded_post_id = post_id
        self.loading_comments = True
        try:
            return self.refresh_comments(post_id)
        finally:
            self.loading_comments = False

    # ---------------------------
    # Posts
    # ---------------------------

    def create_post(self, title: str, content: str) -> bool:
        self.error = None
        if not title.strip() or not content.strip():
            return self._refuse("Title and content are required.")
        try:
            self.client.create_post(title, content)
        except BlogApiError as e:
            return self._fail("Creating post", e)
        return self.refresh_posts()

    def start_edit_post(self, post_id: int) -> bool:
        self.error = None
        post = self.find_post(post_id)
        if post is None:
            return self._refuse(f"Post {post_id} not found.")
        if not self.can_modify(post):
            return self._refuse(NOT_ELIGIBLE)
        self.modes.set(post_key(post_id), Editing(content=post.content, title=post.title))
        return True

    def save_post(self, post_id: int) -> bool:
        self.error = None
        key = post_key(post_id)
        mode = self.modes.get(key)
        post = self.find_post(post_id)
        if not isinstance(mode, Editing) or post is None:
            return self._refuse(f"Post {post_id} is not being edited.")
        if not self.can_modify(post):
            self.modes.clear(key)
            return self._refuse(NOT_ELIGIBLE)
        try:
            self.client.update_post(post_id, mode.title or "", mode.content)
        except (BlogApiError, ValueError) as e:
            return self._fail("Updating post", e)
        self.modes.clear(key)
        return self.refresh_posts()

    def delete_post(self, post_id: int) -> bool:
        self.error = None
        post = self.find_post(post_id)
        if post is None:
            return self._refuse(f"Post {post_id} not found.")
        if not self.can_modify(post):
            return self._refuse(NOT_ELIGIBLE)
        try:
            self.client.delete_post(post_id)
        except BlogApiError as e:
            return self._fail("Deleting post", e)
        self.comments.pop(post_id, None)
        self.modes.clear(post_key(post_id))
        if self.expanded_post_id == post_id:
            self.expanded_post_id = None
        return self.refresh_posts()

    # ---------------------------
    # Comments
    # ---------------------------

    def start_edit_comment(self, comment_id: int) -> bool:
        self.error = None
        comment = self.find_comment(comment_id)
        if comment is None:
            return self._refuse(f"Comment {comment_id} not found.")
        if not self.can_modify(comment):
            return self._refuse(NOT_ELIGIBLE)
        self.modes.set(comment_key(comment_id), Editing(content=comment.content))
        return True

    def save_comment(self, comment_id: int) -> bool:
        self.error = None
        key = comment_key(comment_id)
        mode = self.modes.get(key)
        comment = self.find_comment(comment_id)
        if not isinstance(mode, Editing) or comment is None:
            return self._refuse(f"Comment {comment_id} is not being edited.")
        if not self.can_modify(comment):
            self.modes.clear(key)
            return self._refuse(NOT_ELIGIBLE)
        try:
            self.client.update_comment(comment_id, mode.content)
        except (BlogApiError, ValueError) as e:
            return self._fail("Updating comment", e)
        self.modes.clear(key)
        return self.refresh_comments(comment.post_id)

    def delete_comment(self, comment_id: int) -> bool:
        self.error = None
        comment = self.find_comment(comment_id)
        if comment is None:
            return self._refuse(f"Comment {comment_id} not found.")
        if not self.can_modify(comment):
            return self._refuse(NOT_ELIGIBLE)
        try:
            self.client.delete_comment(comment_id)
        except BlogApiError as e:
            return self._fail("Deleting comment", e)
        self.modes.clear(comment_key(comment_id))
        return self.refresh_comments(comment.post_id)

    # ---------------------------
    # Replies
    # ---------------------------

    def start_reply(self, post_id: int, parent_id: int | None = None) -> EntityKey | None:
        """Open a reply on a post or comment; None if that entity has an unsaved edit."""
        self.error = None
        key = comment_key(parent_id) if parent_id is not None else post_key(post_id)
        if isinstance(self.modes.get(key), Editing):
            self._refuse("Save or cancel your edit before replying.")
            return None
        self.modes.set(key, Replying(post_id=post_id, parent_id=parent_id))
        return key

    def cancel(self, key: EntityKey) -> None:
        self.modes.clear(key)

    def submit_reply(self, key: EntityKey) -> bool:
        self.error = None
        mode = self.modes.get(key)
        if not isinstance(mode, Replying):
            return self._refuse("Nothing to reply to.")
        content = mode.content.strip()
        if not content:
            return self._refuse("Reply content is required.")
        try:
            self.client.create_comment(
                mode.post_id,
                content,
                parent_id=mode.parent_id,
                author_name=self.viewer or ANONYMOUS_AUTHOR,
            )
        except BlogApiError as e:
            return self._fail("Posting reply", e)
        self.modes.clear(key)
        return self.refresh_comments(mode.post_id)
