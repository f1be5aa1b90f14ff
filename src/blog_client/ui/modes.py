from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union


EntityKey = tuple[str, int]


def post_key(post_id: int) -> EntityKey:
    return ("post", post_id)


def comment_key(comment_id: int) -> EntityKey:
    return ("comment", comment_id)


@dataclass(frozen=True)
class Viewing:
    pass


@dataclass(frozen=True)
class Editing:
    content: str
    title: str | None = None


@dataclass(frozen=True)
class Replying:
    post_id: int
    parent_id: int | None = None
    content: str = ""


Mode = Union[Viewing, Editing, Replying]

VIEWING = Viewing()


class ModeTable:
    """What each post or comment is currently doing on the page.

    Entities not in the table are viewing. At most one entity is replying.
    Editing and replying on one entity share its key, so setting a reply replaces an
    edit on the same key; PostsPage.start_reply refuses in that case.
    """

    def __init__(self) -> None:
        self._modes: dict[EntityKey, Mode] = {}

    def get(self, key: EntityKey) -> Mode:
        return self._modes.get(key, VIEWING)

    def set(self, key: EntityKey, mode: Mode) -> None:
        if isinstance(mode, Viewing):
            self._modes.pop(key, None)
            return
        if isinstance(mode, Replying):
            for other in [k for k, m in self._modes.items() if isinstance(m, Replying)]:
                del self._modes[other]
        self._modes[key] = mode

    def clear(self, key: EntityKey) -> None:
        self._modes.pop(key, None)

    def update_draft(self, key: EntityKey, content: str, title: str | None = None) -> bool:
        mode = self.get(key)
        if isinstance(mode, Editing):
            self._modes[key] = replace(mode, content=content, title=title if title is not None else mode.title)
            return True
        if isinstance(mode, Replying):
            self._modes[key] = replace(mode, content=content)
            return True
        return False

    def active_reply(self) -> EntityKey | None:
        for key, mode in self._modes.items():
            if isinstance(mode, Replying):
                return key
        return None
