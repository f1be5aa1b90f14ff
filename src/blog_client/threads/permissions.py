from __future__ import annotations

from datetime import datetime, timedelta, timezone

from blog_client.schema import Comment, Post


EDIT_WINDOW = timedelta(minutes=15)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def can_modify(
    author_name: str | None,
    created_at: datetime | None,
    viewer: str | None,
    now: datetime | None = None,
) -> bool:
    """Whether ``viewer`` may edit or delete a record.

    The viewer must be the record's author (names compared case-insensitively)
    and no more than ``EDIT_WINDOW`` may have passed since ``created_at``; the
    boundary itself is still inside the window. Missing values give False.
    """
    if not viewer or not author_name:
        return False
    if author_name.casefold() != viewer.casefold():
        return False
    if created_at is None:
        return False

    current = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    return current - _as_utc(created_at) <= EDIT_WINDOW


def can_modify_record(record: Post | Comment, viewer: str | None, now: datetime | None = None) -> bool:
    return can_modify(record.author_name, record.created_at, viewer, now)
