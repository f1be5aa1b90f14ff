from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping

from pydantic import ValidationError

from blog_client.schema import LoginResult, SessionState


logger = logging.getLogger(__name__)


class Session:
    """Viewer identity and cookie jar, persisted to a JSON file.

    Load once at startup with ``Session.load``; ``login`` saves, ``logout``
    clears the state and removes the file.
    """

    def __init__(self, path: Path, state: SessionState | None = None) -> None:
        self.path = Path(path)
        self.state = state or SessionState()

    @classmethod
    def load(cls, path: Path) -> Session:
        path = Path(path)
        if not path.exists():
            return cls(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            state = SessionState.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("ignoring unreadable session file %s: %s", path, exc)
            return cls(path)
        return cls(path, state)

    @property
    def viewer(self) -> str | None:
        return self.state.username or None

    @property
    def cookies(self) -> dict[str, str]:
        return dict(self.state.cookies)

    @property
    def is_authenticated(self) -> bool:
        return self.viewer is not None

    def login(self, result: LoginResult, cookies: Mapping[str, str] | None = None) -> None:
        self.state = SessionState(username=result.username, cookies=dict(cookies or {}))
        self.save()

    def logout(self) -> None:
        self.state = SessionState()
        if self.path.exists():
            self.path.unlink()

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.state.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("session saved to %s", self.path)
