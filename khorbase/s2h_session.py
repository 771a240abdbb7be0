"""Session carrying the authenticated user's identity and roles."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from khorbase.session import Session

SESSION_VERSION_MIN = 4
SESSION_VERSION_CURRENT = 4


class S2HSession(Session):
    """A session that knows who is logged in and which roles they hold."""

    def __init__(self, session_id: str, created: datetime, expired: datetime) -> None:
        super().__init__(session_id, created, expired)

    def reset(self) -> None:
        super().reset()
        self.authenticated = False
        self.user_id = 0
        self.nickname = ""
        self.position = ""
        self.roles: set[str] = set()

    def reset_roles(self) -> None:
        self.roles.clear()

    def append_role(self, role: str) -> None:
        self.roles.add(role)

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def _payload(self) -> dict[str, Any]:
        return {
            "authenticated": self.authenticated,
            "user_id": self.user_id,
            "nickname": self.nickname,
            "position": self.position,
            "roles": sorted(self.roles),
        }

    def _load_payload(self, payload: dict[str, Any]) -> None:
        self.authenticated = bool(payload.get("authenticated", False))
        self.user_id = int(payload.get("user_id", 0))
        self.nickname = str(payload.get("nickname", ""))
        self.position = str(payload.get("position", ""))
        self.roles = set(payload.get("roles", []))