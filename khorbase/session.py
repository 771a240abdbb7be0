"""Client sessions kept in memory and persisted to an SQLite database."""

from __future__ import annotations

import sqlite3
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from khorbase.utils import epoch_diff, json_string, parse_json

_EPOCH = datetime(1970, 1, 1)
INACTIVITY_MINUTES = 20


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


def _to_epoch(moment: datetime) -> int:
    return int(epoch_diff(moment).total_seconds())


def _from_epoch(seconds: int) -> datetime:
    return _EPOCH + timedelta(seconds=seconds)


class Session:
    """A client session with its lifetime, usage counter and seen addresses."""

    DEFAULT_EXPIRE_MINUTES = 30

    def __init__(self, session_id: str, created: datetime, expired: datetime) -> None:
        self.session_id = session_id
        self.created = created
        self.expired = expired
        self.last_activity = created
        self._ips: dict[str, bool] = {}
        self.reset()

    @staticmethod
    def generate_session_id() -> str:
        """Return a new random session identifier."""
        return str(uuid.uuid4())

    def reset(self) -> None:
        self.count = 0
        self._stats_update = False

    def set_ip(self, ip: str) -> None:
        """Remember a client address; a new one marks the statistics as changed."""
        if ip not in self._ips:
            self._ips[ip] = False
            self._stats_update = True

    def pending_ips(self, reset: bool = False) -> list[str]:
        """Addresses not yet reported; with ``reset`` they are marked as reported."""
        pending = [ip for ip, reported in self._ips.items() if not reported]
        if reset:
            for ip in pending:
                self._ips[ip] = True
        return pending

    def touch(self, value: datetime) -> None:
        """Record activity at ``value``; a long pause counts as a new visit."""
        gap = int((value - self.last_activity).total_seconds())
        # Only the minutes field of the gap is looked at; whole hours are ignored.
        if gap >= 0 and (gap // 60) % 60 > INACTIVITY_MINUTES:
            self.count += 1
        self.last_activity = value
        self._stats_update = True

    def is_stats_update(self, reset: bool = False) -> bool:
        """Whether the statistics changed; with ``reset`` the flag is cleared."""
        changed = self._stats_update
        if reset:
            self._stats_update = False
        return changed

    def expire_shift(self) -> timedelta:
        """How far the expiry moves forward on each use."""
        return timedelta(minutes=self.DEFAULT_EXPIRE_MINUTES)

    def _payload(self) -> dict[str, Any]:
        return {}

    def _load_payload(self, payload: dict[str, Any]) -> None:
        pass

    def export_data(self) -> str:
        """Serialise the session's own data as a JSON document."""
        return json_string(self._payload())

    def import_data(self, data: str) -> None:
        """Restore the session's own data from :meth:`export_data` output."""
        if not data:
            return
        payload = parse_json(data)
        if not isinstance(payload, dict):
            raise ValueError("session data must be a JSON object")
        self._load_payload(payload)


Creator = Callable[[str, datetime, datetime], Session]


class SessionStore:
    """SQLite table of serialised sessions."""

    def __init__(self, path: str) -> None:
        self._db = sqlite3.connect(path)
        with self._db:
            self._db.execute(
                "CREATE TABLE IF NOT EXISTS sessions ("
                "SID text, Version integer, dtCreate integer, dtUpdate integer, "
                "dtExpire integer, Data text, "
                "constraint pk_sessions primary key (SID))"
            )
            self._db.execute(
                "CREATE INDEX IF NOT EXISTS idx_sessions_expire ON sessions (dtExpire)"
            )

    def close(self) -> None:
        self._db.close()

    def update_session(self, session: Session, version: int) -> None:
        with self._db:
            self._db.execute(
                "INSERT OR REPLACE INTO sessions "
                "(SID, Version, dtCreate, dtUpdate, dtExpire, Data) VALUES (?,?,?,?,?,?)",
                (
                    session.session_id,
                    version,
                    _to_epoch(session.created),
                    int(time.time()),
                    _to_epoch(session.expired),
                    session.export_data(),
                ),
            )

    def remove_session(self, session: Session) -> None:
        with self._db:
            self._db.execute("DELETE FROM sessions WHERE SID = ?", (session.session_id,))

    def load_sessions(self, version_min: int, creator: Creator | None) -> list[Session]:
        """Drop expired or outdated rows, then build sessions from the rest."""
        with self._db:
            self._db.execute(
                "DELETE FROM sessions WHERE dtExpire < ? OR Version < ?",
                (int(time.time()), version_min),
            )
        if creator is None:
            return []
        sessions = []
        rows = self._db.execute("SELECT SID, dtCreate, dtExpire, Data FROM sessions")
        for session_id, created, expired, data in rows:
            session = creator(session_id, _from_epoch(created), _from_epoch(expired))
            session.import_data(data or "")
            sessions.append(session)
        return sessions


class SessionController:
    """Keeps active sessions in memory and mirrors them to a store."""

    def __init__(self) -> None:
        self.version_min = 1
        self.version_current = 1
        self._sessions: dict[str, Session] = {}
        self._db: SessionStore | None = None

    @property
    def _store(self) -> SessionStore:
        if self._db is None:
            raise RuntimeError("session store is not open")
        return self._db

    def open(
        self,
        driver: str,
        version_min: int,
        version_current: int,
        creator: Creator | None,
    ) -> None:
        """Open the store at ``driver`` and load the sessions it still holds."""
        self.close()
        self.version_min = version_min
        self.version_current = version_current
        self._db = SessionStore(driver)
        for session in self._db.load_sessions(version_min, creator):
            self._sessions[session.session_id] = session

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None
        self._sessions.clear()

    def check_alive_sessions(self, now: datetime | None = None) -> None:
        """Drop every session that expired before ``now``."""
        now = _utc_now() if now is None else now
        for session in [s for s in self._sessions.values() if s.expired < now]:
            self._store.remove_session(session)
            del self._sessions[session.session_id]

    def active_sessions_stats(self) -> list[Session]:
        """Sessions whose statistics changed since last asked."""
        return [s for s in list(self._sessions.values()) if s.is_stats_update(True)]

    def find_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def get_session(
        self,
        session_id: str,
        creator: Creator | None,
        now: datetime | None = None,
    ) -> tuple[Session | None, bool]:
        """Return ``(session, created)`` for ``session_id``.

        A live session gets its expiry pushed forward. An expired or unknown
        one is replaced by a new session made by ``creator``.
        """
        now = _utc_now() if now is None else now
        session = self._sessions.get(session_id)
        if session is not None:
            if session.expired > now:
                session.expired = now + session.expire_shift()
                return session, False
            del self._sessions[session_id]
            self._store.remove_session(session)

        if creator is None:
            return None, False
        expire = now + timedelta(minutes=Session.DEFAULT_EXPIRE_MINUTES)
        session = creator(Session.generate_session_id(), now, expire)
        session.count = 1
        self._sessions[session.session_id] = session
        self._store.update_session(session, self.version_current)
        return session, True

    def update_session(self, session: Session) -> None:
        self._store.update_session(session, self.version_current)

    def remove_session(self, session: Session) -> None:
        self._store.remove_session(session)
        self._sessions.pop(session.session_id, None)