"""
services/sessions.py

In-process store of live admin sessions: opaque token -> (admin id, expiry).
Created once per application (see main.lifespan) and injected wherever it is
needed; sessions do not survive a restart.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

from loguru import logger

from island_properties.models.base import utcnow
from island_properties.utils.security import generate_session_token


@dataclass(frozen=True)
class AdminSession:
    token: str
    admin_user_id: str
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.expires_at < (now or utcnow())


class SessionStore:

    def __init__(self) -> None:
        self._sessions: Dict[str, AdminSession] = {}

    def issue(self, admin_user_id: str, ttl: timedelta) -> AdminSession:
        token = generate_session_token()
        while token in self._sessions:
            token = generate_session_token()
        session = AdminSession(token=token, admin_user_id=admin_user_id, expires_at=utcnow() + ttl)
        self._sessions[token] = session
        return session

    def get(self, token: str) -> Optional[AdminSession]:
        return self._sessions.get(token)

    def validate(self, token: Optional[str]) -> Optional[str]:
        """Admin id for a live token, else None. Expired entries are evicted."""
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None:
            return None
        if session.is_expired():
            self._sessions.pop(token, None)
            return None
        return session.admin_user_id

    def revoke(self, token: Optional[str]) -> None:
        if token:
            self._sessions.pop(token, None)

    def purge_expired(self) -> int:
        now = utcnow()
        expired = [token for token, session in self._sessions.items() if session.is_expired(now)]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.info("Purged expired admin sessions", count=len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, token: str) -> bool:
        return token in self._sessions
