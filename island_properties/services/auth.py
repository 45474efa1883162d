"""
services/auth.py

Admin login / logout / session validation.

Lockout state per admin is carried by two fields on the admin record:
`login_attempts` and `locked_until`. A wrong password bumps the counter and,
once it reaches MAX_LOGIN_ATTEMPTS, locks the account for LOCKOUT_DURATION.
While locked, attempts are refused without being counted or logged. Only a
successful login clears the counter and the lock.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from loguru import logger
from starlette.concurrency import run_in_threadpool

from island_properties.core.errors import AccountLockedError, UnauthorizedError
from island_properties.models.base import utcnow
from island_properties.repositories.base import Repository
from island_properties.schemas.admin import AdminUserInDB
from island_properties.services.audit import AuditAction, AuditLogger, RequestMeta
from island_properties.services.sessions import AdminSession, SessionStore
from island_properties.utils.locks import KeyedLock
from island_properties.utils.security import dummy_password_hash, verify_password

MAX_LOGIN_ATTEMPTS = 5
LOCKOUT_DURATION = timedelta(minutes=15)
DEFAULT_SESSION_TTL = timedelta(hours=2)
REMEMBER_ME_SESSION_TTL = timedelta(hours=7 * 24)


@dataclass(frozen=True)
class LoginResult:
    user: AdminUserInDB
    session: AdminSession


class AuthService:

    def __init__(
        self,
        repository: Repository,
        sessions: SessionStore,
        audit: AuditLogger,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        remember_me_ttl: timedelta = REMEMBER_ME_SESSION_TTL,
    ):
        self.repository = repository
        self.sessions = sessions
        self.audit = audit
        self.session_ttl = session_ttl
        self.remember_me_ttl = remember_me_ttl
        self._attempt_locks = KeyedLock()

    def session_ttl_for(self, remember_me: bool) -> timedelta:
        return self.remember_me_ttl if remember_me else self.session_ttl

    async def login(
        self,
        email: str,
        password: str,
        remember_me: bool = False,
        meta: Optional[RequestMeta] = None,
    ) -> LoginResult:
        admin = await self.repository.get_admin_user_by_email(email)
        if admin is None:
            # Same bcrypt cost as a wrong password so timing does not reveal the email
            await run_in_threadpool(verify_password, password, dummy_password_hash())
            await self.audit.record(
                AuditAction.FAILED_LOGIN, None, meta, {"email": email, "reason": "User not found"}
            )
            logger.warning("Admin login failed: unknown email")
            raise UnauthorizedError()

        async with self._attempt_locks.hold(admin.id):
            # Re-read under the lock: a concurrent attempt may have moved the counter
            admin = await self.repository.get_admin_user(admin.id)
            if admin is None:
                raise UnauthorizedError()

            if admin.locked_until is not None and admin.locked_until > utcnow():
                logger.warning("Admin login refused: account locked", admin_id=admin.id)
                raise AccountLockedError(admin.locked_until)

            password_ok = await run_in_threadpool(verify_password, password, admin.password_hash)
            if not password_ok:
                attempts = (admin.login_attempts or 0) + 1
                updates = {"login_attempts": attempts}
                if attempts >= MAX_LOGIN_ATTEMPTS:
                    updates["locked_until"] = utcnow() + LOCKOUT_DURATION
                await self.repository.update_admin_user(admin.id, updates)
                await self.audit.record(
                    AuditAction.FAILED_LOGIN, admin.id, meta, {"email": email, "attempt": attempts}
                )
                if "locked_until" in updates:
                    logger.warning("Admin account locked", admin_id=admin.id, attempts=attempts)
                raise UnauthorizedError()

            admin = await self.repository.update_admin_user(
                admin.id, {"login_attempts": 0, "locked_until": None, "last_login": utcnow()}
            )

        session = self.sessions.issue(admin.id, self.session_ttl_for(remember_me))
        await self.audit.record(
            AuditAction.LOGIN, admin.id, meta, {"email": email, "rememberMe": remember_me}
        )
        logger.info("Admin logged in", admin_id=admin.id, remember_me=remember_me)
        return LoginResult(user=admin, session=session)

    async def logout(
        self, token: str, admin: AdminUserInDB, meta: Optional[RequestMeta] = None
    ) -> None:
        self.sessions.revoke(token)
        await self.audit.record(AuditAction.LOGOUT, admin.id, meta)
        logger.info("Admin logged out", admin_id=admin.id)

    async def validate_request(self, token: Optional[str]) -> AdminUserInDB:
        """Resolve a session token to its admin, or raise UnauthorizedError."""
        if not token:
            raise UnauthorizedError("Unauthorized: No token provided")

        admin_id = self.sessions.validate(token)
        if admin_id is None:
            raise UnauthorizedError("Unauthorized: Invalid or expired session")

        admin = await self.repository.get_admin_user(admin_id)
        if admin is None:
            self.sessions.revoke(token)
            raise UnauthorizedError("Unauthorized: Admin user not found")
        return admin
