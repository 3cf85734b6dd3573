import base64
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable

from passlib.hash import bcrypt

from app.core.config import AccountTables, Settings, settings as default_settings
from app.db.database import Database
from app.models.instructor import InstructorStatus
from app.services.instructor_token_service import (
    create_instructor_access_token,
    create_instructor_refresh_token,
    rotate_instructor_refresh_token,
)

logger = logging.getLogger(__name__)

BLOCKED_STATUSES = (InstructorStatus.DISABLED, InstructorStatus.SUSPENDED, InstructorStatus.DELISTED)


def log_reset_token(instructor: dict, token: str) -> None:
    """Default delivery for reset tokens; swap in a mailer in production."""
    logger.debug("Password reset token for %s: %s", instructor["fino"], token)


def encode_recoverable(password: str) -> str:
    return base64.b64encode(password.encode("utf-8")).decode("ascii")


class InstructorAccount:
    """Login, session and password handling for instructors, bound to a set of account tables."""

    def __init__(
        self,
        db: Database,
        tables: AccountTables,
        settings: Settings = default_settings,
        send_reset_token: Callable[[dict, str], None] = log_reset_token,
    ):
        self.db = db
        self.tables = tables
        self.settings = settings
        self.send_reset_token = send_reset_token

    def get_hash(self, password: str) -> str:
        return bcrypt.hash(password)

    def verify_password(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bcrypt.verify(password, hashed)
        except ValueError:
            return False

    def is_blocked(self, email: str) -> bool:
        since = datetime.now() - timedelta(minutes=self.settings.LOGIN_ATTEMPT_WINDOW_MINUTES)
        attempts = self.db.select_all(self.tables.attempts, {"email": email, "attempted_at": (">=", since)}, ["id"])
        return bool(attempts) and len(attempts) >= self.settings.MAX_LOGIN_ATTEMPTS

    def add_attempt(self, email: str) -> bool:
        return self.db.insert(self.tables.attempts, {"email": email, "attempted_at": datetime.now()})

    def login(self, email: str, password: str):
        if self.is_blocked(email):
            logger.warning("Login blocked for %s after too many attempts", email)
            return False
        instructor = self.db.select(self.tables.users, {"email": email})
        if not instructor or not self.verify_password(password, instructor["password"]):
            self.add_attempt(email)
            return False
        if instructor["status"] in BLOCKED_STATUSES:
            logger.info("Login refused for %s with status %s", instructor["fino"], instructor["status"])
            return False

        refresh_token = create_instructor_refresh_token(self.db, self.tables.sessions, instructor["fino"])
        if not refresh_token:
            return False
        return {
            "fino": instructor["fino"],
            "name": instructor["name"],
            "email": instructor["email"],
            "access_token": create_instructor_access_token({"sub": str(instructor["fino"])}),
            "refresh_token": refresh_token,
        }

    def refresh(self, refresh_token: str):
        return rotate_instructor_refresh_token(self.db, self.tables.sessions, refresh_token)

    def logout(self, refresh_token: str) -> bool:
        if not self.db.select(self.tables.sessions, {"token": refresh_token}):
            return False
        return self.db.update(self.tables.sessions, {"is_revoked": True}, {"token": refresh_token})

    def request_password_reset(self, email: str) -> bool:
        """Store a reset token and hand it to ``send_reset_token``. The token is never returned."""
        instructor = self.db.select(self.tables.users, {"email": email})
        if not instructor:
            return False
        token = secrets.token_urlsafe(32)
        expires = datetime.now() + timedelta(hours=self.settings.PASSWORD_RESET_EXPIRE_HOURS)
        if not self.db.insert(self.tables.requests, {"fino": instructor["fino"], "token": token, "used": False, "expired_at": expires}):
            return False
        logger.info("Password reset requested for %s", instructor["fino"])
        self.send_reset_token(instructor, token)
        return True

    def reset_password(self, token: str, password: str) -> bool:
        request = self.db.select(self.tables.requests, {"token": token, "used": False})
        if not request or request["expired_at"] < datetime.now():
            return False
        updated = self.db.update(
            self.tables.users,
            {"password": self.get_hash(password), "password_base": encode_recoverable(password)},
            {"fino": request["fino"]},
        )
        if updated:
            self.db.update(self.tables.requests, {"used": True}, {"id": request["id"]})
        return updated
