"""
Auth Service

Signup, login/logout, password change and token-based password reset
against the simulated user collection. Passwords are plain text in this
simulation.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional

from homefinder.core.database import CollectionStore, generate_id
from homefinder.core.exceptions import (
    ConflictError,
    ExpiredError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from homefinder.core.kv_store import KeyValueStore
from homefinder.core.models import PasswordResetToken, User, UserRole, public_user
from homefinder.core.result import ServiceResult

from .base import BaseService, SLOW, STANDARD, WRITE, parse_iso, service_call, utc_now
from .email_service import EmailService

logger = logging.getLogger(__name__)

SESSION_KEY = 'current_user'

RESET_REQUESTED_MESSAGE = 'If the email exists, a password reset link has been sent to your inbox.'


class SessionStore:
    """Current session user, persisted under its own key apart from the database."""

    def __init__(self, kv: KeyValueStore, key: str = SESSION_KEY):
        self.kv = kv
        self.key = key

    def get(self) -> Optional[User]:
        data = self.kv.load(self.key)
        if not isinstance(data, dict):
            return None
        try:
            return public_user(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Discarding unreadable session: {e}")
            self.clear()
            return None

    def set(self, user: User) -> None:
        self.kv.save(self.key, public_user(user.to_dict()).to_dict())

    def clear(self) -> None:
        self.kv.remove(self.key)


class AuthService(BaseService):
    """Account lifecycle and sessions."""

    def __init__(self, store: CollectionStore, session: SessionStore,
                 email_service: Optional[EmailService] = None,
                 latency_scale: float = 1.0, reset_token_ttl_minutes: int = 60):
        super().__init__(store, latency_scale)
        self.session = session
        self.email_service = email_service or EmailService()
        self.reset_token_ttl = timedelta(minutes=reset_token_ttl_minutes)

    def current_user(self) -> Optional[User]:
        """Session user, or None when logged out."""
        return self.session.get()

    def _start_session(self, record: dict) -> User:
        user = public_user(record)
        self.session.set(user)
        return user

    # ==========================================================================
    # Login / signup
    # ==========================================================================

    @service_call(WRITE)
    def login(self, email: str, password: str) -> ServiceResult[User]:
        record = self.store.find(
            'users', lambda u: u.get('email') == email and u.get('password') == password
        )
        if not record:
            raise UnauthorizedError('Invalid email or password.')

        logger.info(f"User {record['id']} logged in")
        return ServiceResult.ok(self._start_session(record))

    @service_call(WRITE)
    def signup(self, name: str, email: str, phone: str, password: str,
               role: UserRole = UserRole.BUYER) -> ServiceResult[User]:
        try:
            role = UserRole(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role}")

        if self.store.find('users', lambda u: u.get('email') == email):
            raise ConflictError('Email already exists.')

        new_user = User(
            id=generate_id(),
            name=name,
            email=email,
            phone=phone,
            role=role,
            avatar_url=f"https://picsum.photos/40/40?random={secrets.randbelow(100)}",
            password=password,
        )
        record = new_user.to_dict()
        self.store.update('users', lambda users: [*users, record])

        logger.info(f"Created {new_user.role.value} account {new_user.id}")
        return ServiceResult.ok(self._start_session(record))

    @service_call(STANDARD)
    def logout(self) -> ServiceResult[bool]:
        self.session.clear()
        return ServiceResult.ok(True)

    # ==========================================================================
    # Passwords
    # ==========================================================================

    @service_call(WRITE)
    def update_password(self, user_id: str, current_password: str,
                        new_password: str) -> ServiceResult[User]:
        record = self.store.find('users', lambda u: u['id'] == user_id)
        if not record:
            raise NotFoundError('User not found.')
        if record.get('password') != current_password:
            raise UnauthorizedError('Current password is incorrect.')

        updated = {**record, 'password': new_password}
        self.store.update(
            'users', lambda users: [updated if u['id'] == user_id else u for u in users]
        )

        user = public_user(updated)
        current = self.session.get()
        if current and current.id == user_id:
            self.session.set(user)

        return ServiceResult.ok(user, 'Password changed successfully.')

    @service_call(SLOW)
    def request_password_reset(self, email: str) -> ServiceResult[None]:
        record = self.store.find('users', lambda u: u.get('email') == email)

        # Unknown emails get the same response as registered ones
        if not record:
            return ServiceResult.ok(message=RESET_REQUESTED_MESSAGE)

        user_id = record['id']
        token = PasswordResetToken(
            id=generate_id(),
            user_id=user_id,
            token=secrets.token_urlsafe(24),
            expires_at=(utc_now() + self.reset_token_ttl).isoformat(),
        )
        self.store.update(
            'passwordResetTokens',
            lambda tokens: [t for t in tokens if t['user_id'] != user_id] + [token.to_dict()],
        )

        self.email_service.send_password_reset(
            to=email, name=record.get('name', ''), token=token.token, expires_at=token.expires_at
        )
        return ServiceResult.ok(message=RESET_REQUESTED_MESSAGE)

    @service_call(SLOW)
    def reset_password(self, token: str, new_password: str) -> ServiceResult[None]:
        found = self.store.find('passwordResetTokens', lambda t: t['token'] == token)
        if not found:
            raise NotFoundError('Invalid password reset link.')

        token_id = found['id']

        def drop_token(tokens):
            return [t for t in tokens if t['id'] != token_id]

        if parse_iso(found['expires_at']) < utc_now():
            self.store.update('passwordResetTokens', drop_token)
            raise ExpiredError('Password reset link has expired.')

        user_id = found['user_id']
        if not self.store.find('users', lambda u: u['id'] == user_id):
            raise NotFoundError('The user for this reset link no longer exists.')

        self.store.update(
            'users',
            lambda users: [{**u, 'password': new_password} if u['id'] == user_id else u for u in users],
        )
        self.store.update('passwordResetTokens', drop_token)

        logger.info(f"Password reset completed for user {user_id}")
        return ServiceResult.ok(message='Your password has been reset.')
