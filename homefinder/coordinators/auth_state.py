"""Session-level auth state for a UI."""

import logging
from contextlib import contextmanager
from typing import Optional

from homefinder.core.models import User, UserRole
from homefinder.core.result import ServiceResult
from homefinder.services.auth_service import AuthService

logger = logging.getLogger(__name__)


class AuthState:
    """Holds the logged-in user and mirrors auth service calls."""

    def __init__(self, auth: AuthService):
        self.auth = auth
        self.user: Optional[User] = None
        self.loading = True
        self.error: Optional[str] = None

    @contextmanager
    def _busy(self):
        self.loading = True
        self.error = None
        try:
            yield
        except Exception:
            logger.exception("Unexpected auth error")
            self.error = 'An unexpected error occurred.'
            raise
        finally:
            self.loading = False

    def initialize(self) -> Optional[User]:
        """Restore the user from the persisted session."""
        try:
            self.user = self.auth.current_user()
        except Exception as e:
            logger.error(f"Failed to restore session: {e}")
            self.user = None
        finally:
            self.loading = False
        return self.user

    async def login(self, email: str, password: str) -> Optional[User]:
        with self._busy():
            result = await self.auth.login(email, password)
            if result.success:
                self.user = result.data
                return self.user
            self.error = result.message or 'Login failed.'
            return None

    async def signup(self, name: str, email: str, phone: str, password: str,
                     role: UserRole = UserRole.BUYER) -> Optional[User]:
        with self._busy():
            result = await self.auth.signup(name, email, phone, password, role)
            if result.success:
                self.user = result.data
                return self.user
            self.error = result.message or 'Signup failed.'
            return None

    async def logout(self) -> None:
        with self._busy():
            await self.auth.logout()
            self.user = None

    async def update_password(self, current_password: str, new_password: str) -> bool:
        if not self.user:
            self.error = 'You must be logged in to change your password.'
            return False

        with self._busy():
            result = await self.auth.update_password(self.user.id, current_password, new_password)
            if not result.success:
                self.error = result.message or 'Password change failed.'
            return result.success

    async def request_password_reset(self, email: str) -> ServiceResult[None]:
        with self._busy():
            result = await self.auth.request_password_reset(email)
            if not result.success:
                self.error = result.message
            return result

    async def reset_password(self, token: str, new_password: str) -> ServiceResult[None]:
        with self._busy():
            result = await self.auth.reset_password(token, new_password)
            if not result.success:
                self.error = result.message
            return result
