"""User directory and login session.

Supplies the authenticated User that callers bind to a ContentController.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from ..domain.result import DuplicateError, Failure, Result, Success, ValidationError
from ..domain.users import User, create_user
from ..domain.value_objects import Permission
from ..models.config import AccountConfig

logger = logging.getLogger(__name__)


class UserController:
    """Registered users plus the currently logged-in one."""

    def __init__(self, accounts: Optional[Iterable[AccountConfig]] = None):
        self._users: List[User] = []
        self._session: Optional[User] = None
        for account in accounts or ():
            self.register_user(create_user(account.role, account.username, account.password, account.email))

    @property
    def current_user(self) -> Optional[User]:
        return self._session

    @property
    def is_logged_in(self) -> bool:
        return self._session is not None

    def login(self, username: str, password: str) -> Optional[User]:
        """Start a session for matching credentials; None when they do not match."""
        user = self.find_user_by_username(username)
        if user is None or not user.authenticate(password):
            logger.info(f"Failed login for {username!r}")
            return None
        self._session = user
        logger.info(f"Logged in {user}")
        return user

    def logout(self) -> None:
        self._session = None

    def validate_permission(self, permission: Union[Permission, str]) -> bool:
        return self._session is not None and self._session.has_permission(permission)

    def register_user(self, user: Optional[User]) -> Result[User, Exception]:
        if user is None:
            return Failure(ValidationError("No user given"))
        if self.find_user_by_username(user.username) is not None:
            return Failure(DuplicateError(f"Username already taken: {user.username}"))
        self._users.append(user)
        return Success(user)

    def find_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users:
            if user.username == username:
                return user
        return None

    def get_all_users(self) -> List[User]:
        return list(self._users)
