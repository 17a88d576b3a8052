"""User entities.

A user's permission set is fixed by its variant: the class declares it and
instances only expose a read-only view.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, FrozenSet, Union
from uuid import uuid4

from .value_objects import Permission, Role

if TYPE_CHECKING:
    from .content import Content


@dataclass(kw_only=True, eq=False)
class User(ABC):
    """Base class for every account type."""

    role: ClassVar[Role]
    PERMISSIONS: ClassVar[FrozenSet[Permission]] = frozenset()

    id: str = field(default_factory=lambda: str(uuid4()))
    username: str
    password: str = field(repr=False)
    email: str = ""
    registered_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        if type(self) is User:
            raise TypeError("User is abstract; use Administrator or Editor")

    @property
    def permissions(self) -> FrozenSet[Permission]:
        return self.PERMISSIONS

    def has_permission(self, permission: Union[Permission, str]) -> bool:
        try:
            return Permission(permission) in self.PERMISSIONS
        except ValueError:
            return False

    def authenticate(self, password: str) -> bool:
        return self.password == password

    def change_password(self, old_password: str, new_password: str) -> bool:
        if not self.authenticate(old_password):
            return False
        self.password = new_password
        return True

    def update_profile(self, email: str) -> None:
        self.email = email

    def __str__(self) -> str:
        return f"{self.username} ({self.role.value})"


@dataclass(kw_only=True, eq=False)
class Administrator(User):
    """Full access: create, edit, delete and publish."""

    role: ClassVar[Role] = Role.ADMINISTRATOR
    PERMISSIONS: ClassVar[FrozenSet[Permission]] = frozenset(
        {Permission.CREATE, Permission.EDIT, Permission.DELETE, Permission.PUBLISH}
    )


@dataclass(kw_only=True, eq=False)
class Editor(User):
    """Can create and edit, but must ask an administrator to publish."""

    role: ClassVar[Role] = Role.EDITOR
    PERMISSIONS: ClassVar[FrozenSet[Permission]] = frozenset(
        {Permission.CREATE, Permission.EDIT}
    )

    def request_publication(self, content: "Content") -> str:
        return f"Publication request sent for: {content.title}"


USER_TYPES = {
    Role.ADMINISTRATOR: Administrator,
    Role.EDITOR: Editor,
}


def create_user(role: Union[Role, str], username: str, password: str, email: str = "") -> User:
    """Build the user variant for ``role``."""
    if not isinstance(role, Role):
        role = Role(role.strip().upper())
    return USER_TYPES[role](username=username, password=password, email=email)
