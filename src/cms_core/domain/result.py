"""Result pattern implementation for error handling.

Controller operations that can be refused (missing permission, unknown
identity, failed admission rule) report the outcome as a value instead of
raising. A Result is truthy on success and falsy on failure, so callers that
only need "did it happen" can keep treating it as a boolean.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .value_objects import Permission

T = TypeVar('T')  # Success type
E = TypeVar('E', bound=Exception)  # Error type


class Result(ABC, Generic[T, E]):
    """Abstract base class for Result pattern.

    A Result represents either a successful operation with a value,
    or a failed operation with an error.
    """

    @abstractmethod
    def is_success(self) -> bool:
        """Check if the result is a success."""
        ...

    @abstractmethod
    def is_failure(self) -> bool:
        """Check if the result is a failure."""
        ...

    @abstractmethod
    def value(self) -> T:
        """Get the success value.

        Raises:
            ValueError: If the result is a failure.
        """
        ...

    @abstractmethod
    def error(self) -> E:
        """Get the error.

        Raises:
            ValueError: If the result is a success.
        """
        ...

    def __bool__(self) -> bool:
        return self.is_success()

    @property
    def reason(self) -> Optional[str]:
        """Human-readable failure reason, or None for a success."""
        return str(self.error()) if self.is_failure() else None


@dataclass(frozen=True, slots=True)
class Success(Result[T, E]):
    """Represents a successful operation with a value."""
    _value: T

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def value(self) -> T:
        return self._value

    def error(self) -> E:
        raise ValueError("Cannot get error from Success result")


@dataclass(frozen=True, slots=True)
class Failure(Result[T, E]):
    """Represents a failed operation with an error."""
    _error: E

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def value(self) -> T:
        raise ValueError(f"Cannot get value from Failure result: {self._error}")

    def error(self) -> E:
        return self._error


# Domain-specific errors for the content core
class DomainError(Exception):
    """Base class for domain-specific errors."""
    pass


class ValidationError(DomainError):
    """Raised when a variant's admission rule or input validation fails."""
    pass


class NotFoundError(DomainError):
    """Raised when a content item or report is not found."""

    def __init__(self, entity_id: str, kind: str = "Content"):
        super().__init__(f"{kind} not found: {entity_id}")
        self.entity_id = entity_id


class DuplicateError(DomainError):
    """Raised when an item is already managed or a name is taken."""
    pass


class PermissionDeniedError(DomainError):
    """Raised when the acting user lacks a permission."""

    def __init__(self, permission: Permission, actor: Any = None):
        who = getattr(actor, "username", None) or "anonymous"
        super().__init__(f"{who} lacks {permission.value} permission")
        self.permission = permission
        self.actor = actor


class LifecycleError(DomainError):
    """Raised when a lifecycle transition does not apply to the current status."""
    pass
