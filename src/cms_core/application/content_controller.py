"""Content controller.

The controller owns the authoritative, insertion-ordered content collection.
Mutating calls are gated on the acting user's permissions and report their
outcome as a Result; queries are unrestricted and always return fresh lists.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, List, Optional, Union

from ..domain.content import Content
from ..domain.result import (
    DuplicateError,
    Failure,
    LifecycleError,
    NotFoundError,
    PermissionDeniedError,
    Result,
    Success,
    ValidationError,
)
from ..domain.taxonomy import Category, Tag
from ..domain.users import User
from ..domain.value_objects import ContentStatus, ContentType, Permission

logger = logging.getLogger(__name__)

_UNSET = object()


class ContentController:
    """Sole gateway for content mutation and querying.

    A bound actor (``set_current_actor``) gates every mutating call. Each
    mutating method also takes an explicit ``actor=`` keyword that overrides
    the bound actor for that call only.

    One re-entrant lock serializes collection changes together with the
    category and tag counter updates they imply.
    """

    def __init__(self, actor: Optional[User] = None):
        self._contents: List[Content] = []
        self._actor = actor
        self._lock = threading.RLock()

    # Actor binding

    @property
    def current_actor(self) -> Optional[User]:
        return self._actor

    def set_current_actor(self, user: Optional[User]) -> None:
        with self._lock:
            self._actor = user

    def has_permission(self, permission: Permission, actor: object = _UNSET) -> bool:
        user = self._actor if actor is _UNSET else actor
        return user is not None and user.has_permission(permission)

    def _authorize(self, permission: Permission, actor: object) -> Optional[Result]:
        user = self._actor if actor is _UNSET else actor
        if user is not None and user.has_permission(permission):
            return None
        logger.debug(f"Denied {permission.value} for {getattr(user, 'username', 'anonymous')}")
        return Failure(PermissionDeniedError(permission, user))

    def _index_of(self, content_id: str) -> int:
        for index, content in enumerate(self._contents):
            if content.id == content_id:
                return index
        return -1

    # CRUD

    def create(self, content: Content, *, actor: object = _UNSET) -> Result[Content, Exception]:
        """Append ``content`` to the collection (needs CREATE)."""
        with self._lock:
            denied = self._authorize(Permission.CREATE, actor)
            if denied is not None:
                return denied
            if content.is_live or self._index_of(content.id) >= 0:
                return Failure(DuplicateError(f"Content already managed: {content.id}"))
            if content.category is None:
                return Failure(ValidationError("A category is required"))

            content.attach_counters()
            self._contents.append(content)
            logger.info(f"Created {content.content_type.value} {content.id} ({content.title!r})")
            return Success(content)

    def edit(self, content: Content, *, actor: object = _UNSET) -> Result[Content, Exception]:
        """Replace the stored item having ``content.id`` in place (needs EDIT)."""
        with self._lock:
            denied = self._authorize(Permission.EDIT, actor)
            if denied is not None:
                return denied
            index = self._index_of(content.id)
            if index < 0:
                return Failure(NotFoundError(content.id))

            if content.category is None:
                return Failure(ValidationError("A category is required"))

            existing = self._contents[index]
            if existing is not content:
                if content.is_live:
                    return Failure(DuplicateError(f"Content already managed elsewhere: {content.id}"))
                existing.release_counters()
                content.attach_counters()
                self._contents[index] = content
            content.touch()
            logger.info(f"Edited {content.content_type.value} {content.id}")
            return Success(content)

    def delete(self, content_id: str, *, actor: object = _UNSET) -> Result[Content, Exception]:
        """Remove an item and release its category and tag counts (needs DELETE)."""
        with self._lock:
            denied = self._authorize(Permission.DELETE, actor)
            if denied is not None:
                return denied
            index = self._index_of(content_id)
            if index < 0:
                return Failure(NotFoundError(content_id))

            content = self._contents.pop(index)
            content.release_counters()
            logger.info(f"Deleted {content.content_type.value} {content_id}")
            return Success(content)

    def get_by_id(self, content_id: str) -> Optional[Content]:
        with self._lock:
            index = self._index_of(content_id)
            return self._contents[index] if index >= 0 else None

    # Lifecycle

    def publish_content(self, content_id: str, *, actor: object = _UNSET) -> Result[Content, Exception]:
        """Publish a draft if its variant's admission rule holds (needs PUBLISH)."""
        with self._lock:
            denied = self._authorize(Permission.PUBLISH, actor)
            if denied is not None:
                return denied
            content = self.get_by_id(content_id)
            if content is None:
                return Failure(NotFoundError(content_id))
            if content.is_published:
                return Failure(LifecycleError(f"Content already published: {content_id}"))

            reason = content.admission_error()
            if reason is not None or not content.publish():
                logger.debug(f"Publish rejected for {content_id}: {reason}")
                return Failure(ValidationError(reason or "Admission rule failed"))
            logger.info(f"Published {content.content_type.value} {content_id}")
            return Success(content)

    def unpublish_content(self, content_id: str, *, actor: object = _UNSET) -> Result[Content, Exception]:
        """Return a published item to draft (needs PUBLISH)."""
        with self._lock:
            denied = self._authorize(Permission.PUBLISH, actor)
            if denied is not None:
                return denied
            content = self.get_by_id(content_id)
            if content is None:
                return Failure(NotFoundError(content_id))
            if not content.is_published:
                return Failure(LifecycleError(f"Content is not published: {content_id}"))

            content.unpublish()
            logger.info(f"Unpublished {content.content_type.value} {content_id}")
            return Success(content)

    # Classification changes on live items

    def assign_category(self, content_id: str, category: Category, *,
                        actor: object = _UNSET) -> Result[Content, Exception]:
        """Move an item to another category (needs EDIT)."""
        with self._lock:
            denied = self._authorize(Permission.EDIT, actor)
            if denied is not None:
                return denied
            if category is None:
                return Failure(ValidationError("A category is required"))
            content = self.get_by_id(content_id)
            if content is None:
                return Failure(NotFoundError(content_id))
            content.assign_category(category)
            return Success(content)

    def add_tag(self, content_id: str, tag: Tag, *, actor: object = _UNSET) -> Result[Content, Exception]:
        """Attach a tag to an item (needs EDIT)."""
        with self._lock:
            denied = self._authorize(Permission.EDIT, actor)
            if denied is not None:
                return denied
            content = self.get_by_id(content_id)
            if content is None:
                return Failure(NotFoundError(content_id))
            if not content.add_tag(tag):
                return Failure(DuplicateError(f"{content_id} already tagged {tag}"))
            return Success(content)

    def remove_tag(self, content_id: str, tag: Tag, *, actor: object = _UNSET) -> Result[Content, Exception]:
        """Detach a tag from an item (needs EDIT)."""
        with self._lock:
            denied = self._authorize(Permission.EDIT, actor)
            if denied is not None:
                return denied
            content = self.get_by_id(content_id)
            if content is None:
                return Failure(NotFoundError(content_id))
            if not content.remove_tag(tag):
                return Failure(NotFoundError(str(tag), kind="Tag"))
            return Success(content)

    # Queries

    def search_by_keyword(self, keyword: Optional[str]) -> List[Content]:
        """Case-insensitive substring match on title or author."""
        with self._lock:
            if keyword is None or not keyword.strip():
                return list(self._contents)
            needle = keyword.lower()
            return [
                c for c in self._contents
                if needle in (c.title or "").lower() or needle in (c.author or "").lower()
            ]

    def filter_by_category(self, category: Optional[Category]) -> List[Content]:
        with self._lock:
            if category is None:
                return list(self._contents)
            return [c for c in self._contents if c.category == category]

    def filter_by_type(self, content_type: Union[ContentType, str, None]) -> List[Content]:
        """Items of one variant; None or the ALL sentinel returns everything.

        An unrecognised discriminant matches nothing.
        """
        try:
            wanted = ContentType.parse(content_type)
        except ValueError:
            return []
        with self._lock:
            if wanted is ContentType.ALL:
                return list(self._contents)
            return [c for c in self._contents if c.content_type is wanted]

    def filter_by_tag(self, tag: Optional[Tag]) -> List[Content]:
        with self._lock:
            if tag is None:
                return list(self._contents)
            return [c for c in self._contents if c.has_tag(tag)]

    def filter(
        self,
        keyword: Optional[str] = None,
        category: Optional[Category] = None,
        content_type: Union[ContentType, str, None] = None,
        tag: Optional[Tag] = None,
    ) -> List[Content]:
        """Conjunction of the individual filters; omitted criteria match all."""
        with self._lock:
            results = self.search_by_keyword(keyword)
            if category is not None:
                results = [c for c in results if c.category == category]
            try:
                wanted = ContentType.parse(content_type)
            except ValueError:
                return []
            if wanted is not ContentType.ALL:
                results = [c for c in results if c.content_type is wanted]
            if tag is not None:
                results = [c for c in results if c.has_tag(tag)]
            return results

    def get_all_content(self) -> List[Content]:
        with self._lock:
            return list(self._contents)

    def get_published_content(self) -> List[Content]:
        with self._lock:
            return [c for c in self._contents if c.is_published]

    def get_content_by_status(self, status: Union[ContentStatus, str]) -> List[Content]:
        try:
            wanted = ContentStatus.parse(status)
        except ValueError:
            return []
        with self._lock:
            return [c for c in self._contents if c.status is wanted]

    def count(self) -> int:
        with self._lock:
            return len(self._contents)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Content]:
        return iter(self.get_all_content())
