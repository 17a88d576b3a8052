"""Categories and tags used to organize content.

Categories form a tree: a parent owns its ordered list of subcategories and
each child keeps only a weak back-reference to its parent. Tags are flat
labels whose identity is their normalized name.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional
from uuid import uuid4


def normalize_tag_name(name: str) -> str:
    """Lower-case and trim a tag name."""
    return name.strip().lower()


class Tag:
    """A named label with a usage counter.

    Two tags with the same normalized name are the same tag for membership
    purposes, so the name is read-only once created. The usage counter
    belongs to the instance, though: separately built tags with equal names
    count independently. Obtain tags from ``Taxonomy.tag`` so every item
    holding a label shares one counter.
    """

    __slots__ = ("_id", "_name", "_usage_count")

    def __init__(self, name: str) -> None:
        self._id = str(uuid4())
        self._name = normalize_tag_name(name)
        self._usage_count = 0

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def usage_count(self) -> int:
        return self._usage_count

    def increment_usage(self) -> None:
        self._usage_count += 1

    def decrement_usage(self) -> None:
        if self._usage_count > 0:
            self._usage_count -= 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __str__(self) -> str:
        return f"#{self._name}"

    def __repr__(self) -> str:
        return f"Tag({self._name!r}, usage_count={self._usage_count})"


@dataclass(eq=False)
class Category:
    """
    A classification node for content.

    Equality is by generated identity: two categories sharing a name are
    still distinct. ``content_count`` is maintained by the content items that
    are live in a controller and never drops below zero.
    """

    name: str
    description: str = ""
    id: str = field(default_factory=lambda: str(uuid4()))
    content_count: int = field(default=0, init=False)
    parent_id: Optional[str] = field(default=None, init=False)

    _subcategories: List["Category"] = field(default_factory=list, init=False, repr=False)
    _parent_ref: Optional[weakref.ReferenceType] = field(default=None, init=False, repr=False)

    @property
    def parent(self) -> Optional["Category"]:
        """The parent category, if it is still alive."""
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def subcategories(self) -> List["Category"]:
        return list(self._subcategories)

    def ancestors(self) -> Iterator["Category"]:
        """Yield parent, grandparent, ... up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def add_subcategory(self, child: Optional["Category"]) -> bool:
        """Adopt ``child`` as the last subcategory.

        Returns False when the child is missing, already present, or would
        create a cycle.
        """
        if child is None or child is self or child in self._subcategories:
            return False
        if any(ancestor is child for ancestor in self.ancestors()):
            return False

        previous = child.parent
        if previous is not None:
            previous._subcategories.remove(child)

        self._subcategories.append(child)
        child._parent_ref = weakref.ref(self)
        child.parent_id = self.id
        return True

    def remove_subcategory(self, child: "Category") -> bool:
        if child not in self._subcategories:
            return False
        self._subcategories.remove(child)
        child._parent_ref = None
        child.parent_id = None
        return True

    def walk(self) -> Iterator["Category"]:
        """Depth-first traversal starting with this category."""
        yield self
        for child in self._subcategories:
            yield from child.walk()

    def path(self) -> List[str]:
        """Category names from the root down to this category."""
        names = [ancestor.name for ancestor in self.ancestors()]
        names.reverse()
        names.append(self.name)
        return names

    def increment_content_count(self) -> None:
        self.content_count += 1

    def decrement_content_count(self) -> None:
        if self.content_count > 0:
            self.content_count -= 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.name


class Taxonomy:
    """Registry of root categories and canonical tags.

    Handing out one Tag instance per name keeps usage counters shared by
    every item that references the same label.
    """

    def __init__(self) -> None:
        self._roots: List[Category] = []
        self._tags: Dict[str, Tag] = {}

    def add_category(self, name: str, description: str = "",
                     parent: Optional[Category] = None) -> Category:
        category = Category(name=name, description=description)
        if parent is None:
            self._roots.append(category)
        else:
            parent.add_subcategory(category)
        return category

    def categories(self) -> List[Category]:
        """All categories, depth-first in insertion order."""
        result: List[Category] = []
        for root in self._roots:
            result.extend(root.walk())
        return result

    def find_category(self, name: str) -> Optional[Category]:
        for category in self.categories():
            if category.name == name:
                return category
        return None

    def tag(self, name: str) -> Tag:
        """Return the canonical tag for ``name``, creating it on first use."""
        key = normalize_tag_name(name)
        if key not in self._tags:
            self._tags[key] = Tag(key)
        return self._tags[key]

    def tags(self) -> List[Tag]:
        return list(self._tags.values())
