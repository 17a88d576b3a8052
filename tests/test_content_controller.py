"""Tests for the content controller."""

import threading

import pytest

from cms_core.application.content_controller import ContentController
from cms_core.domain.content import Article, Video, Image
from cms_core.domain.result import (
    DuplicateError,
    LifecycleError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from cms_core.domain.taxonomy import Category, Tag
from cms_core.domain.users import Administrator, Editor
from cms_core.domain.value_objects import ContentStatus, ContentType, Permission

SIXTY_CHARS = "Lorem ipsum dolor sit amet, consectetur adipiscing elit sed."
assert len(SIXTY_CHARS) == 60


@pytest.fixture
def admin():
    return Administrator(username="admin", password="admin123")


@pytest.fixture
def editor():
    return Editor(username="editor", password="editor123")


@pytest.fixture
def category():
    return Category(name="Programming")


@pytest.fixture
def controller(admin):
    """A controller bound to an administrator."""
    return ContentController(actor=admin)


def make_article(category, body=SIXTY_CHARS, title="Intro", author="Ada"):
    return Article(title=title, author=author, category=category, body=body)


class TestPermissions:
    """Test permission gating of mutating calls."""

    def test_no_actor_cannot_create(self, category):
        controller = ContentController()
        result = controller.create(make_article(category))
        assert not result
        assert isinstance(result.error(), PermissionDeniedError)
        assert result.error().permission is Permission.CREATE
        assert controller.get_all_content() == []

    def test_editor_can_create_and_edit(self, editor, category):
        controller = ContentController(actor=editor)
        article = make_article(category)
        assert controller.create(article)
        assert controller.edit(article)

    def test_editor_cannot_delete(self, editor, category):
        """An actor without DELETE gets False and the item stays."""
        controller = ContentController(actor=editor)
        article = make_article(category)
        controller.create(article)

        result = controller.delete(article.id)
        assert bool(result) is False
        assert isinstance(result.error(), PermissionDeniedError)
        assert controller.get_by_id(article.id) is article
        assert category.content_count == 1

    def test_editor_cannot_publish(self, editor, category):
        controller = ContentController(actor=editor)
        article = make_article(category)
        controller.create(article)
        assert not controller.publish_content(article.id)
        assert article.status is ContentStatus.DRAFT

    def test_set_current_actor(self, editor, admin, category):
        controller = ContentController(actor=editor)
        article = make_article(category)
        controller.create(article)
        controller.set_current_actor(admin)
        assert controller.current_actor is admin
        assert controller.delete(article.id)

    def test_explicit_actor_overrides_bound_actor(self, editor, admin, category):
        controller = ContentController(actor=editor)
        article = make_article(category)
        controller.create(article)

        assert controller.publish_content(article.id, actor=admin)
        assert not controller.unpublish_content(article.id)
        assert not controller.delete(article.id, actor=None)
        assert controller.current_actor is editor

    def test_has_permission(self, controller, editor):
        assert controller.has_permission(Permission.DELETE)
        assert not controller.has_permission(Permission.DELETE, actor=editor)
        assert not ContentController().has_permission(Permission.CREATE)


class TestCrud:
    """Test create, edit, delete and lookup."""

    def test_create_appends_and_counts(self, controller, category):
        tag = Tag("python")
        article = make_article(category)
        article.add_tag(tag)

        result = controller.create(article)
        assert result.value() is article
        assert controller.get_all_content() == [article]
        assert category.content_count == 1
        assert tag.usage_count == 1

    def test_create_twice_is_duplicate(self, controller, category):
        article = make_article(category)
        controller.create(article)
        result = controller.create(article)
        assert isinstance(result.error(), DuplicateError)
        assert controller.count() == 1
        assert category.content_count == 1

    def test_create_without_category_is_rejected(self, controller):
        """An item with no category is refused before it joins the collection."""
        tag = Tag("orphan")
        article = make_article(None)
        article.add_tag(tag)

        result = controller.create(article)
        assert isinstance(result.error(), ValidationError)
        assert controller.count() == 0
        assert not article.is_live
        assert tag.usage_count == 0

    def test_edit_without_category_keeps_existing(self, controller, category):
        original = make_article(category)
        controller.create(original)

        replacement = make_article(None, title="No category")
        replacement.id = original.id
        result = controller.edit(replacement)

        assert isinstance(result.error(), ValidationError)
        assert controller.get_by_id(original.id) is original
        assert original.is_live
        assert not replacement.is_live
        assert category.content_count == 1

    def test_item_belongs_to_one_controller(self, controller, admin, category):
        article = make_article(category)
        controller.create(article)
        other = ContentController(actor=admin)
        assert not other.create(article)
        assert category.content_count == 1

    def test_get_by_id_missing(self, controller):
        assert controller.get_by_id("nope") is None

    def test_edit_replaces_in_place(self, controller, category):
        first = make_article(category, title="First")
        second = make_article(category, title="Second")
        controller.create(first)
        controller.create(second)

        replacement = make_article(category, title="First v2")
        replacement.id = first.id
        assert controller.edit(replacement)

        assert [c.title for c in controller.get_all_content()] == ["First v2", "Second"]
        assert controller.get_by_id(first.id) is replacement
        assert category.content_count == 2

    def test_edit_replacement_moves_counters(self, controller, category):
        other = Category(name="Other")
        old_tag, new_tag = Tag("old"), Tag("new")
        original = make_article(category)
        original.add_tag(old_tag)
        controller.create(original)

        replacement = Video(title="v", author="a", category=other, url="u", duration=1)
        replacement.id = original.id
        replacement.add_tag(new_tag)
        controller.edit(replacement)

        assert category.content_count == 0
        assert other.content_count == 1
        assert old_tag.usage_count == 0
        assert new_tag.usage_count == 1

    def test_edit_missing_is_not_found(self, controller, category):
        result = controller.edit(make_article(category))
        assert isinstance(result.error(), NotFoundError)
        assert controller.count() == 0

    def test_delete_releases_counters(self, controller, category):
        """Deleting the only item in a category zeroes both counters."""
        tag = Tag("solo")
        article = make_article(category)
        article.add_tag(tag)
        controller.create(article)
        assert category.content_count == 1
        assert tag.usage_count == 1

        result = controller.delete(article.id)
        assert result
        assert result.value() is article
        assert category.content_count == 0
        assert tag.usage_count == 0
        assert controller.get_by_id(article.id) is None
        assert not article.is_live

    def test_delete_missing(self, controller):
        result = controller.delete("missing")
        assert not result
        assert isinstance(result.error(), NotFoundError)
        assert "missing" in result.reason


class TestLifecycle:
    """Test publish and unpublish through the controller."""

    def test_publish_long_article(self, controller, category):
        article = make_article(category)
        controller.create(article)

        result = controller.publish_content(article.id)
        assert result
        assert article.status is ContentStatus.PUBLISHED
        assert article.published_at is not None

    def test_publish_short_article_fails(self, controller, category):
        article = make_article(category, body="0123456789")
        controller.create(article)

        result = controller.publish_content(article.id)
        assert bool(result) is False
        assert isinstance(result.error(), ValidationError)
        assert "50" in result.reason
        assert article.status is ContentStatus.DRAFT
        assert article.published_at is None

    def test_publish_already_published(self, controller, category):
        article = make_article(category)
        controller.create(article)
        controller.publish_content(article.id)
        result = controller.publish_content(article.id)
        assert isinstance(result.error(), LifecycleError)

    def test_publish_missing(self, controller):
        assert isinstance(controller.publish_content("x").error(), NotFoundError)

    def test_unpublish(self, controller, category):
        article = make_article(category)
        controller.create(article)
        assert not controller.unpublish_content(article.id)

        controller.publish_content(article.id)
        assert controller.unpublish_content(article.id)
        assert article.status is ContentStatus.DRAFT
        assert article.published_at is None
        assert isinstance(controller.unpublish_content(article.id).error(), LifecycleError)

    def test_publish_each_variant(self, controller, category):
        video = Video(title="v", author="a", category=category, url="https://x/v.mp4", duration=30)
        bad_video = Video(title="v", author="a", category=category, url="", duration=30)
        image = Image(title="i", author="a", category=category, url="https://x/i.png", format="png")
        for item in (video, bad_video, image):
            controller.create(item)

        assert controller.publish_content(video.id)
        assert not controller.publish_content(bad_video.id)
        assert controller.publish_content(image.id)


class TestClassificationChanges:
    """Test category and tag changes made through the controller."""

    def test_assign_category(self, controller, category):
        other = Category(name="Other")
        article = make_article(category)
        controller.create(article)

        assert controller.assign_category(article.id, other)
        assert category.content_count == 0
        assert other.content_count == 1
        assert not controller.assign_category(article.id, None)
        assert not controller.assign_category("missing", other)

    def test_add_and_remove_tag(self, controller, category):
        tag = Tag("python")
        article = make_article(category)
        controller.create(article)

        assert controller.add_tag(article.id, tag)
        assert tag.usage_count == 1
        assert isinstance(controller.add_tag(article.id, Tag("Python")).error(), DuplicateError)
        assert controller.remove_tag(article.id, tag)
        assert tag.usage_count == 0
        assert not controller.remove_tag(article.id, tag)

    def test_classification_changes_need_edit(self, category):
        controller = ContentController()
        assert isinstance(controller.add_tag("x", Tag("t")).error(), PermissionDeniedError)


class TestQueries:
    """Test search and filters."""

    @pytest.fixture
    def populated(self, controller, category):
        other = Category(name="Math")
        python = Tag("python")
        items = [
            make_article(category, title="Python Basics", author="Ada"),
            Video(title="Calculus", author="Newton", category=other, url="u", duration=5),
            Image(title="Diagram", author="Ada Lovelace", category=category, url="u", format="png"),
            make_article(other, title="Limits", author="Cauchy", body="short"),
        ]
        items[0].add_tag(python)
        items[2].add_tag(python)
        for item in items:
            controller.create(item)
        controller.publish_content(items[0].id)
        return controller, items, category, other, python

    def test_search_matches_title_or_author(self, populated):
        controller, items, *_ = populated
        assert controller.search_by_keyword("ada") == [items[0], items[2]]
        assert controller.search_by_keyword("CALC") == [items[1]]
        assert controller.search_by_keyword("zzz") == []

    @pytest.mark.parametrize("keyword", [None, "", "   "])
    def test_blank_search_returns_everything(self, populated, keyword):
        controller, items, *_ = populated
        assert controller.search_by_keyword(keyword) == items

    def test_filter_by_category(self, populated):
        controller, items, category, other, _ = populated
        assert controller.filter_by_category(category) == [items[0], items[2]]
        assert controller.filter_by_category(other) == [items[1], items[3]]
        assert controller.filter_by_category(None) == items
        assert controller.filter_by_category(Category(name="Programming")) == []

    @pytest.mark.parametrize("sentinel", [None, ContentType.ALL, "All", "all"])
    def test_filter_by_type_sentinel(self, populated, sentinel):
        controller, items, *_ = populated
        assert controller.filter_by_type(sentinel) == items

    def test_filter_by_type(self, populated):
        controller, items, *_ = populated
        assert controller.filter_by_type(ContentType.ARTICLE) == [items[0], items[3]]
        assert controller.filter_by_type("Video") == [items[1]]
        assert controller.filter_by_type("Image") == [items[2]]
        assert controller.filter_by_type("Podcast") == []

    def test_filter_by_tag(self, populated):
        controller, items, *_, python = populated
        assert controller.filter_by_tag(python) == [items[0], items[2]]
        assert controller.filter_by_tag(Tag("Python")) == [items[0], items[2]]
        assert controller.filter_by_tag(Tag("other")) == []
        assert controller.filter_by_tag(None) == items

    def test_combined_filter(self, populated):
        controller, items, category, *_ = populated
        assert controller.filter(keyword="ada", category=category, content_type="Image") == [items[2]]
        assert controller.filter() == items

    def test_status_views(self, populated):
        controller, items, *_ = populated
        assert controller.get_published_content() == [items[0]]
        assert controller.get_content_by_status(ContentStatus.DRAFT) == items[1:]
        assert controller.get_content_by_status("PUBLISHED") == [items[0]]
        assert controller.get_content_by_status("ARCHIVED") == []

    def test_results_are_independent_copies(self, populated):
        controller, items, *_ = populated
        snapshot = controller.get_all_content()
        snapshot.clear()
        controller.search_by_keyword("").pop()
        controller.filter_by_type(None).pop()
        assert controller.get_all_content() == items
        assert len(controller) == 4
        assert list(controller) == items


class TestConcurrency:
    """Test that concurrent mutation keeps counters consistent."""

    def test_parallel_create_and_delete(self, controller, category):
        tag = Tag("busy")
        articles = []
        for i in range(200):
            article = make_article(category, title=f"a{i}")
            article.add_tag(tag)
            articles.append(article)

        def create(chunk):
            for article in chunk:
                controller.create(article)

        threads = [threading.Thread(target=create, args=(articles[i::4],)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert category.content_count == 200
        assert tag.usage_count == 200

        def delete(chunk):
            for article in chunk:
                controller.delete(article.id)

        threads = [threading.Thread(target=delete, args=(articles[i::4],)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert controller.count() == 0
        assert category.content_count == 0
        assert tag.usage_count == 0
