from __future__ import annotations

import pytest

from countercache.config import CounterCacheConfig
from countercache.domain.registry import CounterRegistry
from countercache.domain.resolution import CounterAttributeResolver
from tests.helpers.records import (
    AUTHOR_COMMENTS,
    AUTHOR_POSTS,
    POST_AUTHOR,
    POST_EDITOR,
    PUBLISHER_POSTS,
    Author,
    Comment,
    FakeRecord,
    FakeRecordAccessor,
    GuestAuthor,
    Post,
    blog_catalog,
    has_many,
)


@pytest.fixture
def registry() -> CounterRegistry:
    return CounterRegistry()


@pytest.fixture
def resolver(registry: CounterRegistry) -> CounterAttributeResolver:
    return CounterAttributeResolver(blog_catalog(), registry)


def test_inverse_registration_resolves_counter_name(
    resolver: CounterAttributeResolver, registry: CounterRegistry
) -> None:
    registry.register(Post, "author")

    assert resolver.resolve_counter_attribute_name(AUTHOR_POSTS) == "posts_count"

    inverse = resolver.inverse_which_updates_counter_cache(AUTHOR_POSTS)
    assert inverse is not None
    assert inverse.relationship is POST_AUTHOR
    assert inverse.counter_cache_name == "posts_count"


def test_explicit_configuration_wins_over_registrations(
    resolver: CounterAttributeResolver, registry: CounterRegistry
) -> None:
    registry.register(Post, "author")
    descriptor = has_many(Author, Post, "articles", counter_cache="articles_tally")

    assert resolver.resolve_counter_attribute_name(descriptor) == "articles_tally"
    assert resolver.authoritative_counter_attribute_name(descriptor) == "articles_tally"


def test_convention_fallback_without_registrations(resolver: CounterAttributeResolver) -> None:
    assert resolver.resolve_counter_attribute_name(AUTHOR_POSTS) == "posts_count"
    assert resolver.authoritative_counter_attribute_name(AUTHOR_POSTS) is None
    assert resolver.inverse_which_updates_counter_cache(AUTHOR_POSTS) is None


def test_convention_fallback_uses_configured_suffix(registry: CounterRegistry) -> None:
    resolver = CounterAttributeResolver(
        blog_catalog(), registry, config=CounterCacheConfig(counter_suffix="_total")
    )

    assert resolver.resolve_counter_attribute_name(AUTHOR_POSTS) == "posts_total"


def test_first_qualifying_inverse_in_declaration_order_wins(
    resolver: CounterAttributeResolver, registry: CounterRegistry
) -> None:
    # Post declares editor before author; both point back to Author.
    registry.register(Post, "author")
    registry.register(Post, "editor", column_name="edited_posts_count")

    first = resolver.inverse_which_updates_counter_cache(AUTHOR_POSTS)
    second = resolver.inverse_which_updates_counter_cache(AUTHOR_POSTS)

    assert first is not None
    assert first.relationship is POST_EDITOR
    assert first == second
    assert resolver.resolve_counter_attribute_name(AUTHOR_POSTS) == "edited_posts_count"
    assert resolver.resolve_counter_attribute_name(AUTHOR_POSTS) == "edited_posts_count"


def test_reverse_relationship_must_point_back_to_owner(
    resolver: CounterAttributeResolver, registry: CounterRegistry
) -> None:
    registry.register(Post, "publisher")

    assert resolver.inverse_which_updates_counter_cache(AUTHOR_POSTS) is None
    inverse = resolver.inverse_which_updates_counter_cache(PUBLISHER_POSTS)
    assert inverse is not None
    assert inverse.counter_cache_name == "posts_count"


def test_multi_hop_counters_do_not_match_direct_inverse(
    resolver: CounterAttributeResolver, registry: CounterRegistry
) -> None:
    registry.register(Comment, ("post", "author"), column_name="comments_count")

    assert resolver.inverse_which_updates_counter_cache(AUTHOR_COMMENTS) is None
    assert resolver.authoritative_counter_attribute_name(AUTHOR_COMMENTS) is None


def test_only_belongs_to_reverse_relationships_qualify(registry: CounterRegistry) -> None:
    resolver = CounterAttributeResolver(blog_catalog(has_many(Post, Author, "fans")), registry)
    registry.register(Post, "fans", column_name="fans_count")

    assert resolver.inverse_which_updates_counter_cache(AUTHOR_POSTS) is None


def test_has_cached_counter_requires_explicit_attribute_present(
    resolver: CounterAttributeResolver,
) -> None:
    records = FakeRecordAccessor()
    descriptor = has_many(Author, Post, "articles", counter_cache="articles_tally")

    assert resolver.has_cached_counter(descriptor, FakeRecord({"articles_tally": 0}), records)
    assert not resolver.has_cached_counter(descriptor, FakeRecord(), records)
    assert not resolver.has_cached_counter(AUTHOR_POSTS, FakeRecord({"posts_count": 3}), records)


def test_has_cached_counter_by_convention_checks_owner_attribute(
    resolver: CounterAttributeResolver, registry: CounterRegistry
) -> None:
    records = FakeRecordAccessor()
    registry.register(Post, "author")

    assert resolver.has_cached_counter_by_convention(
        AUTHOR_POSTS, FakeRecord({"posts_count": 4}), records
    )
    assert not resolver.has_cached_counter_by_convention(
        AUTHOR_POSTS, FakeRecord({"posts_count": None}), records
    )
    assert not resolver.has_cached_counter_by_convention(AUTHOR_POSTS, FakeRecord(), records)


def test_convention_name_alone_is_not_a_cached_counter(
    resolver: CounterAttributeResolver,
) -> None:
    owner = FakeRecord({"posts_count": 4})

    assert not resolver.has_cached_counter_by_convention(
        AUTHOR_POSTS, owner, FakeRecordAccessor()
    )


def test_subclass_owner_uses_counter_registered_for_base(
    resolver: CounterAttributeResolver, registry: CounterRegistry
) -> None:
    registry.register(Post, "author")
    guest_posts = has_many(GuestAuthor, Post, "posts")

    inverse = resolver.inverse_which_updates_counter_cache(guest_posts)

    assert inverse is not None
    assert inverse.relationship is POST_AUTHOR
    assert resolver.authoritative_counter_attribute_name(guest_posts) == "posts_count"


def test_cached_inverse_counter_returns_candidate_only_when_present(
    resolver: CounterAttributeResolver, registry: CounterRegistry
) -> None:
    records = FakeRecordAccessor()
    registry.register(Post, "author", column_name="post_tally")

    candidate = resolver.cached_inverse_counter(
        AUTHOR_POSTS, FakeRecord({"post_tally": 2}), records
    )

    assert candidate is not None
    assert candidate.counter_cache_name == "post_tally"
    assert resolver.cached_inverse_counter(AUTHOR_POSTS, FakeRecord(), records) is None
