from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from mirante.domain import CurationRepository, CurationState, StoreError, ValidationError
from mirante.services.curation.store import CurationStore, build_pinned_article

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryCurationRepository(CurationRepository):
    def __init__(self, state: CurationState | None = None) -> None:
        self.state = state or CurationState()
        self.saves = 0
        self.fail = False

    def load(self) -> CurationState:
        return self.state

    def save(self, state: CurationState) -> None:
        if self.fail:
            raise StoreError("disco cheio")
        self.saves += 1
        self.state = state


@pytest.fixture
def repository() -> InMemoryCurationRepository:
    return InMemoryCurationRepository()


@pytest.fixture
def store(repository) -> CurationStore:
    return CurationStore(repository, clock=lambda: FIXED_NOW)


def test_hide_is_idempotent_and_persists_once(store, repository):
    assert asyncio.run(store.hide("https://a.com/x")) is True
    assert asyncio.run(store.hide("https://a.com/x")) is False

    assert store.snapshot().hidden == ("https://a.com/x",)
    assert repository.saves == 1


def test_unhide_of_unknown_url_is_a_no_op(store, repository):
    assert asyncio.run(store.unhide("https://never-hidden.com")) is False
    assert repository.saves == 0


def test_hide_rejects_unsafe_urls(store):
    with pytest.raises(ValidationError, match="Invalid URL"):
        asyncio.run(store.hide("javascript:alert(1)"))
    with pytest.raises(ValidationError):
        asyncio.run(store.hide(""))


def test_unpin_requires_url(store):
    with pytest.raises(ValidationError, match="URL required"):
        asyncio.run(store.unpin(None))


def test_pin_inserts_at_front_and_keeps_first_pin(store):
    asyncio.run(store.pin("https://a.com", {"title": "A"}, "primeiro"))
    asyncio.run(store.pin("https://b.com", {"title": "B"}))
    changed = asyncio.run(store.pin("https://a.com", {"title": "A2"}, "segundo"))

    pinned = store.snapshot().pinned
    assert changed is False
    assert [item.url for item in pinned] == ["https://b.com", "https://a.com"]
    assert pinned[1].title == "A"
    assert pinned[1].note == "primeiro"


def test_unpin_removes_entry(store):
    asyncio.run(store.pin("https://a.com", {"title": "A"}))

    assert asyncio.run(store.unpin("https://a.com")) is True
    assert store.snapshot().pinned == ()


def test_failed_save_keeps_previous_state(store, repository):
    asyncio.run(store.hide("https://a.com"))
    repository.fail = True

    with pytest.raises(StoreError):
        asyncio.run(store.hide("https://b.com"))
    with pytest.raises(StoreError):
        asyncio.run(store.pin("https://c.com", {"title": "C"}))

    state = store.snapshot()
    assert state.hidden == ("https://a.com",)
    assert state.pinned == ()


def test_state_is_loaded_from_repository_on_start():
    repository = InMemoryCurationRepository(CurationState(hidden=("https://old.com",)))

    store = CurationStore(repository)

    assert store.snapshot().is_hidden("https://old.com")


def test_build_pinned_article_sanitizes_metadata():
    article = build_pinned_article(
        "https://a.com",
        {
            "title": "T" * 600,
            "source": "S",
            "description": "D" * 2500,
            "image": "javascript:alert(1)",
            "readTime": 999,
            "category": "Gossip",
        },
        "n" * 600,
        now=FIXED_NOW,
    )

    assert len(article.title) == 500
    assert len(article.description) == 2000
    assert len(article.note) == 500
    assert article.image is None
    assert article.read_time == 60
    assert article.category == "General"
    assert article.published_at == FIXED_NOW.isoformat()
    assert article.pinned_at == FIXED_NOW.isoformat()


@pytest.mark.parametrize("value, expected", [(None, 1), ("abc", 1), (0, 1), (-5, 1), (7.8, 7), (float("nan"), 1)])
def test_build_pinned_article_clamps_read_time(value, expected):
    article = build_pinned_article("https://a.com", {"readTime": value}, None, now=FIXED_NOW)

    assert article.read_time == expected
