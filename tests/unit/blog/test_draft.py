"""Unit tests for blog drafts."""

import json
from datetime import date

import pytest

from watchlist_tracker.blog.draft import DRAFT_KEY, BlogDraft, pdf_filename
from watchlist_tracker.exceptions import CacheReadError
from watchlist_tracker.persistence.cache import MemorySlotStore


@pytest.mark.unit
class TestBlogDraft:
    def test_starts_with_one_section(self) -> None:
        draft = BlogDraft()
        assert draft.section_count == 1
        assert [s.section_num for s in draft.sections] == [1]

    def test_add_and_remove(self) -> None:
        draft = BlogDraft()
        draft.add_section()
        third = draft.add_section()
        assert third.section_num == 3
        draft.remove_section(2)
        assert [s.section_num for s in draft.sections] == [1, 3]
        # numbers are never reused
        assert draft.add_section().section_num == 4

    def test_first_section_cannot_be_removed(self) -> None:
        with pytest.raises(ValueError, match="first section"):
            BlogDraft().remove_section(1)

    def test_unknown_section(self) -> None:
        with pytest.raises(KeyError):
            BlogDraft().get_section(9)

    def test_payload(self) -> None:
        draft = BlogDraft()
        draft.update_section(1, content="<p>intro</p>")
        draft.add_section()
        draft.update_section(2, title="Setups", content="<p>SPY</p>")
        payload = draft.to_blog_payload()
        assert payload["title"] == "Setups"
        assert payload["content"] == "<p>intro</p>\n<h2>Setups</h2>\n<p>SPY</p>"

    def test_payload_untitled(self) -> None:
        assert BlogDraft().to_blog_payload()["title"] == "Untitled"


@pytest.mark.unit
class TestDraftPersistence:
    def test_save_and_load(self) -> None:
        store = MemorySlotStore()
        draft = BlogDraft()
        draft.update_section(1, title="Week 5", content="<p>notes</p>")
        draft.add_section()
        draft.save(store)

        stored = json.loads(store.get(DRAFT_KEY) or "")
        assert stored["sectionCount"] == 2
        assert stored["sections"][0] == {"sectionNum": 1, "title": "Week 5", "content": "<p>notes</p>"}

        loaded = BlogDraft.load(store)
        assert loaded is not None
        assert loaded.section_count == 2
        assert loaded.get_section(1).title == "Week 5"

    def test_load_missing(self) -> None:
        assert BlogDraft.load(MemorySlotStore()) is None

    def test_load_corrupt(self) -> None:
        store = MemorySlotStore()
        store.set(DRAFT_KEY, '{"sections": "nope"}')
        with pytest.raises(CacheReadError, match="unreadable"):
            BlogDraft.load(store)

    def test_clear(self) -> None:
        store = MemorySlotStore()
        BlogDraft().save(store)
        BlogDraft.clear(store)
        assert store.get(DRAFT_KEY) is None


@pytest.mark.unit
def test_pdf_filename() -> None:
    assert pdf_filename(date(2025, 3, 7)) == "document_2025-03-07.pdf"
