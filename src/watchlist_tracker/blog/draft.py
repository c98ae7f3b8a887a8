"""Blog draft: ordered titled sections of rich-text HTML.

Drafts live in a single slot of a SlotStore, so they survive restarts the same
way the watchlist table does.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date

from watchlist_tracker.exceptions import CacheReadError
from watchlist_tracker.persistence.cache import SlotStore

logger = logging.getLogger(__name__)

DRAFT_KEY = "documentEditorData"


@dataclass
class DraftSection:
    """One titled section."""

    section_num: int
    title: str = ""
    content: str = ""


@dataclass
class BlogDraft:
    """Editable document made of sections; section 1 always exists."""

    section_count: int = 0
    sections: list[DraftSection] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.sections:
            self.add_section()

    def add_section(self) -> DraftSection:
        """Append an empty section with the next number."""
        self.section_count += 1
        section = DraftSection(section_num=self.section_count)
        self.sections.append(section)
        return section

    def get_section(self, section_num: int) -> DraftSection:
        for section in self.sections:
            if section.section_num == section_num:
                return section
        raise KeyError(section_num)

    def remove_section(self, section_num: int) -> None:
        """Remove a section; the first section cannot be removed."""
        if section_num == 1:
            raise ValueError("The first section cannot be removed")
        self.sections.remove(self.get_section(section_num))

    def update_section(self, section_num: int, *, title: str | None = None, content: str | None = None) -> None:
        section = self.get_section(section_num)
        if title is not None:
            section.title = title
        if content is not None:
            section.content = content

    def to_blog_payload(self) -> dict[str, str]:
        """Blog API payload: first non-empty title, sections joined as HTML."""
        title = next((s.title for s in self.sections if s.title.strip()), "Untitled")
        parts = []
        for section in self.sections:
            if section.title:
                parts.append(f"<h2>{section.title}</h2>")
            parts.append(section.content)
        return {"title": title, "content": "\n".join(parts)}

    def save(self, store: SlotStore) -> None:
        payload = {
            "sectionCount": self.section_count,
            "sections": [
                {"sectionNum": s.section_num, "title": s.title, "content": s.content} for s in self.sections
            ],
        }
        store.set(DRAFT_KEY, json.dumps(payload, ensure_ascii=False))
        logger.debug("Saved blog draft with %d sections", len(self.sections))

    @classmethod
    def load(cls, store: SlotStore) -> BlogDraft | None:
        """Restore a saved draft, or None when nothing is stored.

        Raises:
            CacheReadError: If the stored draft is not valid JSON.
        """
        raw = store.get(DRAFT_KEY)
        if not raw:
            return None
        try:
            payload = json.loads(raw)
            sections = [
                DraftSection(section_num=int(s["sectionNum"]), title=s.get("title", ""), content=s.get("content", ""))
                for s in payload["sections"]
            ]
            section_count = int(payload["sectionCount"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise CacheReadError(f"Stored blog draft is unreadable: {e}") from e
        return cls(section_count=max(section_count, len(sections)), sections=sections)

    @staticmethod
    def clear(store: SlotStore) -> None:
        store.delete(DRAFT_KEY)


def pdf_filename(today: date) -> str:
    """Export file name, e.g. ``document_2025-01-31.pdf``."""
    return f"document_{today.isoformat()}.pdf"
