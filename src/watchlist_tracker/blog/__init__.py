"""Blog drafts."""

from watchlist_tracker.blog.draft import DRAFT_KEY, BlogDraft, DraftSection, pdf_filename

__all__ = ["DRAFT_KEY", "BlogDraft", "DraftSection", "pdf_filename"]
