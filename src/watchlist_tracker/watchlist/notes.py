"""Rich-text notes: editor capability, row binding, and plain-text cleanup."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from bs4 import BeautifulSoup

from watchlist_tracker.models.row import get_text, notes_field

if TYPE_CHECKING:
    from watchlist_tracker.watchlist.state import WatchlistState

_LINE_BREAK = "|||LINEBREAK|||"
_BREAK_TAGS = re.compile(r"<br\s*/?>|</p>|</div>|</li>|</blockquote>", re.IGNORECASE)
_SENTENCE_END = re.compile(r"[.!?]$")
_PERIOD_NO_SPACE = re.compile(r"\.([^ ])")


class RichTextWidget(Protocol):
    """Opaque rich-text editor: HTML in, HTML out, change notification."""

    def get_content(self) -> str: ...

    def set_content(self, html: str) -> None: ...

    def on_change(self, callback: Callable[[], None]) -> None: ...


class NotesBinding:
    """Keep one row's timeframe notes in sync with an editor widget."""

    def __init__(self, state: WatchlistState, symbol: str, timeframe: str, widget: RichTextWidget) -> None:
        self.state = state
        self.symbol = symbol
        self.timeframe = timeframe
        self.widget = widget

        row = state.find_row(symbol)
        widget.set_content(get_text(row, notes_field(timeframe)))
        widget.on_change(self._handle_change)

    def _handle_change(self) -> None:
        self.state.set_notes(self.symbol, self.timeframe, self.widget.get_content())


@dataclass
class CleanedNotes:
    """Notes flattened to sentences, plus the image sources they embedded."""

    text: str
    images: list[str] = field(default_factory=list)


def clean_notes_text(html: str | None) -> CleanedNotes:
    """Flatten notes HTML into one line of sentences.

    Block ends and ``<br>`` become line breaks; each non-empty line gets a
    trailing period unless it already ends in ``.``, ``!`` or ``?``.
    """
    if not html:
        return CleanedNotes(text="")

    soup = BeautifulSoup(_BREAK_TAGS.sub(_LINE_BREAK, html), "html.parser")
    images = [str(img["src"]) for img in soup.find_all("img") if img.get("src")]

    lines = [line.strip() for line in soup.get_text().split(_LINE_BREAK)]
    sentences = [line if _SENTENCE_END.search(line) else f"{line}." for line in lines if line]

    text = _PERIOD_NO_SPACE.sub(r". \1", " ".join(sentences))
    return CleanedNotes(text=text, images=images)
