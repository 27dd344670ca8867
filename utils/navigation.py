# utils/navigation.py
"""
Chapter-by-chapter navigation.

Moves never leave the current book: "previous" from chapter 1 is an error,
and "next" always increments without checking the book's real chapter count.
Asking for a chapter that does not exist is left to the text provider, which
answers with a FetchError.
"""

import logging
from enum import Enum

from models.bible import ChapterPosition, ChapterText, Reference
from utils.errors import FetchError, NavigationError
from utils.segmentation import segment

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    NEXT = 'next'
    PREVIOUS = 'previous'

    @classmethod
    def from_value(cls, value):
        value = (value or '').strip().lower()
        if value == 'prev':
            return cls.PREVIOUS
        try:
            return cls(value)
        except ValueError:
            raise NavigationError(f"unknown direction: {value}") from None


def advance(position, direction):
    """Return the position one chapter away; the input is left untouched."""
    direction = Direction.from_value(direction)

    if direction is Direction.PREVIOUS:
        if position.chapter - 1 < 1:
            raise NavigationError("at first chapter")
        return ChapterPosition(position.book, position.chapter - 1)

    return ChapterPosition(position.book, position.chapter + 1)


def selection(book):
    """Position for a book picked from the book list: its first chapter."""
    return ChapterPosition(book, 1)


class ChapterNavigator:
    """Loads positions and references through a text client (see BibleTextClient)."""

    def __init__(self, client):
        self.client = client

    def load(self, target):
        """
        Fetch and segment the text for a ChapterPosition or a Reference.

        A Reference with verses fetches just those verses. FetchError from
        the client propagates with its message unchanged.
        """
        if isinstance(target, Reference) and target.verses is not None:
            raw_text = self.client.fetch_verses(target.book, target.chapter, target.verses)
            label = str(target)
        else:
            position = target.position if isinstance(target, Reference) else target
            raw_text = self.client.fetch_chapter(position.book, position.chapter)
            label = str(position)

        if not raw_text or not raw_text.strip():
            raise FetchError(f"No text returned for {label}")

        logger.info(f"Loaded {label} ({len(raw_text)} chars)")
        return ChapterText(
            book=target.book,
            chapter=target.chapter,
            reference=label,
            raw_text=raw_text,
            segments=segment(raw_text),
        )

    def step(self, position, direction):
        """advance() then load(); navigation errors are raised before any fetch."""
        return self.load(advance(position, direction))
