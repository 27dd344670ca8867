# This file makes the models directory a Python package
from .bible import (
    Book,
    BookCatalogue,
    ChapterPosition,
    ChapterText,
    Reference,
    VerseRange,
    VerseSegment,
    default_catalogue,
)

__all__ = [
    'Book',
    'BookCatalogue',
    'ChapterPosition',
    'ChapterText',
    'Reference',
    'VerseRange',
    'VerseSegment',
    'default_catalogue',
]
