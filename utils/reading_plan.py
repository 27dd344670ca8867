# utils/reading_plan.py
from datetime import date

from models.bible import ChapterPosition

DEFAULT_PLAN_START = date(2026, 1, 1)


def chapter_for_day(day, catalogue, start=DEFAULT_PLAN_START):
    """
    One chapter a day, walking the catalogue in order from `start`.

    Days before the start show the first chapter of the first book. After
    the last chapter of the last book the plan starts over.
    """
    days = (day - start).days
    first = catalogue[0]
    if days < 0:
        return ChapterPosition(first.name, 1)

    days %= catalogue.total_chapters
    for book in catalogue:
        if days < book.chapters:
            return ChapterPosition(book.name, days + 1)
        days -= book.chapters

    # Unreachable while total_chapters matches the books
    return ChapterPosition(first.name, 1)


def parse_plan_start(value):
    """READING_PLAN_START is an ISO date ("2026-01-01")"""
    if not value:
        return DEFAULT_PLAN_START
    return date.fromisoformat(value)
