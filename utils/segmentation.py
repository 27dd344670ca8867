# utils/segmentation.py
import re

from models.bible import VerseSegment

VERSE_MARKER = re.compile(r'\[(\d+)\]')

# "[3] text" up to the next marker or the end of the chapter
_BRACKETED_VERSE = re.compile(r'\[(\d+)\]\s*(.*?)(?=\[\d+\]|\Z)', re.S)
# "3. text" / "3 text" at the start of a line, for providers without markers
_NUMBERED_LINE = re.compile(r'(?:^|\n)\s*(\d+)[.\s]\s*(.*?)(?=\n\s*\d+[.\s]|\Z)', re.S)
_MAX_VERSE = 200


def segment(raw_text):
    """
    Split chapter text on [n] markers for display.

    Every marker becomes VerseSegment(verse_number=n, text="") and every run
    of text between markers becomes an unnumbered segment, in order. Runs
    that are blank are dropped. Text without markers comes back as a single
    unnumbered segment.
    """
    segments = []
    parts = VERSE_MARKER.split(raw_text or '')

    # re.split alternates literal runs (even) and captured numbers (odd)
    for index, part in enumerate(parts):
        if index % 2 == 1:
            segments.append(VerseSegment(text='', verse_number=int(part)))
        elif part.strip():
            segments.append(VerseSegment(text=part.lstrip()))

    return segments


def verse_map(raw_text):
    """Map verse number -> verse text for a whole chapter."""
    verses = {}
    for match in _BRACKETED_VERSE.finditer(raw_text or ''):
        verses[int(match.group(1))] = match.group(2).strip()

    if verses:
        return verses

    for match in _NUMBERED_LINE.finditer(raw_text or ''):
        number = int(match.group(1))
        # Skip things like years that happen to start a line
        if 0 < number < _MAX_VERSE:
            verses[number] = match.group(2).strip()

    return verses


def select_verses(raw_text, verses):
    """
    Keep only the verses in `verses` (a VerseRange), as "[n] text" lines.

    Returns the chapter unchanged if it has no recognizable verse numbering,
    and an empty string if none of the requested verses exist.
    """
    by_number = verse_map(raw_text)
    if not by_number:
        return raw_text

    lines = [f"[{number}] {by_number[number]}"
             for number in sorted(by_number) if number in verses]
    return '\n'.join(lines)
