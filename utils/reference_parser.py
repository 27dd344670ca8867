# utils/reference_parser.py
"""
Parser for Bible citations typed by readers.

Handles the formats people actually type in the search box:
- Chapter only: "Juan 3", "Salmos 23"
- Single verse: "Juan 3:16"
- Verse range: "1 Cronicas 20:1-5"
- Numbered books with an ordinal prefix: "1 Corintios 13", "1Juan 3"
- Accents and case are ignored: "GÉNESIS 1:1" == "genesis 1:1"
- Common abbreviations, with or without a dot: "Gn 1", "1 Cor. 13:4"
"""

import logging
import re

from models.bible import Reference, VerseRange
from utils.errors import ParseError
from utils.text import normalize

logger = logging.getLogger(__name__)

# ordinal? + book words + chapter + optional ":verse" or ":start-end"
REFERENCE_PATTERN = re.compile(
    r'^(?:(?P<ordinal>[1-3]) ?)?'
    r'(?P<words>[a-z]+\.?(?: [a-z]+\.?)*)'
    r' ?(?P<chapter>\d+)'
    r'(?::(?P<start>\d+)(?:-(?P<end>\d+))?)?$'
)

_DASHES = re.compile(r'\s*[-–—]\s*')
_COLON = re.compile(r'\s*:\s*')


class ReferenceParser:
    """Turns free text into a Reference, resolving books against a catalogue."""

    def __init__(self, catalogue):
        self.catalogue = catalogue

    def parse(self, text):
        clean = normalize(text)
        clean = _COLON.sub(':', _DASHES.sub('-', clean))

        match = REFERENCE_PATTERN.match(clean)
        if not match:
            logger.info(f"Unrecognized reference format: '{text}'")
            raise ParseError("unrecognized format")

        words = match.group('words').replace('.', '')
        phrase = f"{match.group('ordinal')} {words}" if match.group('ordinal') else words

        book = self.catalogue.find(phrase)
        if book is None:
            raise ParseError(f"book not found: {phrase}")

        chapter = int(match.group('chapter'))
        if chapter < 1:
            raise ParseError("chapter must be >= 1")

        verses = None
        if match.group('start'):
            start = int(match.group('start'))
            end = int(match.group('end')) if match.group('end') else start
            if start < 1 or end < start:
                token = clean.split(':', 1)[1]
                raise ParseError(f"invalid verse range: {token}")
            verses = VerseRange(start, end)

        return Reference(book=book.name, chapter=chapter, verses=verses)


def parse_reference(text, catalogue):
    """Shortcut for ReferenceParser(catalogue).parse(text)"""
    return ReferenceParser(catalogue).parse(text)


def format_reference(reference):
    """Canonical display string; parsing it again yields the same Reference."""
    return str(reference)
