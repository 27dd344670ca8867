# utils/text.py
import re
import unicodedata

_WHITESPACE = re.compile(r'\s+')


def normalize(text):
    """Strip accents, lower-case and collapse whitespace ("Éxodo " -> "exodo")"""
    decomposed = unicodedata.normalize('NFD', text or '')
    stripped = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return _WHITESPACE.sub(' ', stripped.lower()).strip()


def api_book_slug(book):
    """Book name as the Bible API expects it in the URL ("1 Cronicas" -> "1cronicas")"""
    slug = normalize(book).replace(' ', '')
    return slug.rstrip('.')
