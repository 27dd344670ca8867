from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from utils.text import normalize


# Canonical book titles (accent-free Reina-Valera naming), chapter counts and
# the abbreviations readers commonly type. Order is canonical order.
BOOKS_DATA: List[Tuple[str, int, Tuple[str, ...]]] = [
    ('Genesis', 50, ('Gen', 'Gn')),
    ('Exodo', 40, ('Exo', 'Ex')),
    ('Levitico', 27, ('Lev', 'Lv')),
    ('Numeros', 36, ('Num', 'Nm')),
    ('Deuteronomio', 34, ('Deut', 'Dt')),
    ('Josue', 24, ('Jos',)),
    ('Jueces', 21, ('Jue',)),
    ('Rut', 4, ()),
    ('1 Samuel', 31, ('1 Sam', '1 Sm', '1 Sa')),
    ('2 Samuel', 24, ('2 Sam', '2 Sm', '2 Sa')),
    ('1 Reyes', 22, ('1 Rey', '1 Re')),
    ('2 Reyes', 25, ('2 Rey', '2 Re')),
    ('1 Cronicas', 29, ('1 Cron', '1 Cr')),
    ('2 Cronicas', 36, ('2 Cron', '2 Cr')),
    ('Esdras', 10, ('Esd',)),
    ('Nehemias', 13, ('Neh', 'Ne')),
    ('Ester', 10, ('Est',)),
    ('Job', 42, ()),
    ('Salmos', 150, ('Sal',)),
    ('Proverbios', 31, ('Prov', 'Pr')),
    ('Eclesiastes', 12, ('Ecl', 'Ec')),
    ('Cantares', 8, ('Cant', 'Cnt')),
    ('Isaias', 66, ('Isa', 'Is')),
    ('Jeremias', 52, ('Jer', 'Jr')),
    ('Lamentaciones', 5, ('Lam', 'Lm')),
    ('Ezequiel', 48, ('Eze', 'Ez')),
    ('Daniel', 12, ('Dan', 'Dn')),
    ('Oseas', 14, ('Os',)),
    ('Joel', 3, ()),
    ('Amos', 9, ()),
    ('Abdias', 1, ('Abd',)),
    ('Jonas', 4, ('Jon',)),
    ('Miqueas', 7, ('Miq',)),
    ('Nahum', 3, ('Nah',)),
    ('Habacuc', 3, ('Hab',)),
    ('Sofonias', 3, ('Sof',)),
    ('Hageo', 2, ('Hag', 'Hg')),
    ('Zacarias', 14, ('Zac',)),
    ('Malaquias', 4, ('Mal',)),
    ('Mateo', 28, ('Mat', 'Mt')),
    ('Marcos', 16, ('Mar', 'Marc', 'Mr')),
    ('Lucas', 24, ('Luc', 'Lc')),
    ('Juan', 21, ('Jn', 'Jno')),
    ('Hechos', 28, ('Hech', 'Hch', 'Ac')),
    ('Romanos', 16, ('Rom', 'Rm')),
    ('1 Corintios', 16, ('1 Cor', '1 Co')),
    ('2 Corintios', 13, ('2 Cor', '2 Co')),
    ('Galatas', 6, ('Gal', 'Gl')),
    ('Efesios', 6, ('Ef', 'Efe')),
    ('Filipenses', 4, ('Fil', 'Flp', 'Php')),
    ('Colosenses', 4, ('Col',)),
    ('1 Tesalonicenses', 5, ('1 Tes', '1 Ts')),
    ('2 Tesalonicenses', 3, ('2 Tes', '2 Ts')),
    ('1 Timoteo', 6, ('1 Tim', '1 Ti')),
    ('2 Timoteo', 4, ('2 Tim', '2 Ti')),
    ('Tito', 3, ('Tit',)),
    ('Filemon', 1, ('Flm',)),
    ('Hebreos', 13, ('Heb',)),
    ('Santiago', 5, ('Sant', 'Stg')),
    ('1 Pedro', 5, ('1 Ped', '1 Pe')),
    ('2 Pedro', 3, ('2 Ped', '2 Pe')),
    ('1 Juan', 5, ('1 Jn',)),
    ('2 Juan', 1, ('2 Jn',)),
    ('3 Juan', 1, ('3 Jn',)),
    ('Judas', 1, ('Jud',)),
    ('Apocalipsis', 22, ('Apoc', 'Ap')),
]


@dataclass(frozen=True)
class Book:
    name: str
    chapters: int
    aliases: Tuple[str, ...] = ()

    def to_json(self):
        return {
            "name": self.name,
            "chapters": self.chapters,
        }


class BookCatalogue:
    """
    Ordered, read-only collection of books.

    Built once and handed to whoever needs it (parser, reading plan, routes)
    instead of living in a module global, so tests can pass their own.
    Lookups compare normalized text, so "Éxodo", "exodo" and "EXODO" all hit.
    """

    def __init__(self, books):
        self._books: Tuple[Book, ...] = tuple(books)
        self._by_name: Dict[str, Book] = {}
        self._by_alias: Dict[str, Book] = {}

        for book in self._books:
            key = normalize(book.name)
            if key in self._by_name:
                raise ValueError(f"Duplicate book in catalogue: {book.name}")
            self._by_name[key] = book

        for book in self._books:
            for alias in book.aliases:
                key = normalize(alias).rstrip('.')
                if key in self._by_name:
                    # A canonical name always wins over an abbreviation
                    if self._by_name[key] is not book:
                        raise ValueError(f"Alias '{alias}' of {book.name} shadows {self._by_name[key].name}")
                    continue
                if key in self._by_alias and self._by_alias[key] is not book:
                    raise ValueError(f"Alias '{alias}' used by {book.name} and {self._by_alias[key].name}")
                self._by_alias[key] = book

    def __iter__(self) -> Iterator[Book]:
        return iter(self._books)

    def __len__(self):
        return len(self._books)

    def __getitem__(self, index) -> Book:
        return self._books[index]

    def __contains__(self, name):
        return self.find(name) is not None

    def get(self, name) -> Optional[Book]:
        """Exact lookup by canonical name only (accent and case tolerant)."""
        return self._by_name.get(normalize(name))

    def find(self, phrase) -> Optional[Book]:
        """Resolve a canonical name first, then an abbreviation."""
        key = normalize(phrase)
        book = self._by_name.get(key)
        if book is None:
            book = self._by_alias.get(key.rstrip('.'))
        return book

    def names(self) -> List[str]:
        return [book.name for book in self._books]

    @property
    def total_chapters(self):
        return sum(book.chapters for book in self._books)


def default_catalogue():
    """Fresh catalogue of the 66 canonical books."""
    return BookCatalogue(Book(name, chapters, aliases) for name, chapters, aliases in BOOKS_DATA)


@dataclass(frozen=True)
class VerseRange:
    """Inclusive verse range; a single verse has start == end."""
    start: int
    end: int

    @property
    def is_single(self):
        return self.start == self.end

    def __contains__(self, verse):
        return self.start <= verse <= self.end

    def __str__(self):
        if self.is_single:
            return str(self.start)
        return f"{self.start}-{self.end}"

    def to_json(self):
        if self.is_single:
            return self.start
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class Reference:
    book: str
    chapter: int
    verses: Optional[VerseRange] = None

    def __str__(self):
        if self.verses is None:
            return f"{self.book} {self.chapter}"
        return f"{self.book} {self.chapter}:{self.verses}"

    @property
    def position(self):
        return ChapterPosition(self.book, self.chapter)

    def to_json(self):
        return {
            "book": self.book,
            "chapter": self.chapter,
            "verses": self.verses.to_json() if self.verses else None,
            "reference": str(self),
        }


@dataclass(frozen=True)
class ChapterPosition:
    """Navigation cursor. Moves produce new positions (see utils.navigation)."""
    book: str
    chapter: int

    def __str__(self):
        return f"{self.book} {self.chapter}"

    def to_json(self):
        return {"book": self.book, "chapter": self.chapter}


@dataclass(frozen=True)
class VerseSegment:
    text: str
    verse_number: Optional[int] = None

    def to_json(self):
        if self.verse_number is not None:
            return {"verse_number": self.verse_number, "text": self.text}
        return {"text": self.text}


@dataclass
class ChapterText:
    book: str
    chapter: int
    reference: str
    raw_text: str
    segments: List[VerseSegment] = field(default_factory=list)

    def to_json(self):
        return {
            "book": self.book,
            "chapter": self.chapter,
            "reference": self.reference,
            "text": self.raw_text,
            "segments": [segment.to_json() for segment in self.segments],
        }
