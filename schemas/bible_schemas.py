from pydantic import BaseModel, Field
from typing import List, Optional, Union


class ProviderVerse(BaseModel):
    number: int
    text: str


class ProviderChapter(BaseModel):
    """
    Chapter payload as returned by the Bible text API.

    The provider has shipped three shapes over time: `text` as a list of
    verse strings, `verses` as a list of {number, text}, or `text` as one
    pre-formatted string. Unknown keys are ignored.
    """
    book: Optional[str] = None
    chapter: Optional[int] = None
    text: Optional[Union[List[str], str]] = None
    verses: Optional[List[ProviderVerse]] = None
    error: Optional[str] = None

    def content(self) -> Optional[str]:
        """Chapter text with [n] verse markers, or None for an unknown shape."""
        if isinstance(self.text, list):
            return '\n'.join(f"[{i + 1}] {verse}" for i, verse in enumerate(self.text))
        if self.verses is not None:
            return '\n'.join(f"[{verse.number}] {verse.text}" for verse in self.verses)
        if isinstance(self.text, str):
            return self.text
        return None


class ChapterRequest(BaseModel):
    book: str = Field(..., min_length=1, max_length=100)
    chapter: int = Field(..., ge=1)


class ReadingCreate(BaseModel):
    reference: str = Field(..., min_length=1, max_length=100)
    score: Optional[int] = Field(None, ge=0, le=3)
    reflection: Optional[str] = Field(None, max_length=2000)
