# utils/bible_client.py
import logging

import requests
from pydantic import ValidationError

from schemas.bible_schemas import ProviderChapter
from utils.errors import FetchError
from utils.segmentation import select_verses
from utils.text import api_book_slug

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://biblia-api.vercel.app/api/v1"


class BibleTextClient:
    """
    Client for the external Bible text API.

    One GET per call, no retries. Whatever goes wrong (network, status code,
    body shape, empty chapter) surfaces as a FetchError whose message the
    caller can show as-is.

    Usage:
        client = BibleTextClient()
        text = client.fetch_chapter("Juan", 3)        # "[1] Había un hombre..."
        text = client.fetch_verses("Juan", 3, VerseRange(16, 16))
    """

    def __init__(self, base_url=DEFAULT_BASE_URL, timeout=15, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def chapter_url(self, book, chapter):
        return f"{self.base_url}/{api_book_slug(book)}/{chapter}"

    def fetch_chapter(self, book, chapter):
        """Return the chapter text with [n] verse markers."""
        url = self.chapter_url(book, chapter)
        logger.info(f"Fetching Bible text for: {book} {chapter} ({url})")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Bible API request failed for {book} {chapter}: {str(e)}")
            raise FetchError(f"Bible API unreachable: {str(e)}") from e

        if not response.ok:
            logger.warning(f"Bible API returned {response.status_code} for {book} {chapter}")
            raise FetchError(f"API Error {response.status_code} for {book} {chapter}",
                             status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Bible API returned a non-JSON body for {book} {chapter}")
            raise FetchError("Bible API returned an invalid response") from e

        return self.decode_chapter(data, book, chapter)

    def decode_chapter(self, data, book, chapter):
        if not isinstance(data, dict):
            raise FetchError("Bible API returned an invalid response")

        try:
            payload = ProviderChapter.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected Bible API payload for {book} {chapter}: {e}")
            raise FetchError("Bible API returned an unexpected format") from e

        if payload.error:
            raise FetchError(payload.error)

        content = payload.content()
        if content is None:
            raise FetchError("Bible API returned an unexpected format")
        if not content.strip():
            raise FetchError(f"No verses found for {book} {chapter}", status=404)

        return content

    def fetch_verses(self, book, chapter, verses):
        """Return only `verses` (a VerseRange) of the chapter, as "[n] text" lines."""
        text = select_verses(self.fetch_chapter(book, chapter), verses)
        if not text.strip():
            raise FetchError(f"Verses {verses} not found in {book} {chapter}", status=404)
        return text
