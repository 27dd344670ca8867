from contextlib import contextmanager
from types import SimpleNamespace

import pytest

from app import create_app
from models.bible import default_catalogue
from utils.bible_client import BibleTextClient
from utils.errors import FetchError


GENESIS_1 = {
    "book": "genesis",
    "chapter": 1,
    "text": [
        "En el principio creó Dios los cielos y la tierra.",
        "Y la tierra estaba desordenada y vacía.",
        "Y dijo Dios: Sea la luz; y fue la luz.",
    ],
}


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=''):
        self.status_code = status_code
        self._json = json_data
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("Expecting value")
        return self._json


class FakeSession:
    """Stands in for requests.Session; answers by URL and records calls."""

    def __init__(self, routes=None, error=None):
        self.routes = routes or {}
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.routes.get(url, FakeResponse(404, {"error": "not found"}, 'not found'))


class StubTextClient:
    """In-memory text collaborator keyed by (book, chapter)."""

    def __init__(self, chapters=None):
        self.chapters = chapters or {}
        self.calls = []

    def fetch_chapter(self, book, chapter):
        self.calls.append(('chapter', book, chapter))
        if (book, chapter) not in self.chapters:
            raise FetchError(f"API Error 404 for {book} {chapter}", status=404)
        return self.chapters[(book, chapter)]

    def fetch_verses(self, book, chapter, verses):
        self.calls.append(('verses', book, chapter, verses))
        text = self.chapters.get((book, chapter))
        if text is None:
            raise FetchError(f"API Error 404 for {book} {chapter}", status=404)
        return f"[{verses.start}] {text}"


class FakeQuery:
    def __init__(self, table):
        self.table = table
        self.filters = []
        self.payload = None

    def select(self, *args, **kwargs):
        return self

    def insert(self, payload):
        self.payload = payload
        return self

    def eq(self, column, value):
        self.filters.append(('eq', column, value))
        return self

    def gte(self, column, value):
        self.filters.append(('gte', column, value))
        return self

    def order(self, column, desc=False):
        return self

    def execute(self):
        if self.payload is not None:
            row = dict(self.payload, id=len(self.table.rows) + 1)
            self.table.rows.append(row)
            return SimpleNamespace(data=[row])
        rows = [row for row in self.table.rows
                if all(row.get(col) == val for op, col, val in self.filters if op == 'eq')]
        return SimpleNamespace(data=rows)


class FakeTable:
    def __init__(self):
        self.rows = []


class FakeSupabase:
    """Just enough of the Supabase client for auth and daily_readings."""

    def __init__(self, tokens=None):
        self.tokens = tokens or {}
        self.tables = {}
        self.auth = SimpleNamespace(get_user=self._get_user)

    def _get_user(self, token):
        if token not in self.tokens:
            raise Exception("invalid JWT")
        return SimpleNamespace(user=SimpleNamespace(id=self.tokens[token]))

    def table(self, name):
        return FakeQuery(self.tables.setdefault(name, FakeTable()))


@pytest.fixture
def catalogue():
    return default_catalogue()


@pytest.fixture
def fake_session():
    base = "https://bible.test/api/v1"
    return FakeSession({
        f"{base}/genesis/1": FakeResponse(200, GENESIS_1),
        f"{base}/genesis/2": FakeResponse(200, {"text": ["Fueron, pues, acabados los cielos y la tierra."]}),
        f"{base}/juan/3": FakeResponse(200, {"verses": [
            {"number": 16, "text": "Porque de tal manera amó Dios al mundo."},
            {"number": 17, "text": "Porque no envió Dios a su Hijo al mundo para condenar al mundo."},
        ]}),
    })


@pytest.fixture
def bible_client(fake_session):
    return BibleTextClient(base_url="https://bible.test/api/v1", timeout=5, session=fake_session)


@pytest.fixture
def fake_supabase(monkeypatch):
    supabase = FakeSupabase(tokens={'good-token': 'user-123'})

    @contextmanager
    def fake_get_db():
        yield supabase

    monkeypatch.setattr('utils.auth.get_db', fake_get_db)
    monkeypatch.setattr('routes.readings.get_db', fake_get_db)
    return supabase


@pytest.fixture
def app(bible_client, catalogue):
    app = create_app(
        config={'TESTING': True, 'READING_PLAN_START': '2026-01-01'},
        catalogue=catalogue,
        bible_client=bible_client,
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()
