import pytest
import requests

from conftest import FakeResponse, FakeSession
from models.bible import VerseRange
from utils.bible_client import BibleTextClient
from utils.errors import FetchError

BASE = "https://bible.test/api/v1"


def make_client(routes=None, error=None):
    return BibleTextClient(base_url=BASE + "/", timeout=3, session=FakeSession(routes, error))


def test_chapter_url_uses_compact_book_slug():
    client = make_client()
    assert client.chapter_url("1 Cronicas", 20) == f"{BASE}/1cronicas/20"
    assert client.chapter_url("Éxodo", 3) == f"{BASE}/exodo/3"


def test_text_list_is_numbered(bible_client, fake_session):
    text = bible_client.fetch_chapter("Genesis", 1)
    assert text.splitlines()[0] == "[1] En el principio creó Dios los cielos y la tierra."
    assert text.splitlines()[2].startswith("[3] ")
    assert fake_session.calls == [(f"{BASE}/genesis/1", 5)]


def test_verses_list_keeps_numbers(bible_client):
    text = bible_client.fetch_chapter("Juan", 3)
    assert text.startswith("[16] Porque de tal manera")
    assert "\n[17] " in text


def test_text_string_is_passed_through():
    client = make_client({f"{BASE}/rut/1": FakeResponse(200, {"text": "[1] Aconteció en los días"})})
    assert client.fetch_chapter("Rut", 1) == "[1] Aconteció en los días"


def test_http_error_carries_status():
    client = make_client({f"{BASE}/genesis/51": FakeResponse(404, None, "Not Found")})
    with pytest.raises(FetchError) as exc:
        client.fetch_chapter("Genesis", 51)
    assert exc.value.status == 404
    assert exc.value.message == "API Error 404 for Genesis 51"


def test_error_key_in_body_is_surfaced_verbatim():
    client = make_client({f"{BASE}/juan/99": FakeResponse(200, {"error": "Capítulo no encontrado"})})
    with pytest.raises(FetchError, match="Capítulo no encontrado"):
        client.fetch_chapter("Juan", 99)


def test_network_failure():
    client = make_client(error=requests.ConnectionError("connection refused"))
    with pytest.raises(FetchError, match="Bible API unreachable"):
        client.fetch_chapter("Juan", 3)


def test_timeout_is_a_fetch_error():
    client = make_client(error=requests.Timeout("read timed out"))
    with pytest.raises(FetchError):
        client.fetch_chapter("Juan", 3)


def test_non_json_body():
    client = make_client({f"{BASE}/juan/3": FakeResponse(200, None, "<html>")})
    with pytest.raises(FetchError, match="invalid response"):
        client.fetch_chapter("Juan", 3)


@pytest.mark.parametrize(
    "body",
    [
        {"book": "juan"},
        {"text": 42},
        {"verses": [{"number": "uno", "text": "x"}]},
        ["[1] texto"],
    ],
)
def test_unexpected_shapes_are_rejected(body):
    client = make_client({f"{BASE}/juan/3": FakeResponse(200, body)})
    with pytest.raises(FetchError):
        client.fetch_chapter("Juan", 3)


def test_empty_chapter_is_not_found():
    client = make_client({f"{BASE}/juan/3": FakeResponse(200, {"text": []})})
    with pytest.raises(FetchError) as exc:
        client.fetch_chapter("Juan", 3)
    assert exc.value.status == 404


def test_fetch_verses_filters_the_chapter(bible_client):
    assert bible_client.fetch_verses("Genesis", 1, VerseRange(2, 3)) == (
        "[2] Y la tierra estaba desordenada y vacía.\n"
        "[3] Y dijo Dios: Sea la luz; y fue la luz."
    )


def test_fetch_verses_outside_chapter(bible_client):
    with pytest.raises(FetchError) as exc:
        bible_client.fetch_verses("Genesis", 1, VerseRange(40, 41))
    assert exc.value.status == 404
