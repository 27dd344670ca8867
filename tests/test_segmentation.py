from models.bible import VerseRange, VerseSegment
from utils.segmentation import segment, select_verses, verse_map


def test_segment_pairs_markers_with_text():
    assert segment("[1] En el principio [2] Y la tierra") == [
        VerseSegment(text="", verse_number=1),
        VerseSegment(text="En el principio "),
        VerseSegment(text="", verse_number=2),
        VerseSegment(text="Y la tierra"),
    ]


def test_every_marker_is_followed_by_its_text_in_order():
    raw = "[1] Uno\n[2] Dos\n[3] Tres"
    segments = segment(raw)

    numbers = [s.verse_number for s in segments if s.verse_number is not None]
    assert numbers == [1, 2, 3]
    for index, current in enumerate(segments):
        if current.verse_number is not None:
            following = segments[index + 1]
            assert following.verse_number is None
            assert following.text.strip()


def test_blank_runs_are_dropped():
    assert segment("  [1]   [2] Texto") == [
        VerseSegment(text="", verse_number=1),
        VerseSegment(text="", verse_number=2),
        VerseSegment(text="Texto"),
    ]


def test_text_without_markers_is_one_segment():
    assert segment("Sin marcadores de versículo.") == [VerseSegment(text="Sin marcadores de versículo.")]


def test_empty_text_has_no_segments():
    assert segment("") == []
    assert segment(None) == []


def test_verse_map_from_markers():
    assert verse_map("[1] Uno\n[2] Dos") == {1: "Uno", 2: "Dos"}


def test_verse_map_falls_back_to_numbered_lines():
    raw = "1. Bienaventurado el varón\n2 Sino que en la ley\n3. Será como árbol"
    assert verse_map(raw) == {
        1: "Bienaventurado el varón",
        2: "Sino que en la ley",
        3: "Será como árbol",
    }


def test_select_verses_range():
    raw = "[1] Uno\n[2] Dos\n[3] Tres\n[4] Cuatro"
    assert select_verses(raw, VerseRange(2, 3)) == "[2] Dos\n[3] Tres"


def test_select_verses_missing_verse_is_empty():
    assert select_verses("[1] Uno", VerseRange(5, 6)) == ""


def test_select_verses_without_numbering_returns_chapter():
    assert select_verses("Texto corrido", VerseRange(1, 1)) == "Texto corrido"
