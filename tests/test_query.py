from __future__ import annotations

from primerpedia.query import build_random_query, build_search_query

BASE = "action=query&prop=extracts&exintro&indexpageids=true&format=json"


def test_random_query_string():
    query = build_random_query()
    assert query.to_query_string() == BASE + "&generator=random&grnnamespace=0"
    assert query.search_term is None


def test_search_query_encodes_term():
    query = build_search_query("cats & dogs/1")
    qs = query.to_query_string()
    assert qs.startswith(BASE)
    assert "generator=search&gsrlimit=1&gsrsearch=cats%20%26%20dogs%2F1" in qs
    assert query.search_term == "cats & dogs/1"


def test_search_query_encodes_like_encode_uri_component():
    qs = build_search_query("Ærø (island)!").to_query_string()
    assert qs.endswith("gsrsearch=%C3%86r%C3%B8%20(island)!")


def test_search_term_is_trimmed():
    assert build_search_query("  Cat  ").search_term == "Cat"


def test_blank_search_falls_back_to_random():
    random_qs = build_random_query().to_query_string()
    for term in ("", "   ", "\t\n", None):
        assert build_search_query(term).to_query_string() == random_qs


def test_plain_text_flag():
    qs = build_search_query("Cat", plain_text=True).to_query_string()
    assert qs.startswith(BASE + "&explaintext&generator=search")
    assert "explaintext" not in build_search_query("Cat").to_query_string()
