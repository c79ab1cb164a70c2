import pytest

from postats.classes import Catalog, Entry
from postats.parser import parse
from postats.stats import aggregate, is_empty, percentage


@pytest.mark.parametrize(
    "individual,total,expected",
    [(0, 0, 0), (5, 10, 50.0), (1, 3, 33.33), (3, 0, 300.0), (2, 3, 66.67)],
)
def test_percentage(individual, total, expected):
    assert percentage(individual, total) == expected


def test_german_catalog(german):
    stats = aggregate(parse(german))
    assert stats.language == "de"
    assert (stats.comments.total, stats.comments.unique) == (3, 2)
    assert stats.comments.duplicates == 1
    assert (stats.entries.total, stats.entries.unique) == (2, 1)
    assert stats.entries.duplicates == 1
    assert stats.empty == 1
    assert stats.obsolete == 0
    assert stats.flags == {}


def test_language_defaults_to_pot(template):
    assert aggregate(parse(template)).language == "pot"


def test_blank_language_is_pot():
    catalog = Catalog(headers={"Language": "  "})
    assert aggregate(catalog).language == "pot"


def test_obsolete_fuzzy_entry(french):
    stats = aggregate(parse(french))
    assert stats.language == "fr"
    assert stats.obsolete == 1
    assert stats.flags == {"fuzzy": 2}


def test_flags_count_once_per_entry():
    catalog = Catalog(
        entries=[
            Entry("a", ["A"], flags=frozenset({"fuzzy", "c-format"})),
            Entry("b", ["B"], obsolete=True, flags=frozenset({"fuzzy"})),
        ]
    )
    stats = aggregate(catalog)
    assert stats.flags == {"fuzzy": 2, "c-format": 1}
    assert stats.obsolete == 1


@pytest.mark.parametrize(
    "translation,empty",
    [([], True), ([""], True), (["", ""], True), (["", "x"], False), (["x"], False)],
)
def test_is_empty(translation, empty):
    assert is_empty(Entry("a", translation)) is empty


def test_duplicates_use_id_only():
    catalog = Catalog(entries=[Entry("x", ["one"]), Entry("x", ["two"]), Entry("y")])
    stats = aggregate(catalog)
    assert stats.entries.total == 3
    assert stats.entries.unique == 2
    assert stats.entries.duplicates == 1
    assert stats.empty == 1


def test_repeated_header_keys_are_duplicates():
    text = 'msgid ""\nmsgstr ""\n"Language: de\\n"\n"Language: fr\\n"\n"X-Tool: t\\n"\n'
    stats = aggregate(parse(text))
    assert stats.language == "fr"
    assert stats.headers.total == 3
    assert stats.headers.unique == 2
    assert stats.headers.duplicates == 1


def test_headers_without_raw_keys():
    stats = aggregate(Catalog(headers={"Language": "de", "X-Tool": "t"}))
    assert stats.headers.total == 2
    assert stats.headers.duplicates == 0


def test_duplicate_identity(german, french, template):
    for text in (german, french, template):
        stats = aggregate(parse(text))
        for category in (stats.comments, stats.headers, stats.entries):
            assert category.duplicates == category.total - category.unique
        assert stats.empty <= stats.entries.total


def test_aggregate_is_deterministic(french):
    catalog = parse(french)
    assert aggregate(catalog) == aggregate(catalog)


def test_empty_catalog():
    stats = aggregate(Catalog())
    assert stats.language == "pot"
    assert stats.entries.total == 0
    assert stats.empty == 0
