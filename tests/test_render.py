import pytest

from postats.parser import parse
from postats.render import TableRenderer, format_percent, rows_for, with_percentage
from postats.stats import aggregate


@pytest.mark.parametrize(
    "value,expected", [(50.0, "50"), (33.33, "33.33"), (0.0, "0"), (12.5, "12.5")]
)
def test_format_percent(value, expected):
    assert format_percent(value) == expected


def test_with_percentage():
    assert with_percentage(1, 3) == ("1 (33.33%)", True)
    assert with_percentage(0, 5) == ("0 (0%)", False)
    assert with_percentage(0, 0) == ("0 (0%)", False)
    assert with_percentage(None, 10) == ("--", False)


def test_rows(german):
    rows = dict(rows_for(aggregate(parse(german))))
    assert [text for text, _ in rows["[de] Total Keys"]] == ["3", "2", "2"]
    assert [text for text, _ in rows["[de] Dupe Keys"]] == [
        "1 (33.33%)",
        "0 (0%)",
        "1 (50%)",
    ]
    assert [text for text, _ in rows["[de] Empty Values"]] == ["--", "--", "1 (50%)"]
    assert [text for text, _ in rows["[de] Obsolete Values"]] == ["--", "--", "0 (0%)"]


def test_flag_rows_only_when_expanded(french):
    stats = aggregate(parse(french))
    assert "[fr] Flag fuzzy" not in dict(rows_for(stats))
    assert "[fr] Flag fuzzy" in dict(rows_for(stats, expand=True))


def test_table_without_color(german, template):
    lines = []
    renderer = TableRenderer(color=False, echo=lines.append)
    renderer([aggregate(parse(german)), aggregate(parse(template))])

    (table,) = lines
    assert "\x1b[" not in table
    assert "Comments" in table and "Strings" in table
    assert "[de] Dupe Keys" in table
    assert "[pot] Obsolete Values" in table
    assert "1 (33.33%)" in table
    widths = {len(line) for line in table.splitlines()}
    assert widths == {sum([30, 18, 18, 18]) + 5}


def test_table_styles(german):
    renderer = TableRenderer()
    table = renderer.render([aggregate(parse(german))])
    assert "\x1b[" in table


def test_unknown_language_is_unstyled():
    renderer = TableRenderer(styles={})
    assert renderer.style("text", "de") == "text"


def test_expanded_table_separates_rows(french):
    compact = TableRenderer(color=False).render([aggregate(parse(french))])
    expanded = TableRenderer(color=False, expand=True).render(
        [aggregate(parse(french))]
    )
    assert expanded.count("├") > compact.count("├")
    assert "[fr] Flag fuzzy" in expanded
