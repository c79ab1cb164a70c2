from typing import Any, Callable

import click

from postats.classes import Stats
from postats.stats import percentage

# click.style() keyword arguments per language tag, plus the table's own styles
DEFAULT_STYLES: dict[str, dict[str, Any]] = {
    "header": {"fg": "white", "bold": True, "underline": True},
    "attention": {"fg": "red", "italic": True},
    "en": {"fg": "green", "bold": True},
    "de": {"fg": "cyan", "bold": True},
    "fr": {"fg": "blue", "bold": True},
    "ja": {"fg": "magenta", "bold": True},
    "pot": {"fg": "yellow", "bold": True, "italic": True},
}

HEAD = ["", "Comments", "Headers", "Strings"]
COL_WIDTHS = [30, 18, 18, 18]
MISSING = "--"

Cell = tuple[str, bool]


def format_percent(value: float) -> str:
    return f"{value:g}"


def with_percentage(individual: int | None, total: int) -> Cell:
    """Cell text ``"N (P%)"`` and whether it deserves attention."""
    if individual is None:
        return MISSING, False
    percent = percentage(individual, total)
    return f"{individual} ({format_percent(percent)}%)", bool(percent)


def rows_for(stats: Stats, expand: bool = False) -> list[tuple[str, list[Cell]]]:
    def plain(value: int) -> Cell:
        return str(value), False

    rows = [
        (
            "Total Keys",
            [
                plain(stats.comments.total),
                plain(stats.headers.total),
                plain(stats.entries.total),
            ],
        ),
        (
            "Dupe Keys",
            [
                with_percentage(stats.comments.duplicates, stats.comments.total),
                with_percentage(stats.headers.duplicates, stats.headers.total),
                with_percentage(stats.entries.duplicates, stats.entries.total),
            ],
        ),
        (
            "Empty Values",
            [
                with_percentage(None, 0),
                with_percentage(None, 0),
                with_percentage(stats.empty, stats.entries.total),
            ],
        ),
        (
            "Obsolete Values",
            [
                with_percentage(None, 0),
                with_percentage(None, 0),
                with_percentage(stats.obsolete, stats.entries.total),
            ],
        ),
    ]
    if expand:
        for flag, count in sorted(stats.flags.items()):
            rows.append(
                (
                    f"Flag {flag}",
                    [
                        with_percentage(None, 0),
                        with_percentage(None, 0),
                        with_percentage(count, stats.entries.total),
                    ],
                )
            )
    return [(f"[{stats.language}] {label}", cells) for label, cells in rows]


class TableRenderer:
    """Prints all collected stats as one table once the batch is done."""

    def __init__(
        self,
        styles: dict[str, dict[str, Any]] | None = None,
        expand: bool = False,
        color: bool = True,
        echo: Callable[[str], Any] = click.echo,
    ):
        self.styles = DEFAULT_STYLES if styles is None else styles
        self.expand = expand
        self.color = color
        self.echo = echo

    def style(self, text: str, name: str) -> str:
        if not self.color or name not in self.styles:
            return text
        return click.style(text, **self.styles[name])

    def cell(self, text: str, width: int, left: bool = False) -> str:
        inner = width - 2
        if len(text) > inner:
            text = text[: inner - 1] + "…"
        return " " + (text.ljust(inner) if left else text.center(inner)) + " "

    def rule(self, left: str, middle: str, right: str) -> str:
        return left + middle.join("─" * width for width in COL_WIDTHS) + right

    def row(self, label: str, label_style: str, cells: list[Cell]) -> str:
        parts = [self.style(self.cell(label, COL_WIDTHS[0], left=True), label_style)]
        for (text, attention), width in zip(cells, COL_WIDTHS[1:]):
            padded = self.cell(text, width)
            parts.append(self.style(padded, "attention") if attention else padded)
        return "│" + "│".join(parts) + "│"

    def render(self, all_stats: list[Stats]) -> str:
        lines = [self.rule("┌", "┬", "┐")]
        head = [self.cell(HEAD[0], COL_WIDTHS[0])] + [
            self.style(self.cell(text, width), "header")
            for text, width in zip(HEAD[1:], COL_WIDTHS[1:])
        ]
        lines.append("│" + "│".join(head) + "│")
        lines.append(self.rule("├", "┼", "┤"))
        body: list[str] = []
        for stats in all_stats:
            for label, cells in rows_for(stats, self.expand):
                if body and self.expand:
                    body.append(self.rule("├", "┼", "┤"))
                body.append(self.row(label, stats.language, cells))
        lines.extend(body)
        lines.append(self.rule("└", "┴", "┘"))
        return "\n".join(lines)

    def __call__(self, all_stats: list[Stats]) -> None:
        self.echo(self.render(all_stats))
