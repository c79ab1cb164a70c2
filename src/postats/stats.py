import logging
from collections import Counter

from postats.classes import Catalog, CategoryStats, Entry, Stats

logger = logging.getLogger(__name__)

TEMPLATE_LANGUAGE = "pot"


def percentage(individual: int, total: int) -> float:
    """Share of ``individual`` in ``total`` rounded to two decimals.

    A zero total is treated as one, so ``percentage(0, 0)`` is 0.
    """
    return round(individual / (total or 1) * 100, 2)


def is_empty(entry: Entry) -> bool:
    return not "".join(entry.translation)


def _category(values: list[str]) -> CategoryStats:
    return CategoryStats(total=len(values), unique=len(set(values)))


def aggregate(catalog: Catalog, filename: str | None = None) -> Stats:
    language = catalog.headers.get("Language", "").strip() or TEMPLATE_LANGUAGE

    flags: Counter[str] = Counter()
    for entry in catalog.entries:
        flags.update(entry.flags)

    stats = Stats(
        language=language,
        comments=_category(catalog.comments),
        headers=CategoryStats(
            total=len(catalog.header_keys or catalog.headers),
            unique=len(catalog.headers),
        ),
        entries=_category([entry.id for entry in catalog.entries]),
        empty=sum(1 for entry in catalog.entries if is_empty(entry)),
        obsolete=sum(1 for entry in catalog.entries if entry.obsolete),
        flags=dict(flags),
        filename=filename,
    )
    logger.debug(f"Aggregated {stats.entries.total} entries for [{language}]")
    return stats
