import codecs
import logging
import re
from typing import Callable, Iterable, Iterator

from postats import parser, stats
from postats.classes import CatalogFile, Stats
from postats.exceptions import (
    MalformedCatalogError,
    PostatsError,
    UnsupportedInputError,
)

logger = logging.getLogger(__name__)

# UTF-32 first, its little-endian BOM starts with the UTF-16 one
_BOMS = [
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
]
_CHARSET_RE = re.compile(rb"charset\s*=\s*([A-Za-z0-9_.:-]+)")

Renderer = Callable[[list[Stats]], None]
ErrorHandler = Callable[[CatalogFile, PostatsError], None]


def is_buffer(item: CatalogFile) -> bool:
    """Whether the item holds its whole contents in memory."""
    return item.contents is None or isinstance(
        item.contents, (str, bytes, bytearray)
    )


def read_text(item: CatalogFile) -> str | None:
    """Text of a buffered item, or None for empty and binary contents.

    Bytes are decoded by their BOM when they carry one, else by the
    catalog's own ``charset=`` header, else as UTF-8. Undecodable bytes
    are replaced rather than rejected.
    """
    contents = item.contents
    if not contents:
        return None
    if isinstance(contents, str):
        return contents
    data = bytes(contents)
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return data.decode(encoding, errors="replace")
    if b"\x00" in data:
        return None
    return data.decode(declared_charset(data), errors="replace")


def declared_charset(data: bytes) -> str:
    match = _CHARSET_RE.search(data)
    if match:
        charset = match.group(1).decode("ascii")
        try:
            return codecs.lookup(charset).name
        except LookupError:
            logger.debug(f"Unknown charset {charset!r}, reading as UTF-8")
    return "utf-8"


def log_error(item: CatalogFile, error: PostatsError) -> None:
    logger.error(f"{item.filename}: {type(error).__name__}: {error}")


class StatsPipeline:
    """Pass-through stage that collects one Stats per catalog.

    Every item given to ``process`` is yielded back unchanged and in order.
    Once the input is exhausted the collected stats are handed to the
    renderer in a single call.
    """

    def __init__(self, renderer: Renderer, on_error: ErrorHandler | None = None):
        self.renderer = renderer
        self.on_error = on_error or log_error
        self.errors: list[PostatsError] = []
        self.stats: list[Stats] = []

    def report(self, item: CatalogFile, error: PostatsError) -> None:
        self.errors.append(error)
        self.on_error(item, error)

    def collect(self, item: CatalogFile) -> Stats | None:
        if not is_buffer(item):
            self.report(item, UnsupportedInputError(item.filename))
            return None

        text = read_text(item)
        if text is None:
            logger.debug(f"Passing through {item.filename} without contents")
            return None

        logger.debug(f"Parsing {item.filename}")
        try:
            catalog = parser.parse(text)
        except MalformedCatalogError as ex:
            ex.filename = item.filename
            self.report(item, ex)
            return None
        return stats.aggregate(catalog, filename=item.filename)

    def process(self, items: Iterable[CatalogFile]) -> Iterator[CatalogFile]:
        for item in items:
            result = self.collect(item)
            if result is not None:
                self.stats.append(result)
            yield item

        logger.info(f"Collected stats for {len(self.stats)} catalogs")
        self.renderer(list(self.stats))


def run(
    items: Iterable[CatalogFile],
    renderer: Renderer,
    on_error: ErrorHandler | None = None,
) -> list[CatalogFile]:
    return list(StatsPipeline(renderer, on_error).process(items))
