import logging
import re

from postats.classes import Catalog, Entry
from postats.exceptions import (
    EntryError,
    MalformedCatalogError,
    MalformedEntryError,
    MissingIdentifierError,
)

logger = logging.getLogger(__name__)

_KEYWORD_RE = re.compile(
    r"^(msgctxt|msgid_plural|msgid|msgstr)(?:\[(\d+)\])?\s*(\".*)$", re.DOTALL
)
_ESCAPE_RE = re.compile(r"\\(n|t|r|\\|\"|[0-7]{1,3}|x[0-9a-fA-F]{2})")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"'}


def _unescape(value: str) -> str:
    def repl(match: re.Match[str]) -> str:
        escape = match.group(1)
        if escape in _ESCAPES:
            return _ESCAPES[escape]
        if escape.startswith("x"):
            return chr(int(escape[1:], 16))
        return chr(int(escape, 8))

    return _ESCAPE_RE.sub(repl, value)


def _parse_quoted(rest: str, line: int) -> str:
    rest = rest.strip()
    if len(rest) < 2 or not (rest.startswith('"') and rest.endswith('"')):
        raise MalformedEntryError(f"Invalid PO string: {rest!r}", line)
    return _unescape(rest[1:-1])


class _Block:
    """Lines of one message block while it is being read."""

    def __init__(self, line: int):
        self.line = line
        self.comments: list[str] = []
        self.extracted: list[str] = []
        self.references: list[str] = []
        self.previous: list[str] = []
        self.flags: set[str] = set()
        self.obsolete = False
        self.context: str | None = None
        self.msgid: str | None = None
        self.plural_id: str | None = None
        self.msgstr: dict[int, str] = {}
        self.active: tuple[str, int] | None = None
        self.error: EntryError | None = None

    @property
    def has_keywords(self) -> bool:
        return self.active is not None

    def fail(self, error: EntryError) -> None:
        if self.error is None:
            self.error = error

    def append(self, value: str, line: int) -> None:
        if self.active is None:
            raise MalformedEntryError("String continues no keyword", line)
        keyword, index = self.active
        if keyword == "msgctxt":
            self.context = (self.context or "") + value
        elif keyword == "msgid":
            self.msgid = (self.msgid or "") + value
        elif keyword == "msgid_plural":
            self.plural_id = (self.plural_id or "") + value
        else:
            self.msgstr[index] = self.msgstr.get(index, "") + value

    def to_entry(self) -> Entry:
        if self.msgid is None:
            raise MissingIdentifierError("Message block has no msgid", self.line)
        return Entry(
            id=self.msgid,
            translation=[self.msgstr[i] for i in sorted(self.msgstr)],
            obsolete=self.obsolete,
            flags=frozenset(self.flags),
            context=self.context,
            plural_id=self.plural_id,
            comments=self.comments,
            extracted_comments=self.extracted,
            references=self.references,
            previous=self.previous,
            line=self.line,
        )


class _CatalogBuilder:
    def __init__(self):
        self.headers: dict[str, str] = {}
        self.header_keys: list[str] = []
        self.comments: list[str] = []
        self.entries: list[Entry] = []
        self.seen_header = False
        self.dropped = 0

    def add(self, block: _Block) -> None:
        if block.error is not None:
            self.drop(block.error)
            return

        # A block without any keyword only carries free-standing comments
        if not block.has_keywords:
            self.comments.extend(block.comments)
            return

        try:
            entry = block.to_entry()
        except EntryError as ex:
            self.drop(ex)
            return

        if (
            not self.seen_header
            and entry.id == ""
            and entry.context is None
            and not entry.obsolete
        ):
            self.seen_header = True
            self.comments.extend(block.comments)
            self.add_headers("".join(entry.translation))
            return

        self.entries.append(entry)

    def add_headers(self, text: str) -> None:
        for line in text.split("\n"):
            if ":" not in line:
                continue
            key, value = line.split(":", 1)
            key = key.strip()
            if not key:
                continue
            self.header_keys.append(key)
            self.headers[key] = value.strip()

    def drop(self, error: EntryError) -> None:
        self.dropped += 1
        logger.debug(f"Skipping {type(error).__name__}: {error}")

    def build(self) -> Catalog:
        return Catalog(
            headers=self.headers,
            header_keys=self.header_keys,
            comments=self.comments,
            entries=self.entries,
        )


def parse(text: str) -> Catalog:
    """Parse the text of a PO/POT catalog.

    Parsing is best-effort: a message block that cannot be read is dropped
    and the rest of the catalog is still returned. ``MalformedCatalogError``
    is raised only when nothing in ``text`` looks like PO syntax.
    """
    if "\x00" in text:
        raise MalformedCatalogError("Catalog contains NUL characters")

    text = text.lstrip("\ufeff").replace("\r\n", "\n")
    builder = _CatalogBuilder()
    block: _Block | None = None
    recognized = 0
    content = 0

    for lineno, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()

        if not line:
            if block is not None:
                builder.add(block)
                block = None
            continue

        content += 1
        if block is None:
            block = _Block(lineno)

        obsolete = False
        if line.startswith("#~"):
            obsolete = True
            line = line[2:].strip()
            if line.startswith("|"):
                if block.msgstr:
                    builder.add(block)
                    block = _Block(lineno)
                block.previous.append(line[1:].strip())
                recognized += 1
                continue
            if not line:
                recognized += 1
                continue

        if line.startswith("#"):
            recognized += 1
            # a comment after a msgstr opens the next message
            if block.msgstr:
                builder.add(block)
                block = _Block(lineno)
            marker, rest = line[:2], line[2:].strip()
            if marker == "#,":
                block.flags.update(f.strip() for f in rest.split(",") if f.strip())
            elif marker == "#.":
                block.extracted.append(rest)
            elif marker == "#:":
                block.references.extend(rest.split())
            elif marker == "#|":
                block.previous.append(rest)
            else:
                block.comments.append(line[1:].strip())
            continue

        match = _KEYWORD_RE.match(line)
        if match:
            recognized += 1
            keyword, index, rest = match.groups()
            if keyword in ("msgctxt", "msgid") and (
                block.msgid is not None or block.msgstr
            ):
                builder.add(block)
                block = _Block(lineno)
            if obsolete:
                block.obsolete = True
            try:
                value = _parse_quoted(rest, lineno)
            except MalformedEntryError as ex:
                block.fail(ex)
                continue
            if keyword != "msgstr" and index is not None:
                block.fail(MalformedEntryError(f"{keyword} takes no index", lineno))
                continue
            block.active = (keyword, int(index or 0))
            if keyword == "msgctxt":
                block.context = value
            elif keyword == "msgid":
                block.msgid = value
            elif keyword == "msgid_plural":
                block.plural_id = value
            else:
                block.msgstr[int(index or 0)] = value
            continue

        if line.startswith('"'):
            recognized += 1
            if obsolete:
                block.obsolete = True
            try:
                block.append(_parse_quoted(line, lineno), lineno)
            except MalformedEntryError as ex:
                block.fail(ex)
            continue

        block.fail(MalformedEntryError(f"Unexpected line: {line!r}", lineno))

    if block is not None:
        builder.add(block)

    if content and not recognized:
        raise MalformedCatalogError("Text is not a PO catalog")

    if builder.dropped:
        logger.debug(f"Dropped {builder.dropped} malformed entries")
    return builder.build()
