from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Entry:
    id: str
    translation: list[str] = field(default_factory=list)
    obsolete: bool = False
    flags: frozenset[str] = frozenset()
    context: str | None = None
    plural_id: str | None = None
    comments: list[str] = field(default_factory=list)
    extracted_comments: list[str] = field(default_factory=list)
    references: list[str] = field(default_factory=list)
    previous: list[str] = field(default_factory=list)
    line: int = 0


@dataclass(frozen=True)
class Catalog:
    headers: dict[str, str] = field(default_factory=dict)
    # every header key as written, including keys that were overwritten later
    header_keys: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)
    entries: list[Entry] = field(default_factory=list)


@dataclass(frozen=True)
class CategoryStats:
    total: int = 0
    unique: int = 0

    @property
    def duplicates(self) -> int:
        return self.total - self.unique


@dataclass(frozen=True)
class Stats:
    language: str
    comments: CategoryStats
    headers: CategoryStats
    entries: CategoryStats
    empty: int = 0
    obsolete: int = 0
    flags: dict[str, int] = field(default_factory=dict)
    filename: str | None = None


@dataclass
class CatalogFile:
    filename: str
    contents: Any = None
