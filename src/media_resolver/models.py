"""
Domain records for entity resolution.

A record is anything that can list its title fields and, optionally, an
external catalog identifier. Library and incoming records share that shape,
so one engine serves book/manga series and animated series alike.
"""
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Hashable, Optional, Protocol, Tuple, runtime_checkable


class TitlePriority(IntEnum):
    """
    Semantic trust rank of a title field.

    Lower value means higher trust for automatic merging. The ordering is the
    integer ordering, so ``min()`` over priorities yields the most trusted one.
    """
    ROMANIZED = 1
    NATIVE = 2
    ENGLISH = 3
    DISPLAY = 4
    ALTERNATE = 5

    @property
    def is_auto_mergeable(self) -> bool:
        """Alternate titles collide across unrelated works and never auto-merge."""
        return self <= TitlePriority.DISPLAY


@dataclass(frozen=True)
class TitleField:
    text: str
    priority: TitlePriority

    def __post_init__(self):
        object.__setattr__(self, "priority", TitlePriority(self.priority))
        if self.text is None:
            object.__setattr__(self, "text", "")


@runtime_checkable
class TitledRecord(Protocol):
    """Capability interface the engine needs from any record shape."""

    external_id: Optional[int]

    def title_fields(self) -> Tuple[TitleField, ...]:
        ...


def _display_title(titles: Tuple[TitleField, ...]) -> str:
    populated = [t for t in titles if t.text and t.text.strip()]
    for title in populated:
        if title.priority == TitlePriority.DISPLAY:
            return title.text.strip()
    if not populated:
        return ""
    return min(populated, key=lambda t: t.priority).text.strip()


@dataclass(frozen=True)
class LibraryRecord:
    """
    An existing corpus entry.

    Attributes:
        record_id: Opaque identifier owned by the persistence layer
        titles: Title fields, any order, duplicates and blanks allowed
        external_id: Catalog identifier (e.g. a MyAnimeList id), unique when present
        category: Optional category tag used to prune candidates
    """
    record_id: Hashable
    titles: Tuple[TitleField, ...] = field(default_factory=tuple)
    external_id: Optional[int] = None
    category: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "titles", tuple(self.titles))

    def title_fields(self) -> Tuple[TitleField, ...]:
        return self.titles

    @property
    def display_title(self) -> str:
        return _display_title(self.titles)


@dataclass(frozen=True)
class IncomingRecord:
    """
    A record from an import source, not yet persisted.

    ``source_label`` is free text for reports (source name, row number...).
    """
    titles: Tuple[TitleField, ...] = field(default_factory=tuple)
    external_id: Optional[int] = None
    category_hint: Optional[str] = None
    source_label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "titles", tuple(self.titles))

    def title_fields(self) -> Tuple[TitleField, ...]:
        return self.titles

    @property
    def display_title(self) -> str:
        return _display_title(self.titles)
