"""
Candidate extraction from record title fields.

Turns a record into the ordered list of normalized keys the matching tiers
compare. Alternate-title fields often pack several titles in one string
(or a JSON array), so they are split before normalization.
"""
import json
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from ..models import TitledRecord, TitlePriority
from .normalizer import normalize_title

_ALTERNATE_SEPARATORS_RE = re.compile(r"[\n\r;,/|]+")


@dataclass(frozen=True)
class TitleCandidate:
    """A normalized key with the priority and raw text of the field it came from."""
    key: str
    priority: TitlePriority
    original: str


def split_alternative_titles(value: Union[str, Sequence[str], None]) -> List[str]:
    """
    Split an alternate-titles value into individual titles.

    Accepts a list, a JSON array string (``'["A", "B"]'``) or a packed string
    separated by ``/``, ``|``, ``;``, ``,`` or line breaks.

    :param value: Raw alternate-titles value
    :return: Trimmed, non-empty titles in source order
    """
    if not value:
        return []

    if not isinstance(value, str):
        titles: List[str] = []
        for item in value:
            if item is None:
                continue
            titles.extend(split_alternative_titles(str(item)))
        return titles

    stripped = value.strip()
    if stripped.startswith("[") and stripped.endswith("]"):
        try:
            parsed = json.loads(stripped)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return [str(item).strip() for item in parsed if item is not None and str(item).strip()]

    pieces = (piece.strip() for piece in _ALTERNATE_SEPARATORS_RE.split(stripped))
    cleaned = (re.sub(r"^\[|\]$", "", piece).strip() for piece in pieces)
    return [piece for piece in cleaned if piece]


def _field_texts(text: Optional[str], priority: TitlePriority) -> Iterable[str]:
    if not text or not text.strip():
        return []
    if priority == TitlePriority.ALTERNATE:
        return split_alternative_titles(text)
    return [text.strip()]


def extract_candidates(record: TitledRecord) -> List[TitleCandidate]:
    """
    Extract normalized title candidates from a record.

    Blank fields and titles that normalize to an empty key are dropped.
    Repeated (key, priority) pairs are kept once. The result is sorted by
    priority, most trusted first; within one priority the field order of the
    record is preserved.

    :param record: Any record exposing ``title_fields()``
    :return: List of TitleCandidate
    """
    candidates: List[TitleCandidate] = []
    seen = set()

    for title_field in record.title_fields():
        for text in _field_texts(title_field.text, title_field.priority):
            key = normalize_title(text)
            if not key or (key, title_field.priority) in seen:
                continue
            seen.add((key, title_field.priority))
            candidates.append(TitleCandidate(key=key, priority=title_field.priority, original=text))

    # sorted() is stable, so field order survives within a priority
    return sorted(candidates, key=lambda c: c.priority)
