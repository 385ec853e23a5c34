"""
Core abstractions for record matching.

Defines the match result type and the tier protocol every matching strategy
implements.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Hashable, Optional, Sequence

from ..models import IncomingRecord, TitlePriority
from .candidate_extractor import TitleCandidate

if TYPE_CHECKING:
    from .corpus import CorpusSnapshot


class MatchMethod(str, Enum):
    """Which tier produced a match."""
    EXTERNAL_ID = "external_id"
    TITLE_EXACT = "title_exact"
    TITLE_SIMILARITY = "title_similarity"


@dataclass(frozen=True)
class MatchResult:
    """
    Immutable result of resolving one incoming record.

    Attributes:
        matched_record_id: Identifier of the corpus record that matched
        is_exact: True for identifier hits and trusted exact-title hits
        similarity: Similarity between the agreeing keys, 0-100
        matched_title: Raw text of the corpus-side title that agreed
        matched_priority: Priority of that corpus-side title field
        match_method: Tier that produced the match
        consecutive_count: Anchored prefix length of the agreeing keys
        matched_external_id: External identifier carried by the matched record
    """
    matched_record_id: Hashable
    is_exact: bool
    similarity: float
    matched_title: str
    matched_priority: TitlePriority
    match_method: MatchMethod
    consecutive_count: int = 0
    matched_external_id: Optional[int] = None

    def __post_init__(self):
        """Validate similarity range and coerce enums."""
        if not 0.0 <= self.similarity <= 100.0:
            raise ValueError(f"Similarity must be between 0 and 100, got {self.similarity}")
        object.__setattr__(self, "matched_priority", TitlePriority(self.matched_priority))
        object.__setattr__(self, "match_method", MatchMethod(self.match_method))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "matched_record_id": self.matched_record_id,
            "is_exact": self.is_exact,
            "similarity": self.similarity,
            "matched_title": self.matched_title,
            "matched_priority": int(self.matched_priority),
            "match_method": self.match_method.value,
            "consecutive_count": self.consecutive_count,
            "matched_external_id": self.matched_external_id,
        }


class MatchTier(ABC):
    """
    One tier of the resolution escalation.

    A tier either produces a result, which ends the search, or returns None
    so the next tier runs.
    """

    name: str = "tier"
    # Title tiers only see records compatible with the incoming category hint
    uses_category_filter: bool = True

    @abstractmethod
    def match(
        self,
        incoming: IncomingRecord,
        incoming_candidates: Sequence[TitleCandidate],
        corpus: "CorpusSnapshot",
    ) -> Optional[MatchResult]:
        """
        Look for a match for ``incoming`` in ``corpus``.

        :param incoming: Record being resolved
        :param incoming_candidates: Its extracted title candidates
        :param corpus: Snapshot to search
        :return: MatchResult, or None when this tier finds nothing
        """
        pass
