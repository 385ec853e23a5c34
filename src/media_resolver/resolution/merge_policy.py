"""
Merge decision policy.

Turns a raw match into what the import driver should do: merge into the
existing record, create a new record but keep a suggestion for manual
linking, or simply create a new record.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Optional, Union

from ..models import IncomingRecord
from .match_result import MatchMethod, MatchResult

logger = logging.getLogger(__name__)


class DecisionKind(str, Enum):
    AUTO_MERGE = "auto_merge"
    REVIEW_SUGGESTED = "review_suggested"
    CREATE_NEW = "create_new"


@dataclass(frozen=True)
class IdentifierConflict:
    """
    A title match rejected because both records carry different external ids.

    Not an error: two catalog ids prove two distinct works. Kept on the
    decision so the near miss can be shown to a human.
    """
    record_id: Hashable
    incoming_external_id: int
    existing_external_id: int
    similarity: float
    matched_title: str
    match_method: MatchMethod

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "incoming_external_id": self.incoming_external_id,
            "existing_external_id": self.existing_external_id,
            "similarity": self.similarity,
            "matched_title": self.matched_title,
            "match_method": self.match_method.value,
        }


@dataclass(frozen=True)
class AutoMerge:
    record_id: Hashable
    match: Optional[MatchResult] = None
    kind: DecisionKind = DecisionKind.AUTO_MERGE


@dataclass(frozen=True)
class ReviewSuggested:
    """Create a new record, and suggest linking it to ``record_id`` later."""
    record_id: Hashable
    similarity: float
    matched_title: str
    match: Optional[MatchResult] = None
    kind: DecisionKind = DecisionKind.REVIEW_SUGGESTED


@dataclass(frozen=True)
class CreateNew:
    conflict: Optional[IdentifierConflict] = None
    kind: DecisionKind = DecisionKind.CREATE_NEW

    @property
    def needs_review(self) -> bool:
        return self.conflict is not None


MergeDecision = Union[AutoMerge, ReviewSuggested, CreateNew]


class MergeDecisionPolicy:
    """
    Stateless classification of match results.

    Rules, first applicable wins:
    1. No match -> CreateNew
    2. External id tier -> AutoMerge
    3. Both sides carry external ids that differ -> CreateNew with a conflict
    4. Both sides carry the same external id -> AutoMerge
    5. Exact match on a trusted title field -> AutoMerge
    6. Anything else (alternate-title agreement, fuzzy match) -> ReviewSuggested
    """

    def decide(self, incoming: IncomingRecord, match: Optional[MatchResult]) -> MergeDecision:
        """
        Classify a match result for one incoming record.

        :param incoming: Record that was resolved
        :param match: Result of ResolutionPolicy.resolve, or None
        :return: AutoMerge, ReviewSuggested or CreateNew
        """
        if match is None:
            return CreateNew()

        if match.match_method == MatchMethod.EXTERNAL_ID:
            return AutoMerge(record_id=match.matched_record_id, match=match)

        incoming_id = incoming.external_id
        existing_id = match.matched_external_id
        if incoming_id is not None and existing_id is not None:
            if incoming_id != existing_id:
                logger.warning(
                    f"External id mismatch (existing: {existing_id}, incoming: {incoming_id}) "
                    f"for '{incoming.display_title}' matched on '{match.matched_title}' "
                    f"-> creating a new record"
                )
                return CreateNew(conflict=IdentifierConflict(
                    record_id=match.matched_record_id,
                    incoming_external_id=incoming_id,
                    existing_external_id=existing_id,
                    similarity=match.similarity,
                    matched_title=match.matched_title,
                    match_method=match.match_method,
                ))
            # Only reachable from hand-built results; the identifier tier catches equal ids first
            return AutoMerge(record_id=match.matched_record_id, match=match)

        if (
            match.is_exact
            and match.match_method == MatchMethod.TITLE_EXACT
            and match.matched_priority.is_auto_mergeable
        ):
            return AutoMerge(record_id=match.matched_record_id, match=match)

        logger.debug(
            f"Similar title detected ({match.similarity}%) for '{incoming.display_title}' "
            f"-> suggesting record {match.matched_record_id!r} for review"
        )
        return ReviewSuggested(
            record_id=match.matched_record_id,
            similarity=match.similarity,
            matched_title=match.matched_title,
            match=match,
        )
