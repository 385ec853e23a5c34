"""
Resolution metadata for import reports.

Used to surface merge outcomes and near misses for explainability.
"""
from dataclasses import dataclass, field
from typing import Hashable, List, Optional

from ..models import IncomingRecord
from .match_result import MatchResult
from .merge_policy import CreateNew, DecisionKind, MergeDecision, ReviewSuggested


@dataclass
class PotentialMatch:
    """
    A near miss kept for manual linking.

    Tracks:
    - Which incoming title was resolved
    - Which existing record it resembled, and on which title
    - Similarity and matching method
    - Whether a conflicting external id blocked the merge
    """
    incoming_title: str
    existing_record_id: Hashable
    matched_title: str
    similarity: float
    match_method: str
    incoming_external_id: Optional[int] = None
    existing_external_id: Optional[int] = None
    identifier_conflict: bool = False
    source_label: Optional[str] = None

    @classmethod
    def from_decision(cls, incoming: IncomingRecord, decision: MergeDecision) -> Optional["PotentialMatch"]:
        """Build a near miss from a decision, or None when there is nothing to review."""
        if isinstance(decision, ReviewSuggested):
            match = decision.match
            return cls(
                incoming_title=incoming.display_title,
                existing_record_id=decision.record_id,
                matched_title=decision.matched_title,
                similarity=decision.similarity,
                match_method=match.match_method.value if match else "title_similarity",
                incoming_external_id=incoming.external_id,
                existing_external_id=match.matched_external_id if match else None,
                source_label=incoming.source_label,
            )
        if isinstance(decision, CreateNew) and decision.conflict is not None:
            conflict = decision.conflict
            return cls(
                incoming_title=incoming.display_title,
                existing_record_id=conflict.record_id,
                matched_title=conflict.matched_title,
                similarity=conflict.similarity,
                match_method=conflict.match_method.value,
                incoming_external_id=conflict.incoming_external_id,
                existing_external_id=conflict.existing_external_id,
                identifier_conflict=True,
                source_label=incoming.source_label,
            )
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result = {
            "incoming_title": self.incoming_title,
            "existing_record_id": self.existing_record_id,
            "matched_title": self.matched_title,
            "similarity": self.similarity,
            "match_method": self.match_method,
            "identifier_conflict": self.identifier_conflict,
        }

        if self.incoming_external_id is not None:
            result["incoming_external_id"] = self.incoming_external_id

        if self.existing_external_id is not None:
            result["existing_external_id"] = self.existing_external_id

        if self.source_label:
            result["source_label"] = self.source_label

        return result


@dataclass
class ResolutionOutcome:
    """Decision for one incoming record, with the match it was based on."""
    incoming: IncomingRecord
    match: Optional[MatchResult]
    decision: MergeDecision


@dataclass
class ResolutionReport:
    """Outcomes of a batch, grouped by decision kind."""
    merged: List[ResolutionOutcome] = field(default_factory=list)
    review: List[ResolutionOutcome] = field(default_factory=list)
    created: List[ResolutionOutcome] = field(default_factory=list)
    potential_matches: List[PotentialMatch] = field(default_factory=list)
    cancelled: bool = False

    def add(self, outcome: ResolutionOutcome) -> None:
        kind = outcome.decision.kind
        if kind == DecisionKind.AUTO_MERGE:
            self.merged.append(outcome)
        elif kind == DecisionKind.REVIEW_SUGGESTED:
            self.review.append(outcome)
        else:
            self.created.append(outcome)

        potential = PotentialMatch.from_decision(outcome.incoming, outcome.decision)
        if potential is not None:
            self.potential_matches.append(potential)

    @property
    def total(self) -> int:
        return len(self.merged) + len(self.review) + len(self.created)

    @property
    def stats(self) -> dict:
        return {
            "total": self.total,
            "merged": len(self.merged),
            "review": len(self.review),
            "created": len(self.created),
            "identifier_conflicts": sum(1 for p in self.potential_matches if p.identifier_conflict),
        }

    def to_dict(self) -> dict:
        return {
            "stats": self.stats,
            "cancelled": self.cancelled,
            "potential_matches": [p.to_dict() for p in self.potential_matches],
        }
