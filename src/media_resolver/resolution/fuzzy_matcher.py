"""
Fuzzy title matching tier.

Handles subtitle extensions, season suffixes and near-miss spellings, and
picks up exact agreements on alternate titles that the exact tier refuses
to treat as trusted.
"""
import logging
from typing import Optional, Sequence, Tuple

from ..models import IncomingRecord, LibraryRecord
from .candidate_extractor import TitleCandidate
from .corpus import CorpusSnapshot
from .match_result import MatchMethod, MatchResult, MatchTier
from .similarity import MIN_CONSECUTIVE_CHARS, StrictMatch, is_strict_match

logger = logging.getLogger(__name__)

ScoredPair = Tuple[LibraryRecord, TitleCandidate, StrictMatch]


def rank_key(scored: ScoredPair) -> Tuple[int, int, float]:
    """
    Ordering of fuzzy candidates, larger is better.

    Most trusted corpus field first, then longer anchored prefix, then higher
    similarity.
    """
    _, corpus_candidate, strict = scored
    return (-int(corpus_candidate.priority), strict.consecutive_count, strict.similarity)


class FuzzyTitleMatcher(MatchTier):
    """
    Fuzzy match strategy gated on an anchored common prefix.

    A pair qualifies when its keys are equal, or when they share at least
    ``min_consecutive`` leading characters; either way its similarity must
    reach ``threshold``.
    """

    name = "title_similarity"

    def __init__(
        self,
        threshold: float = 75.0,
        min_consecutive: int = MIN_CONSECUTIVE_CHARS,
    ):
        """
        Initialize fuzzy matcher.

        :param threshold: Minimum similarity percentage to keep a pair (0-100)
        :param min_consecutive: Minimum anchored prefix length for unequal keys
        """
        if not 0.0 <= threshold <= 100.0:
            raise ValueError(f"Threshold must be between 0 and 100, got {threshold}")
        if min_consecutive < 1:
            raise ValueError(f"min_consecutive must be at least 1, got {min_consecutive}")

        self.threshold = threshold
        self.min_consecutive = min_consecutive

    def _score(self, corpus_key: str, incoming_key: str) -> StrictMatch:
        if corpus_key == incoming_key:
            return StrictMatch(is_match=True, similarity=100.0, consecutive_count=len(corpus_key))
        return is_strict_match(incoming_key, corpus_key, self.min_consecutive)

    def match(
        self,
        incoming: IncomingRecord,
        incoming_candidates: Sequence[TitleCandidate],
        corpus: CorpusSnapshot,
    ) -> Optional[MatchResult]:
        scored = (
            (record, corpus_candidate, self._score(corpus_candidate.key, incoming_candidate.key))
            for record, corpus_candidate, incoming_candidate in corpus.candidate_pairs(incoming_candidates)
        )
        qualifying = (
            entry for entry in scored
            if entry[2].is_match and entry[2].similarity >= self.threshold
        )
        # max() keeps the first of fully tied candidates
        best = max(qualifying, key=rank_key, default=None)
        if best is None:
            return None

        record, corpus_candidate, strict = best
        logger.debug(
            f"Fuzzy title match on '{corpus_candidate.original}' "
            f"(similarity={strict.similarity}, consecutive={strict.consecutive_count}, "
            f"priority {int(corpus_candidate.priority)}) -> record {record.record_id!r}"
        )
        return MatchResult(
            matched_record_id=record.record_id,
            is_exact=False,
            similarity=strict.similarity,
            matched_title=corpus_candidate.original,
            matched_priority=corpus_candidate.priority,
            match_method=MatchMethod.TITLE_SIMILARITY,
            consecutive_count=strict.consecutive_count,
            matched_external_id=record.external_id,
        )
