"""
External identifier matching tier.

An equal catalog identifier is authoritative: no title comparison happens.
"""
import logging
from typing import Optional, Sequence

from ..models import IncomingRecord, TitlePriority
from .candidate_extractor import TitleCandidate, extract_candidates
from .corpus import CorpusSnapshot
from .match_result import MatchMethod, MatchResult, MatchTier

logger = logging.getLogger(__name__)


class ExternalIdMatcher(MatchTier):
    """First tier: look the incoming external identifier up in the snapshot."""

    name = "external_id"
    uses_category_filter = False

    def match(
        self,
        incoming: IncomingRecord,
        incoming_candidates: Sequence[TitleCandidate],
        corpus: CorpusSnapshot,
    ) -> Optional[MatchResult]:
        record = corpus.find_by_external_id(incoming.external_id)
        if record is None:
            return None

        title, priority = self._reported_title(record)
        logger.debug(f"External id {incoming.external_id} matched record {record.record_id!r}")
        return MatchResult(
            matched_record_id=record.record_id,
            is_exact=True,
            similarity=100.0,
            matched_title=title,
            matched_priority=priority,
            match_method=MatchMethod.EXTERNAL_ID,
            matched_external_id=record.external_id,
        )

    @staticmethod
    def _reported_title(record):
        # Report the display title when there is one, else the most trusted title
        candidates = extract_candidates(record)
        for candidate in candidates:
            if candidate.priority == TitlePriority.DISPLAY:
                return candidate.original, candidate.priority
        if candidates:
            return candidates[0].original, candidates[0].priority
        return "", TitlePriority.DISPLAY
