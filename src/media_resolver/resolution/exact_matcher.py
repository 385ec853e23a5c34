"""
Exact title matching tier.

Fast, deterministic matching on equal normalized keys.
"""
import logging
from typing import Optional, Sequence

from ..models import IncomingRecord
from .candidate_extractor import TitleCandidate
from .corpus import CorpusSnapshot
from .match_result import MatchMethod, MatchResult, MatchTier

logger = logging.getLogger(__name__)


class ExactTitleMatcher(MatchTier):
    """
    Exact match strategy over every candidate pair of the snapshot.

    Only corpus-side fields of priority DISPLAY or better can produce an exact
    match here. Equal keys on an alternate title are left to the fuzzy tier,
    which reports them for review instead of merging.
    """

    name = "title_exact"

    def match(
        self,
        incoming: IncomingRecord,
        incoming_candidates: Sequence[TitleCandidate],
        corpus: CorpusSnapshot,
    ) -> Optional[MatchResult]:
        """
        Find the exact match whose corpus-side field is most trusted.

        :param incoming: Record being resolved
        :param incoming_candidates: Its extracted title candidates
        :param corpus: Snapshot already narrowed to the incoming category
        :return: MatchResult, or None when no trusted field agrees
        """
        agreeing = (
            (record, corpus_candidate)
            for record, corpus_candidate, incoming_candidate in corpus.candidate_pairs(incoming_candidates)
            if corpus_candidate.priority.is_auto_mergeable
            and corpus_candidate.key == incoming_candidate.key
        )
        # min() keeps the first of equally trusted matches
        best = min(agreeing, key=lambda pair: pair[1].priority, default=None)
        if best is None:
            return None

        record, corpus_candidate = best
        logger.debug(
            f"Exact title match on '{corpus_candidate.original}' "
            f"(priority {int(corpus_candidate.priority)}) -> record {record.record_id!r}"
        )
        return MatchResult(
            matched_record_id=record.record_id,
            is_exact=True,
            similarity=100.0,
            matched_title=corpus_candidate.original,
            matched_priority=corpus_candidate.priority,
            match_method=MatchMethod.TITLE_EXACT,
            consecutive_count=len(corpus_candidate.key),
            matched_external_id=record.external_id,
        )
