"""
Record resolver combining tier escalation and merge decisions.
"""
import logging
from typing import Callable, Iterable, List, Optional, Tuple

from ..models import IncomingRecord
from .match_result import MatchResult
from .merge_policy import MergeDecision, MergeDecisionPolicy
from .resolution_metadata import ResolutionOutcome, ResolutionReport
from .resolution_policy import Corpus, ResolutionPolicy, as_snapshot

logger = logging.getLogger(__name__)


class RecordResolver:
    """
    Concrete resolver for import batches.

    Combines:
    - ResolutionPolicy (external id -> exact title -> fuzzy title)
    - MergeDecisionPolicy (conflict guard and promotion rules)

    Usage:
        resolver = RecordResolver()
        match, decision = resolver.resolve_and_decide(incoming, corpus)
        if isinstance(decision, AutoMerge):
            update(decision.record_id, incoming)
    """

    def __init__(
        self,
        policy: Optional[ResolutionPolicy] = None,
        merge_policy: Optional[MergeDecisionPolicy] = None,
    ):
        self._policy = policy or ResolutionPolicy()
        self._merge_policy = merge_policy or MergeDecisionPolicy()

    def resolve(self, incoming: IncomingRecord, corpus: Corpus) -> Optional[MatchResult]:
        return self._policy.resolve(incoming, corpus)

    def decide(self, incoming: IncomingRecord, match: Optional[MatchResult]) -> MergeDecision:
        return self._merge_policy.decide(incoming, match)

    def resolve_and_decide(
        self,
        incoming: IncomingRecord,
        corpus: Corpus,
    ) -> Tuple[Optional[MatchResult], MergeDecision]:
        match = self.resolve(incoming, corpus)
        return match, self.decide(incoming, match)

    def resolve_batch(
        self,
        incomings: Iterable[IncomingRecord],
        corpus: Corpus,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> ResolutionReport:
        """
        Resolve a batch against one frozen snapshot.

        Records are independent of each other; the snapshot is built once and
        never updated mid-batch, so records created by this batch are not
        matched against later records of the same batch.

        :param incomings: Records to resolve
        :param corpus: CorpusSnapshot or sequence of LibraryRecord
        :param should_cancel: Checked between records; returning True stops the batch
        :return: ResolutionReport
        """
        snapshot = as_snapshot(corpus)
        report = ResolutionReport()

        for incoming in incomings:
            if should_cancel is not None and should_cancel():
                logger.info(f"Batch cancelled after {report.total} records")
                report.cancelled = True
                break
            match, decision = self.resolve_and_decide(incoming, snapshot)
            report.add(ResolutionOutcome(incoming=incoming, match=match, decision=decision))

        stats = report.stats
        logger.info(
            f"Resolved {stats['total']} records against {len(snapshot)}: "
            f"{stats['merged']} merged, {stats['review']} for review, {stats['created']} new "
            f"({stats['identifier_conflicts']} identifier conflicts)"
        )
        return report

    def resolve_multiple(self, incomings: List[IncomingRecord], corpus: Corpus) -> List[Optional[MatchResult]]:
        """
        Resolve several records without deciding.

        :param incomings: Records to resolve
        :param corpus: CorpusSnapshot or sequence of LibraryRecord
        :return: One MatchResult (or None) per record
        """
        snapshot = as_snapshot(corpus)
        return [self.resolve(incoming, snapshot) for incoming in incomings]
