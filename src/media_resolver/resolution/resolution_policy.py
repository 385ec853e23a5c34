"""
Resolution policy for tier escalation.

Implements the escalation: external id -> exact title -> fuzzy title.
"""
import logging
from typing import Iterable, List, Optional, Union

from ..models import IncomingRecord, LibraryRecord
from .candidate_extractor import extract_candidates
from .corpus import CorpusSnapshot
from .exact_matcher import ExactTitleMatcher
from .fuzzy_matcher import FuzzyTitleMatcher
from .identifier_matcher import ExternalIdMatcher
from .match_result import MatchResult, MatchTier

logger = logging.getLogger(__name__)

Corpus = Union[CorpusSnapshot, Iterable[LibraryRecord]]


def as_snapshot(corpus: Corpus) -> CorpusSnapshot:
    """Wrap a plain record sequence in a snapshot; snapshots pass through."""
    if isinstance(corpus, CorpusSnapshot):
        return corpus
    return CorpusSnapshot(corpus or ())


def default_tiers(
    fuzzy_threshold: float = 75.0,
    min_consecutive: int = 5,
    enable_fuzzy: bool = True,
) -> List[MatchTier]:
    """Standard escalation order."""
    tiers: List[MatchTier] = [ExternalIdMatcher(), ExactTitleMatcher()]
    if enable_fuzzy:
        tiers.append(FuzzyTitleMatcher(threshold=fuzzy_threshold, min_consecutive=min_consecutive))
    return tiers


class ResolutionPolicy:
    """
    Policy for escalating through matching tiers.

    Tries tiers in order and returns the first result. Each call is a pure
    function of the incoming record and the snapshot, so one policy can be
    shared across threads resolving different records.
    """

    def __init__(self, tiers: Optional[List[MatchTier]] = None):
        """
        Initialize resolution policy.

        :param tiers: Tiers to try in order. Defaults to id, exact, fuzzy.
        """
        if tiers is None:
            tiers = default_tiers()
        if not tiers:
            raise ValueError("At least one tier must be provided")

        self._tiers = list(tiers)

    @property
    def tiers(self) -> List[MatchTier]:
        return list(self._tiers)

    def resolve(self, incoming: IncomingRecord, corpus: Corpus) -> Optional[MatchResult]:
        """
        Resolve an incoming record against the corpus.

        Escalation logic:
        1. External id lookup over the whole snapshot
        2. Exact title match on trusted fields, within the category
        3. Fuzzy title match, within the category
        The first tier that returns a result wins.

        :param incoming: Record to resolve
        :param corpus: CorpusSnapshot or sequence of LibraryRecord
        :return: MatchResult, or None when no tier matches
        """
        snapshot = as_snapshot(corpus)
        scoped = snapshot.for_category(incoming.category_hint)
        candidates = extract_candidates(incoming)

        for tier in self._tiers:
            searched = scoped if tier.uses_category_filter else snapshot
            result = tier.match(incoming, candidates, searched)
            if result is not None:
                return result

        logger.debug(
            f"No match for '{incoming.display_title}' "
            f"({len(candidates)} candidates, {len(scoped)} records in scope)"
        )
        return None
