"""
Entity resolution for a personal media library.

Module-level ``resolve`` and ``decide`` use the default policies.
"""
from typing import Optional

from .config import ResolverConfig
from .config_loader import load_config_from_env
from .data_loader import RecordLoader
from .exceptions import ConfigurationError, MediaResolverError, RecordValidationError
from .models import IncomingRecord, LibraryRecord, TitledRecord, TitleField, TitlePriority
from .resolution import (
    AutoMerge,
    CorpusSnapshot,
    CreateNew,
    MatchMethod,
    MatchResult,
    MergeDecision,
    MergeDecisionPolicy,
    RecordResolver,
    ResolutionPolicy,
    ReviewSuggested,
    create_record_resolver,
    extract_candidates,
    normalize_title,
    score_similarity,
)
from .resolution.resolution_policy import Corpus
from .schemas import AnimeRow, SeriesRow

_default_policy = ResolutionPolicy()
_default_merge_policy = MergeDecisionPolicy()


def resolve(incoming: IncomingRecord, corpus: Corpus) -> Optional[MatchResult]:
    """Resolve ``incoming`` against ``corpus`` with the default tiers."""
    return _default_policy.resolve(incoming, corpus)


def decide(incoming: IncomingRecord, match: Optional[MatchResult]) -> MergeDecision:
    """Classify a match result with the default merge policy."""
    return _default_merge_policy.decide(incoming, match)


__all__ = [
    "resolve",
    "decide",
    "normalize_title",
    "score_similarity",
    "extract_candidates",
    "ResolverConfig",
    "load_config_from_env",
    "RecordLoader",
    "ConfigurationError",
    "MediaResolverError",
    "RecordValidationError",
    "IncomingRecord",
    "LibraryRecord",
    "TitledRecord",
    "TitleField",
    "TitlePriority",
    "AutoMerge",
    "CorpusSnapshot",
    "CreateNew",
    "MatchMethod",
    "MatchResult",
    "MergeDecision",
    "MergeDecisionPolicy",
    "RecordResolver",
    "ResolutionPolicy",
    "ReviewSuggested",
    "create_record_resolver",
    "AnimeRow",
    "SeriesRow",
]
