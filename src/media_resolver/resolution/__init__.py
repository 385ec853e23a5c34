"""
Entity resolution layer for library imports.

Decides whether an incoming record is the same work as an existing library
record, a different work with a similar title, or a new work.

Key components:
- normalize_title / score_similarity: comparable keys and their scoring
- extract_candidates: title candidates of a record, most trusted first
- ResolutionPolicy: escalation external id -> exact title -> fuzzy title
- MergeDecisionPolicy: AutoMerge / ReviewSuggested / CreateNew
- RecordResolver: both policies plus batch reports
"""
from .normalizer import normalize_title
from .similarity import (
    StrictMatch,
    are_similar,
    consecutive_prefix_match,
    edit_distance,
    is_strict_match,
    score_similarity,
    similarity_percent,
)
from .candidate_extractor import TitleCandidate, extract_candidates, split_alternative_titles
from .corpus import CorpusSnapshot
from .match_result import MatchMethod, MatchResult, MatchTier
from .identifier_matcher import ExternalIdMatcher
from .exact_matcher import ExactTitleMatcher
from .fuzzy_matcher import FuzzyTitleMatcher
from .resolution_policy import ResolutionPolicy, default_tiers
from .merge_policy import (
    AutoMerge,
    CreateNew,
    DecisionKind,
    IdentifierConflict,
    MergeDecision,
    MergeDecisionPolicy,
    ReviewSuggested,
)
from .resolution_metadata import PotentialMatch, ResolutionOutcome, ResolutionReport
from .record_resolver import RecordResolver
from .resolver_factory import create_record_resolver

__all__ = [
    "normalize_title",
    "StrictMatch",
    "are_similar",
    "consecutive_prefix_match",
    "edit_distance",
    "is_strict_match",
    "score_similarity",
    "similarity_percent",
    "TitleCandidate",
    "extract_candidates",
    "split_alternative_titles",
    "CorpusSnapshot",
    "MatchMethod",
    "MatchResult",
    "MatchTier",
    "ExternalIdMatcher",
    "ExactTitleMatcher",
    "FuzzyTitleMatcher",
    "ResolutionPolicy",
    "default_tiers",
    "AutoMerge",
    "CreateNew",
    "DecisionKind",
    "IdentifierConflict",
    "MergeDecision",
    "MergeDecisionPolicy",
    "ReviewSuggested",
    "PotentialMatch",
    "ResolutionOutcome",
    "ResolutionReport",
    "RecordResolver",
    "create_record_resolver",
]
