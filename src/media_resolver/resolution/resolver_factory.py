"""
Factory for creating record resolvers from configuration.
"""
from typing import Optional

from ..config import ResolverConfig
from .record_resolver import RecordResolver
from .resolution_policy import ResolutionPolicy, default_tiers


def create_record_resolver(config: Optional[ResolverConfig] = None) -> RecordResolver:
    """
    Factory function to create a RecordResolver.

    With fuzzy matching disabled the fuzzy tier is left out, so only
    identifier and exact-title matches are ever reported.

    :param config: ResolverConfig instance, defaults when None
    :return: Configured RecordResolver
    """
    if config is None:
        config = ResolverConfig()

    policy = ResolutionPolicy(tiers=default_tiers(
        fuzzy_threshold=config.fuzzy_similarity_threshold,
        min_consecutive=config.min_consecutive_chars,
        enable_fuzzy=config.enable_fuzzy_matching,
    ))
    return RecordResolver(policy=policy)
