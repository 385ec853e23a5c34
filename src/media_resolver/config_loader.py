"""
Configuration loader with validation.
"""
from dotenv import load_dotenv

from .config import ResolverConfig
from .config_validator import get_optional_env, parse_bool, parse_float, parse_int


def load_config_from_env(load_env_file: bool = True) -> ResolverConfig:
    """
    Load resolver configuration from environment variables.

    Reads:
        RESOLVER_FUZZY_THRESHOLD (default 75)
        RESOLVER_MIN_CONSECUTIVE_CHARS (default 5)
        RESOLVER_ENABLE_FUZZY_MATCHING (default true)

    Usage:
        config = load_config_from_env()
        resolver = create_record_resolver(config)

    :param load_env_file: Load a .env file first (local development)
    :return: Validated ResolverConfig instance
    :raises: ConfigurationError if a value is malformed or out of range
    """
    if load_env_file:
        load_dotenv()

    return ResolverConfig(
        fuzzy_similarity_threshold=parse_float(
            get_optional_env("RESOLVER_FUZZY_THRESHOLD", "75"),
            "RESOLVER_FUZZY_THRESHOLD",
        ),
        min_consecutive_chars=parse_int(
            get_optional_env("RESOLVER_MIN_CONSECUTIVE_CHARS", "5"),
            "RESOLVER_MIN_CONSECUTIVE_CHARS",
        ),
        enable_fuzzy_matching=parse_bool(
            get_optional_env("RESOLVER_ENABLE_FUZZY_MATCHING", "true"),
            "RESOLVER_ENABLE_FUZZY_MATCHING",
        ),
    )
