from dataclasses import dataclass

from .exceptions import ConfigurationError


@dataclass
class ResolverConfig:
    # Fuzzy tier
    fuzzy_similarity_threshold: float = 75.0
    min_consecutive_chars: int = 5
    enable_fuzzy_matching: bool = True

    def __post_init__(self):
        if not 0.0 <= self.fuzzy_similarity_threshold <= 100.0:
            raise ConfigurationError(
                f"fuzzy_similarity_threshold must be between 0 and 100, "
                f"got {self.fuzzy_similarity_threshold}"
            )
        if self.min_consecutive_chars < 1:
            raise ConfigurationError(
                f"min_consecutive_chars must be at least 1, got {self.min_consecutive_chars}"
            )
