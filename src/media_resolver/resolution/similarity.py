"""
Similarity scoring between normalized title keys.

Two independent measures:
- similarity percentage derived from Levenshtein distance
- count of identical characters anchored at the start of both keys

Only the anchored prefix count gates a fuzzy match. The percentage is kept
for ranking and display.
"""
from dataclasses import dataclass

from rapidfuzz.distance import Levenshtein, Prefix

MIN_CONSECUTIVE_CHARS = 5


@dataclass(frozen=True)
class StrictMatch:
    """
    Outcome of a strict comparison between two keys.

    Attributes:
        is_match: True when the shared prefix reaches the minimum length
        similarity: Edit-distance similarity, 0-100, two decimals
        consecutive_count: Identical characters from index 0 before the first mismatch
    """
    is_match: bool
    similarity: float
    consecutive_count: int

    def to_dict(self) -> dict:
        return {
            "similarity": self.similarity,
            "consecutive_count": self.consecutive_count,
            "is_strict_match": self.is_match,
        }


def edit_distance(a: str, b: str) -> int:
    """Unit-cost insertion/deletion/substitution distance."""
    return Levenshtein.distance(a or "", b or "")


def similarity_percent(a: str, b: str) -> float:
    """
    Similarity relative to the longer key, rounded to two decimals.

    Two empty keys score 100, one empty key scores 0.
    """
    a = a or ""
    b = b or ""
    longest = max(len(a), len(b))
    if longest == 0:
        return 100.0
    if not a or not b:
        return 0.0
    if a == b:
        return 100.0
    return round((longest - edit_distance(a, b)) / longest * 100, 2)


def consecutive_prefix_match(a: str, b: str) -> int:
    """Number of identical characters from index 0, stopping at the first mismatch."""
    if not a or not b:
        return 0
    return int(Prefix.similarity(a, b))


def is_strict_match(
    a: str,
    b: str,
    min_consecutive: int = MIN_CONSECUTIVE_CHARS,
) -> StrictMatch:
    """
    Strict comparison of two normalized keys.

    A long shared prefix (title plus subtitle, season suffix...) is the only
    gate. Overall similarity can be low and the pair still matches.

    :param a: First normalized key
    :param b: Second normalized key
    :param min_consecutive: Minimum anchored prefix length for a match
    :return: StrictMatch
    """
    if not a or not b:
        return StrictMatch(is_match=False, similarity=0.0, consecutive_count=0)

    consecutive = consecutive_prefix_match(a, b)
    return StrictMatch(
        is_match=consecutive >= min_consecutive,
        similarity=similarity_percent(a, b),
        consecutive_count=consecutive,
    )


def score_similarity(a: str, b: str) -> StrictMatch:
    """Score two keys with the default prefix gate."""
    return is_strict_match(a, b)


def are_similar(a: str, b: str) -> bool:
    """
    Near-duplicate check with a length-adaptive edit tolerance.

    Allows 1 edit below 15 characters, 2 below 30, 3 beyond.
    """
    if not a or not b:
        return False
    if a == b:
        return True

    longest = max(len(a), len(b))
    if longest < 15:
        tolerance = 1
    elif longest < 30:
        tolerance = 2
    else:
        tolerance = 3
    return edit_distance(a, b) <= tolerance
