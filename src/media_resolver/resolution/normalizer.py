"""
Title normalization for comparison.

Turns a free-text title into a key where two titles a reader would call
"the same string" compare equal, regardless of case, full-width forms,
accents, spacing or punctuation.
"""
import re
import unicodedata
from typing import Optional

# Combining diacritical marks block only. Kana voicing marks (U+3099/U+309A)
# are outside it and survive, so が and か stay distinct.
_DIACRITICS_RE = re.compile(r"[\u0300-\u036f]")

_SEPARATORS_RE = re.compile(r"[\s\-\u2010\u2011'\u2018\u2019\u02bc]")

_LONG_VOWELS = str.maketrans({
    "ā": "a", "ē": "e", "ī": "i", "ō": "o", "ū": "u",
    "â": "a", "ê": "e", "î": "i", "ô": "o", "û": "u",
})


def _strip_punctuation(text: str) -> str:
    return "".join(c for c in text if not unicodedata.category(c).startswith("P"))


def normalize_title(text: Optional[str]) -> str:
    """
    Canonicalize a title into a comparable key.

    Steps run in a fixed order: case-fold and NFKC compatibility folding,
    folding of long-vowel romanization marks, NFD decomposition with
    diacritic stripping, removal of hyphens, apostrophes and whitespace,
    then removal of punctuation and brackets. The key is returned in NFD
    form, so canonically equivalent titles give the same key.

    Total and idempotent. Empty or missing input gives ``""``, which callers
    treat as "no signal".

    :param text: Raw title, may be None
    :return: Normalized key
    """
    if not text:
        return ""

    # Compatibility folding can produce uppercase (e.g. "㎒" -> "MHz"),
    # so case-fold on both sides of it.
    folded = unicodedata.normalize("NFKC", text.casefold()).casefold()
    # Fold romanization marks while they are still precomposed
    folded = folded.translate(_LONG_VOWELS)
    decomposed = _DIACRITICS_RE.sub("", unicodedata.normalize("NFD", folded))
    joined = _SEPARATORS_RE.sub("", decomposed)
    cleaned = _strip_punctuation(joined)
    # Removals can bring combining marks together out of canonical order
    return unicodedata.normalize("NFD", cleaned)
