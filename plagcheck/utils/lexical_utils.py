import re
from typing import List, Optional, Set

from plagcheck.config import DEFAULT_SHINGLE_SIZE

_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_WHITESPACE_RUN_RE = re.compile(r"\s{2,}")


def normalize_text(text: Optional[str]) -> str:
    """Lowercase, drop the fixed punctuation class, collapse whitespace runs and trim.

    Total and idempotent: ``normalize_text(normalize_text(s)) == normalize_text(s)``.
    """
    if not text:
        return ""
    text = text.lower()
    text = _PUNCTUATION_RE.sub("", text)
    text = _WHITESPACE_RUN_RE.sub(" ", text)
    return text.strip()


def _word_windows(norm_text: str, k: int) -> List[str]:
    tokens = norm_text.split()
    if len(tokens) < k:
        return []
    return [" ".join(tokens[i:i+k]) for i in range(len(tokens) - k + 1)]


def word_shingles(text: Optional[str], k: int = DEFAULT_SHINGLE_SIZE) -> Set[str]:
    """Set of k-word shingles of the normalized text; empty when it has fewer than k words."""
    if k < 1:
        raise ValueError(f"Shingle size must be a positive integer, got {k}")
    return set(_word_windows(normalize_text(text), k))


def jaccard_similarity(a: Set[str], b: Set[str]) -> float:
    # Two empty sets count as identical, one empty set as unrelated.
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    inter = len(a & b)
    union = len(a | b)
    return inter / union
