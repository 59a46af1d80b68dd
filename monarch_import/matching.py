"""Merchant similarity heuristics.

Two entry points:

- :func:`are_similar`: exact / substring / token-overlap test between two
  free-text merchant strings.
- :func:`first_match`: the order-sensitive scan the transformer uses to pick a
  learned merchant for a normalized input key. Unlike :func:`are_similar` it
  has no empty-input rule: an empty key is a substring of every key.

Substring containment can misfire on short or generic names ("aw" inside
"saw mill"). The first qualifying entry wins, not the longest.
"""

from __future__ import annotations

from collections.abc import Iterable

from .logging_setup import get_logger
from .models import MerchantKnowledge
from .normalizers import normalize

_MIN_TOKEN_LEN = 3
_TOKEN_OVERLAP_RATIO = 0.5

_logger = get_logger("monarch_import.matching")


def _significant_tokens(key: str) -> list[str]:
    return [w for w in key.split() if len(w) >= _MIN_TOKEN_LEN]


def keys_overlap(a: str, b: str) -> bool:
    """Return True when two normalized keys are equal or one contains the other.

    An empty key is contained in every key, so it overlaps everything.
    """

    return a == b or a in b or b in a


def are_similar(a: str | None, b: str | None) -> bool:
    """Decide whether two merchant strings denote the same entity.

    Checked in order on the normalized forms: either empty -> False; equal or
    substring either way -> True; otherwise at least half of the smaller list
    of tokens longer than two characters must also appear in the other list.
    """

    norm_a = normalize(a)
    norm_b = normalize(b)
    if not norm_a or not norm_b:
        return False
    if keys_overlap(norm_a, norm_b):
        return True

    words_a = _significant_tokens(norm_a)
    words_b = _significant_tokens(norm_b)
    if not words_a or not words_b:
        return False

    common = [w for w in words_a if w in words_b]
    return len(common) >= min(len(words_a), len(words_b)) * _TOKEN_OVERLAP_RATIO


def first_match(key: str, entries: Iterable[tuple[str, str]]) -> str | None:
    """Return the value of the first ``(learned_key, value)`` entry overlapping ``key``."""

    for learned_key, value in entries:
        if keys_overlap(key, learned_key):
            return value
    return None


def find_inconsistent_merchants(
    knowledge: MerchantKnowledge,
) -> list[tuple[str, str]]:
    """List learned merchant pairs that look alike but learned different categories.

    Each pair holds the two display names in learning order. Quadratic in the
    number of learned merchants; meant for reporting, not the conversion path.
    """

    names = knowledge.display_names
    categories = knowledge.categories
    pairs: list[tuple[str, str]] = []
    for i in range(len(names)):
        for j in range(i + 1, len(names)):
            if categories[i][1] == categories[j][1]:
                continue
            if are_similar(names[i][1], names[j][1]):
                pairs.append((names[i][1], names[j][1]))
    _logger.debug("consistency:done merchants=%d conflicts=%d", len(names), len(pairs))
    return pairs


__all__ = ["are_similar", "find_inconsistent_merchants", "first_match", "keys_overlap"]
