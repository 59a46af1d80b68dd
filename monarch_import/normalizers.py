"""Text and amount normalization helpers.

``normalize`` is the single canonical form used for every merchant
comparison, both while learning and while matching. The remaining helpers
render raw export values into the import schema and never raise.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

_NON_KEY_CHARS_RE = re.compile(r"[^a-z0-9\s]")

# Leading decimal literal, as accepted by a lenient float parse ("12.5abc" -> 12.5).
_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Words kept lower-case when title-casing an unmatched merchant name.
SMALL_WORDS: frozenset[str] = frozenset({"ca", "inc", "the", "and", "of", "for", "w", "on"})


def normalize(text: Any) -> str:
    """Return the lookup key for ``text``.

    Lower-cases, trims, and drops every character other than ``a-z``, digits
    and whitespace. Absent or falsy input yields ``""``. The result is trimmed
    again so that ``normalize(normalize(s)) == normalize(s)``.
    """

    if not text:
        return ""
    s = str(text).lower().strip()
    return _NON_KEY_CHARS_RE.sub("", s).strip()


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def title_case_merchant(name: str | None) -> str:
    """Title-case a raw merchant name, keeping :data:`SMALL_WORDS` lower-case.

    Splits on single spaces so runs of spaces are preserved as-is.
    """

    if not name:
        return ""
    words = []
    for word in name.split(" "):
        lowered = word.lower()
        words.append(lowered if lowered in SMALL_WORDS else _capitalize(word))
    return " ".join(words)


def capitalize_words(text: str | None) -> str:
    """Capitalize the first letter of each space-separated word ("jane q. doe" -> "Jane Q. Doe")."""

    if not text:
        return ""
    return " ".join(_capitalize(word) for word in text.split(" "))


def _format_number(value: float) -> str:
    # Shortest round-trip digits, positional between 1e-6 and 1e21, no
    # trailing ".0" on integral values.
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if 1e-6 <= abs(value) < 1e21:
        return f"{Decimal(repr(value)):f}"
    mantissa, _, exponent = repr(value).partition("e")
    exp = int(exponent)
    return f"{mantissa.removesuffix('.0')}e{'+' if exp >= 0 else '-'}{abs(exp)}"


def clean_amount(raw: str | None) -> str:
    """Render a raw amount cell as a canonical decimal string.

    Dollar signs and thousands separators are removed and the leading numeric
    literal is parsed; the sign is passed through unchanged. Returns ``""``
    when no number can be read (``"abc"``, blank, or absent).
    """

    if not raw:
        return ""
    stripped = raw.replace("$", "").replace(",", "").lstrip()
    m = _LEADING_NUMBER_RE.match(stripped)
    if m is None:
        return ""
    literal = m.group(0)
    if literal.lstrip("+-") == "Infinity":
        value = -math.inf if literal.startswith("-") else math.inf
    else:
        value = float(literal)
    return _format_number(value)


__all__ = [
    "SMALL_WORDS",
    "capitalize_words",
    "clean_amount",
    "normalize",
    "title_case_merchant",
]
