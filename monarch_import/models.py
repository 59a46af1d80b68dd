"""Data models and type aliases for ``monarch_import``.

Records on both sides of a conversion are plain string-keyed mappings as
produced by the CSV collaborator. The learned state and the conversion
statistics are immutable once built.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, model_validator

# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

type RawRecord = Mapping[str, str]
"""One transaction from the uncategorized bank export (column -> cell text)."""

type ReferenceRecord = Mapping[str, str]
"""One transaction from the already-categorized export used as ground truth."""

type OutputRecord = dict[str, str]
"""One row in the import schema; keys follow :data:`OUTPUT_FIELDS` order."""


OUTPUT_FIELDS: tuple[str, ...] = (
    "Date",
    "Merchant",
    "Category",
    "Account",
    "Original Statement",
    "Notes",
    "Amount",
    "Tags",
    "Owner",
)

UNCATEGORIZED: str = "Uncategorized"

# Account label used when the reference export carries no account column.
DEFAULT_ACCOUNT: str = "Rogers"


# ---------------------------------------------------------------------------
# Learned state
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MerchantKnowledge:
    """Merchant tables learned from one reference export.

    Attributes
    ----------
    categories:
        ``(normalized_key, category)`` pairs in the order keys were first
        learned. Matching scans this sequence front to back, so the order is
        part of the observable behavior.
    display_names:
        ``(normalized_key, display_name)`` pairs with the same key order as
        ``categories``. The display name is the first trimmed, original-cased
        merchant string seen for the key.
    dominant_account:
        The most frequent account label in the reference export.
    """

    categories: tuple[tuple[str, str], ...]
    display_names: tuple[tuple[str, str], ...]
    dominant_account: str = DEFAULT_ACCOUNT
    _category_index: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        cat_keys = [k for k, _ in self.categories]
        name_keys = [k for k, _ in self.display_names]
        if cat_keys != name_keys:
            raise ValueError("categories and display_names must share the same ordered keys")
        # Built once; frozen instances need object.__setattr__.
        object.__setattr__(self, "_category_index", dict(self.categories))

    def exact_category(self, key: str) -> str | None:
        """Category learned for exactly ``key``, or ``None``."""
        return self._category_index.get(key)

    @property
    def category_of(self) -> dict[str, str]:
        return dict(self.categories)

    @property
    def display_name_of(self) -> dict[str, str]:
        return dict(self.display_names)

    @property
    def learned_merchants(self) -> int:
        return len(self.categories)


# ---------------------------------------------------------------------------
# Statistics and results
# ---------------------------------------------------------------------------


def format_rate(categorized: int, total: int) -> str:
    """Render ``categorized / total`` as a percentage with one decimal place.

    Ties round half-up on the exact binary value of the ratio (``12.25`` ->
    ``"12.3%"``). ``total`` must be positive.
    """

    pct = Decimal(categorized / total * 100)
    return f"{pct.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}%"


class ConversionStats(BaseModel):
    """Aggregate counts for one conversion (or a combined view of several)."""

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    total_rows: int
    categorized_rows: int
    uncategorized_rows: int
    learned_merchants: int
    categorization_rate: str

    @model_validator(mode="after")
    def _counts_add_up(self) -> ConversionStats:
        if self.categorized_rows + self.uncategorized_rows != self.total_rows:
            raise ValueError("categorized_rows + uncategorized_rows must equal total_rows")
        if min(self.total_rows, self.categorized_rows, self.uncategorized_rows) < 0:
            raise ValueError("row counts must be non-negative")
        return self

    @classmethod
    def from_counts(
        cls, *, total_rows: int, categorized_rows: int, learned_merchants: int
    ) -> ConversionStats:
        return cls(
            total_rows=total_rows,
            categorized_rows=categorized_rows,
            uncategorized_rows=total_rows - categorized_rows,
            learned_merchants=learned_merchants,
            categorization_rate=format_rate(categorized_rows, total_rows),
        )


@dataclass(frozen=True, slots=True)
class ConvertedFile:
    """Output rows and stats for one converted raw export."""

    name: str
    rows: Sequence[OutputRecord]
    stats: ConversionStats


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """All converted files from one pass plus their combined stats."""

    files: tuple[ConvertedFile, ...]
    stats: ConversionStats


__all__ = [
    "DEFAULT_ACCOUNT",
    "OUTPUT_FIELDS",
    "UNCATEGORIZED",
    "ConversionResult",
    "ConversionStats",
    "ConvertedFile",
    "MerchantKnowledge",
    "OutputRecord",
    "RawRecord",
    "ReferenceRecord",
    "format_rate",
]
