"""Build merchant knowledge from a categorized reference export."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from .config import DEFAULT_SCHEMA, SourceSchema
from .logging_setup import get_logger
from .models import MerchantKnowledge, ReferenceRecord
from .normalizers import normalize

_logger = get_logger("monarch_import.learning")


def _field(record: ReferenceRecord, name: str) -> str:
    value = record.get(name)
    return value.strip() if isinstance(value, str) else ""


def learn_account(
    reference: Iterable[ReferenceRecord], *, schema: SourceSchema = DEFAULT_SCHEMA
) -> str:
    """Return the most frequent non-empty account label, or the schema default.

    Ties go to the label seen first.
    """

    counts: Counter[str] = Counter()
    for record in reference:
        account = record.get(schema.reference_account_field)
        if account:
            counts[account] += 1
    if not counts:
        return schema.default_account
    return counts.most_common(1)[0][0]


def learn_knowledge(
    reference: Iterable[ReferenceRecord], *, schema: SourceSchema = DEFAULT_SCHEMA
) -> MerchantKnowledge:
    """Learn merchant -> category and merchant -> display name tables.

    Rows lacking a merchant or a category (after trimming) are skipped. For
    each normalized merchant the most frequent category wins; equal counts go
    to the category seen first. The display name is the first trimmed
    merchant string seen for the key.
    """

    rows = list(reference)
    display_names: dict[str, str] = {}
    category_counts: dict[str, Counter[str]] = {}
    skipped = 0

    for record in rows:
        merchant = _field(record, schema.reference_merchant_field)
        category = _field(record, schema.reference_category_field)
        if not merchant or not category:
            skipped += 1
            continue

        key = normalize(merchant)
        display_names.setdefault(key, merchant)
        category_counts.setdefault(key, Counter())[category] += 1

    # Counter.most_common is a stable sort, so insertion order breaks ties.
    categories = tuple(
        (key, counts.most_common(1)[0][0]) for key, counts in category_counts.items()
    )
    knowledge = MerchantKnowledge(
        categories=categories,
        display_names=tuple((key, display_names[key]) for key, _ in categories),
        dominant_account=learn_account(rows, schema=schema),
    )

    _logger.info(
        "learn:done rows=%d skipped=%d merchants=%d account=%r",
        len(rows),
        skipped,
        knowledge.learned_merchants,
        knowledge.dominant_account,
    )
    return knowledge


__all__ = ["learn_account", "learn_knowledge"]
