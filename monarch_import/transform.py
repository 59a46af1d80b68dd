"""Map one raw bank-export record onto the import schema.

Output mapping rules:

- ``Date``: raw date cell verbatim (``""`` when absent)
- ``Merchant``: display name of the first learned merchant overlapping the
  normalized raw name; otherwise the raw name title-cased
- ``Category``: exact learned key first, then the first overlapping learned
  key; otherwise ``"Uncategorized"``
- ``Account``: the learned dominant account
- ``Original Statement``, ``Notes``, ``Tags``: always blank
- ``Amount``: see :func:`~monarch_import.normalizers.clean_amount`
- ``Owner``: cardholder name with each word capitalized
"""

from __future__ import annotations

from .config import DEFAULT_SCHEMA, SourceSchema
from .logging_setup import get_logger
from .matching import first_match
from .models import UNCATEGORIZED, MerchantKnowledge, OutputRecord, RawRecord
from .normalizers import capitalize_words, clean_amount, normalize, title_case_merchant

_logger = get_logger("monarch_import.transform")


def transform_merchant_name(raw_name: str | None, knowledge: MerchantKnowledge) -> str:
    if not raw_name:
        return ""
    learned = first_match(normalize(raw_name), knowledge.display_names)
    if learned is not None:
        return learned
    return title_case_merchant(raw_name)


def determine_category(raw_name: str | None, knowledge: MerchantKnowledge) -> str:
    key = normalize(raw_name)
    exact = knowledge.exact_category(key)
    if exact is not None:
        return exact
    learned = first_match(key, knowledge.categories)
    return learned if learned is not None else UNCATEGORIZED


def transform_record(
    raw: RawRecord,
    knowledge: MerchantKnowledge,
    *,
    schema: SourceSchema = DEFAULT_SCHEMA,
) -> OutputRecord:
    """Return the import-schema row for ``raw``. Never raises on bad cell values."""

    merchant_name = raw.get(schema.merchant_name_field)
    row: OutputRecord = {
        "Date": raw.get(schema.date_field) or "",
        "Merchant": transform_merchant_name(merchant_name, knowledge),
        "Category": determine_category(merchant_name, knowledge),
        "Account": knowledge.dominant_account,
        "Original Statement": "",
        "Notes": "",
        "Amount": clean_amount(raw.get(schema.amount_field)),
        "Tags": "",
        "Owner": capitalize_words(raw.get(schema.cardholder_field)),
    }
    _logger.debug(
        "transform: merchant=%r -> %r category=%r", merchant_name, row["Merchant"], row["Category"]
    )
    return row


__all__ = ["determine_category", "transform_merchant_name", "transform_record"]
