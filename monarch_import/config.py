"""Column naming and runtime settings.

The conversion core only ever receives a :class:`SourceSchema`; environment
lookups happen in :func:`load_settings`, which the CLI calls after loading a
local ``.env`` file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .models import DEFAULT_ACCOUNT

_ENV_PREFIX = "MONARCH_IMPORT_"


@dataclass(frozen=True, slots=True)
class SourceSchema:
    """Column names of the two input exports.

    Defaults match the bank's credit-card export (raw side) and the
    finance tool's transaction export (reference side).
    """

    date_field: str = "Date"
    merchant_name_field: str = "Merchant Name"
    cardholder_field: str = "Name on Card"
    amount_field: str = "Amount"

    reference_merchant_field: str = "Merchant"
    reference_category_field: str = "Category"
    reference_account_field: str = "Account"

    default_account: str = DEFAULT_ACCOUNT

    @property
    def required_raw_fields(self) -> tuple[str, ...]:
        return (
            self.date_field,
            self.merchant_name_field,
            self.cardholder_field,
            self.amount_field,
        )

    @property
    def required_reference_fields(self) -> tuple[str, ...]:
        return (self.reference_merchant_field, self.reference_category_field)


DEFAULT_SCHEMA = SourceSchema()


@dataclass(frozen=True, slots=True)
class Settings:
    schema: SourceSchema = field(default_factory=SourceSchema)
    output_prefix: str = "converted-"


def _env(name: str) -> str | None:
    val = os.getenv(_ENV_PREFIX + name)
    if val is None or not val.strip():
        return None
    return val.strip()


def load_settings() -> Settings:
    """Build :class:`Settings` from ``MONARCH_IMPORT_*`` environment variables.

    Recognized variables (all optional): ``DATE_FIELD``, ``MERCHANT_NAME_FIELD``,
    ``CARDHOLDER_FIELD``, ``AMOUNT_FIELD``, ``REFERENCE_MERCHANT_FIELD``,
    ``REFERENCE_CATEGORY_FIELD``, ``REFERENCE_ACCOUNT_FIELD``,
    ``DEFAULT_ACCOUNT`` and ``OUTPUT_PREFIX``. Unset or blank values keep the
    defaults.
    """

    overrides: dict[str, str] = {}
    for attr in (
        "date_field",
        "merchant_name_field",
        "cardholder_field",
        "amount_field",
        "reference_merchant_field",
        "reference_category_field",
        "reference_account_field",
        "default_account",
    ):
        val = _env(attr.upper())
        if val is not None:
            overrides[attr] = val

    prefix = os.getenv(_ENV_PREFIX + "OUTPUT_PREFIX")
    return Settings(
        schema=SourceSchema(**overrides),
        output_prefix=prefix if prefix is not None else "converted-",
    )


__all__ = ["DEFAULT_SCHEMA", "Settings", "SourceSchema", "load_settings"]
