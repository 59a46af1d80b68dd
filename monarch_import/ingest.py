"""CSV reading and writing for bank and reference exports.

Parsing follows RFC 4180 rules via the stdlib :mod:`csv` module (UTF-8,
first row is the header, quoted fields with embedded commas and newlines).
Empty lines are skipped (``csv.DictReader`` does this); a line of
separators such as ``,,,`` is kept as a record of empty cells.
"""

from __future__ import annotations

import csv
import re
from collections.abc import Iterable, Mapping, Sequence
from os import PathLike
from pathlib import Path
from typing import IO

from .models import OUTPUT_FIELDS

_CSV_SUFFIX_RE = re.compile(r"\.csv$", re.IGNORECASE)


def read_records(f: IO[str], *, source: str = "<stream>") -> list[dict[str, str]]:
    """Parse CSV text from ``f`` into string-keyed records.

    Raises ``csv.Error`` when the input has no header row.
    """

    reader = csv.DictReader(f)
    if not reader.fieldnames:
        raise csv.Error(f"CSV appears to have no header row: {source}")

    rows: list[dict[str, str]] = []
    for row in reader:
        # DictReader collects overflow cells under a None key; drop them and
        # fill short rows with "" to keep a ``dict[str, str]`` shape.
        rows.append({k: (v if v is not None else "") for k, v in row.items() if k is not None})
    return rows


def load_records(csv_path: str | PathLike[str]) -> list[dict[str, str]]:
    p = Path(csv_path)
    # utf-8-sig: spreadsheet exports often start with a BOM.
    with p.open(encoding="utf-8-sig", newline="") as f:
        return read_records(f, source=str(p))


def require_columns(
    records: Sequence[Mapping[str, str]], required: Iterable[str], *, source: str
) -> None:
    """Raise ``csv.Error`` if the first record lacks any ``required`` column."""

    if not records:
        return
    present = set(records[0])
    missing = sorted(h for h in required if h not in present)
    if missing:
        raise csv.Error(f"CSV header mismatch in {source}. Missing columns: " + ", ".join(missing))


def write_records(f: IO[str], rows: Iterable[Mapping[str, str]]) -> None:
    writer = csv.DictWriter(f, fieldnames=list(OUTPUT_FIELDS), extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)


def save_records(csv_path: str | PathLike[str], rows: Iterable[Mapping[str, str]]) -> Path:
    p = Path(csv_path)
    with p.open("w", encoding="utf-8", newline="") as f:
        write_records(f, rows)
    return p


def output_filename(name: str, prefix: str = "converted-") -> str:
    """Return the download name for a converted export ("Jan.CSV" -> "converted-Jan.csv")."""

    stem = _CSV_SUFFIX_RE.sub("", Path(name).name)
    return f"{prefix}{stem}.csv"


__all__ = [
    "load_records",
    "output_filename",
    "read_records",
    "require_columns",
    "save_records",
    "write_records",
]
