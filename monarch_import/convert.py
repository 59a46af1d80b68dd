"""Conversion orchestration: learn once, transform every row, aggregate stats.

Public API:
    - :func:`convert`
    - :func:`convert_files`
    - :func:`combine_stats`

Every call relearns from the reference records it is given; nothing is cached
between calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .config import DEFAULT_SCHEMA, SourceSchema
from .learning import learn_knowledge
from .logging_setup import get_logger
from .models import (
    UNCATEGORIZED,
    ConversionResult,
    ConversionStats,
    ConvertedFile,
    OutputRecord,
    RawRecord,
    ReferenceRecord,
)
from .transform import transform_record

_logger = get_logger("monarch_import.convert")


def convert(
    raw: Sequence[RawRecord],
    reference: Sequence[ReferenceRecord],
    *,
    schema: SourceSchema = DEFAULT_SCHEMA,
) -> tuple[list[OutputRecord], ConversionStats] | None:
    """Convert ``raw`` using merchant knowledge learned from ``reference``.

    Returns ``(rows, stats)`` with one output row per raw record, in input
    order. Returns ``None`` without doing any work when either sequence is
    empty; callers treat that as "not ready" rather than as an error.
    """

    if not raw or not reference:
        _logger.info(
            "convert:skip raw_rows=%d reference_rows=%d", len(raw), len(reference)
        )
        return None

    _logger.info("convert:learn reference_rows=%d", len(reference))
    knowledge = learn_knowledge(reference, schema=schema)

    rows = [transform_record(r, knowledge, schema=schema) for r in raw]
    categorized = sum(1 for row in rows if row["Category"] != UNCATEGORIZED)

    stats = ConversionStats.from_counts(
        total_rows=len(raw),
        categorized_rows=categorized,
        learned_merchants=knowledge.learned_merchants,
    )
    _logger.info(
        "convert:done rows=%d categorized=%d rate=%s",
        stats.total_rows,
        stats.categorized_rows,
        stats.categorization_rate,
    )
    return rows, stats


def combine_stats(stats: Iterable[ConversionStats]) -> ConversionStats:
    """Sum per-file counts into one view.

    ``learned_merchants`` is not summed: every file was converted against the
    same reference records, so it is taken from the per-file stats as-is.
    """

    items = list(stats)
    if not items:
        raise ValueError("combine_stats requires at least one ConversionStats")
    return ConversionStats.from_counts(
        total_rows=sum(s.total_rows for s in items),
        categorized_rows=sum(s.categorized_rows for s in items),
        learned_merchants=items[-1].learned_merchants,
    )


def convert_files(
    raw_files: Sequence[tuple[str, Sequence[RawRecord]]],
    reference: Sequence[ReferenceRecord],
    *,
    schema: SourceSchema = DEFAULT_SCHEMA,
) -> ConversionResult | None:
    """Convert several named raw exports independently against one reference.

    Raw files without records are left out of the result. Returns ``None``
    when ``reference`` is empty or no raw file has records.
    """

    if not raw_files or not reference:
        _logger.info(
            "convert_files:skip files=%d reference_rows=%d", len(raw_files), len(reference)
        )
        return None

    converted: list[ConvertedFile] = []
    for name, records in raw_files:
        outcome = convert(records, reference, schema=schema)
        if outcome is None:
            _logger.warning("convert_files: no records in %r; skipped", name)
            continue
        rows, stats = outcome
        converted.append(ConvertedFile(name=name, rows=rows, stats=stats))

    if not converted:
        return None
    return ConversionResult(
        files=tuple(converted),
        stats=combine_stats(f.stats for f in converted),
    )


__all__ = ["combine_stats", "convert", "convert_files"]
