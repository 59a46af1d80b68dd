"""Holder for the currently loaded exports.

A :class:`ConversionSession` keeps the raw exports and the reference export
the user has supplied so far. Every mutation reruns the full conversion over
the current inputs; the previous result is replaced, or cleared when the
inputs are no longer sufficient.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .config import DEFAULT_SCHEMA, SourceSchema
from .convert import convert_files
from .logging_setup import get_logger
from .models import ConversionResult, RawRecord, ReferenceRecord

_logger = get_logger("monarch_import.session")


class ConversionSession:
    def __init__(self, *, schema: SourceSchema = DEFAULT_SCHEMA) -> None:
        self.schema = schema
        self._raw_files: list[tuple[str, list[RawRecord]]] = []
        self._reference: list[ReferenceRecord] = []
        self._reference_name: str | None = None
        self._result: ConversionResult | None = None

    @property
    def raw_files(self) -> tuple[tuple[str, list[RawRecord]], ...]:
        return tuple(self._raw_files)

    @property
    def reference_name(self) -> str | None:
        return self._reference_name

    @property
    def result(self) -> ConversionResult | None:
        """The latest conversion, or ``None`` when inputs are insufficient."""
        return self._result

    @property
    def ready(self) -> bool:
        return self._result is not None

    def add_raw_files(self, files: Iterable[tuple[str, Sequence[RawRecord]]]) -> None:
        """Append raw exports (``(name, records)``) after those already held."""
        self._raw_files.extend((name, list(records)) for name, records in files)
        self._recompute()

    def remove_raw_file(self, index: int) -> None:
        del self._raw_files[index]
        self._recompute()

    def set_reference(self, records: Sequence[ReferenceRecord], name: str | None = None) -> None:
        """Replace the reference export; the knowledge base is rebuilt from scratch."""
        self._reference = list(records)
        self._reference_name = name
        self._recompute()

    def reset(self) -> None:
        self._raw_files.clear()
        self._reference = []
        self._reference_name = None
        self._result = None

    def _recompute(self) -> None:
        self._result = convert_files(self._raw_files, self._reference, schema=self.schema)
        if self._result is None:
            _logger.debug(
                "session: not ready files=%d reference_rows=%d",
                len(self._raw_files),
                len(self._reference),
            )


__all__ = ["ConversionSession"]
