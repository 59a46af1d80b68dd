"""CLI for the ``monarch_import`` package.

A Typer-based console interface over :mod:`monarch_import.convert`. Settings
(column names, fallback account, output prefix) are read from
``MONARCH_IMPORT_*`` environment variables after loading a local ``.env``
with ``python-dotenv``. Business logic lives in the library modules.
"""

from __future__ import annotations

import csv
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .config import SourceSchema, load_settings
from .convert import convert_files
from .ingest import load_records, output_filename, require_columns, save_records
from .learning import learn_knowledge
from .logging_setup import configure_logging
from .matching import find_inconsistent_merchants
from .models import ConversionStats

# Module-level option objects keep calls out of parameter defaults (ruff B008).
REFERENCE_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--reference",
    "-r",
    help="Categorized export to learn merchants and categories from",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)

OUTPUT_DIR_OPTION: OptionInfo = typer.Option(
    "--output-dir",
    "-o",
    help="Directory for the converted CSV files",
    file_okay=False,
    dir_okay=True,
)


def _fail(msg: str) -> typer.Exit:
    print(f"Error: {msg}", file=sys.stderr)
    return typer.Exit(code=1)


def _read_csv(path: Path, required: tuple[str, ...]) -> list[dict[str, str]]:
    """Load ``path`` and check its header, turning I/O and parse errors into exit 1."""

    try:
        records = load_records(path)
        require_columns(records, required, source=str(path))
    except FileNotFoundError:
        raise _fail(f"File not found: {path}") from None
    except PermissionError:
        raise _fail(f"Permission denied: {path}") from None
    except csv.Error as e:
        raise _fail(f"Failed to parse CSV: {e}") from None
    except UnicodeDecodeError as e:
        raise _fail(f"'{path}' is not UTF-8 text: {e}") from None
    return records


def _format_stats(label: str, stats: ConversionStats) -> str:
    return (
        f"{label}: {stats.total_rows} rows, {stats.categorized_rows} categorized, "
        f"{stats.uncategorized_rows} uncategorized ({stats.categorization_rate})"
    )


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Convert credit-card exports into the finance tool's import format, "
        "learning categories from a previously categorized export."
    ),
)


@app.command("convert")
def convert_cmd(
    raw_paths: Annotated[
        list[Path], typer.Argument(help="Bank export CSV file(s) to convert", dir_okay=False)
    ],
    reference: Annotated[Path, REFERENCE_OPTION],
    output_dir: Annotated[Path, OUTPUT_DIR_OPTION] = Path("."),
) -> None:
    """Convert each bank export and write ``converted-<name>.csv`` next to the others."""

    settings = load_settings()
    schema: SourceSchema = settings.schema

    reference_rows = _read_csv(reference, schema.required_reference_fields)
    raw_files = [(p.name, _read_csv(p, schema.required_raw_fields)) for p in raw_paths]

    result = convert_files(raw_files, reference_rows, schema=schema)
    if result is None:
        print("Nothing to convert: both the bank export(s) and the reference need rows.")
        raise typer.Exit(code=1)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for converted in result.files:
            out = save_records(
                output_dir / output_filename(converted.name, settings.output_prefix),
                converted.rows,
            )
            print(_format_stats(out.name, converted.stats))
    except OSError as e:
        raise _fail(f"failed to write output: {e}") from None

    print(_format_stats("Total", result.stats))
    print(f"Learned merchants: {result.stats.learned_merchants}")


@app.command("learn")
def learn_cmd(reference: Annotated[Path, REFERENCE_OPTION]) -> None:
    """Show what would be learned from a reference export."""

    schema = load_settings().schema
    knowledge = learn_knowledge(
        _read_csv(reference, schema.required_reference_fields), schema=schema
    )

    display = knowledge.display_name_of
    for key, category in knowledge.categories:
        print(f"{display[key]}\t{category}")
    print(f"Account: {knowledge.dominant_account}")
    print(f"Learned merchants: {knowledge.learned_merchants}")

    conflicts = find_inconsistent_merchants(knowledge)
    if conflicts:
        print(f"Similar merchants with different categories ({len(conflicts)}):")
        category_of = knowledge.category_of
        name_to_key = {name: key for key, name in knowledge.display_names}
        for a, b in conflicts:
            print(
                f"  {a} ({category_of[name_to_key[a]]}) ~ {b} ({category_of[name_to_key[b]]})"
            )


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None, help="Logging level (falls back to MONARCH_IMPORT_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    # override=False keeps variables already set in the environment
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


if __name__ == "__main__":  # pragma: no cover
    app()
