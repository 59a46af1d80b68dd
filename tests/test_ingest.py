import csv
import io
import textwrap

import pytest

from monarch_import.ingest import (
    load_records,
    output_filename,
    read_records,
    require_columns,
    save_records,
)
from monarch_import.models import OUTPUT_FIELDS


def _dedent(s: str) -> str:
    return textwrap.dedent(s).lstrip("\n")


def test_read_records_uses_header_and_skips_empty_lines():
    text = _dedent(
        """
        Date,Merchant Name,Name on Card,Amount
        2024-01-01,"STARBUCKS, #4521",JOHN SMITH,"$-1,005.25"


        2024-01-02,SHELL,JANE DOE
        """
    )
    rows = read_records(io.StringIO(text))
    assert rows == [
        {
            "Date": "2024-01-01",
            "Merchant Name": "STARBUCKS, #4521",
            "Name on Card": "JOHN SMITH",
            "Amount": "$-1,005.25",
        },
        {"Date": "2024-01-02", "Merchant Name": "SHELL", "Name on Card": "JANE DOE", "Amount": ""},
    ]


def test_read_records_keeps_rows_of_empty_cells():
    rows = read_records(io.StringIO("Merchant,Category\n,\nShell,Gas\n"))
    assert rows == [{"Merchant": "", "Category": ""}, {"Merchant": "Shell", "Category": "Gas"}]


def test_read_records_drops_overflow_cells():
    rows = read_records(io.StringIO("Merchant,Category\nShell,Gas,extra\n"))
    assert rows == [{"Merchant": "Shell", "Category": "Gas"}]


def test_read_records_requires_header():
    with pytest.raises(csv.Error):
        read_records(io.StringIO(""))


def test_load_records_strips_bom(tmp_path):
    p = tmp_path / "ref.csv"
    p.write_text("Merchant,Category\nShell,Gas\n", encoding="utf-8-sig")
    assert load_records(p) == [{"Merchant": "Shell", "Category": "Gas"}]


def test_require_columns_reports_missing():
    require_columns([{"Merchant": "a", "Category": "b"}], ["Merchant", "Category"], source="x")
    require_columns([], ["Merchant"], source="x")
    with pytest.raises(csv.Error, match="Missing columns: Category"):
        require_columns([{"Merchant": "a"}], ["Merchant", "Category"], source="ref.csv")


def test_save_records_writes_fixed_header_order(tmp_path):
    row = {field: "" for field in reversed(OUTPUT_FIELDS)}
    row.update(Date="2024-01-01", Merchant="Starbucks", Amount="-5.25")
    out = save_records(tmp_path / "out.csv", [row])

    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == ",".join(OUTPUT_FIELDS)
    assert lines[1] == "2024-01-01,Starbucks,,,,,-5.25,,"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("jan.csv", "converted-jan.csv"),
        ("Statement.CSV", "converted-Statement.csv"),
        ("export", "converted-export.csv"),
        ("/tmp/dir/feb.csv", "converted-feb.csv"),
    ],
)
def test_output_filename(name, expected):
    assert output_filename(name) == expected


def test_output_filename_custom_prefix():
    assert output_filename("jan.csv", prefix="monarch-") == "monarch-jan.csv"
