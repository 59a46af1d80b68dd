from monarch_import.session import ConversionSession

REFERENCE = [
    {"Merchant": "Starbucks", "Category": "Coffee Shops", "Account": "Visa"},
    {"Merchant": "Shell", "Category": "Gas", "Account": "Visa"},
]


def _raw(*merchants):
    return [{"Merchant Name": m, "Amount": "-1.00"} for m in merchants]


def test_not_ready_until_both_sides_present():
    session = ConversionSession()
    assert session.result is None

    session.add_raw_files([("jan.csv", _raw("SHELL 1"))])
    assert session.result is None
    assert not session.ready

    session.set_reference(REFERENCE, name="monarch.csv")
    assert session.ready
    assert session.reference_name == "monarch.csv"
    assert session.result.stats.total_rows == 1


def test_each_mutation_recomputes_everything():
    session = ConversionSession()
    session.set_reference(REFERENCE)
    session.add_raw_files([("jan.csv", _raw("SHELL 1", "TIM HORTONS"))])
    session.add_raw_files([("feb.csv", _raw("STARBUCKS 9"))])

    result = session.result
    assert [f.name for f in result.files] == ["jan.csv", "feb.csv"]
    assert result.stats.total_rows == 3
    assert result.stats.categorized_rows == 2

    # A new reference relearns from scratch and re-categorizes every file.
    session.set_reference([{"Merchant": "Tim Hortons", "Category": "Coffee Shops"}])
    result = session.result
    assert result.stats.learned_merchants == 1
    assert [r["Category"] for r in result.files[0].rows] == ["Uncategorized", "Coffee Shops"]
    assert [r["Account"] for r in result.files[0].rows] == ["Rogers", "Rogers"]


def test_removing_last_file_or_emptying_reference_clears_result():
    session = ConversionSession()
    session.set_reference(REFERENCE)
    session.add_raw_files([("jan.csv", _raw("SHELL 1")), ("feb.csv", _raw("SHELL 2"))])

    session.remove_raw_file(0)
    assert [f.name for f in session.result.files] == ["feb.csv"]

    session.set_reference([])
    assert session.result is None

    session.set_reference(REFERENCE)
    assert session.ready
    session.remove_raw_file(0)
    assert session.result is None


def test_reset_drops_all_inputs():
    session = ConversionSession()
    session.set_reference(REFERENCE, name="monarch.csv")
    session.add_raw_files([("jan.csv", _raw("SHELL 1"))])
    session.reset()
    assert session.result is None
    assert session.raw_files == ()
    assert session.reference_name is None
