from monarch_import.config import SourceSchema
from monarch_import.learning import learn_account, learn_knowledge
from monarch_import.normalizers import normalize
from monarch_import.transform import determine_category


def _rows(*pairs):
    return [{"Merchant": m, "Category": c} for m, c in pairs]


def test_majority_category_wins():
    kb = learn_knowledge(_rows(("Acme", "Food"), ("Acme", "Food"), ("Acme", "Travel")))
    assert kb.category_of[normalize("Acme")] == "Food"


def test_ties_go_to_first_seen_category():
    kb = learn_knowledge(_rows(("Acme", "Travel"), ("Acme", "Food")))
    assert kb.category_of["acme"] == "Travel"

    kb = learn_knowledge(_rows(("Acme", "Food"), ("Acme", "Travel"), ("Acme", "Travel"), ("Acme", "Food")))
    assert kb.category_of["acme"] == "Food"


def test_first_seen_display_name_is_kept():
    kb = learn_knowledge(_rows(("ACME CORP", "Food"), ("acme corp", "Food"), ("  Acme Corp!  ", "Food")))
    assert kb.display_name_of[normalize("ACME CORP")] == "ACME CORP"
    assert kb.learned_merchants == 1


def test_display_name_is_trimmed():
    kb = learn_knowledge(_rows(("  Loblaws  ", "Groceries")))
    assert kb.display_names == (("loblaws", "Loblaws"),)


def test_rows_missing_merchant_or_category_are_skipped():
    kb = learn_knowledge(
        [
            {"Merchant": "   ", "Category": "Food"},
            {"Merchant": "Acme", "Category": ""},
            {"Merchant": "Acme"},
            {"Category": "Food"},
            {"Merchant": "Shell", "Category": "Gas"},
        ]
    )
    assert kb.categories == (("shell", "Gas"),)


def test_tables_share_ordered_keys(reference_rows):
    kb = learn_knowledge(reference_rows)
    assert [k for k, _ in kb.categories] == ["starbucks", "loblaws", "shell"]
    assert [k for k, _ in kb.display_names] == ["starbucks", "loblaws", "shell"]
    assert kb.category_of["starbucks"] == "Coffee Shops"
    assert kb.display_name_of["starbucks"] == "Starbucks"


def test_learning_is_deterministic(reference_rows):
    assert learn_knowledge(reference_rows) == learn_knowledge(reference_rows)


def test_empty_reference_learns_nothing():
    kb = learn_knowledge([])
    assert kb.categories == ()
    assert kb.display_names == ()
    assert kb.dominant_account == "Rogers"


def test_dominant_account(reference_rows):
    assert learn_knowledge(reference_rows).dominant_account == "Visa"


def test_account_defaults_when_column_absent_or_blank():
    assert learn_account(_rows(("Acme", "Food"))) == "Rogers"
    assert learn_account([{"Account": ""}]) == "Rogers"
    schema = SourceSchema(default_account="Mastercard")
    assert learn_account([], schema=schema) == "Mastercard"


def test_account_ties_go_to_first_seen():
    rows = [{"Account": "Amex"}, {"Account": "Visa"}, {"Account": "Visa"}, {"Account": "Amex"}]
    assert learn_account(rows) == "Amex"


def test_custom_reference_columns():
    schema = SourceSchema(
        reference_merchant_field="Payee", reference_category_field="Group", reference_account_field="Card"
    )
    kb = learn_knowledge([{"Payee": "Acme", "Group": "Food", "Card": "Gold"}], schema=schema)
    assert kb.category_of == {"acme": "Food"}
    assert kb.dominant_account == "Gold"


def test_exact_category_lookup_is_built_once(reference_rows):
    kb = learn_knowledge(reference_rows)
    index = kb._category_index
    assert index == kb.category_of
    for name in ("SHELL 1", "Starbucks", "Nowhere"):
        determine_category(name, kb)
    assert kb._category_index is index
    assert kb.exact_category("shell") == "Gas"
    assert kb.exact_category("shell canada") is None
