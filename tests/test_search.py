from dealerdesk.core.search import filter_records

RECORDS = [
    {"id": "ORD-1", "customer_name": "John Doe", "city": "Mumbai"},
    {"id": "ORD-2", "customer_name": "Jane Smith", "city": None},
    {"id": "ORD-3", "customer_name": "a.b (test)", "city": "Delhi"},
]
FIELDS = ["customer_name", "id", "city"]


def test_empty_query_returns_everything_in_order():
    assert filter_records(RECORDS, "", FIELDS) == RECORDS
    assert filter_records(RECORDS, None, FIELDS) == RECORDS


def test_case_insensitive_substring():
    assert [r["id"] for r in filter_records(RECORDS, "JOHN", FIELDS)] == ["ORD-1"]
    assert [r["id"] for r in filter_records(RECORDS, "ord-", FIELDS)] == ["ORD-1", "ORD-2", "ORD-3"]


def test_query_is_literal_text():
    assert [r["id"] for r in filter_records(RECORDS, "(test)", FIELDS)] == ["ORD-3"]
    assert filter_records(RECORDS, ".*", FIELDS) == []


def test_none_values_never_match():
    assert filter_records(RECORDS, "none", FIELDS) == []


def test_query_is_not_trimmed():
    assert filter_records(RECORDS, " doe", FIELDS) == [RECORDS[0]]
    assert filter_records(RECORDS, "doe ", FIELDS) == []


def test_idempotent():
    once = filter_records(RECORDS, "j", FIELDS)
    assert filter_records(once, "j", FIELDS) == once
    assert filter_records(RECORDS, "j", FIELDS) == once
