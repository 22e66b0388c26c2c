from datetime import date

from dealerdesk.core.identifiers import IdentifierFormat, IdentifierGenerator, sequence_of


def test_sequence_of():
    assert sequence_of("CUST-007") == 7
    assert sequence_of("ORD-20240115-012") == 12
    assert sequence_of("no-number-here") is None
    assert sequence_of(None) is None


def test_render_formats():
    on = date(2024, 1, 15)
    assert IdentifierFormat("CUST").render(1, on) == "CUST-001"
    assert IdentifierFormat("ORD", embed_date=True).render(3, on) == "ORD-20240115-003"
    assert IdentifierFormat("SHIP", width=5).render(42, on) == "SHIP-00042"


def test_generator_starts_above_observed_ids():
    ids = IdentifierGenerator(IdentifierFormat("ENQ"), clock=lambda: date(2024, 2, 1))
    ids.observe(["ENQ-001", "ENQ-009", "ENQ-003", "garbage"])

    assert ids.next_sequence == 10
    assert ids.next_id() == "ENQ-010"
    assert ids.next_id() == "ENQ-011"


def test_generator_never_moves_backwards():
    ids = IdentifierGenerator(IdentifierFormat("PRICE"), start=5)
    ids.observe(["PRICE-002"])
    assert ids.next_sequence == 5
