import pytest

from dealerdesk.data.loader import BUNDLED_SEED, MappingSeedSource, YamlSeedSource


def test_bundled_seed_covers_every_entity():
    data = YamlSeedSource().load()
    assert BUNDLED_SEED.exists()
    assert set(data) == {"customer", "model", "color", "enquiry", "order", "price", "shipping"}


def test_yaml_dates_become_iso_strings():
    data = YamlSeedSource().load()
    assert data["order"][0]["tentative_delivery_date"] == "2024-02-15"
    assert data["customer"][0]["created_at"] == "2024-01-15"


def test_empty_section_and_bad_section():
    assert MappingSeedSource({"customer": None}).load() == {"customer": []}
    with pytest.raises(ValueError):
        MappingSeedSource({"customer": {"id": "CUST-001"}}).load()


def test_mapping_source_copies_input():
    raw = {"customer": [{"id": "CUST-001"}]}
    MappingSeedSource(raw).load()["customer"][0]["id"] = "changed"
    assert raw["customer"][0]["id"] == "CUST-001"


def test_missing_and_malformed_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        YamlSeedSource(str(tmp_path / "nope.yaml")).load()

    bad = tmp_path / "seed.yaml"
    bad.write_text("just a string\n", encoding="utf-8")
    with pytest.raises(ValueError):
        YamlSeedSource(str(bad)).load()
