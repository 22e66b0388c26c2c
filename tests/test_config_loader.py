import pytest

from dealerdesk.config.defaults import DEFAULT_CONFIG
from dealerdesk.config.loader import load_config
from dealerdesk.config.workspace_config import EntityConfig, WorkspaceConfig


def test_defaults_without_file():
    config = load_config(None)

    assert config["output_dir"] == "runs"
    assert config["export_pdf"] is False
    assert config["seed"] == {"path": None}
    assert isinstance(config["workspace_config"], WorkspaceConfig)
    assert config["workspace_config"].policy_for("order") == "ignore"


def test_defaults_are_not_mutated(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("report:\n  charts: false\n", encoding="utf-8")

    config = load_config(str(cfg))

    assert config["report"]["charts"] is False
    assert config["report"]["currency_symbol"] == "₹"
    assert DEFAULT_CONFIG["report"]["charts"] is True


def test_per_entity_overrides(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "workspace:\n"
        "  id_width: 4\n"
        "  entities:\n"
        "    order:\n"
        "      missing_record_policy: report\n",
        encoding="utf-8",
    )

    ws_config = load_config(str(cfg))["workspace_config"]

    assert ws_config.get_entity_config("order") == EntityConfig("report", 4)
    assert ws_config.get_entity_config("customer") == EntityConfig("ignore", 4)


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config("does/not/exist.yaml")


def test_non_mapping_yaml(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(cfg))


def test_unknown_policy(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("workspace:\n  missing_record_policy: shout\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(cfg))


def test_bad_id_width():
    with pytest.raises(ValueError):
        EntityConfig(id_width=0)


def test_report_section_holds_only_read_keys():
    assert set(DEFAULT_CONFIG["report"]) == {"charts", "currency_symbol"}
