DEFAULT_CONFIG = {
    # -----------------------------
    # SEED DATA (OPTIONAL)
    # -----------------------------
    "seed": {
        "path": None,  # None -> bundled dealerdesk/data/seed.yaml
    },

    # -----------------------------
    # ENTITY STORES
    # -----------------------------
    "workspace": {
        "missing_record_policy": "ignore",  # ignore | report
        "id_width": 3,
        "entities": {},  # per-entity overrides, e.g. {"order": {"missing_record_policy": "report"}}
    },

    # -----------------------------
    # REPORTING
    # -----------------------------
    "report": {
        "charts": True,
        "currency_symbol": "₹",
    },

    # -----------------------------
    # OUTPUT CONTROL
    # -----------------------------
    "output_dir": "runs",
    "export_pdf": False,

    # -----------------------------
    # LOGGING
    # -----------------------------
    "logging": {
        "level": "INFO",
    },
}
