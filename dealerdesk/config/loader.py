import copy
from pathlib import Path
from typing import Optional

import yaml

from .defaults import DEFAULT_CONFIG
from dealerdesk.config.workspace_config import build_workspace_config


# -------------------------------------------------
# MAIN CONFIG LOADER
# -------------------------------------------------
def load_config(path: Optional[str] = None) -> dict:
    """
    Load and merge user config with dealerdesk defaults.

    Rules:
    - Defaults ALWAYS win if the user omits a field
    - every section is OPTIONAL
    - the result always carries a validated "workspace_config"
    """

    # -------------------------------------------------
    # 1. Load user config (if provided)
    # -------------------------------------------------
    user_config = {}

    if path:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}

        if not isinstance(user_config, dict):
            raise ValueError("Config file must contain a YAML dictionary")

    # -------------------------------------------------
    # 2. Merge with defaults (one level deep)
    # -------------------------------------------------
    config = copy.deepcopy(DEFAULT_CONFIG)

    for key, value in user_config.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value

    # -------------------------------------------------
    # 3. Required invariants
    # -------------------------------------------------
    config.setdefault("output_dir", "runs")
    config.setdefault("export_pdf", False)
    if not isinstance(config.get("seed"), dict):
        config["seed"] = {"path": config.get("seed")}

    # -------------------------------------------------
    # 4. Attach typed store config (raises ValueError on bad policy)
    # -------------------------------------------------
    config["workspace_config"] = build_workspace_config(config.get("workspace"))

    return config
