"""
Seed data sources.

A seed source is anything with `load() -> {entity_name: [record, ...]}`.
The workspace reads it ONCE at startup; nothing is ever written back.
"""

import copy
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

BUNDLED_SEED = Path(__file__).with_name("seed.yaml")

SeedData = Dict[str, List[Dict[str, Any]]]


def _plain(value: Any) -> Any:
    # YAML turns bare 2024-01-15 into date objects; records keep ISO strings
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def normalize_seed(raw: Mapping[str, Any]) -> SeedData:
    data: SeedData = {}
    for entity, records in raw.items():
        if records is None:
            data[entity] = []
            continue
        if not isinstance(records, list):
            raise ValueError(f"Seed section '{entity}' must be a list of records")
        data[entity] = [
            {key: _plain(value) for key, value in dict(record).items()}
            for record in records
        ]
    return data


class YamlSeedSource:
    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path else BUNDLED_SEED

    def load(self) -> SeedData:
        if not self.path.exists():
            raise FileNotFoundError(f"Seed file not found: {self.path}")

        with open(self.path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ValueError("Seed file must contain a YAML dictionary")

        return normalize_seed(raw)


class MappingSeedSource:
    """In-memory seed, mostly for tests and embedding."""

    def __init__(self, data: Mapping[str, Any]):
        self._data = data

    def load(self) -> SeedData:
        return normalize_seed(copy.deepcopy(dict(self._data)))
