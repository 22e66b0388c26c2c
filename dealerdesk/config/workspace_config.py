from dataclasses import dataclass, field
from typing import Dict, Optional

from dealerdesk.core.store import MISSING_POLICIES


# -------------------------------------------------
# PER-ENTITY CONFIG
# -------------------------------------------------
@dataclass
class EntityConfig:
    """
    Store settings for a single entity type.
    """
    missing_record_policy: str = "ignore"
    id_width: int = 3

    def __post_init__(self):
        if self.missing_record_policy not in MISSING_POLICIES:
            raise ValueError(
                f"missing_record_policy must be one of {MISSING_POLICIES}, "
                f"got {self.missing_record_policy!r}"
            )
        if int(self.id_width) < 1:
            raise ValueError("id_width must be at least 1")
        self.id_width = int(self.id_width)


# -------------------------------------------------
# WORKSPACE CONFIG
# -------------------------------------------------
@dataclass
class WorkspaceConfig:
    """
    Global store configuration.

    - entities MUST always be a dict
    - unlisted entities inherit the workspace defaults
    """
    missing_record_policy: str = "ignore"
    id_width: int = 3
    entities: Dict[str, EntityConfig] = field(default_factory=dict)

    def __post_init__(self):
        # validates the defaults the same way as an override
        EntityConfig(self.missing_record_policy, self.id_width)

    def get_entity_config(self, entity: str) -> EntityConfig:
        return self.entities.get(
            entity,
            EntityConfig(
                missing_record_policy=self.missing_record_policy,
                id_width=self.id_width,
            ),
        )

    def policy_for(self, entity: str) -> str:
        return self.get_entity_config(entity).missing_record_policy


def build_workspace_config(cfg: Optional[dict]) -> WorkspaceConfig:
    cfg = cfg or {}
    defaults = {
        "missing_record_policy": cfg.get("missing_record_policy", "ignore"),
        "id_width": cfg.get("id_width", 3),
    }

    entities = {}
    for entity, values in (cfg.get("entities") or {}).items():
        entities[entity] = EntityConfig(**{**defaults, **(values or {})})

    return WorkspaceConfig(entities=entities, **defaults)
