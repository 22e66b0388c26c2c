from .loader import load_config
from .defaults import DEFAULT_CONFIG
from .workspace_config import EntityConfig, WorkspaceConfig, build_workspace_config

__all__ = [
    "load_config",
    "DEFAULT_CONFIG",
    "EntityConfig",
    "WorkspaceConfig",
    "build_workspace_config",
]
