from .loader import BUNDLED_SEED, MappingSeedSource, YamlSeedSource

__all__ = ["BUNDLED_SEED", "MappingSeedSource", "YamlSeedSource"]
