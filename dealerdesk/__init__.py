"""
dealerdesk

In-memory record management for a vehicle dealership: customers,
enquiries, orders, models, colours, pricing and shipping.
"""

from .__version__ import __version__

# Keep package init lightweight and safe
# Reporting (matplotlib / reportlab) is imported explicitly by users

from .core import (
    DealerDeskError,
    RecordNotFoundError,
    UnknownEntityError,
    Option,
    calculate_balance,
)
from .data.loader import MappingSeedSource, YamlSeedSource
from .manager import EntityListManager, MutationResult
from .session import FormSession
from .workspace import DealerWorkspace

__all__ = [
    "__version__",
    "DealerDeskError",
    "RecordNotFoundError",
    "UnknownEntityError",
    "Option",
    "calculate_balance",
    "MappingSeedSource",
    "YamlSeedSource",
    "EntityListManager",
    "MutationResult",
    "FormSession",
    "DealerWorkspace",
]
