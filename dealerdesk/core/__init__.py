"""Core entity mechanics - store, validation, search, references, pricing."""

from .errors import DealerDeskError, RecordNotFoundError, UnknownEntityError
from .identifiers import IdentifierFormat, IdentifierGenerator
from .pricing import PriceBreakdown, calculate_balance
from .references import Option, Reference, ReferenceResolver
from .search import filter_records
from .store import EntityStore
from .validator import EntitySchema, ValidationResult

__all__ = [
    "DealerDeskError",
    "RecordNotFoundError",
    "UnknownEntityError",
    "IdentifierFormat",
    "IdentifierGenerator",
    "PriceBreakdown",
    "calculate_balance",
    "Option",
    "Reference",
    "ReferenceResolver",
    "filter_records",
    "EntityStore",
    "EntitySchema",
    "ValidationResult",
]
