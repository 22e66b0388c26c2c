"""
Error taxonomy for the entity layer.

Validation failures are NOT exceptions: they travel as field -> message maps
inside ValidationResult / MutationResult. Only the conditions below raise.
"""


class DealerDeskError(Exception):
    """Base class for all dealerdesk errors."""


class RecordNotFoundError(DealerDeskError, LookupError):
    """
    Raised for update/delete of an unknown id when the store runs with the
    "report" missing-record policy. Non-fatal: callers catch and display it.
    """

    def __init__(self, entity: str, record_id: str, action: str = "update"):
        self.entity = entity
        self.record_id = record_id
        self.action = action
        super().__init__(f"Cannot {action} {entity} '{record_id}': no such record")


class UnknownEntityError(DealerDeskError, KeyError):
    """Raised when an entity name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self):
        return f"Unknown entity '{self.name}'"
