from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from dealerdesk.core.identifiers import IdentifierFormat
from dealerdesk.core.references import Reference
from dealerdesk.core.validator import EntitySchema


class BaseEntity(ABC):
    """
    Abstract base class for all entity descriptors.

    One subclass per record type. The generic EntityListManager reads
    everything it needs from here: schema, id format, search fields,
    references and status values. Subclasses hold no records themselves.
    """

    name: str = "generic"
    description: str = "Generic entity"

    id_prefix: str = "REC"
    embed_date: bool = False

    schema: EntitySchema = EntitySchema(fields={})
    search_fields: List[str] = []
    references: List[Reference] = []
    static_options: Dict[str, Sequence[str]] = {}

    statuses: Tuple[str, ...] = ()
    initial_status: Optional[str] = None

    # --------------------------------------------------
    # IDENTIFIERS / LABELS
    # --------------------------------------------------

    def id_format(self, width: int = 3) -> IdentifierFormat:
        return IdentifierFormat(self.id_prefix, width=width, embed_date=self.embed_date)

    def option_label(self, record: Mapping[str, Any]) -> str:
        return str(record.get("id", ""))

    # --------------------------------------------------
    # OPTIONAL HOOKS (DEFAULT SAFE)
    # --------------------------------------------------

    def normalize(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Form values -> validator input. Default = unchanged."""
        return dict(values)

    def form_values(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Stored record -> values an edit form starts from."""
        return dict(record)

    def derive(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Computed fields stored alongside the validated ones."""
        return record

    def preview(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Live computed values for an in-progress form."""
        return {}

    # --------------------------------------------------
    # REFERENCES
    # --------------------------------------------------

    def reference(self, field: str) -> Reference:
        for ref in self.references:
            if ref.field == field:
                return ref
        raise KeyError(f"{self.name} has no reference field '{field}'")

    def children_of(self, field: str) -> List[Reference]:
        """References narrowed by `field` (e.g. color narrowed by model)."""
        return [ref for ref in self.references if ref.parent_field == field]

    # --------------------------------------------------
    # REQUIRED CONTRACT
    # --------------------------------------------------

    @abstractmethod
    def calculate_kpis(self, df: pd.DataFrame, today: date) -> Dict[str, Any]:
        pass
