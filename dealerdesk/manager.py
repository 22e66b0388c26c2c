"""
Generic Entity List Manager.

One instance per entity type, configured entirely by its descriptor:

    list(query)            -> visible records
    validate(values)       -> ValidationResult
    create(values)         -> MutationResult
    update(id, values)     -> MutationResult
    delete(id)             -> bool
    resolve_options(field) -> [Option]
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional

from dealerdesk.core.references import Option, ReferenceResolver
from dealerdesk.core.search import filter_records
from dealerdesk.core.store import EntityStore
from dealerdesk.core.validator import BooleanField, ValidationResult
from dealerdesk.entities.base import BaseEntity
from dealerdesk.reporting.utils import records_frame

log = logging.getLogger("dealerdesk.manager")


@dataclass
class MutationResult:
    record: Optional[Dict[str, Any]] = None
    errors: Dict[str, str] = field(default_factory=dict)
    unresolved: List[str] = field(default_factory=list)
    not_found: bool = False

    @property
    def ok(self) -> bool:
        return self.record is not None and not self.errors


class EntityListManager:
    def __init__(
        self,
        entity: BaseEntity,
        store: EntityStore,
        resolver: ReferenceResolver,
        clock: Callable[[], date] = date.today,
    ):
        self.entity = entity
        self.store = store
        self.resolver = resolver
        self.clock = clock

    @property
    def name(self) -> str:
        return self.entity.name

    # -------------------------------------------------
    # READ SIDE
    # -------------------------------------------------
    def list(self, query: Optional[str] = None) -> List[Dict[str, Any]]:
        return filter_records(self.store.list(), query, self.entity.search_fields)

    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        return self.store.get(record_id)

    def validate(self, values: Mapping[str, Any]) -> ValidationResult:
        return self.entity.schema.validate(self.entity.normalize(values or {}))

    def resolve_options(self, field_name: str, parent_id: Any = None) -> List[Option]:
        """
        Options for a form field: a reference field lists the target's
        records (narrowed by parent_id when the reference has a parent);
        an enumerated field lists its allowed values.
        """
        try:
            ref = self.entity.reference(field_name)
        except KeyError:
            choices = self.entity.static_options.get(field_name)
            if choices is None:
                choices = getattr(self.entity.schema.fields.get(field_name), "choices", None)
            if choices is None:
                raise
            return [Option(c, c) for c in choices]
        return self.resolver.options(ref, parent_id)

    def summary(self, today: Optional[date] = None) -> Dict[str, Any]:
        frame = records_frame(self.store.list(), ["id", "status"])
        return self.entity.calculate_kpis(frame, today or self.clock())

    # -------------------------------------------------
    # WRITE SIDE
    # -------------------------------------------------
    def create(self, values: Mapping[str, Any]) -> MutationResult:
        result = self.validate(values)
        if not result.ok:
            log.debug("%s create rejected: %s", self.name, result.errors)
            return MutationResult(errors=result.errors)

        record, unresolved = self._complete(result.record)
        if self.entity.initial_status:
            record["status"] = self.entity.initial_status

        return MutationResult(record=self.store.insert(record), unresolved=unresolved)

    def update(self, record_id: str, values: Mapping[str, Any]) -> MutationResult:
        """
        Merge `values` over the stored record, validate the merge, store it.
        Fields not in `values` keep their stored value; id, created_at and
        status are never touched here.
        """
        current = self.store.get(record_id)
        if current is None:
            self.store.missing(record_id, "update")
            return MutationResult(not_found=True)

        merged = {**self.entity.form_values(current), **dict(values)}
        result = self.validate(merged)
        if not result.ok:
            log.debug("%s %s update rejected: %s", self.name, record_id, result.errors)
            return MutationResult(errors=result.errors)

        record, unresolved = self._complete(result.record)
        stored = self.store.replace_by_id(record_id, record)
        return MutationResult(record=stored, unresolved=unresolved)

    def delete(self, record_id: str) -> bool:
        return self.store.delete_by_id(record_id)

    def set_status(self, record_id: str, status: str) -> Optional[Dict[str, Any]]:
        if status not in self.entity.statuses:
            raise ValueError(
                f"{self.name} status must be one of {self.entity.statuses}, got {status!r}"
            )
        return self.store.replace_by_id(record_id, {"status": status})

    def toggle(self, record_id: str, field_name: str) -> Optional[Dict[str, Any]]:
        """Flip a boolean field (e.g. a colour's availability)."""
        if not isinstance(self.entity.schema.fields.get(field_name), BooleanField):
            raise ValueError(f"{self.name}.{field_name} is not a boolean field")

        current = self.store.get(record_id)
        if current is None:
            self.store.missing(record_id, "update")
            return None
        return self.store.replace_by_id(record_id, {field_name: not current.get(field_name)})

    def _complete(self, record: Dict[str, Any]):
        """Snapshot referenced display fields, then computed fields."""
        updates, unresolved = self.resolver.snapshot(self.entity.references, record)
        record.update(updates)
        return self.entity.derive(record), unresolved
