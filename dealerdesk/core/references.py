"""
Cross-entity reference resolution.

A Reference describes one foreign-key field on a form. The resolver reads the
target entity's store to:
- build the option list for the field (optionally narrowed by a parent field)
- snapshot display fields into a record at submit time

Snapshots are taken at write time and never refreshed: if the source record
changes later, the copied value goes stale. An unresolved key is NOT an error
for the caller; the copied fields become "" and the field is reported back.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

log = logging.getLogger("dealerdesk.references")

# Form values meaning "no selection"
EMPTY_KEYS = (None, "", "none")


@dataclass(frozen=True)
class Option:
    id: str
    label: str


@dataclass
class Reference:
    field: str
    target: str
    snapshot: Dict[str, str] = field(default_factory=dict)  # dest -> source
    prefill: Dict[str, str] = field(default_factory=dict)   # dest -> source, form only
    parent_field: Optional[str] = None  # field on THIS form holding the parent id
    parent_key: Optional[str] = None    # field on the TARGET compared with it


class ReferenceResolver:
    """
    Read-only view over other entity stores.

    `stores` returns the store for an entity name; `labels` returns the
    option label for a target record.
    """

    def __init__(
        self,
        stores: Callable[[str], Any],
        labels: Callable[[str, Dict[str, Any]], str],
    ):
        self.stores = stores
        self.labels = labels

    def lookup(self, target: str, key: Any) -> Optional[Dict[str, Any]]:
        if key in EMPTY_KEYS:
            return None
        return self.stores(target).get(key)

    def options(self, ref: Reference, parent_id: Any = None) -> List[Option]:
        records = self.stores(ref.target).list()

        if ref.parent_key and parent_id not in EMPTY_KEYS:
            records = [r for r in records if r.get(ref.parent_key) == parent_id]

        return [Option(r["id"], self.labels(ref.target, r)) for r in records]

    def snapshot(
        self, refs: List[Reference], record: Mapping[str, Any]
    ) -> Tuple[Dict[str, Any], List[str]]:
        """
        Returns (display field updates, unresolved foreign-key fields).
        """
        updates: Dict[str, Any] = {}
        unresolved: List[str] = []

        for ref in refs:
            if not ref.snapshot:
                continue

            key = record.get(ref.field)
            source = self.lookup(ref.target, key)

            if source is None and key not in EMPTY_KEYS:
                unresolved.append(ref.field)
                log.warning(
                    "%s=%r does not resolve to a %s; display fields left empty",
                    ref.field, key, ref.target,
                )

            for dest, src in ref.snapshot.items():
                value = source.get(src) if source else None
                updates[dest] = "" if value is None else value

        return updates, unresolved

    def prefill(self, ref: Reference, key: Any) -> Dict[str, Any]:
        source = self.lookup(ref.target, key)
        if source is None:
            return {}
        return {
            dest: source.get(src)
            for dest, src in ref.prefill.items()
            if source.get(src) is not None
        }
