import logging
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from dealerdesk.core.errors import RecordNotFoundError
from dealerdesk.core.identifiers import IdentifierGenerator

log = logging.getLogger("dealerdesk.store")

MISSING_POLICIES = ("ignore", "report")

# Never overwritten by an update
IMMUTABLE_FIELDS = ("id", "created_at")


class EntityStore:
    """
    Authoritative in-memory collection for ONE entity type.

    Responsibilities:
    - keep records in insertion order
    - assign ids (monotonic) and created_at on insert
    - replace/delete by id, honouring the missing-record policy

    Records handed out are copies; callers mutate only through this API.
    """

    def __init__(
        self,
        entity: str,
        ids: IdentifierGenerator,
        records: Optional[Iterable[Mapping[str, Any]]] = None,
        missing_policy: str = "ignore",
        clock: Callable[[], date] = date.today,
    ):
        if missing_policy not in MISSING_POLICIES:
            raise ValueError(
                f"missing_policy must be one of {MISSING_POLICIES}, got {missing_policy!r}"
            )

        self.entity = entity
        self.ids = ids
        self.missing_policy = missing_policy
        self.clock = clock
        self._records: List[Dict[str, Any]] = []

        seeded = [dict(r) for r in (records or [])]
        self.ids.observe(r["id"] for r in seeded if r.get("id"))
        for record in seeded:
            if not record.get("id"):
                record["id"] = self.ids.next_id()
            self._records.append(record)

        log.debug("%s store seeded with %d records", entity, len(self._records))

    # -------------------------------------------------
    # READS
    # -------------------------------------------------
    def list(self) -> List[Dict[str, Any]]:
        return [dict(r) for r in self._records]

    def get(self, record_id: Optional[str]) -> Optional[Dict[str, Any]]:
        index = self._index_of(record_id)
        return None if index is None else dict(self._records[index])

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id) -> bool:
        return self._index_of(record_id) is not None

    # -------------------------------------------------
    # WRITES
    # -------------------------------------------------
    def insert(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        stored = dict(record)
        stored["id"] = self.ids.next_id()
        stored["created_at"] = self.clock().isoformat()
        self._records.append(stored)
        log.info("%s %s created", self.entity, stored["id"])
        return dict(stored)

    def replace_by_id(
        self, record_id: str, changes: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        index = self._index_of(record_id)
        if index is None:
            self.missing(record_id, "update")
            return None

        current = self._records[index]
        merged = {**current, **changes}
        for key in IMMUTABLE_FIELDS:
            if key in current:
                merged[key] = current[key]

        self._records[index] = merged
        log.info("%s %s updated", self.entity, record_id)
        return dict(merged)

    def delete_by_id(self, record_id: str) -> bool:
        index = self._index_of(record_id)
        if index is None:
            self.missing(record_id, "delete")
            return False

        del self._records[index]
        log.info("%s %s deleted", self.entity, record_id)
        return True

    def missing(self, record_id: Optional[str], action: str) -> None:
        """Apply the missing-record policy for an unknown id."""
        if self.missing_policy == "report":
            raise RecordNotFoundError(self.entity, str(record_id), action)
        log.debug("%s %s: no record %r, ignored", self.entity, action, record_id)

    def _index_of(self, record_id: Optional[str]) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.get("id") == record_id:
                return index
        return None
