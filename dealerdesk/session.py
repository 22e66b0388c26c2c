import logging
from typing import Any, Callable, Dict, List, Optional

from dealerdesk.core.references import EMPTY_KEYS, Option
from dealerdesk.manager import EntityListManager, MutationResult

log = logging.getLogger("dealerdesk.session")

CLOSED = "closed"
CREATING = "creating"
EDITING = "editing"


class FormSession:
    """
    Transient create/edit state for one entity form.

    closed -> open_create()/open_edit() -> set()... -> submit()
    A successful submit (or cancel) closes the session and drops its values;
    a rejected submit keeps the values and exposes `errors`.
    """

    def __init__(
        self,
        manager: EntityListManager,
        on_success: Optional[Callable[[Dict[str, Any]], None]] = None,
    ):
        self.manager = manager
        self.on_success = on_success
        self.mode = CLOSED
        self.editing_id: Optional[str] = None
        self.values: Dict[str, Any] = {}
        self.errors: Dict[str, str] = {}

    @property
    def is_open(self) -> bool:
        return self.mode != CLOSED

    # -------------------------------------------------
    # OPEN / CLOSE
    # -------------------------------------------------
    def open_create(self, **prefill) -> "FormSession":
        self._reset()
        self.mode = CREATING
        for field, value in prefill.items():
            self.set(field, value)
        return self

    def open_edit(self, record_id: str) -> "FormSession":
        record = self.manager.get(record_id)
        if record is None:
            self.manager.store.missing(record_id, "update")
            return self

        self._reset()
        self.mode = EDITING
        self.editing_id = record_id
        self.values = self.manager.entity.form_values(record)
        return self

    def cancel(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.mode = CLOSED
        self.editing_id = None
        self.values = {}
        self.errors = {}

    # -------------------------------------------------
    # EDITING
    # -------------------------------------------------
    def set(self, field: str, value: Any) -> None:
        if not self.is_open:
            raise RuntimeError("Form session is not open")

        previous = self.values.get(field)
        self.values[field] = value
        self.errors.pop(field, None)

        entity = self.manager.entity
        ref = next((r for r in entity.references if r.field == field), None)

        # A newly picked record refreshes the inputs it pre-fills
        if ref is not None and ref.prefill and value != previous:
            self.values.update(self.manager.resolver.prefill(ref, value))

        # A new parent invalidates a child picked under the old one
        if value != previous:
            for child in entity.children_of(field):
                chosen = self.values.get(child.field)
                if chosen in EMPTY_KEYS:
                    continue
                allowed = {o.id for o in self.options(child.field)}
                if chosen not in allowed:
                    self.values[child.field] = ""

    def options(self, field: str) -> List[Option]:
        entity = self.manager.entity
        try:
            ref = entity.reference(field)
        except KeyError:
            return self.manager.resolve_options(field)
        parent_id = self.values.get(ref.parent_field) if ref.parent_field else None
        return self.manager.resolve_options(field, parent_id)

    def preview(self) -> Dict[str, Any]:
        return self.manager.entity.preview(self.values)

    def copy_billing_address(self) -> bool:
        """
        Shipping forms: fill the address block from the selected order's
        customer. Returns False (values untouched) when nothing resolves.
        """
        entity = self.manager.entity
        source = getattr(entity, "billing_address_for", None)
        if source is None:
            raise TypeError(f"{entity.name} forms have no billing address to copy")

        fields = source(self.values.get("order_id"), self.manager.resolver.lookup)
        if not fields:
            return False

        self.values.update(fields)
        self.values["is_same_as_billing"] = True
        return True

    # -------------------------------------------------
    # SUBMIT
    # -------------------------------------------------
    def submit(self) -> MutationResult:
        if not self.is_open:
            raise RuntimeError("Form session is not open")

        if self.mode == EDITING:
            result = self.manager.update(self.editing_id, self.values)
        else:
            result = self.manager.create(self.values)

        if result.not_found:
            self._reset()
            return result

        if not result.ok:
            self.errors = dict(result.errors)
            return result

        log.debug("%s form submitted (%s)", self.manager.name, self.mode)
        self._reset()
        if self.on_success:
            self.on_success(result.record)
        return result
