"""
DealerWorkspace

Wires one store + one manager per registered entity around a single
reference resolver. Seed data is read once here; nothing is written back.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from dealerdesk.config.workspace_config import WorkspaceConfig, build_workspace_config
from dealerdesk.core.errors import UnknownEntityError
from dealerdesk.core.identifiers import IdentifierGenerator
from dealerdesk.core.references import ReferenceResolver
from dealerdesk.core.store import EntityStore
from dealerdesk.data.loader import YamlSeedSource
from dealerdesk.entities import registry as default_registry
from dealerdesk.entities.base import BaseEntity
from dealerdesk.manager import EntityListManager
from dealerdesk.session import FormSession

log = logging.getLogger("dealerdesk.workspace")


class DealerWorkspace:
    def __init__(
        self,
        seed_source=None,
        config: Optional[WorkspaceConfig] = None,
        clock: Callable[[], date] = date.today,
        registry=default_registry,
    ):
        self.config = config or WorkspaceConfig()
        self.clock = clock
        self.registry = registry

        seed = (seed_source or YamlSeedSource()).load()
        unknown = sorted(set(seed) - set(registry.list_entities()))
        if unknown:
            log.warning("Seed sections with no registered entity ignored: %s", unknown)

        self._entities: Dict[str, BaseEntity] = {}
        self._stores: Dict[str, EntityStore] = {}
        self._managers: Dict[str, EntityListManager] = {}

        self.resolver = ReferenceResolver(
            stores=self.store,
            labels=lambda target, record: self._entity(target).option_label(record),
        )

        for name in registry.list_entities():
            entity = registry.get_entity(name)
            entity_config = self.config.get_entity_config(name)

            records = [
                entity.derive(entity.schema.coerce(r)) for r in seed.get(name, [])
            ]
            store = EntityStore(
                name,
                IdentifierGenerator(entity.id_format(entity_config.id_width), clock=clock),
                records=records,
                missing_policy=entity_config.missing_record_policy,
                clock=clock,
            )

            self._entities[name] = entity
            self._stores[name] = store
            self._managers[name] = EntityListManager(entity, store, self.resolver, clock=clock)

        log.info(
            "Workspace ready: %s",
            ", ".join(f"{n}={len(s)}" for n, s in self._stores.items()),
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any], clock: Callable[[], date] = date.today):
        """Build from a load_config() result."""
        workspace_config = config.get("workspace_config") or build_workspace_config(
            config.get("workspace")
        )
        seed_path = (config.get("seed") or {}).get("path")
        return cls(YamlSeedSource(seed_path), config=workspace_config, clock=clock)

    # -------------------------------------------------
    # LOOKUPS
    # -------------------------------------------------
    def entities(self) -> List[str]:
        return list(self._managers.keys())

    def manager(self, name: str) -> EntityListManager:
        try:
            return self._managers[name]
        except KeyError:
            raise UnknownEntityError(name) from None

    __getitem__ = manager

    def store(self, name: str) -> EntityStore:
        try:
            return self._stores[name]
        except KeyError:
            raise UnknownEntityError(name) from None

    def _entity(self, name: str) -> BaseEntity:
        try:
            return self._entities[name]
        except KeyError:
            raise UnknownEntityError(name) from None

    # -------------------------------------------------
    # FORMS
    # -------------------------------------------------
    def session(
        self,
        name: str,
        on_success: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> FormSession:
        return FormSession(self.manager(name), on_success=on_success)

    def convert_enquiry(self, enquiry_id: str) -> Optional[FormSession]:
        """
        Open an order form pre-filled from the enquiry. The enquiry is marked
        converted only once that order is submitted successfully.
        """
        enquiries = self.manager("enquiry")
        enquiry = enquiries.get(enquiry_id)
        if enquiry is None:
            enquiries.store.missing(enquiry_id, "convert")
            return None

        def mark_converted(order: Dict[str, Any]) -> None:
            enquiries.set_status(enquiry_id, "converted")
            log.info("Enquiry %s converted to order %s", enquiry_id, order["id"])

        session = self.session("order", on_success=mark_converted)
        return session.open_create(
            customer_id=enquiry.get("customer_id", ""),
            enquiry_id=enquiry_id,
        )
