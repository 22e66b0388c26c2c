"""
Entity Registry

The SINGLE registry instance the workspace builds its stores from.
"""

from dealerdesk.core.errors import UnknownEntityError


class EntityRegistry:
    def __init__(self):
        self._entities = {}

    def register(self, name, entity_cls):
        self._entities[name] = entity_cls

    def get_entity(self, name):
        entity_cls = self._entities.get(name)
        if not entity_cls:
            raise UnknownEntityError(name)
        return entity_cls()

    def list_entities(self):
        return list(self._entities.keys())

    def __contains__(self, name):
        return name in self._entities


# SINGLETON REGISTRY (import this, do not construct another)
registry = EntityRegistry()
