from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class Entity:
    type: str
    mutability: str | None = None
    data: Mapping[str, Any] = field(default_factory=dict)


def _entity_from_raw(value: Any) -> Entity | None:
    if not isinstance(value, Mapping):
        return None
    etype = value.get("type")
    if not isinstance(etype, str):
        return None
    mutability = value.get("mutability")
    data = value.get("data")
    return Entity(
        type=etype,
        mutability=mutability if isinstance(mutability, str) else None,
        data=data if isinstance(data, Mapping) else {},
    )


def entity_key(key: Any) -> str | None:
    """Normalize an entity key; input may carry numeric-looking keys as ints."""
    if isinstance(key, bool):
        return None
    if isinstance(key, str):
        return key
    if isinstance(key, int):
        return str(key)
    return None


class EntityTable:
    """
    Keyed lookup over a content-state entity map.

    The map arrives either as a list of {"key": ..., "value": {...}} pairs or as a
    mapping keyed by entity key; both are folded into one dict at construction.
    """

    def __init__(self, entities: Mapping[str, Entity] | None = None) -> None:
        self._entities: dict[str, Entity] = dict(entities or {})

    @classmethod
    def from_raw(cls, raw: Any) -> "EntityTable":
        entities: dict[str, Entity] = {}

        if isinstance(raw, list):
            for item in raw:
                if not isinstance(item, Mapping):
                    continue
                key = entity_key(item.get("key"))
                entity = _entity_from_raw(item.get("value"))
                if key is None or entity is None or key in entities:
                    continue
                entities[key] = entity
        elif isinstance(raw, Mapping):
            for k, v in raw.items():
                key = entity_key(k)
                entity = _entity_from_raw(v)
                if key is None or entity is None:
                    continue
                entities[key] = entity

        return cls(entities)

    def get(self, key: Any) -> Entity | None:
        k = entity_key(key)
        if k is None:
            return None
        return self._entities.get(k)

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entities)
