"""Per-entity mapping of field names to orderable column attributes.

Built once per mapped class from the SQLAlchemy mapper and looked up at
query time, so validating a sort or search field is a dict lookup.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, FrozenSet, Optional, Tuple

from sqlalchemy import inspect
from sqlalchemy.orm import InstrumentedAttribute


@dataclass(frozen=True)
class EntityColumns:
    """Column metadata for one entity type."""
    entity: type
    attributes: Dict[str, InstrumentedAttribute]  # attribute key -> attribute
    column_names: Dict[str, str]  # store column name -> attribute key
    relationships: FrozenSet[str]

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self.attributes)

    def resolve(self, name: Optional[str]) -> Optional[InstrumentedAttribute]:
        """
        Look up a column by attribute key or mapped column name.

        Returns None for unknown names (including relationship names).
        """
        if not name:
            return None
        attr = self.attributes.get(name)
        if attr is not None:
            return attr
        key = self.column_names.get(name)
        if key is not None:
            return self.attributes[key]
        return None

    def require(self, name: str) -> InstrumentedAttribute:
        attr = self.resolve(name)
        if attr is None:
            raise ValueError(f"{self.entity.__name__} has no column '{name}'")
        return attr


@lru_cache(maxsize=None)
def describe_entity(entity: type) -> EntityColumns:
    """Build (and cache) the column mapping table for a mapped class."""
    mapper = inspect(entity)
    attributes: Dict[str, InstrumentedAttribute] = {}
    column_names: Dict[str, str] = {}
    for prop in mapper.column_attrs:
        attributes[prop.key] = getattr(entity, prop.key)
        for column in prop.columns:
            name = getattr(column, "name", None)
            if name and name != prop.key:
                column_names.setdefault(name, prop.key)
    relationships = frozenset(rel.key for rel in mapper.relationships)
    return EntityColumns(
        entity=entity,
        attributes=attributes,
        column_names=column_names,
        relationships=relationships,
    )
