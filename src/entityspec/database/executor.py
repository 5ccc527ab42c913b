"""Compile specifications into count/page queries and run them."""

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import and_, func
from sqlalchemy.orm import Query, Session, joinedload
from sqlalchemy.sql.elements import ColumnElement

from ..api.models import PaginatedResult
from ..spec.base_spec import BaseModelSpec
from ..spec.spec_tool import apply_sorting, default_predicate, is_unsatisfiable
from ..utils.logging import get_logger
from .metadata import describe_entity
from .schema import BASE_FIELDS

logger = get_logger(__name__)


def compile_filter(spec: BaseModelSpec, entity: type) -> Optional[ColumnElement]:
    """
    Entity search clause AND the lifecycle/identity defaults.

    Returns None when the search clause is unsatisfiable; callers answer
    without querying the store.
    """
    search = spec.of_search(entity)
    if is_unsatisfiable(search):
        logger.debug(f"Unsatisfiable filter for {entity.__name__}")
        return None
    return and_(search, default_predicate(entity, spec))


def eager_load_options(entity: type, attributes: Optional[Sequence[str]]) -> list:
    """
    Loader options fetching the named relations in the same round trip.

    Raises:
        ValueError: If a name is not a relationship of the entity
    """
    if not attributes:
        return []
    relationships = describe_entity(entity).relationships
    options = []
    for name in attributes:
        if name not in relationships:
            raise ValueError(f"{entity.__name__} has no relationship '{name}'")
        options.append(joinedload(getattr(entity, name)))
    return options


class ProjectionExecutor:
    """
    Runs specifications against a SQLAlchemy session.

    The session is supplied by the caller, who owns the transaction. Nothing
    is committed here.
    """

    def __init__(self, session: Session):
        self.session = session

    def _data_query(self, entity: type, predicate: ColumnElement, attributes: Optional[Sequence[str]]) -> Query:
        query = self.session.query(entity).filter(predicate)
        options = eager_load_options(entity, attributes)
        if options:
            query = query.options(*options)
        return query

    def _count(self, entity: type, predicate: ColumnElement) -> int:
        return self.session.query(func.count()).select_from(entity).filter(predicate).scalar() or 0

    def find_one(
        self,
        spec: BaseModelSpec,
        entity: type,
        attributes: Optional[Sequence[str]] = None,
    ) -> Optional[Any]:
        """
        First entity matching the specification (in its sort order), or None.

        Args:
            spec: Specification to apply
            entity: Mapped entity class
            attributes: Relationship names to load eagerly

        Returns:
            Entity or None if nothing matches
        """
        predicate = compile_filter(spec, entity)
        if predicate is None:
            return None
        query = self._data_query(entity, predicate, attributes)
        query = apply_sorting(query, entity, spec)
        return query.first()

    def find_all(
        self,
        spec: BaseModelSpec,
        entity: type,
        attributes: Optional[Sequence[str]] = None,
    ) -> PaginatedResult:
        """
        One page of matching entities plus the total match count.

        The count query and the page query share the same compiled filter;
        only the page query is sorted, offset and limited.

        Args:
            spec: Specification to apply
            entity: Mapped entity class
            attributes: Relationship names to load eagerly

        Returns:
            PaginatedResult of entities
        """
        predicate = compile_filter(spec, entity)
        if predicate is None:
            return PaginatedResult.empty_page(spec.page, spec.size)

        total = self._count(entity, predicate)
        query = self._data_query(entity, predicate, attributes)
        query = apply_sorting(query, entity, spec)
        content = query.offset(spec.offset()).limit(spec.limit()).all()
        logger.debug(
            f"Fetched {entity.__name__} page offset={spec.offset()} limit={spec.limit()} "
            f"rows={len(content)} total={total}"
        )
        return PaginatedResult(content=content, page=spec.page, size=spec.size, total_elements=total)

    def exists(self, spec: BaseModelSpec, entity: type) -> bool:
        predicate = compile_filter(spec, entity)
        if predicate is None:
            return False
        return self._count(entity, predicate) > 0

    def project(self, spec: BaseModelSpec, entity: type) -> PaginatedResult:
        """
        Like find_all, but returns dicts holding only the requested columns.

        ``spec.fields`` selects the columns; the base entity fields are always
        included. With no fields every column is returned.

        Raises:
            ValueError: If a requested field is not a column of the entity
        """
        columns = describe_entity(entity)
        if spec.fields is None:
            names: List[str] = list(columns.field_names)
        else:
            requested = set(spec.fields) | set(BASE_FIELDS)
            names = [name for name in columns.field_names if name in requested]
            unknown = requested - set(columns.field_names)
            if unknown:
                raise ValueError(f"{entity.__name__} has no columns {sorted(unknown)}")

        predicate = compile_filter(spec, entity)
        if predicate is None:
            return PaginatedResult.empty_page(spec.page, spec.size)

        total = self._count(entity, predicate)
        query = self.session.query(*[columns.attributes[name].label(name) for name in names]).filter(predicate)
        query = apply_sorting(query, entity, spec)
        rows = query.offset(spec.offset()).limit(spec.limit()).all()
        content: List[Dict[str, Any]] = [dict(row._mapping) for row in rows]
        return PaginatedResult(content=content, page=spec.page, size=spec.size, total_elements=total)
