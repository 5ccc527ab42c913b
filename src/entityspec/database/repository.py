"""Repository for one entity type: key lookups plus specification queries."""

from typing import Any, Generic, Optional, Sequence, TypeVar

from sqlalchemy.orm import Session

from ..api.models import PaginatedResult
from ..spec.base_spec import BaseModelSpec
from ..utils.logging import get_logger
from .executor import ProjectionExecutor

logger = get_logger(__name__)

T = TypeVar("T")


class EntityRepository(Generic[T]):
    """
    Persistence for a single mapped class.

    ``save`` flushes but does not commit; the caller owns the transaction.
    """

    def __init__(self, session: Session, entity: type[T]):
        self.session = session
        self.entity = entity
        self.executor = ProjectionExecutor(session)

    def find_by_id(self, entity_id: Any) -> Optional[T]:
        return self.session.get(self.entity, entity_id)

    def save(self, row: T) -> T:
        self.session.add(row)
        self.session.flush()
        return row

    def delete_by_id(self, entity_id: Any) -> bool:
        """Hard delete. Returns False if there was no such row."""
        row = self.find_by_id(entity_id)
        if row is None:
            return False
        self.session.delete(row)
        self.session.flush()
        logger.debug(f"Deleted {self.entity.__name__} id={entity_id}")
        return True

    def find_one(self, spec: BaseModelSpec, attributes: Optional[Sequence[str]] = None) -> Optional[T]:
        return self.executor.find_one(spec, self.entity, attributes)

    def find_all(self, spec: BaseModelSpec, attributes: Optional[Sequence[str]] = None) -> PaginatedResult:
        return self.executor.find_all(spec, self.entity, attributes)

    def exists(self, spec: BaseModelSpec) -> bool:
        return self.executor.exists(spec, self.entity)

    def project(self, spec: BaseModelSpec) -> PaginatedResult:
        return self.executor.project(spec, self.entity)
