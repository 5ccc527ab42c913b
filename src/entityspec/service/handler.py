"""Generic CRUD orchestration on top of EntityRepository.

BaseServiceHandler declares the operations; the optional lifecycle ones
raise NotImplementedError unless a subclass provides them.
AbstractServiceHandler implements everything except the recycle bin and
archived listing, leaving only the DTO conversions to subclasses.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from ..api.models import PaginatedResult
from ..database.repository import EntityRepository
from ..exceptions import require_present
from ..spec.base_spec import BaseModelSpec
from ..utils.logging import get_logger

logger = get_logger(__name__)

EntityT = TypeVar("EntityT")
CreateT = TypeVar("CreateT")
UpdateT = TypeVar("UpdateT")
ResponseT = TypeVar("ResponseT")
SpecT = TypeVar("SpecT", bound=BaseModelSpec)


class BaseServiceHandler(ABC, Generic[EntityT, CreateT, UpdateT, ResponseT, SpecT]):

    @abstractmethod
    def create(self, dto: CreateT) -> ResponseT:
        ...

    @abstractmethod
    def update(self, entity: EntityT, dto: UpdateT) -> ResponseT:
        ...

    @abstractmethod
    def exists(self, spec: SpecT) -> bool:
        ...

    @abstractmethod
    def find(self, spec: SpecT) -> EntityT:
        """Raises EntityNotFoundError when nothing matches."""

    @abstractmethod
    def find_all(self, spec: SpecT) -> PaginatedResult:
        ...

    @abstractmethod
    def find_by_id(self, entity_id: Any) -> EntityT:
        """Raises EntityNotFoundError when there is no such id."""

    @abstractmethod
    def save(self, entity: EntityT) -> EntityT:
        ...

    def delete(self, entity_id: Any) -> None:
        raise NotImplementedError("Delete not implemented")

    def restore(self, entity_id: Any) -> None:
        raise NotImplementedError("Restore not implemented")

    def recycle_bin(self, spec: SpecT) -> PaginatedResult:
        raise NotImplementedError("Recycle bin not implemented")

    def delete_permanently(self, entity_id: Any) -> None:
        raise NotImplementedError("Permanent delete not implemented")

    def archive(self, entity_id: Any) -> None:
        raise NotImplementedError("Archive not implemented")

    def un_archive(self, entity_id: Any) -> None:
        raise NotImplementedError("Unarchive not implemented")

    def find_all_archived(self, spec: SpecT) -> PaginatedResult:
        raise NotImplementedError("Find archived not implemented")


class AbstractServiceHandler(BaseServiceHandler[EntityT, CreateT, UpdateT, ResponseT, SpecT]):
    """
    Default implementations over a repository.

    Subclasses supply the three conversions: to_entity, apply_update and
    to_response.
    """

    def __init__(self, repository: EntityRepository[EntityT]):
        self.repository = repository
        self.entity = repository.entity

    @abstractmethod
    def to_entity(self, dto: CreateT) -> EntityT:
        ...

    @abstractmethod
    def apply_update(self, entity: EntityT, dto: UpdateT) -> EntityT:
        ...

    @abstractmethod
    def to_response(self, entity: EntityT) -> ResponseT:
        ...

    def create(self, dto: CreateT) -> ResponseT:
        saved = self.repository.save(self.to_entity(dto))
        return self.to_response(saved)

    def update(self, entity: EntityT, dto: UpdateT) -> ResponseT:
        saved = self.repository.save(self.apply_update(entity, dto))
        return self.to_response(saved)

    def exists(self, spec: SpecT) -> bool:
        return self.repository.exists(spec)

    def find(self, spec: SpecT) -> EntityT:
        return require_present(self.repository.find_one(spec), self.entity.__name__)

    def find_all(self, spec: SpecT) -> PaginatedResult:
        return self.repository.find_all(spec)

    def find_by_id(self, entity_id: Any) -> EntityT:
        row = self.repository.find_by_id(entity_id)
        if row is None:
            logger.warning(f"{self.entity.__name__} not found: id={entity_id}")
        return require_present(row, self.entity.__name__, f"id={entity_id}")

    def save(self, entity: EntityT) -> EntityT:
        return self.repository.save(entity)

    def _set_flag(self, entity_id: Any, flag: str, value: bool) -> None:
        row = self.find_by_id(entity_id)
        setattr(row, flag, value)
        self.repository.save(row)
        logger.info(f"{self.entity.__name__} id={entity_id} {flag}={value}")

    def delete(self, entity_id: Any) -> None:
        self._set_flag(entity_id, "deleted", True)

    def restore(self, entity_id: Any) -> None:
        self._set_flag(entity_id, "deleted", False)

    def archive(self, entity_id: Any) -> None:
        self._set_flag(entity_id, "archived", True)

    def un_archive(self, entity_id: Any) -> None:
        self._set_flag(entity_id, "archived", False)

    def delete_permanently(self, entity_id: Any) -> None:
        self.repository.delete_by_id(entity_id)
        logger.info(f"{self.entity.__name__} id={entity_id} deleted permanently")
