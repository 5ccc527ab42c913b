"""Entity query specification engine.

Describe filtering, sorting, pagination, lifecycle visibility and projection
for a SQLAlchemy entity through one specification object, then compile it
into count and page queries.
"""

from entityspec.api.models import PaginatedResult
from entityspec.database.executor import ProjectionExecutor
from entityspec.database.repository import EntityRepository
from entityspec.database.schema import Base, EntityMixin
from entityspec.exceptions import EntityNotFoundError, require_present
from entityspec.spec.base_spec import BaseModelSpec
from entityspec.spec.pagination import PaginationSpec, ParameterModel, SortOrder
from entityspec.spec.spec_tool import SearchType

__all__ = [
    "Base",
    "BaseModelSpec",
    "EntityMixin",
    "EntityNotFoundError",
    "EntityRepository",
    "PaginatedResult",
    "PaginationSpec",
    "ParameterModel",
    "ProjectionExecutor",
    "SearchType",
    "SortOrder",
    "require_present",
]
