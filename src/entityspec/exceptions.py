"""Domain exceptions."""

from typing import Any, Optional, TypeVar

T = TypeVar("T")


class EntityNotFoundError(LookupError):
    """Raised when a caller requires an entity that does not exist."""

    def __init__(self, entity: str, criteria: Any = None):
        self.entity = entity
        self.criteria = criteria
        if criteria is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} not found: {criteria}"
        super().__init__(message)


def require_present(value: Optional[T], entity: str, criteria: Any = None) -> T:
    """Return value, or raise EntityNotFoundError when it is None."""
    if value is None:
        raise EntityNotFoundError(entity, criteria)
    return value
