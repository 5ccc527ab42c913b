"""Paginated read model returned by the executor and service handler.

Wire shape (to_dict / from_dict)::

    {"content": [...], "page": 1, "size": 10, "totalElements": 0,
     "totalPages": 0, "first": true, "last": true, "empty": true}

``page`` is 1-indexed on the wire and in the model.
"""

import math
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..spec.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, clamp_page, clamp_size


class PaginatedResult(BaseModel):
    """One page of results plus the total count under the same filter."""
    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    content: List[Any] = []
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE
    total_elements: int = Field(default=0, alias="totalElements")

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return math.ceil(self.total_elements / self.size)

    @computed_field
    @property
    def first(self) -> bool:
        return self.page <= 1

    @computed_field
    @property
    def last(self) -> bool:
        return self.page >= self.total_pages

    @computed_field
    @property
    def empty(self) -> bool:
        return len(self.content) == 0

    @classmethod
    def empty_page(cls, page: int = DEFAULT_PAGE, size: int = DEFAULT_PAGE_SIZE) -> "PaginatedResult":
        return cls(content=[], page=page, size=size, total_elements=0)

    @classmethod
    def from_list(
        cls,
        items: Sequence[Any],
        page: int = DEFAULT_PAGE,
        size: int = DEFAULT_PAGE_SIZE,
        total_elements: Optional[int] = None,
    ) -> "PaginatedResult":
        """
        Slice an in-memory list into one page.

        Page and size are clamped the same way as PaginationSpec. The total
        defaults to the length of the full list.
        """
        page = clamp_page(page)
        size = clamp_size(size)
        start = (page - 1) * size
        content = list(items[start:start + size]) if start < len(items) else []
        if total_elements is None:
            total_elements = len(items)
        return cls(content=content, page=page, size=size, total_elements=total_elements)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaginatedResult":
        """Read the wire shape back; derived flags in the input are ignored."""
        content = list(data.get("content") or [])
        return cls(
            content=content,
            page=max(int(data.get("page") or DEFAULT_PAGE), 1),
            size=int(data.get("size") or DEFAULT_PAGE_SIZE),
            total_elements=int(data.get("totalElements", len(content))),
        )

    def map(self, fn: Callable[[Any], Any]) -> "PaginatedResult":
        """Convert each content item, keeping the page metadata."""
        return PaginatedResult(
            content=[fn(item) for item in self.content],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )

    def to_dict(self, item_serializer: Optional[Callable[[Any], Any]] = None) -> Dict[str, Any]:
        content = self.content
        if item_serializer is not None:
            content = [item_serializer(item) for item in content]
        return {
            "content": list(content),
            "page": self.page,
            "size": self.size,
            "totalElements": self.total_elements,
            "totalPages": self.total_pages,
            "first": self.first,
            "last": self.last,
            "empty": self.empty,
        }
