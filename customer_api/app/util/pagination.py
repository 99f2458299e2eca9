import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 10

ASC = "ASC"
DESC = "DESC"

T = TypeVar("T")


@dataclass(frozen=True)
class SortOrder:
    field: str
    direction: str = ASC

    @property
    def ascending(self) -> bool:
        return self.direction == ASC


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE
    sort: Tuple[SortOrder, ...] = ()

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    content: List[T]
    page_request: PageRequest
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        if self.page_request.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.page_request.size)

    def map(self, func) -> "Page":
        return Page(
            content=[func(item) for item in self.content],
            page_request=self.page_request,
            total_elements=self.total_elements,
        )


def build_page_request(page: Optional[int] = None, size: Optional[int] = None,
                       sort_list: Optional[Sequence] = None) -> PageRequest:
    """
    Build a pagination and sorting directive.

    Args:
        page: Zero-based page index, defaults to 0
        size: Page size, defaults to 10
        sort_list: Items exposing ``field`` and ``direction``, applied in order

    Returns:
        PageRequest
    """
    orders = tuple(
        SortOrder(field=item.field, direction=str(item.direction).upper())
        for item in (sort_list or [])
    )

    return PageRequest(
        page=DEFAULT_PAGE if page is None else page,
        size=DEFAULT_PAGE_SIZE if size is None else size,
        sort=orders,
    )
