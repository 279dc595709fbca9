"""
Page/limit pagination shared by the list queries.
"""
import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from core.conf import licensing_setting

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """A 1-based page number and page size, clamped to sane bounds."""

    page: int = 1
    limit: int = 10

    @classmethod
    def build(cls, page: Optional[int] = None, limit: Optional[int] = None) -> "PageRequest":
        max_limit = licensing_setting("MAX_PAGE_SIZE")
        page = max(int(page or 1), 1)
        limit = int(limit or licensing_setting("PAGE_SIZE"))
        return cls(page=page, limit=min(max(limit, 1), max_limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    """One page of results plus totals."""

    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
