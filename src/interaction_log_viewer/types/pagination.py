"""Pagination metadata and computed page windows."""

from dataclasses import dataclass, field
from typing import Optional

from interaction_log_viewer.types.interactions import Interaction


@dataclass(frozen=True)
class PaginationMeta:
    """Pagination block as returned alongside a list response."""
    current_page: int = 1
    limit: int = 20
    total: int = 0
    total_pages: int = 0
    has_next: bool = False
    has_prev: bool = False


@dataclass(frozen=True)
class PageWindow:
    offset: int
    current_page: int
    total_pages: int
    has_next: bool
    has_prev: bool
    # Both None when there is nothing to show
    visible_range_start: Optional[int]
    visible_range_end: Optional[int]
    total: int = 0

    @property
    def is_empty(self) -> bool:
        return self.visible_range_start is None


@dataclass(frozen=True)
class InteractionPage:
    data: tuple[Interaction, ...] = ()
    pagination: PaginationMeta = field(default_factory=PaginationMeta)
