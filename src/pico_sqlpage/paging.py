import logging
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")

log = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValueError(f"Invalid page size: {page_size}")


def start_of_page(page_no: int, page_size: int) -> int:
    """1-based index of the first row of ``page_no``; never below 1."""
    return max(1, (page_no - 1) * page_size + 1)


def current_page_from_start(start: int, page_size: int) -> int:
    check_page_size(page_size)
    return (start - 1) // page_size + 1


def page_count(total_count: int, page_size: int) -> int:
    check_page_size(page_size)
    return (total_count + page_size - 1) // page_size


def end_of_page(start: int, available_count: int) -> int:
    return max(0, start + available_count - 1)


def start_of_previous_page(start: int, page_size: int) -> int:
    return max(start - page_size, 1)


def start_of_next_page(start: int, available_count: int) -> int:
    return start + available_count


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        check_page_size(self.size)

    @property
    def start(self) -> int:
        return start_of_page(self.page, self.size)

    @property
    def has_offset(self) -> bool:
        return self.page > 1


@dataclass(frozen=True)
class Page(Generic[T]):
    """A window of a larger result set.

    ``start`` is the 1-based position of the first row in the full result.
    A page over an empty result set reports itself as page 1 of 1.
    """

    rows: Sequence[T] = field(default_factory=tuple)
    start: int = 0
    total_count: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        check_page_size(self.page_size)
        object.__setattr__(self, "rows", tuple(self.rows))
        if self.available_count > self.page_size:
            log.warning(
                f"Page: {self.available_count} rows returned for page_size={self.page_size}"
            )
        remaining = max(self.total_count - max(self.start - 1, 0), 0)
        if self.available_count > remaining:
            log.warning(
                f"Page: {self.available_count} rows returned from start={self.start} "
                f"but only {remaining} of {self.total_count} remain"
            )

    @classmethod
    def empty(cls, page_size: int = DEFAULT_PAGE_SIZE) -> "Page[T]":
        return cls(rows=(), start=0, total_count=0, page_size=page_size)

    @property
    def available_count(self) -> int:
        return len(self.rows)

    @property
    def current_page(self) -> int:
        if self.total_count == 0:
            return 1
        return max(1, current_page_from_start(self.start, self.page_size))

    @property
    def page_count(self) -> int:
        if self.total_count == 0:
            return 1
        return page_count(self.total_count, self.page_size)

    @property
    def end(self) -> int:
        return end_of_page(self.start, self.available_count)

    @property
    def start_of_previous_page(self) -> int:
        return start_of_previous_page(self.start, self.page_size)

    @property
    def start_of_next_page(self) -> int:
        return start_of_next_page(self.start, self.available_count)

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.page_count
