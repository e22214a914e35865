import enum
import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .dialects import select_dialect
from .executor import QueryExecutor
from .mapping import NativeMapRowMapper, RowMapper
from .paging import DEFAULT_PAGE_SIZE, Page, check_page_size, start_of_page

log = logging.getLogger(__name__)


class StatementState(enum.Enum):
    BUILT = "built"
    COUNT_EXECUTED = "count_executed"
    EMPTY = "empty"
    WINDOW_EXECUTED = "window_executed"
    ASSEMBLED = "assembled"


@dataclass(frozen=True)
class PagedQuery:
    sql: str
    page: int = 1
    size: int = DEFAULT_PAGE_SIZE
    params: Optional[Sequence[Any]] = None
    dialect: Optional[str] = None
    mapper: Optional[RowMapper[Any]] = None

    def __post_init__(self) -> None:
        check_page_size(self.size)
        object.__setattr__(self, "params", tuple(self.params or ()))


class PagedStatement:
    """Count-then-fetch execution of one :class:`PagedQuery`.

    Both SQL strings are built up front. ``execute`` runs the counting query
    with the caller's parameters, returns the empty page when nothing
    matches, and otherwise fetches the window with the dialect's bound
    parameters appended. A statement can be executed once.
    """

    def __init__(self, query: PagedQuery):
        self.query = query
        self.dialect = select_dialect(query.dialect)
        self.mapper: RowMapper[Any] = query.mapper or NativeMapRowMapper()
        self.start_index = start_of_page(query.page, query.size)
        self.has_offset = query.page > 1
        self.count_sql = self.dialect.counting_sql(query.sql)
        self.page_sql = self.dialect.page_sql(query.sql, self.has_offset)
        self.total_count = 0
        self.state = StatementState.BUILT
        log.debug(
            f"PagedStatement: built for {self.dialect!r}, page={query.page}, "
            f"size={query.size}, start={self.start_index}, has_offset={self.has_offset}"
        )

    def execute(self, executor: QueryExecutor) -> Page[Any]:
        if self.state is not StatementState.BUILT:
            raise RuntimeError(f"PagedStatement already executed (state={self.state.value})")
        params = self.query.params

        count = executor.execute_scalar(self.count_sql, params)
        self.total_count = int(count) if count is not None else 0
        self.state = StatementState.COUNT_EXECUTED

        if self.total_count < 1:
            log.debug("PagedStatement.execute: no rows counted, skipping window query.")
            self.state = StatementState.EMPTY
            return Page.empty(self.query.size)

        page_params = self.dialect.attach_page_params(
            params, self.has_offset, self.start_index, self.query.size
        )
        log.debug(
            f"PagedStatement.execute: fetching window "
            f"[total_count:{self.total_count}] [page:{self.query.page}] [size:{self.query.size}]"
        )
        raw_rows = executor.execute(self.page_sql, page_params)
        rows = [self.mapper.map_row(row) for row in raw_rows]
        self.state = StatementState.WINDOW_EXECUTED

        page = Page(
            rows=rows,
            start=self.start_index,
            total_count=self.total_count,
            page_size=self.query.size,
        )
        self.state = StatementState.ASSEMBLED
        return page
