from typing import Any, Optional, Sequence

from pico_ioc import component

from .config import DatabaseSettings
from .executor import ConnectionQueryExecutor
from .mapping import Shape, row_mapper
from .paging import Page
from .session import SessionManager
from .statement import PagedQuery, PagedStatement


@component
class QueryTemplate:
    """Positional-parameter SQL helpers over a :class:`SessionManager`.

    Every call borrows one connection and returns it to the pool before
    returning; results are fully mapped by then. ``dialect`` picks the
    pagination SQL used by :meth:`query_page`.
    """

    def __init__(self, session_manager: SessionManager, settings: DatabaseSettings):
        self.session_manager = session_manager
        self.dialect = settings.dialect
        self.page_size = settings.page_size

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "QueryTemplate":
        return cls(SessionManager(**settings.engine_options()), settings)

    def query_scalar(self, sql: str, *params: Any) -> Optional[str]:
        with self.session_manager.connection() as conn:
            value = ConnectionQueryExecutor(conn).execute_scalar(sql, params)
        return None if value is None else str(value)

    def query_one(self, sql: str, *params: Any, shape: Shape = "native_map") -> Any:
        mapper = row_mapper(shape)
        with self.session_manager.connection() as conn:
            rows = ConnectionQueryExecutor(conn).execute(sql, params)
        return mapper.map_row(rows[0]) if rows else None

    def query_list(self, sql: str, *params: Any, shape: Shape = "native_map") -> list[Any]:
        mapper = row_mapper(shape)
        with self.session_manager.connection() as conn:
            rows = ConnectionQueryExecutor(conn).execute(sql, params)
        return [mapper.map_row(row) for row in rows]

    def query_page(
        self,
        sql: str,
        *params: Any,
        page: int = 1,
        size: Optional[int] = None,
        shape: Shape = "native_map",
    ) -> Page[Any]:
        query = PagedQuery(
            sql=sql,
            page=page,
            size=self.page_size if size is None else size,
            params=params,
            dialect=self.dialect,
            mapper=row_mapper(shape),
        )
        statement = PagedStatement(query)
        with self.session_manager.connection() as conn:
            return statement.execute(ConnectionQueryExecutor(conn))

    def execute(self, sql: str, *params: Any) -> int:
        with self.session_manager.begin() as conn:
            return ConnectionQueryExecutor(conn).execute_update(sql, params)

    def batch(self, sql: str, params_list: Optional[Sequence[Sequence[Any]]]) -> int:
        if params_list is None:
            raise ValueError("Null parameters. If parameters aren't needed, pass an empty list.")
        with self.session_manager.begin() as conn:
            return ConnectionQueryExecutor(conn).execute_batch(sql, params_list)
