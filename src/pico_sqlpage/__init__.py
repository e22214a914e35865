from .config import DatabaseSettings, DatabaseConfigurer
from .decorators import repository, query
from .dialects import OffsetDialect, PageSqlDialect, RownumDialect, select_dialect
from .executor import ConnectionQueryExecutor, QueryExecutor
from .factory import SqlAlchemyFactory
from .mapping import (
    ArrayRowMapper,
    BeanRowMapper,
    MapRowMapper,
    NativeArrayRowMapper,
    NativeMapRowMapper,
    RowMapper,
    row_mapper,
)
from .paging import DEFAULT_PAGE_SIZE, Page, PageRequest
from .repository_interceptor import RepositoryQueryInterceptor
from .session import SessionManager
from .statement import PagedQuery, PagedStatement, StatementState
from .template import QueryTemplate

__all__ = [
    "DatabaseSettings",
    "DatabaseConfigurer",
    "repository",
    "query",
    "OffsetDialect",
    "PageSqlDialect",
    "RownumDialect",
    "select_dialect",
    "ConnectionQueryExecutor",
    "QueryExecutor",
    "SqlAlchemyFactory",
    "ArrayRowMapper",
    "BeanRowMapper",
    "MapRowMapper",
    "NativeArrayRowMapper",
    "NativeMapRowMapper",
    "RowMapper",
    "row_mapper",
    "DEFAULT_PAGE_SIZE",
    "Page",
    "PageRequest",
    "RepositoryQueryInterceptor",
    "SessionManager",
    "PagedQuery",
    "PagedStatement",
    "StatementState",
    "QueryTemplate",
]
