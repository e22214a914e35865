from typing import Any, Optional, Protocol, Sequence

MYSQL = "mysql"
ORACLE = "oracle"


class PageSqlDialect(Protocol):
    name: str

    def counting_sql(self, sql: str) -> str: ...

    def page_sql(self, sql: str, has_offset: bool) -> str: ...

    def attach_page_params(
        self,
        params: Optional[Sequence[Any]],
        has_offset: bool,
        start_index: int,
        page_size: int,
    ) -> tuple[Any, ...]: ...


class OffsetDialect:
    """``LIMIT`` based windows, appended to the query as-is."""

    name = MYSQL

    def counting_sql(self, sql: str) -> str:
        return f"SELECT COUNT(1) FROM ({sql}) AS _tc"

    def page_sql(self, sql: str, has_offset: bool) -> str:
        if has_offset:
            return f"{sql} LIMIT ?, ?"
        return f"{sql} LIMIT ?"

    def attach_page_params(
        self,
        params: Optional[Sequence[Any]],
        has_offset: bool,
        start_index: int,
        page_size: int,
    ) -> tuple[Any, ...]:
        base = tuple(params or ())
        if has_offset:
            return base + (start_index - 1, page_size)
        return base + (page_size,)

    def __repr__(self) -> str:
        return "OffsetDialect()"


class RownumDialect:
    """``ROWNUM`` windows built from nested subqueries.

    Later pages expose the inner ``ROWNUM`` as ``rownum_`` so the outer query
    can apply the lower bound; the upper bound placeholder comes first.
    """

    name = ORACLE

    def counting_sql(self, sql: str) -> str:
        return f"SELECT COUNT(1) FROM ({sql})"

    def page_sql(self, sql: str, has_offset: bool) -> str:
        if has_offset:
            return (
                "SELECT * FROM (SELECT row_.*, ROWNUM rownum_ FROM ("
                f"{sql}"
                ") row_ WHERE ROWNUM < ?) WHERE rownum_ >= ?"
            )
        return f"SELECT * FROM ({sql}) WHERE ROWNUM < ?"

    def attach_page_params(
        self,
        params: Optional[Sequence[Any]],
        has_offset: bool,
        start_index: int,
        page_size: int,
    ) -> tuple[Any, ...]:
        base = tuple(params or ())
        if has_offset:
            return base + (start_index + page_size, start_index)
        return base + (start_index + page_size,)

    def __repr__(self) -> str:
        return "RownumDialect()"


_OFFSET = OffsetDialect()
_ROWNUM = RownumDialect()


def select_dialect(identifier: Optional[str]) -> PageSqlDialect:
    if identifier == MYSQL:
        return _OFFSET
    return _ROWNUM
