import logging
from typing import Any, Optional, Protocol, Sequence

from sqlalchemy import Connection, CursorResult, Row, text
from sqlalchemy.sql.elements import TextClause

sql_log = logging.getLogger("pico_sqlpage.sql")


class QueryExecutor(Protocol):
    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> list[Any]: ...

    def execute_scalar(self, sql: str, params: Optional[Sequence[Any]] = None) -> Any: ...


def describe(sql: str, params: Optional[Sequence[Any]] = None) -> str:
    if not params:
        return sql
    rendered = ", ".join("<null>" if p is None else str(p) for p in params)
    return f"{sql} [params: {rendered}]"


def positional_text(sql: str, params: Optional[Sequence[Any]] = None) -> tuple[TextClause, dict[str, Any]]:
    """Rewrite ``?`` placeholders into named binds for :func:`sqlalchemy.text`.

    Placeholders inside quoted literals are kept (a backslash escapes the
    next character of a literal), and every literal colon is escaped so that
    ``text()`` does not read it as a bind.
    """
    values = tuple(params or ())
    out: list[str] = []
    quote: Optional[str] = None
    count = 0
    escaped = False
    for ch in sql:
        if ch == ":":
            out.append("\\:")
            escaped = False
            continue
        if quote is not None:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "?":
            out.append(f":_p{count}")
            count += 1
            continue
        out.append(ch)
    if count != len(values):
        raise ValueError(
            f"SQL has {count} placeholders but {len(values)} parameters were given"
        )
    return text("".join(out)), {f"_p{i}": v for i, v in enumerate(values)}


class ConnectionQueryExecutor:
    """Runs positional-parameter SQL on one borrowed SQLAlchemy connection."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> list[Row[Any]]:
        return list(self._run(sql, params).all())

    def execute_scalar(self, sql: str, params: Optional[Sequence[Any]] = None) -> Any:
        return self._run(sql, params).scalar()

    def execute_update(self, sql: str, params: Optional[Sequence[Any]] = None) -> int:
        return self._run(sql, params).rowcount

    def execute_batch(self, sql: str, params_list: Sequence[Sequence[Any]]) -> int:
        sql_log.debug(describe(sql, [f"batch sql, count:{len(params_list)}"]))
        if not params_list:
            return 0
        stmt, _ = positional_text(sql, params_list[0])
        binds = [positional_text(sql, params)[1] for params in params_list]
        result = self.connection.execute(stmt, binds)
        return result.rowcount

    def _run(self, sql: str, params: Optional[Sequence[Any]]) -> CursorResult[Any]:
        sql_log.debug(describe(sql, params))
        stmt, binds = positional_text(sql, params)
        return self.connection.execute(stmt, binds)
