from typing import Any, Callable, Optional, ParamSpec, TypeVar
from pico_ioc import component, intercepted_by

P = ParamSpec("P")
R = TypeVar("R")

REPOSITORY_META = "_pico_sqlpage_repository_meta"
QUERY_META = "_pico_sqlpage_query_meta"


def query(
    sql: str | None = None,
    *,
    paged: bool = False,
    unique: bool = False,
    shape: Any = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    if not sql:
        raise ValueError("query decorator requires 'sql'")
    if paged and unique:
        raise ValueError("query decorator cannot be both 'paged' and 'unique'")

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        meta: dict[str, Any] = {
            "mode": "sql",
            "sql": sql,
            "paged": paged,
            "unique": unique,
            "shape": shape,
        }
        setattr(func, QUERY_META, meta)
        from .repository_interceptor import RepositoryQueryInterceptor
        return intercepted_by(RepositoryQueryInterceptor)(func)

    return decorator


def repository(
    cls: Optional[type[Any]] = None,
    *,
    scope: str = "singleton",
    **kwargs: Any,
) -> Callable[[type[Any]], type[Any]] | type[Any]:
    def decorate(c: type[Any]) -> type[Any]:
        setattr(c, REPOSITORY_META, kwargs)
        return component(c, scope=scope)

    if cls is not None:
        return decorate(cls)

    return decorate
