import inspect
import logging
from typing import Any, Callable, Mapping

from pico_ioc import MethodCtx, MethodInterceptor, component

from .decorators import QUERY_META, REPOSITORY_META
from .paging import PageRequest
from .template import QueryTemplate

log = logging.getLogger(__name__)


@component
class RepositoryQueryInterceptor(MethodInterceptor):
    def __init__(self, template: QueryTemplate):
        self.template = template

    def invoke(self, ctx: MethodCtx, call_next: Callable[[MethodCtx], Any]) -> Any:
        func = getattr(ctx.cls, ctx.name, None)
        meta = getattr(func, QUERY_META, None)
        if meta is None:
            return call_next(ctx)
        params = self._bind_params(func, ctx.args, ctx.kwargs)
        repo_meta = getattr(ctx.cls, REPOSITORY_META, {}) or {}
        shape = meta.get("shape") or repo_meta.get("row_type") or "native_map"
        mode = meta.get("mode")
        if mode == "sql":
            return self._execute_sql(meta, params, shape)
        raise RuntimeError(f"Unsupported query mode: {mode!r}")

    def _bind_params(
        self,
        func: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: Mapping[str, Any],
    ) -> dict[str, Any]:
        sig = inspect.signature(func)
        bound = sig.bind_partial(None, *args, **kwargs)
        bound.apply_defaults()
        arguments = dict(bound.arguments)
        arguments.pop("self", None)
        return arguments

    def _execute_sql(
        self,
        meta: dict[str, Any],
        params: dict[str, Any],
        shape: Any,
    ) -> Any:
        sql = meta["sql"]
        if meta.get("paged", False):
            page_req = params.pop("page", None)
            if not isinstance(page_req, PageRequest):
                raise TypeError("Paged SQL query requires a 'page: PageRequest' parameter")
            log.debug(
                f"RepositoryQueryInterceptor: paged query page={page_req.page} size={page_req.size}"
            )
            return self.template.query_page(
                sql,
                *params.values(),
                page=page_req.page,
                size=page_req.size,
                shape=shape,
            )
        if meta.get("unique", False):
            return self.template.query_one(sql, *params.values(), shape=shape)
        return self.template.query_list(sql, *params.values(), shape=shape)
