import dataclasses
import inspect
from typing import Any, Generic, Mapping, Protocol, TypeVar, Union

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class RowMapper(Protocol[T_co]):
    def map_row(self, row: Any) -> T_co: ...


def _to_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _row_mapping(row: Any) -> Mapping[str, Any]:
    mapping = getattr(row, "_mapping", None)
    if mapping is not None:
        return mapping
    return row


class CaseInsensitiveDict(dict):
    """A ``dict`` whose lookups ignore the case of string keys.

    The original key spelling is kept for iteration.
    """

    def __init__(self, data: Mapping[str, Any] | None = None):
        super().__init__()
        self._keys: dict[str, str] = {}
        for key, value in (data or {}).items():
            self[key] = value

    def __setitem__(self, key: str, value: Any) -> None:
        old = self._keys.pop(key.lower(), None)
        if old is not None:
            super().__delitem__(old)
        self._keys[key.lower()] = key
        super().__setitem__(key, value)

    def __getitem__(self, key: str) -> Any:
        return super().__getitem__(self._keys.get(key.lower(), key))

    def __delitem__(self, key: str) -> None:
        super().__delitem__(self._keys.pop(key.lower(), key))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._keys

    def get(self, key: str, default: Any = None) -> Any:
        return self[key] if key in self else default


class ArrayRowMapper:
    def map_row(self, row: Any) -> list[str]:
        return [_to_text(v) for v in row]


class NativeArrayRowMapper:
    def map_row(self, row: Any) -> tuple[Any, ...]:
        return tuple(row)


class MapRowMapper:
    def map_row(self, row: Any) -> CaseInsensitiveDict:
        return CaseInsensitiveDict({k: _to_text(v) for k, v in _row_mapping(row).items()})


class NativeMapRowMapper:
    def map_row(self, row: Any) -> dict[str, Any]:
        return dict(_row_mapping(row))


def camel_case(column: str) -> str:
    """``USER_NAME`` -> ``userName``."""
    words = [w for w in column.lower().split("_") if w]
    if not words:
        return ""
    return words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])


def _field_names(cls: type) -> list[str]:
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls) if f.init]
    params = inspect.signature(cls).parameters.values()
    return [
        p.name
        for p in params
        if p.kind in (p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)
    ]


class BeanRowMapper(Generic[T]):
    """Builds ``cls(**fields)`` from a row.

    A column binds to a field when its camel-cased name matches ignoring
    case, otherwise when the column name itself does. Columns with no
    matching field are dropped.
    """

    def __init__(self, cls: type[T]):
        self.cls = cls
        self._fields = {name.lower(): name for name in _field_names(cls)}

    def field_for(self, column: str) -> str | None:
        if not column:
            return None
        return self._fields.get(camel_case(column).lower()) or self._fields.get(column.lower())

    def map_row(self, row: Any) -> T:
        kwargs: dict[str, Any] = {}
        for column, value in _row_mapping(row).items():
            name = self.field_for(column)
            if name is not None and name not in kwargs:
                kwargs[name] = value
        return self.cls(**kwargs)


SHAPES = {
    "array": ArrayRowMapper,
    "native_array": NativeArrayRowMapper,
    "map": MapRowMapper,
    "native_map": NativeMapRowMapper,
}

Shape = Union[str, type, RowMapper[Any]]


def row_mapper(shape: Shape) -> RowMapper[Any]:
    if isinstance(shape, str):
        factory = SHAPES.get(shape)
        if factory is None:
            raise ValueError(f"Unknown row shape: {shape!r}")
        return factory()
    if isinstance(shape, type):
        return BeanRowMapper(shape)
    if hasattr(shape, "map_row"):
        return shape
    raise ValueError(f"Unsupported row shape: {shape!r}")
