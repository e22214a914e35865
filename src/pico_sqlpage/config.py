from dataclasses import dataclass
from typing import Any, Optional

from pico_ioc import configured
from sqlalchemy import Engine

from .paging import DEFAULT_PAGE_SIZE, check_page_size


@configured(prefix="database", mapping="tree")
@dataclass(frozen=True)
class DatabaseSettings:
    url: str
    echo: bool = False
    pool_size: int = 5
    pool_pre_ping: bool = True
    pool_recycle: int = 3600
    dialect: Optional[str] = None
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        check_page_size(self.page_size)

    def engine_options(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "echo": self.echo,
            "pool_size": self.pool_size,
            "pool_pre_ping": self.pool_pre_ping,
            "pool_recycle": self.pool_recycle,
        }


class DatabaseConfigurer:
    """Hook run against a freshly created engine, lowest ``priority`` first."""

    priority: int = 0

    def configure(self, engine: Engine) -> None:
        raise NotImplementedError
