import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Connection, Engine, create_engine
from pico_ioc import cleanup

log = logging.getLogger(__name__)


class SessionManager:
    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 5,
        pool_pre_ping: bool = True,
        pool_recycle: int = 3600,
    ):
        self._engine: Engine = create_engine(
            url,
            echo=echo,
            pool_size=pool_size,
            pool_pre_ping=pool_pre_ping,
            pool_recycle=pool_recycle,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def connection(self) -> Generator[Connection, None, None]:
        conn = self._engine.connect()
        log.debug(f"SessionManager.connection: Acquired connection {id(conn)}")
        try:
            yield conn
        finally:
            log.debug(f"SessionManager.connection: Releasing connection {id(conn)}")
            conn.close()

    @contextmanager
    def begin(self) -> Generator[Connection, None, None]:
        with self._engine.begin() as conn:
            log.debug(f"SessionManager.begin: Acquired connection {id(conn)}")
            yield conn
        log.debug(f"SessionManager.begin: Committed and released connection {id(conn)}")

    @cleanup
    def dispose(self) -> None:
        log.debug("SessionManager.dispose: Disposing engine pool")
        self._engine.dispose()
