import logging
from typing import Iterable

from pico_ioc import factory, provides

from .config import DatabaseConfigurer, DatabaseSettings
from .session import SessionManager

log = logging.getLogger(__name__)


@factory
class SqlAlchemyFactory:
    @provides(SessionManager)
    def session_manager(
        self,
        settings: DatabaseSettings,
        configurers: list[DatabaseConfigurer],
    ) -> SessionManager:
        return self.create_session_manager(settings, configurers)

    def create_session_manager(
        self,
        settings: DatabaseSettings,
        configurers: Iterable[DatabaseConfigurer] = (),
    ) -> SessionManager:
        manager = SessionManager(**settings.engine_options())
        for configurer in sorted(configurers, key=lambda c: getattr(c, "priority", 0)):
            log.debug(
                f"SqlAlchemyFactory: Running {type(configurer).__name__} "
                f"(priority={getattr(configurer, 'priority', 0)})"
            )
            configurer.configure(manager.engine)
        return manager
