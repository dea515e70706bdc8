"""
Dependency Injection Container.

Arma una QueryFacade a partir de Settings: pool aiomysql + librería de
promesas elegida por nombre. Es el único lugar donde se crean las
implementaciones concretas.
"""

from dataclasses import dataclass, field
from typing import Optional, Any

from myoath.application.ports.connection_pool import IConnectionPool
from myoath.application.ports.promise_library import PromiseLibrary
from myoath.application.services.query_facade import QueryFacade
from myoath.shared.config.settings import Settings
from myoath.shared.logging.logger import setup_logging


@dataclass
class Container:
    """
    Contenedor de Inyección de Dependencias.

    Las dependencias se crean de forma lazy y se pueden reemplazar con
    override() (útil para tests con un pool falso).
    """

    settings: Settings = field(default_factory=Settings)

    _connection_pool: Optional[IConnectionPool] = None
    _promise_library: Optional[PromiseLibrary] = None
    _query_facade: Optional[QueryFacade] = None

    # ==================== Ports ====================

    @property
    def connection_pool(self) -> IConnectionPool:
        """Obtiene el pool de conexiones (singleton)."""
        if self._connection_pool is None:
            from myoath.infrastructure.persistence.aiomysql_pool import AiomysqlConnectionPool
            self._connection_pool = AiomysqlConnectionPool(self.settings)
        return self._connection_pool

    @property
    def promise_library(self) -> PromiseLibrary:
        """Obtiene la librería de promesas configurada."""
        if self._promise_library is None:
            from myoath.infrastructure.promises.asyncio_promises import get_promise_library
            self._promise_library = get_promise_library(self.settings.promise_library)
        return self._promise_library

    # ==================== Facade ====================

    @property
    def query_facade(self) -> QueryFacade:
        """Obtiene la fachada de consultas (singleton)."""
        if self._query_facade is None:
            self._query_facade = QueryFacade(
                pool=self.connection_pool,
                promises=self.promise_library,
                log_prefix=self.settings.log_prefix,
            )
        return self._query_facade

    # ==================== Lifecycle ====================

    def configure_logging(self) -> None:
        """Configura el root logger con settings.log_level (para scripts y apps)."""
        setup_logging(self.settings.log_level)

    def reset(self) -> None:
        """Olvida todas las instancias (no cierra el pool)."""
        self._connection_pool = None
        self._promise_library = None
        self._query_facade = None

    def override(self, name: str, instance: Any) -> None:
        """
        Override una dependencia.

        Args:
            name: Nombre de la dependencia (ej: 'connection_pool')
            instance: Instancia a usar
        """
        attr_name = f"_{name}"
        if hasattr(self, attr_name):
            setattr(self, attr_name, instance)
        else:
            raise ValueError(f"Unknown dependency: {name}")


# ==================== Global Container ====================

_container: Optional[Container] = None


def get_container() -> Container:
    """Obtiene la instancia global del contenedor."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Resetea el contenedor global."""
    global _container
    if _container is not None:
        _container.reset()
    _container = None


def init_container(settings: Optional[Settings] = None) -> Container:
    """
    Inicializa el contenedor con configuración específica.

    Args:
        settings: Configuración opcional. Si es None, usa valores por defecto.
    """
    global _container
    if settings is None:
        settings = Settings()
    _container = Container(settings=settings)
    return _container


def create_query_facade(settings: Optional[Settings] = None, **overrides: Any) -> QueryFacade:
    """
    Atajo: una QueryFacade nueva e independiente del contenedor global.

    `overrides` acepta connection_pool / promise_library.
    """
    container = Container(settings=settings or Settings())
    for name, instance in overrides.items():
        container.override(name, instance)
    return container.query_facade
