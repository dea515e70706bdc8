"""
MyOath – Application Port: Promise Library
===========================================
Interfaz mínima de promesas que la fachada necesita.

La fachada no asume una implementación concreta: recibe una
PromiseLibrary y le pide Deferreds. Qué sabe hacer cada librería se
declara en `capabilities` y se consulta en tiempo de llamada:

    PROGRESS → Deferred.notify() / Promise.progress(cb)
    DONE     → Promise.done(cb, eb) nativo

IMPLEMENTACIONES:
- AsyncioPromiseLibrary (PROGRESS + DONE)
- FuturePromiseLibrary (sin capacidades)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, FrozenSet, Generator, Optional

from myoath.domain.exceptions.query_errors import UnsupportedCapabilityError


class Capability(str, Enum):
    PROGRESS = "progress"
    DONE = "done"


class Promise(ABC):
    """Resultado pendiente. Se puede encadenar con then() o esperar con await."""

    @abstractmethod
    def then(
        self,
        on_fulfilled: Optional[Callable[[Any], Any]] = None,
        on_rejected: Optional[Callable[[BaseException], Any]] = None,
    ) -> "Promise":
        """
        Registra callbacks y retorna una promesa nueva.

        La promesa nueva se resuelve con lo que retorne el callback
        (si retorna un awaitable, con su resultado) o se rechaza con
        lo que lance.
        """

    @abstractmethod
    def __await__(self) -> Generator[Any, None, Any]:
        pass

    def catch(self, on_rejected: Callable[[BaseException], Any]) -> "Promise":
        return self.then(None, on_rejected)


class Deferred(ABC):
    """Lado productor de una Promise."""

    @property
    @abstractmethod
    def promise(self) -> Promise:
        pass

    @abstractmethod
    def resolve(self, value: Any = None) -> None:
        pass

    @abstractmethod
    def reject(self, error: BaseException) -> None:
        pass

    def notify(self, value: Any) -> None:
        """Notificación incremental. Sólo librerías con PROGRESS."""
        raise UnsupportedCapabilityError(self.__class__.__name__, Capability.PROGRESS.value)


class PromiseLibrary(ABC):
    """Fábrica de Deferreds con capacidades declaradas."""

    name: str = "abstract"
    capabilities: FrozenSet[Capability] = frozenset()

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @abstractmethod
    def defer(self) -> Deferred:
        """Crea un Deferred pendiente en el event loop actual."""
