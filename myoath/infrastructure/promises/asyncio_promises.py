"""
MyOath – Promise Libraries sobre asyncio.Future
================================================
Dos implementaciones de PromiseLibrary:

- FuturePromiseLibrary ("future"): Deferred = asyncio.Future pelado.
  Sin notify, sin done() nativo.
- AsyncioPromiseLibrary ("asyncio"): agrega progreso y done().

PROGRESO:
- Promise.progress(cb) registra un listener y retorna la misma promesa.
- Deferred.notify(value) llama a los listeners de forma síncrona, en
  orden de registro. Notificar después de resolver no hace nada.
- Las promesas encadenadas con then() comparten los listeners de la
  promesa origen.
- Un listener que lanza se reporta por logging; el resto sigue
  recibiendo la notificación.

Todas las operaciones deben ocurrir dentro de un event loop corriendo.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Dict, Generator, List, Optional

from myoath.application.ports.promise_library import (
    Capability,
    Deferred,
    Promise,
    PromiseLibrary,
)
from myoath.application.services.done_polyfill import surface_unhandled
from myoath.shared.logging.logger import get_logger

logger = get_logger("promises")


# ════════════════════════════════════════════════════════════════
#  FUTURE (sin capacidades)
# ════════════════════════════════════════════════════════════════


class FuturePromise(Promise):
    """Promise respaldada por un asyncio.Future."""

    def __init__(self, future: asyncio.Future):
        self._future = future

    def __await__(self) -> Generator[Any, None, Any]:
        return self._future.__await__()

    def _chained(self) -> "FutureDeferred":
        return FutureDeferred(self._future.get_loop())

    def then(
        self,
        on_fulfilled: Optional[Callable[[Any], Any]] = None,
        on_rejected: Optional[Callable[[BaseException], Any]] = None,
    ) -> Promise:
        child = self._chained()

        def _settle(future: asyncio.Future) -> None:
            if future.cancelled():
                error: Optional[BaseException] = asyncio.CancelledError()
            else:
                error = future.exception()
            try:
                if error is None:
                    value = future.result()
                    outcome = on_fulfilled(value) if on_fulfilled else value
                elif on_rejected is not None:
                    outcome = on_rejected(error)
                else:
                    child.reject(error)
                    return
            except Exception as exc:
                child.reject(exc)
                return
            child.resolve(outcome)

        self._future.add_done_callback(_settle)
        return child.promise

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self._future!r}>"


class FutureDeferred(Deferred):
    """Deferred mínimo: resolve / reject."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()
        self._future = self._loop.create_future()
        # resolve(awaitable) ya fijó el destino; sólo _adopt liquida
        self._adopting = False
        self._promise = self._make_promise()

    def _make_promise(self) -> Promise:
        return FuturePromise(self._future)

    @property
    def promise(self) -> Promise:
        return self._promise

    def _settled(self) -> bool:
        return self._adopting or self._future.done()

    def resolve(self, value: Any = None) -> None:
        if self._settled():
            return
        if inspect.isawaitable(value):
            # Adoptar el resultado de otra promesa / coroutine
            self._adopting = True
            asyncio.ensure_future(value, loop=self._loop).add_done_callback(self._adopt)
            return
        self._future.set_result(value)

    def reject(self, error: BaseException) -> None:
        if not self._settled():
            self._future.set_exception(error)

    def _adopt(self, future: asyncio.Future) -> None:
        if self._future.done():
            return
        if future.cancelled():
            self._future.set_exception(asyncio.CancelledError())
        elif future.exception() is not None:
            self._future.set_exception(future.exception())
        else:
            self._future.set_result(future.result())


class FuturePromiseLibrary(PromiseLibrary):
    name = "future"
    capabilities = frozenset()

    def defer(self) -> Deferred:
        return FutureDeferred()


# ════════════════════════════════════════════════════════════════
#  ASYNCIO (progreso + done)
# ════════════════════════════════════════════════════════════════


class ProgressPromise(FuturePromise):
    """FuturePromise con progress() y done()."""

    def __init__(self, future: asyncio.Future, listeners: List[Callable[[Any], Any]]):
        super().__init__(future)
        self._listeners = listeners

    def _chained(self) -> "ProgressDeferred":
        return ProgressDeferred(self._future.get_loop(), listeners=self._listeners)

    def progress(self, on_progress: Callable[[Any], Any]) -> "ProgressPromise":
        self._listeners.append(on_progress)
        return self

    def done(
        self,
        on_fulfilled: Optional[Callable[[Any], Any]] = None,
        on_rejected: Optional[Callable[[BaseException], Any]] = None,
    ) -> None:
        surface_unhandled(self.then(on_fulfilled, on_rejected))


class ProgressDeferred(FutureDeferred):
    """Deferred con notify()."""

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        listeners: Optional[List[Callable[[Any], Any]]] = None,
    ):
        self._listeners: List[Callable[[Any], Any]] = listeners if listeners is not None else []
        super().__init__(loop)

    def _make_promise(self) -> Promise:
        return ProgressPromise(self._future, self._listeners)

    def notify(self, value: Any) -> None:
        if self._settled():
            return
        for listener in tuple(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("Error en listener de progreso %r", listener)


class AsyncioPromiseLibrary(PromiseLibrary):
    name = "asyncio"
    capabilities = frozenset({Capability.PROGRESS, Capability.DONE})

    def defer(self) -> Deferred:
        return ProgressDeferred()


# ─── Registro por nombre (para Settings.promise_library) ──────────────────
PROMISE_LIBRARIES: Dict[str, type] = {
    AsyncioPromiseLibrary.name: AsyncioPromiseLibrary,
    FuturePromiseLibrary.name: FuturePromiseLibrary,
}


def get_promise_library(name: str) -> PromiseLibrary:
    """Instancia la librería registrada con ese nombre."""
    try:
        return PROMISE_LIBRARIES[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Librería de promesas desconocida: {name!r} "
            f"(disponibles: {', '.join(sorted(PROMISE_LIBRARIES))})"
        ) from None
