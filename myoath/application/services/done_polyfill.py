"""
MyOath – done() polyfill
=========================
`done()` termina una cadena de promesas: si el rechazo no fue manejado,
se relanza en el event loop para que llegue al exception handler del
loop en lugar de perderse.

Las librerías que declaran Capability.DONE lo implementan ellas mismas;
al resto la fachada les envuelve la promesa con DonePolyfill.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Generator, Optional

from myoath.application.ports.promise_library import Capability, Promise, PromiseLibrary


def _raise(error: BaseException) -> None:
    raise error


def _rethrow_later(error: BaseException) -> None:
    asyncio.get_running_loop().call_soon(_raise, error)


def surface_unhandled(promise: Promise) -> None:
    """Relanza de forma asíncrona cualquier rechazo que llegue al final de la cadena."""
    promise.then(None, _rethrow_later)


class DonePolyfill(Promise):
    """Envuelve una Promise ajena agregando done()."""

    def __init__(self, promise: Promise):
        self._promise = promise

    @property
    def wrapped(self) -> Promise:
        return self._promise

    def then(
        self,
        on_fulfilled: Optional[Callable[[Any], Any]] = None,
        on_rejected: Optional[Callable[[BaseException], Any]] = None,
    ) -> "DonePolyfill":
        return DonePolyfill(self._promise.then(on_fulfilled, on_rejected))

    def __await__(self) -> Generator[Any, None, Any]:
        return self._promise.__await__()

    def done(
        self,
        on_fulfilled: Optional[Callable[[Any], Any]] = None,
        on_rejected: Optional[Callable[[BaseException], Any]] = None,
    ) -> None:
        surface_unhandled(self._promise.then(on_fulfilled, on_rejected))

    def __getattr__(self, name: str) -> Any:
        return getattr(self._promise, name)


def ensure_done(promise: Promise, library: PromiseLibrary) -> Promise:
    """La promesa tal cual si la librería trae done(); si no, envuelta."""
    if library.supports(Capability.DONE):
        return promise
    return DonePolyfill(promise)
