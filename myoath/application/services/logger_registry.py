"""
MyOath – Logger Registry
=========================
Loggers-callback registrados por el usuario en una QueryFacade.

- add() retorna un LoggerHandle; remove(handle) es O(1).
- remove(callback) quita todas las registraciones de ese callback
  (comparación con ==, que para métodos ligados compara objeto y función).
- emit() itera un snapshot inmutable (tupla). Registrar o quitar
  durante una emisión no afecta a la emisión en curso.
- Un callback que lanza se reporta por logging y no corta la entrega
  al resto.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple, Union

from myoath.shared.logging.logger import get_logger

logger = get_logger("loggers")

LogCallback = Callable[[str], None]


class LoggerHandle:
    """Token devuelto por LoggerRegistry.add()."""

    __slots__ = ("callback",)

    def __init__(self, callback: LogCallback):
        self.callback = callback

    def __repr__(self) -> str:
        return f"<LoggerHandle {self.callback!r}>"


class LoggerRegistry:
    def __init__(self, prefix: str = ""):
        self._prefix = prefix
        # dict preserva orden de registro; handle → callback
        self._entries: Dict[LoggerHandle, LogCallback] = {}
        self._snapshot: Optional[Tuple[LogCallback, ...]] = ()

    def add(self, callback: LogCallback) -> LoggerHandle:
        handle = LoggerHandle(callback)
        self._entries[handle] = callback
        self._snapshot = None
        return handle

    def remove(self, target: Union[LoggerHandle, LogCallback]) -> bool:
        """Retorna True si se quitó algo."""
        if isinstance(target, LoggerHandle):
            removed = self._entries.pop(target, None) is not None
        else:
            handles = [h for h, cb in self._entries.items() if cb == target]
            for handle in handles:
                del self._entries[handle]
            removed = bool(handles)
        if removed:
            self._snapshot = None
        return removed

    def _callbacks(self) -> Tuple[LogCallback, ...]:
        snapshot = self._snapshot
        if snapshot is None:
            snapshot = self._snapshot = tuple(self._entries.values())
        return snapshot

    def emit(self, message: str) -> None:
        line = self._prefix + message
        for callback in self._callbacks():
            try:
                callback(line)
            except Exception:
                logger.exception("Error en logger-callback %r", callback)

    def __len__(self) -> int:
        return len(self._entries)
