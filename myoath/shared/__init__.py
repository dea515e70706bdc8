"""
MyOath – Shared Module
=======================
Utilidades transversales usadas por todas las capas.

Este módulo contiene:
- config/: Settings y configuración
- logging/: Setup de logging

NOTA: Este módulo no contiene lógica de consultas.
"""

from myoath.shared.config.settings import Settings
from myoath.shared.logging.logger import setup_logging, get_logger

__all__ = [
    "Settings",
    "setup_logging",
    "get_logger",
]
