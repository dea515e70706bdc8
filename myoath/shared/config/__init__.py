"""Configuración."""
from myoath.shared.config.settings import Settings

__all__ = ["Settings"]
