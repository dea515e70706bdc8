"""
MyOath – Application Layer
===========================
Fachada de consultas y sus puertos.

Este módulo contiene:
- ports/: Interfaces hacia infraestructura (pool, librería de promesas)
- services/: QueryFacade, LoggerRegistry, polyfill de done()

REGLA DE DEPENDENCIA:
Esta capa puede importar de:
- domain/ (entidades, builders, excepciones)
- shared/ (logging)

NO puede importar de:
- infrastructure/ (implementaciones concretas)
"""

from myoath.application.services.query_facade import QueryFacade

__all__ = ["QueryFacade"]
