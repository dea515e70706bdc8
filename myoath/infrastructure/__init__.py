"""
MyOath – Infrastructure Layer
==============================
Implementaciones concretas de interfaces.

Este módulo contiene:
- persistence/: Pool MySQL (aiomysql)
- promises/: Librerías de promesas sobre asyncio.Future

REGLA DE DEPENDENCIA:
Esta capa implementa interfaces definidas en application/ports/.

Puede importar de:
- domain/ (entidades)
- application/ (ports, services)
- shared/ (config, logging)
"""
