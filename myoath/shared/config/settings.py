"""
MyOath – Settings (Pydantic BaseSettings)
==========================================
Configuración centralizada cargada desde variables de entorno / .env.
Se usa pydantic-settings para validación estricta al arranque.

Todas las variables llevan el prefijo MYOATH_ (ej. MYOATH_DB_HOST).
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ─── MySQL Database ─────────────────────────────────────────────────
    db_host: str = Field(default="localhost", description="MySQL host")
    db_port: int = Field(default=3306, description="MySQL port")
    db_user: str = Field(default="root", description="MySQL username")
    db_password: str = Field(default="", description="MySQL password")
    db_name: str = Field(default="myoath", description="MySQL database name")
    db_charset: str = Field(default="utf8mb4", description="Charset de la conexión")
    db_autocommit: bool = Field(
        default=True, description="Autocommit por sentencia (como el pool de node-mysql)"
    )
    db_connect_timeout: float = Field(
        default=10.0, description="Timeout (seg) al abrir una conexión"
    )

    # ─── Pool ───────────────────────────────────────────────────────────
    db_pool_minsize: int = Field(default=1, description="Conexiones mínimas en el pool")
    db_pool_maxsize: int = Field(default=10, description="Conexiones máximas en el pool")
    db_pool_recycle: int = Field(
        default=3600, description="Recicla conexiones cada N seg (-1 = nunca)"
    )

    # ─── Promesas ───────────────────────────────────────────────────────
    promise_library: str = Field(
        default="asyncio",
        description="Librería de promesas: 'asyncio' (con progreso) o 'future'",
    )

    # ─── Logging ────────────────────────────────────────────────────────
    log_prefix: str = Field(
        default="MyOath: ", description="Prefijo de cada línea enviada a los loggers"
    )
    log_level: str = Field(default="INFO", description="Nivel del root logger")

    model_config = {
        "env_prefix": "MYOATH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def pool_kwargs(self) -> Dict[str, Any]:
        """Argumentos para aiomysql.create_pool()."""
        return {
            "host": self.db_host,
            "port": self.db_port,
            "user": self.db_user,
            "password": self.db_password,
            "db": self.db_name,
            "charset": self.db_charset,
            "autocommit": self.db_autocommit,
            "connect_timeout": self.db_connect_timeout,
            "minsize": self.db_pool_minsize,
            "maxsize": self.db_pool_maxsize,
            "pool_recycle": self.db_pool_recycle,
        }

