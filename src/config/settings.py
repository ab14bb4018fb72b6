"""
Configuration settings for the Users CRUD Service
"""

import os
import ssl
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Local (docker compose) connection defaults
DEFAULT_DB_HOST = "postgres-db"
DEFAULT_DB_PORT = 5432
DEFAULT_DB_NAME = "crud_db"
DEFAULT_DB_USER = "postgres"
DEFAULT_DB_PASSWORD = "postgres"

# Pool sizing is delegated to asyncpg; min_size=0 keeps pool creation offline
POOL_MIN_SIZE = 0
POOL_MAX_SIZE = 10
COMMAND_TIMEOUT = 60


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    """Read an environment value, treating empty strings as unset"""
    value = environ.get(name)
    return value if value else None


def build_insecure_ssl_context() -> ssl.SSLContext:
    """TLS without certificate verification (managed Postgres providers)"""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


@dataclass
class DatabaseConfig:
    """Connection parameters for either production (URL) or local mode"""
    mode: str
    dsn: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    use_ssl: bool = False

    def pool_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for asyncpg.create_pool"""
        kwargs: Dict[str, Any] = {
            "min_size": POOL_MIN_SIZE,
            "max_size": POOL_MAX_SIZE,
            "command_timeout": COMMAND_TIMEOUT,
            "statement_cache_size": 0,  # Fix for pgbouncer compatibility
            "ssl": build_insecure_ssl_context() if self.use_ssl else False,
        }
        if self.mode == "url":
            kwargs["dsn"] = self.dsn
        else:
            kwargs.update(
                host=self.host,
                port=self.port,
                database=self.database,
                user=self.user,
                password=self.password,
            )
        return kwargs

    def describe(self) -> str:
        """Loggable summary without credentials"""
        if self.mode == "url":
            return f"DATABASE_URL (ssl={'on' if self.use_ssl else 'off'})"
        return f"local variables ({self.user}@{self.host}:{self.port}/{self.database})"


def get_database_config(environ: Optional[Mapping[str, str]] = None) -> DatabaseConfig:
    """
    Resolve the database configuration from the environment.

    DATABASE_URL takes precedence and enables TLS unless PGSSL is exactly
    "false". Otherwise the discrete DB_* variables are used without TLS.
    """
    if environ is None:
        environ = os.environ

    database_url = _env(environ, "DATABASE_URL")
    if database_url:
        return DatabaseConfig(
            mode="url",
            dsn=database_url,
            use_ssl=environ.get("PGSSL") != "false",
        )

    return DatabaseConfig(
        mode="local",
        host=_env(environ, "DB_HOST") or DEFAULT_DB_HOST,
        port=int(_env(environ, "DB_PORT") or DEFAULT_DB_PORT),
        database=_env(environ, "DB_NAME") or DEFAULT_DB_NAME,
        user=_env(environ, "DB_USER") or DEFAULT_DB_USER,
        password=_env(environ, "DB_PASSWORD") or DEFAULT_DB_PASSWORD,
        use_ssl=False,
    )


# Environment configuration
PORT = int(os.getenv("PORT") or 3000)

# CORS settings
ALLOWED_ORIGINS = ["*"]
