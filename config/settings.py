"""
Clausonus - Configuração
Todas as configurações são injetadas por variáveis de ambiente ou arquivo .env
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Configuração da aplicação, com suporte a .env e variáveis de ambiente"""

    # ── Aplicação ──
    app_name: str = "Clausonus"
    app_env: str = Field(default="development", description="development / test / production")
    debug: bool = True
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    api_prefix: str = "/api"

    # ── PostgreSQL ──
    pg_host: str = "localhost"
    pg_port: int = 5432
    pg_database: str = "clausonus"
    pg_user: str = "clausonus"
    pg_password: str = "clausonus_dev"

    # DSN completo; quando definido tem precedência sobre pg_* (ex.: sqlite+aiosqlite nos testes)
    database_url: str = ""
    db_echo: bool = False

    @property
    def pg_dsn(self) -> str:
        return f"postgresql+asyncpg://{self.pg_user}:{self.pg_password}@{self.pg_host}:{self.pg_port}/{self.pg_database}"

    @property
    def db_dsn(self) -> str:
        return self.database_url or self.pg_dsn

    # ── Dados iniciais ──
    seed_dev_data: bool = True              # lojas de exemplo em development

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton global
settings = Settings()
