"""
Gerenciamento de conexões de infraestrutura
Fornece o engine e as sessões do banco relacional
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.tables import metadata
from config.settings import settings

logger = structlog.get_logger()


# ═══════════════════════════════════════════════════════════════════════════
# Banco relacional (async SQLAlchemy)
# ═══════════════════════════════════════════════════════════════════════════

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_db_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        dsn = settings.db_dsn
        kwargs = {"echo": settings.db_echo}
        if dsn.startswith("postgresql"):
            kwargs.update(pool_size=10, max_overflow=20)
        _engine = create_async_engine(dsn, **kwargs)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_db_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_factory


@asynccontextmanager
async def get_db_session():
    """Context manager de sessão: commit ao final, rollback em caso de erro"""
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_schema():
    """Cria as tabelas que ainda não existem"""
    async with get_db_engine().begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Database schema ready", tables=sorted(metadata.tables))


# ═══════════════════════════════════════════════════════════════════════════
# Lifecycle
# ═══════════════════════════════════════════════════════════════════════════

async def close_all():
    """Fecha todas as conexões (chamado no encerramento da aplicação)"""
    global _engine, _session_factory

    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None

    logger.info("All infrastructure connections closed")
