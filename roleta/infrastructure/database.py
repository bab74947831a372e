"""Gerencia conexão com PostgreSQL."""
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from roleta.config import get_settings

settings = get_settings()

database_url = settings.async_database_url

# Pool só faz sentido no Postgres (SQLite é usado em dev/testes)
engine_options = {"echo": settings.debug, "pool_pre_ping": True}
if database_url.startswith("postgresql"):
    engine_options.update(pool_size=10, max_overflow=20)

engine = create_async_engine(database_url, **engine_options)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency do FastAPI para injetar sessão do banco."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """Cria tabelas do banco (usar só em dev)."""
    from roleta.domain.entities import Base
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
