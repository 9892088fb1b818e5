from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from .config import Settings

Base = declarative_base()

def build_engine(settings: Settings) -> AsyncEngine:
    url = settings.ASYNC_DATABASE_URL
    if url.startswith("sqlite"):
        # aiosqlite connections are tied to the loop that opened them
        return create_async_engine(url, echo=settings.DATABASE_ECHO, poolclass=NullPool)

    connect_args = {"server_settings": {"application_name": "todo"}}
    if settings.DATABASE_SSL:
        connect_args["ssl"] = "require"
    return create_async_engine(url, echo=settings.DATABASE_ECHO, connect_args=connect_args)

def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

async def init_models(engine: AsyncEngine) -> None:
    # registers the tables on Base.metadata
    from todo import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def get_db(request: Request):
    async with request.app.state.sessionmaker() as session:
        yield session
