from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from catalog_sync.core.config import get_settings

settings = get_settings()

# Engine and session factory are only used by the "sql" record store backend
engine = create_async_engine(settings.DATABASE_URL, echo=False, future=True, pool_pre_ping=True)

AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

# Declarative base shared by every ORM model and by alembic autogenerate
Base = declarative_base()
