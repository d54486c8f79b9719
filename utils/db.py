from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from utils.config import settings

async_engine = create_async_engine(settings.database_url, echo=settings.SQL_ECHO, pool_pre_ping=True)
async_session_maker = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
