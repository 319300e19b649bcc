from typing import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool
from inventory.core.core_config import settings
import logging

# 禁用 SQLAlchemy 引擎的 INFO 级别日志（只保留 WARNING 和 ERROR）
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

# 创建异步数据库引擎（SQLite 每次取用新连接，避免跨事件循环共用）
engine = create_async_engine(
    settings.database_url_async,
    echo=settings.API_DEBUG,
    poolclass=NullPool,
    connect_args={"timeout": 10},
)


# SQLite 預設不啟用外鍵約束
@event.listens_for(engine.sync_engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# 创建异步会话工厂
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)


# 依赖注入：获取数据库会话
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# 初始化数据库表
async def init_db():
    from inventory.db.base import Base
    import inventory.table  # noqa: F401  註冊所有資料表
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
