"""
数据库初始化脚本

创建所有表和索引

用法: python -m storyhub.db.init_db
"""

import asyncio
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from storyhub.db.base import get_database_url
from storyhub.db.models import Base


async def create_tables(engine: Optional[AsyncEngine] = None):
    """
    创建所有表（已存在的表会被跳过）

    Args:
        engine: 异步引擎（默认按配置创建并在结束后释放）
    """
    owns_engine = engine is None
    if owns_engine:
        engine = create_async_engine(get_database_url(async_mode=True), echo=False)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        if owns_engine:
            await engine.dispose()


async def main():
    """主函数"""
    print("🚀 Starting database initialization...")
    print(f"Database URL: {get_database_url(async_mode=True)}")

    try:
        print("\n📦 Creating tables...")
        await create_tables()
        print("\n✅ Database initialization completed successfully!")
    except Exception as e:
        print(f"\n❌ Database initialization failed: {e}")
        raise


if __name__ == "__main__":
    asyncio.run(main())
