"""
商城数据库表创建脚本
"""

import asyncio
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy import text
from storefront.core.config import settings
from storefront.core.database import init_database, create_tables, close_database


async def create_database_if_not_exists():
    """创建数据库（如果不存在）"""
    server_url = settings.database_url_computed.replace(f"/{settings.db_name}", "/postgres")

    engine = create_async_engine(server_url, isolation_level="AUTOCOMMIT")

    async with engine.connect() as conn:
        result = await conn.execute(
            text("SELECT 1 FROM pg_database WHERE datname = :db_name"),
            {"db_name": settings.db_name}
        )

        if not result.fetchone():
            await conn.execute(text(f'CREATE DATABASE "{settings.db_name}"'))
            print(f"数据库 '{settings.db_name}' 创建成功")
        else:
            print(f"数据库 '{settings.db_name}' 已存在")

    await engine.dispose()


async def main():
    print("开始初始化商城数据库...")

    await create_database_if_not_exists()

    await init_database()
    try:
        await create_tables()
    finally:
        await close_database()

    print("数据库初始化完成")


if __name__ == "__main__":
    asyncio.run(main())
