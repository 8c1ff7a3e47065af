from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from storefront.core.config import settings
from storefront.core.redis import redis_manager
from storefront.core.database import init_database, close_database
from storefront.api.health import router as health_router
from storefront.api.coupons import router as coupons_router
from storefront.api.checkout import router as checkout_router
from storefront.api.cron import router as cron_router
from storefront.api.admin import router as admin_router
from storefront.api.products import router as products_router
from storefront.api.orders import router as orders_router
from storefront.api.exceptions import (
    validation_exception_handler,
    http_exception_handler,
    database_exception_handler,
    general_exception_handler,
    business_exception_handler,
    BusinessException
)

import logging

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logger.info(f"正在启动 {settings.app_name}")

    try:
        await init_database()
        logger.info("PostgreSQL数据库初始化成功")
    except Exception as e:
        logger.error(f"应用启动失败: {e}")
        raise

    # 缓存不可用时降级为直查数据库
    try:
        await redis_manager.init_redis()
    except Exception as e:
        logger.warning(f"Redis不可用，缓存已禁用: {e}")

    if not settings.cron_secret:
        logger.warning("未配置 CRON_SECRET，弃单挽回定时接口未加保护")

    logger.info("应用启动完成")

    yield

    logger.info("正在关闭应用")
    await close_database()
    await redis_manager.close_redis()
    logger.info("应用关闭完成")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="商城后端 - 优惠券校验、弃单挽回与热销榜",
    debug=settings.debug,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 注册路由
app.include_router(health_router)
app.include_router(coupons_router)
app.include_router(checkout_router)
app.include_router(cron_router)
app.include_router(admin_router)
app.include_router(products_router)
app.include_router(orders_router)

# 注册异常处理器
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)
app.add_exception_handler(BusinessException, business_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)


@app.get("/")
async def root():
    """根路径"""
    return {
        "message": f"欢迎使用 {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    uvicorn.run(
        "storefront.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
