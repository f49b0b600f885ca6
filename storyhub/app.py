"""
FastAPI 应用入口
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from loguru import logger
from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import create_async_engine

from storyhub.config import settings
from storyhub.api import api_v1_router
from storyhub.db import base as db_base
from storyhub.db.base import init_db, close_db, get_database_url
from storyhub.db.init_db import create_tables
from storyhub.exceptions import StoryHubError
from storyhub.models import ErrorResponse
from storyhub.utils.logger_config import setup_logging


async def check_and_init_database():
    """检查数据库连接，缺少表时自动建表，然后初始化连接池"""
    if not settings.DATABASE_ENABLED:
        logger.info("📦 Database disabled, skipping initialization")
        return

    try:
        logger.info("🔍 Checking database connection...")

        # 创建临时引擎用于检查
        engine = create_async_engine(get_database_url(async_mode=True), echo=False)

        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            tables_exist = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).has_table("stories")
            )

        if not tables_exist:
            logger.warning("⚠️  Database not initialized, creating tables...")
            await create_tables(engine)
            logger.success("🎉 Database auto-initialization completed!")
        else:
            logger.success("✅ Database already initialized")

        await engine.dispose()

        # 初始化应用的数据库连接池
        await init_db()
        logger.success("✅ Database connection pool initialized")

    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        logger.warning("⚠️  Requests that need the database will fail until it is reachable")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时执行
    setup_logging()
    logger.info(f"🚀 Starting {settings.APP_NAME}...")

    await check_and_init_database()

    logger.success("🎉 Application started successfully!")

    yield

    # 关闭时执行
    logger.info("👋 Shutting down...")

    if settings.DATABASE_ENABLED:
        try:
            await close_db()
            logger.info("✅ Database connections closed")
        except Exception as e:
            logger.error(f"❌ Database close failed: {e}")

    logger.success("✅ Application shutdown complete")


# 创建 FastAPI 应用
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册 API 路由
app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """健康检查"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "ok"
    }


@app.get("/health")
async def health_check():
    """健康检查（详细）"""
    health_status = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "services": {}
    }

    # 检查数据库
    if settings.DATABASE_ENABLED:
        try:
            if db_base.async_engine:
                async with db_base.async_engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
                health_status["services"]["database"] = "healthy"
            else:
                health_status["services"]["database"] = "not_initialized"
        except Exception as e:
            logger.warning(f"⚠️  Database health check failed: {e}")
            health_status["services"]["database"] = "unhealthy"
            health_status["status"] = "degraded"
    else:
        health_status["services"]["database"] = "disabled"

    return health_status


# 业务异常处理
@app.exception_handler(StoryHubError)
async def storyhub_exception_handler(request: Request, exc: StoryHubError):
    """业务异常统一转换为错误响应"""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")

    body = ErrorResponse(
        code=exc.status_code,
        message=exc.message,
        error=exc.to_error()
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# 全局异常处理
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """全局异常处理"""
    logger.error(f"Unhandled exception: {type(exc).__name__}: {str(exc)}")

    body = ErrorResponse(
        code=500,
        message="Internal server error",
        error={
            "code": "INTERNAL_ERROR",
            "message": str(exc)
        }
    )
    return JSONResponse(status_code=500, content=body.model_dump())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "storyhub.app:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
