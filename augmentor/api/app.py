"""
FastAPI 应用模块

为流程编辑器提供解析和校验服务。
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from augmentor import __version__
from augmentor.api.routes import flows_router
from augmentor.api.schemas import ErrorResponse, HealthResponse
from augmentor.config import AppConfig, get_config
from augmentor.core.errors import Error

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    config = get_config()
    logger.info(
        f"Augmentor 流程服务启动中... "
        f"max_steps={config.limits.max_steps} max_runtime_ms={config.limits.max_runtime_ms}"
    )
    yield
    logger.info("Augmentor 流程服务关闭中...")


async def health_check():
    """健康检查"""
    return HealthResponse(status="healthy", version=__version__)


async def global_exception_handler(request, exc):
    """全局异常处理器"""
    logger.error(f"未处理的异常: {exc}", exc_info=True)
    error = Error.from_exception(exc)
    body = ErrorResponse(
        error="internal_error",
        message="服务器内部错误",
        code=error.code,
        details={"type": error.exception_type},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json"),
    )


def create_app(config: AppConfig = None) -> FastAPI:
    """
    创建 FastAPI 应用实例

    Args:
        config: 应用配置，默认使用全局配置
    """
    config = config or get_config()

    app = FastAPI(
        title="Augmentor Flow Server",
        description="动作流解析、校验与构建器桥接接口",
        version=__version__,
        lifespan=lifespan,
    )

    # 配置 CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 注册路由
    app.include_router(flows_router, prefix="/api/v1/flows", tags=["Flows"])
    app.add_api_route("/health", health_check, methods=["GET"], response_model=HealthResponse)
    app.add_exception_handler(Exception, global_exception_handler)

    return app


app = create_app()
