"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy import text

from config.settings import settings
from src.pc_account.api.router import router as user_router
from src.pc_betting.api.router import router as bet_router
from src.pc_betting.api.router import user_router as user_bet_router
from src.pc_common.database import engine
from src.pc_common.errors import AppError
from src.pc_common.redis_client import close_redis, get_redis
from src.pc_common.response import error_response
from src.pc_contract.api.router import router as contract_router
from src.pc_gateway.middleware.request_log import RequestLogMiddleware
from src.pc_ranking.api.router import router as ranking_router
from src.pc_ranking.api.router import user_router as user_ranking_router
from src.pc_settlement.api.router import router as admin_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB, probe Redis. Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    try:
        await (await get_redis()).ping()
    except RedisError as exc:
        # leaderboard reads fall back to PostgreSQL
        logger.warning("Redis unavailable at startup: %s", exc)
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(user_router, prefix="/api/v1")
app.include_router(user_bet_router, prefix="/api/v1")
app.include_router(user_ranking_router, prefix="/api/v1")
app.include_router(contract_router, prefix="/api/v1")
app.include_router(bet_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
app.include_router(ranking_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
