"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.pv_account.api.router import router as account_router
from src.pv_admin.api.router import router as admin_router
from src.pv_authority.api.router import router as authority_router
from src.pv_betting.api.router import router as betting_router
from src.pv_common.database import check_database, engine
from src.pv_common.errors import AppError
from src.pv_common.response import error_response
from src.pv_gateway.middleware.request_log import RequestLogMiddleware
from src.pv_market.api.router import router as market_router
from src.pv_settlement.api.router import router as settlement_router
from src.pv_vault.api.router import router as vault_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the database is reachable. Shutdown: release the pool."""
    await check_database()
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, request)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(authority_router, prefix="/api/v1")
app.include_router(account_router, prefix="/api/v1")
app.include_router(market_router, prefix="/api/v1")
app.include_router(betting_router, prefix="/api/v1")
app.include_router(settlement_router, prefix="/api/v1")
app.include_router(vault_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
