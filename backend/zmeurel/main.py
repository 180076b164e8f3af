import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zmeurel.config import settings
from zmeurel.database import engine
from zmeurel.middleware.exceptions import register_exception_handlers
from zmeurel.middleware.tenant import TenantMiddleware
from zmeurel.routers import (
    activities,
    clients,
    cutting_sales,
    expenses,
    fruit_sales,
    harvests,
    health,
    investments,
    parcels,
    pickers,
    reports,
)
from zmeurel.utils.cache import close_redis

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("zmeurel")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Zmeurel API starting (%s)", settings.environment)
    yield
    await close_redis()
    await engine.dispose()
    logger.info("Zmeurel API stopped")


app = FastAPI(
    title="Zmeurel",
    description="Raspberry farm record keeping: parcels, harvests, sales, treatments and costs",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware (last added runs outermost) ───────────────────
# Tenant context (innermost)
app.add_middleware(TenantMiddleware)

# CORS wraps everything, including tenant header rejections
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
# Public (no tenant context needed)
app.include_router(health.router)

# Tenant-scoped (require the tenant header)
app.include_router(parcels.router, prefix="/api/parcels", tags=["parcels"])
app.include_router(pickers.router, prefix="/api/pickers", tags=["pickers"])
app.include_router(clients.router, prefix="/api/clients", tags=["clients"])
app.include_router(harvests.router, prefix="/api/harvests", tags=["harvests"])
app.include_router(fruit_sales.router, prefix="/api/fruit-sales", tags=["fruit-sales"])
app.include_router(cutting_sales.router, prefix="/api/cutting-sales", tags=["cutting-sales"])
app.include_router(activities.router, prefix="/api/activities", tags=["activities"])
app.include_router(investments.router, prefix="/api/investments", tags=["investments"])
app.include_router(expenses.router, prefix="/api/expenses", tags=["expenses"])
app.include_router(reports.router, prefix="/api/reports", tags=["reports"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=settings.log_level.lower())
