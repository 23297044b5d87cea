import logging

from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from core.config import settings
from core.sync import get_catalog_sync
from routers.categories import router as categories_router
from routers.dashboard import router as dashboard_router
from routers.inventory import router as inventory_router
from routers.operations import router as operations_router
from routers.sync import router as sync_router
from routers.vendors import router as vendors_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Stop the auto-refresh tasks; in-memory state goes with the process.
    await get_catalog_sync().scheduler.aclose()


app = FastAPI(
    title="POS Inventory Dashboard API",
    description="Inventory dashboard backend synchronized with a Clover POS catalog",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Clover connection, manual refresh, auto-refresh scheduler
app.include_router(sync_router, prefix="/sync", tags=["sync"])

# Items, ledger operations, delivery log, sales summary
app.include_router(inventory_router, prefix="/inventory", tags=["inventory"])
app.include_router(vendors_router, prefix="/vendors", tags=["vendors"])
app.include_router(categories_router, prefix="/categories", tags=["categories"])
app.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
app.include_router(operations_router, prefix="/operations", tags=["operations"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
