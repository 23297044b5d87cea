import logging

from fastapi import APIRouter, Depends, HTTPException, status

from core.clover_client import CloverConfig
from core.sync import CatalogSync, NotConnectedError, SyncFailedError, get_catalog_sync
from schemas.sync import ConnectRequest, SchedulerUpdate, SyncResult, SyncStatus

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/status", response_model=SyncStatus)
async def get_status(sync: CatalogSync = Depends(get_catalog_sync)):
    return SyncStatus(**sync.status())


@router.post("/connect", response_model=SyncResult)
async def connect(payload: ConnectRequest, sync: CatalogSync = Depends(get_catalog_sync)):
    """Connect with the given Clover credentials (kept in memory only) and load the catalog."""
    config = CloverConfig(token=payload.token, merchant_id=payload.merchant_id, sandbox=payload.sandbox)
    try:
        return await sync.connect(config)
    except SyncFailedError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/demo", response_model=SyncResult)
async def start_demo(sync: CatalogSync = Depends(get_catalog_sync)):
    return sync.load_demo()


@router.post("/disconnect", response_model=SyncStatus)
async def disconnect(sync: CatalogSync = Depends(get_catalog_sync)):
    sync.disconnect()
    return SyncStatus(**sync.status())


@router.post("/refresh", response_model=SyncResult)
async def refresh(sync: CatalogSync = Depends(get_catalog_sync)):
    """Manual sync. Reports failures, never touches the auto-refresh countdown."""
    try:
        return await sync.reconcile(silent=False)
    except NotConnectedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except SyncFailedError as e:
        logger.warning("[sync] manual refresh failed: %s", e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.patch("/scheduler", response_model=SyncStatus)
async def update_scheduler(payload: SchedulerUpdate, sync: CatalogSync = Depends(get_catalog_sync)):
    if payload.interval is not None:
        sync.scheduler.set_interval(payload.interval)
    if payload.auto_refresh is not None:
        sync.scheduler.set_auto_refresh(payload.auto_refresh)
    return SyncStatus(**sync.status())
