import time

import psutil
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..services.errors import StoreError
from ..services.kv_store import KVStore, get_store

router = APIRouter(tags=["system"])

_start_time = time.time()


class SystemStats(BaseModel):
    success: bool = True
    cpu_pct: float
    ram_pct: float
    uptime_seconds: int
    bookings: int
    complaints: int
    buses: int


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/system/stats", response_model=SystemStats)
def get_system_stats(store: KVStore = Depends(get_store)):
    """Process CPU/RAM usage plus record counts per namespace."""
    try:
        counts = {name: store.count_by_prefix(f"{prefix}:")
                  for name, prefix in (("bookings", "ticket"), ("complaints", "complaint"), ("buses", "bus"))}
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"Failed to count records: {e}")
    return SystemStats(
        cpu_pct=round(psutil.cpu_percent(interval=None), 1),
        ram_pct=round(psutil.virtual_memory().percent, 1),
        uptime_seconds=int(time.time() - _start_time),
        **counts,
    )
