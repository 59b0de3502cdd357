import time
from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["health"])

_started = time.monotonic()


@router.get("/health")
async def health():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started, 3),
    }
