# civicfeed/routers/demo.py
import logging
from fastapi import APIRouter, Depends
from civicfeed.core.errors import InternalError
from civicfeed.db.session import get_store
from civicfeed.db.store import MemoryStore

router = APIRouter(prefix="/api", tags=["demo"])
logger = logging.getLogger("civicfeed.demo")

@router.post("/reset-data")
def reset_data(store: MemoryStore = Depends(get_store)):
    try:
        store.reset()
    except Exception as e:
        raise InternalError(f"Failed to reset demo data: {e}") from e
    logger.info(f"Store reset to demo data: {store.counts()}")
    return {"message": "Data reset to original sample posts successfully"}
