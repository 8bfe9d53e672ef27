# File: civicfeed/routers/technicians.py
from typing import List
from fastapi import APIRouter, Depends
from civicfeed.core.security import require_role
from civicfeed.db.session import get_store
from civicfeed.db.store import MemoryStore
from civicfeed.schemas.technician import TechnicianCreate, TechnicianOut, TechnicianUpdate
from civicfeed.services import technicians

router = APIRouter(prefix="/api/technicians", tags=["technicians"])

@router.get("", response_model=List[TechnicianOut])
def list_technicians(store: MemoryStore = Depends(get_store)):
    return technicians.list_technicians(store)

@router.get("/{technician_id}", response_model=TechnicianOut)
def get_technician(technician_id: str, store: MemoryStore = Depends(get_store)):
    return technicians.get_technician(store, technician_id)

@router.post("", response_model=TechnicianOut, status_code=201,
             dependencies=[Depends(require_role("admin"))])
def create_technician(body: TechnicianCreate, store: MemoryStore = Depends(get_store)):
    return technicians.create_technician(store, body)

@router.patch("/{technician_id}", response_model=TechnicianOut,
              dependencies=[Depends(require_role("admin"))])
def update_technician(technician_id: str, body: TechnicianUpdate, store: MemoryStore = Depends(get_store)):
    return technicians.update_technician(store, technician_id, body)
