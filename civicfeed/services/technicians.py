# File: civicfeed/services/technicians.py
from civicfeed.core.errors import NotFound
from civicfeed.db.store import EntityKind, MemoryStore, new_id
from civicfeed.models.technician import Technician
from civicfeed.schemas.technician import TechnicianCreate, TechnicianUpdate


def list_technicians(store: MemoryStore) -> list[Technician]:
    return store.list_all(EntityKind.technician)


def get_technician(store: MemoryStore, technician_id: str) -> Technician:
    tech = store.get(EntityKind.technician, technician_id)
    if not tech:
        raise NotFound("Technician not found")
    return tech


def create_technician(store: MemoryStore, data: TechnicianCreate) -> Technician:
    tech = Technician(
        id=new_id(),
        name=data.name,
        specialty=data.specialty,
        status=data.status,
        phone=data.phone or None,
        email=data.email or None,
        created_at=store.now(),
    )
    return store.put(EntityKind.technician, tech)


def update_technician(store: MemoryStore, technician_id: str, data: TechnicianUpdate) -> Technician:
    with store.lock:
        tech = get_technician(store, technician_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key in ("name", "specialty", "status"):
                continue
            setattr(tech, key, value)
        store.put(EntityKind.technician, tech)
    return tech
