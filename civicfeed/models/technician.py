# File: civicfeed/models/technician.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum as PyEnum

class TechnicianStatus(str, PyEnum):
    available = "available"
    busy = "busy"
    offline = "offline"

@dataclass
class Technician:
    id: str
    name: str
    specialty: str
    created_at: datetime
    status: TechnicianStatus = TechnicianStatus.available
    phone: str | None = None
    email: str | None = None
