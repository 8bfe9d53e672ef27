from datetime import datetime
from typing import Optional
from pydantic import Field
from civicfeed.models.technician import TechnicianStatus
from civicfeed.schemas.base import CamelModel

class TechnicianCreate(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    specialty: str = Field(min_length=1, max_length=120)
    status: TechnicianStatus = TechnicianStatus.available
    phone: Optional[str] = None
    email: Optional[str] = None

class TechnicianUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    specialty: Optional[str] = Field(default=None, min_length=1, max_length=120)
    status: Optional[TechnicianStatus] = None
    phone: Optional[str] = None
    email: Optional[str] = None

class TechnicianOut(CamelModel):
    id: str
    name: str
    specialty: str
    status: TechnicianStatus
    phone: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime

class TechnicianWorkload(CamelModel):
    technician_id: str
    name: str
    status: TechnicianStatus
    assigned: int
    resolved: int
    effectiveness: int
