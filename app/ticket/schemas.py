# app/ticket/schemas.py
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

class TicketScope(str, Enum):
    open = "open"
    closed = "closed"
    all_organization = "all_organization"
    organization = "organization"
    closed_organization = "closed_organization"

class TicketCreate(BaseModel):
    # length and format rules live on the model so every write path shares them
    name: str | None = None
    description: str | None = None
    phone: str | None = None
    region_id: int | None = None
    resource_category_id: int | None = None

class TicketOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    phone: str
    closed: bool
    captured: bool = Field(validation_alias="is_captured")
    region_id: int
    resource_category_id: int
    organization_id: int | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
