import datetime as dt
from pydantic import BaseModel, ConfigDict, Field

class ProductionEntryIn(BaseModel):
    project_id: int
    date: dt.date
    piles: int = Field(0, ge=0)
    racking_tables: int = Field(0, ge=0)
    modules: int = Field(0, ge=0)
    crew: str | None = None
    notes: str | None = None
    local_id: str | None = Field(None, max_length=64)
    device_id: str | None = Field(None, max_length=64)

class ProductionEntryUpdate(BaseModel):
    date: dt.date | None = None
    piles: int | None = Field(None, ge=0)
    racking_tables: int | None = Field(None, ge=0)
    modules: int | None = Field(None, ge=0)
    crew: str | None = None
    notes: str | None = None

class ProductionEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    user_id: int | None = None
    date: dt.date
    piles: int
    racking_tables: int
    modules: int
    crew: str | None = None
    notes: str | None = None
    local_id: str | None = None
    device_id: str | None = None

class SyncIn(BaseModel):
    items: list[ProductionEntryIn]

class SyncItemResult(BaseModel):
    local_id: str | None = None
    success: bool
    duplicate: bool = False
    id: int | None = None
    error: str | None = None

class SyncOut(BaseModel):
    results: list[SyncItemResult]
