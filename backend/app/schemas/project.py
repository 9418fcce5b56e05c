import datetime as dt
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

ProjectStatus = Literal["active", "completed", "on_hold"]

class ProjectCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=256)
    location: str | None = None
    description: str | None = None
    status: ProjectStatus = "active"
    total_piles: int = Field(0, ge=0)
    total_racking_tables: int = Field(0, ge=0)
    total_modules: int = Field(0, ge=0)
    planned_start_date: dt.date
    planned_end_date: dt.date
    planned_piles_per_day: float = Field(0.0, ge=0)
    planned_racking_per_day: float = Field(0.0, ge=0)
    planned_modules_per_day: float = Field(0.0, ge=0)


class ProjectUpdate(BaseModel):
    code: str | None = None
    name: str | None = None
    location: str | None = None
    description: str | None = None
    status: ProjectStatus | None = None
    total_piles: int | None = Field(None, ge=0)
    total_racking_tables: int | None = Field(None, ge=0)
    total_modules: int | None = Field(None, ge=0)
    planned_start_date: dt.date | None = None
    planned_end_date: dt.date | None = None
    actual_start_date: dt.date | None = None
    actual_end_date: dt.date | None = None
    planned_piles_per_day: float | None = Field(None, ge=0)
    planned_racking_per_day: float | None = Field(None, ge=0)
    planned_modules_per_day: float | None = Field(None, ge=0)

class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    location: str | None = None
    description: str | None = None
    status: str
    total_piles: int
    total_racking_tables: int
    total_modules: int
    planned_start_date: dt.date
    planned_end_date: dt.date
    actual_start_date: dt.date | None = None
    actual_end_date: dt.date | None = None
    planned_piles_per_day: float
    planned_racking_per_day: float
    planned_modules_per_day: float
