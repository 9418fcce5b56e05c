import datetime as dt
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator

Category = Literal["piles", "racking", "modules"]
InspectionStatus = Literal["pass", "fail"]
IssueStatus = Literal["open", "in_progress", "corrected", "verified", "closed"]

class QCInspectionItemIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    pile_id: str | None = Field(None, max_length=64)
    measurement_type: str | None = Field(None, max_length=64)
    measured_value: float
    min_value: float
    max_value: float
    unit: str = Field(..., min_length=1, max_length=16)
    passed: bool | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _check_tolerance(self):
        if self.min_value > self.max_value:
            raise ValueError("min_value must not exceed max_value")
        if self.passed is None:
            self.passed = self.min_value <= self.measured_value <= self.max_value
        return self

class QCInspectionIn(BaseModel):
    project_id: int
    date: dt.date
    category: Category
    scope: str = Field("individual", max_length=32)
    scope_count: int | None = Field(None, ge=0)
    area: str | None = Field(None, max_length=128)
    pile_ids: str | None = None
    pile_type: Literal["interior", "exterior", "motor"] = "interior"
    # derived from the items when omitted
    status: InspectionStatus | None = None
    notes: str | None = None
    issue_description: str | None = None
    assigned_to: str | None = Field(None, max_length=128)
    items: list[QCInspectionItemIn] = Field(default_factory=list)
    local_id: str | None = Field(None, max_length=64)
    device_id: str | None = Field(None, max_length=64)

class QCInspectionUpdate(BaseModel):
    status: InspectionStatus | None = None
    notes: str | None = None

class QCInspectionItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    pile_id: str | None = None
    measurement_type: str | None = None
    measured_value: float
    min_value: float
    max_value: float
    unit: str
    passed: bool
    notes: str | None = None

class QCIssueOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    inspection_id: int | None = None
    status: str
    description: str
    category: str
    pile_id: str | None = None
    assigned_to: str | None = None
    opened_at: dt.datetime | None = None
    corrected_at: dt.datetime | None = None
    verified_at: dt.datetime | None = None

class QCIssueUpdate(BaseModel):
    status: IssueStatus | None = None
    description: str | None = None
    assigned_to: str | None = Field(None, max_length=128)

class QCInspectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    user_id: int | None = None
    date: dt.date
    category: str
    scope: str
    scope_count: int | None = None
    area: str | None = None
    pile_ids: str | None = None
    pile_type: str
    status: str
    notes: str | None = None
    local_id: str | None = None
    device_id: str | None = None
    items: list[QCInspectionItemOut] = []
    issues: list[QCIssueOut] = []

class QCSyncIn(BaseModel):
    items: list[QCInspectionIn]
