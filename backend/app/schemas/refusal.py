import datetime as dt
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator

RefusalStatus = Literal["open", "in_remediation", "remediated", "closed"]

class PileRefusalIn(BaseModel):
    project_id: int
    pile_id: str = Field(..., min_length=1, max_length=64)
    block: str | None = Field(None, max_length=64)
    row: str | None = Field(None, max_length=64)
    pile_number: str | None = Field(None, max_length=64)
    date_discovered: dt.date
    target_depth: float = Field(..., gt=0)
    achieved_depth: float = Field(..., ge=0)
    refusal_reason: str = Field(..., min_length=1, max_length=256)
    refusal_notes: str | None = None

    @model_validator(mode="after")
    def _short_of_target(self):
        if self.achieved_depth > self.target_depth:
            raise ValueError("achieved_depth cannot exceed target_depth")
        return self

class PileRefusalUpdate(BaseModel):
    status: RefusalStatus | None = None
    remediation_method: str | None = Field(None, max_length=256)
    remediation_date: dt.date | None = None
    engineer_approval: str | None = Field(None, max_length=256)
    refusal_notes: str | None = None

class PileRefusalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    reported_by: int | None = None
    pile_id: str
    block: str | None = None
    row: str | None = None
    pile_number: str | None = None
    date_discovered: dt.date
    target_depth: float
    achieved_depth: float
    depth_shortfall: float
    refusal_reason: str
    refusal_notes: str | None = None
    status: str
    remediation_method: str | None = None
    remediation_date: dt.date | None = None
    engineer_approval: str | None = None
