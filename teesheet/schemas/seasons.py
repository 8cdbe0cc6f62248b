# teesheet/schemas/seasons.py

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class SeasonCreate(BaseModel):
    name: str = Field("Untitled Season", min_length=1, max_length=120)
    color: Optional[str] = Field(None, max_length=16)
    start_date: date
    end_date_exclusive: date
    interval_mins: Optional[int] = Field(None, ge=1, le=60)

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date_exclusive <= self.start_date:
            raise ValueError("end_date_exclusive must be after start_date")
        return self


class SeasonUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    color: Optional[str] = Field(None, max_length=16)
    start_date: Optional[date] = None
    end_date_exclusive: Optional[date] = None
    interval_mins: Optional[int] = Field(None, ge=1, le=60)


class SeasonRead(BaseModel):
    id: int
    tee_sheet_id: int
    name: str
    color: Optional[str] = None
    start_date: date
    end_date_exclusive: date
    interval_mins: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SeasonViolationRead(BaseModel):
    date: date
    weekday: Optional[int] = Field(None, description="0 = Sunday .. 6 = Saturday, null = base set")
    code: str
    message: str

    model_config = {"from_attributes": True}


class SeasonPrevalidationResponse(BaseModel):
    ok: bool
    violations: list[SeasonViolationRead]
