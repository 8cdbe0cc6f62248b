# teesheet/schemas/overrides.py

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field


class OverrideCreate(BaseModel):
    date: date
    name: str = Field("Untitled Override", min_length=1, max_length=120)
    color: Optional[str] = Field(None, max_length=16)
    interval_mins: Optional[int] = Field(None, ge=1, le=60)


class OverrideUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    color: Optional[str] = Field(None, max_length=16)
    interval_mins: Optional[int] = Field(None, ge=1, le=60)


class OverrideRead(BaseModel):
    id: int
    tee_sheet_id: int
    date: date
    name: str
    color: Optional[str] = None
    interval_mins: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
