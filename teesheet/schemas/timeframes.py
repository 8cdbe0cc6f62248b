# teesheet/schemas/timeframes.py

from typing import Optional
from pydantic import BaseModel, Field


class TimeframeIn(BaseModel):
    start_time_local: str = Field(description="Time in HH:MM format")
    end_time_local: str = Field(description="Time in HH:MM format, 24:00 = end of day")


class TimeframeRead(BaseModel):
    id: int
    weekday: Optional[int] = None
    position: int
    start_time_local: str
    end_time_local: str

    model_config = {"from_attributes": True}


class TimeframeSetUpdate(BaseModel):
    """Replaces the owner's whole band set."""
    timeframes: list[TimeframeIn]


class TimeframeValidateRequest(BaseModel):
    """One editor step: existing bands plus the candidate being typed."""
    timeframes: list[TimeframeIn] = []
    edit_index: Optional[int] = Field(None, ge=0)
    start: str = ""
    end: str = ""


class TimeframeValidateResponse(BaseModel):
    valid: bool
    errors: list[str]
