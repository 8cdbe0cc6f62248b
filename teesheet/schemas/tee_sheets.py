# teesheet/schemas/tee_sheets.py
"""
Pydantic schemas for resolved tee-sheet views.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class TimeWindow(BaseModel):
    start: str  # "HH:MM"
    end: str    # "HH:MM"


class EffectiveTimeframeResponse(BaseModel):
    """Bands in force for a date after override/season/template resolution."""
    tee_sheet_id: int
    date: date
    source: Optional[str] = Field(None, description="override / season / template, or null")
    source_id: Optional[int] = None
    color: Optional[str] = None
    interval_mins: Optional[int] = Field(None, description="Tee-time spacing for the date")
    timeframes: list[TimeWindow]
    warnings: list[str] = []


class CheckCleanResponse(BaseModel):
    clean: bool
    date: date


class GenerateResponse(BaseModel):
    generated: int
    source: Optional[str] = None
    date: date
