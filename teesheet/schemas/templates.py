# teesheet/schemas/templates.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class TemplateCreate(BaseModel):
    name: str = Field("Untitled Template", min_length=1, max_length=120)
    color: Optional[str] = Field(None, max_length=16)
    interval_mins: int = Field(10, ge=1, le=60)
    is_default: bool = False


class TemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    color: Optional[str] = Field(None, max_length=16)
    interval_mins: Optional[int] = Field(None, ge=1, le=60)
    is_default: Optional[bool] = None


class TemplateRead(BaseModel):
    id: int
    tee_sheet_id: int
    name: str
    color: Optional[str] = None
    interval_mins: int
    is_default: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
