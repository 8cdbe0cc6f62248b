# teesheet/schemas/holds.py

from typing import Literal
from pydantic import BaseModel, Field


class HoldItem(BaseModel):
    tee_time_id: int
    party_size: int = Field(ge=1)


class HoldCreate(BaseModel):
    user_id: int
    items: list[HoldItem] = Field(min_length=1)
    source: Literal["checkout", "waitlist"] = "checkout"


class HoldRead(BaseModel):
    user_id: int
    source: str
    items: list[HoldItem]
    created_at: int = Field(description="Unix time in milliseconds")
    ttl_seconds: int
    remaining_seconds: int


class HoldCreateResponse(BaseModel):
    success: bool = True
    expires_in_seconds: int
    hold: HoldRead
