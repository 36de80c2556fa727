from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class CoordinateModel(BaseModel):
    row: int = Field(..., ge=0, le=7)
    col: int = Field(..., ge=0, le=7)


class SelectRequest(CoordinateModel):
    pass


class MoveRequest(BaseModel):
    start: CoordinateModel
    end: CoordinateModel


class ResetRequest(BaseModel):
    difficulty: Optional[int] = Field(default=None, ge=1, le=3)


class ConfigRequest(BaseModel):
    difficulty: Optional[int] = Field(default=None, ge=1, le=3)
    aiEnabled: Optional[bool] = None
    seed: Optional[int] = Field(
        default=None, description="Seed for the automated player's move shuffling."
    )
