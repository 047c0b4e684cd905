from __future__ import annotations
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field


class DecodeOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    # deepest allowed child level; the top-level descriptor is depth 0
    max_depth: int = Field(32, ge=0)
    # a declared size of 0 means "decode until the caller-imposed end"
    zero_size_unbounded: bool = True
    # reader policy for a failing top-level descriptor
    on_error: Literal["raise", "skip"] = "raise"
