from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Revenue(BaseModel):
    """One month of the revenue series."""

    month: str
    revenue: int

    model_config = ConfigDict(from_attributes=True)
