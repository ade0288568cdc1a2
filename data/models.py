from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Optional, Dict, Any


class CommittedGroup(BaseModel):
    """One bus load: original point indices, the loop that produced it, and its label in that loop's cut"""
    model_config = ConfigDict(frozen=True)

    members: List[int]
    loop: int
    label: int

    @property
    def size(self) -> int:
        return len(self.members)


class VisitorPoint(BaseModel):
    x: float
    y: float
    visitor_id: Optional[str] = None

    @field_validator('x', 'y')
    @classmethod
    def validate_finite(cls, v):
        if v != v or v in (float('inf'), float('-inf')):
            raise ValueError('Coordinates must be finite numbers')
        return v


class GroupingRequest(BaseModel):
    points: List[VisitorPoint]
    max_size: Optional[int] = Field(default=None, ge=1)
    min_size: Optional[int] = Field(default=None, ge=1)
    linkage_method: Optional[str] = None

    @model_validator(mode='after')
    def validate_band(self):
        if self.max_size is not None and self.min_size is not None and self.max_size < self.min_size:
            raise ValueError('max_size must not be smaller than min_size')
        return self


class GroupSummary(BaseModel):
    members: List[int]
    loop: int
    label: int
    size: int
    visitor_ids: Optional[List[Optional[str]]] = None


class GroupingResult(BaseModel):
    status: str
    execution_time: float
    data: List[GroupSummary]
    group_count: int
    point_count: int
    undersized_groups: int
    parameters: Dict[str, Any]
