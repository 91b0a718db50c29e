"""
Pattern schemas - Pydantic models for pattern-related requests/responses

Field names follow the JSON used by the web UI (camelCase), set via aliases.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class PatternResponse(BaseModel):
    """One selectable pattern"""
    id: str = Field(description="Pattern ID (e.g., 'rain')")
    friendly_name: str = Field(alias="friendlyName", description="Display name (e.g., 'Digital Rain')")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "rain",
                "friendlyName": "Digital Rain"
            }
        }


class PatternListResponse(BaseModel):
    """All patterns in presentation order"""
    patterns: List[PatternResponse]
    count: int = Field(description="Total number of patterns")


class ActivePatternResponse(BaseModel):
    active_pattern: Optional[str] = Field(
        alias="activePattern",
        description="ID of the active pattern, null before the first load"
    )

    class Config:
        populate_by_name = True


class ActivePatternRequest(BaseModel):
    """Request to switch the active pattern"""
    active_pattern: str = Field(
        alias="activePattern",
        description="Pattern ID; unknown IDs activate the default pattern"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {"activePattern": "orange"}
        }


class MetricsResponse(BaseModel):
    """Scheduler and output channel counters"""
    engine: Dict[str, Any]
