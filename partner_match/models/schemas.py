"""
Pydantic schemas for the Partner Matching Engine
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..config import settings


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, serializes camelCase"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# INPUT SCHEMAS
# =============================================================================

class Profile(CamelModel):
    """A user's study preferences. Every attribute may be absent or null."""
    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    subjects: List[str] = Field(default_factory=list)
    timezone: Optional[str] = None
    skill_level: Optional[str] = None
    available_days: List[str] = Field(default_factory=list)
    available_hours: List[str] = Field(default_factory=list)
    study_style: Optional[str] = None
    # Not scored, carried for display
    goals: List[str] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)

    @field_validator(
        "subjects", "available_days", "available_hours", "goals", "interests",
        mode="before",
    )
    @classmethod
    def null_as_empty(cls, value):
        return [] if value is None else value


# =============================================================================
# RESULT SCHEMAS
# =============================================================================

class ScoreBreakdown(CamelModel):
    """Per-factor sub-scores, each 0-100"""
    model_config = ConfigDict(frozen=True)

    subjects: int
    timezone: int
    skill_level: int
    availability: int
    study_style: int


class MatchDetails(CamelModel):
    """Explanatory data behind the sub-scores"""
    model_config = ConfigDict(frozen=True)

    shared_subjects: List[str] = Field(default_factory=list)
    timezone_compatible: bool = True
    skill_level_difference: int = 0
    shared_days: List[str] = Field(default_factory=list)
    shared_hours: List[str] = Field(default_factory=list)
    style_compatible: bool = True


class MatchScore(CamelModel):
    """Compatibility between two profiles"""
    model_config = ConfigDict(frozen=True)

    total_score: int
    breakdown: ScoreBreakdown
    details: MatchDetails


class RankedMatch(CamelModel):
    """A candidate profile together with its score against the reference"""
    model_config = ConfigDict(frozen=True)

    profile: Profile
    match_score: MatchScore


# =============================================================================
# API REQUEST SCHEMAS
# =============================================================================

class ScoreRequest(CamelModel):
    """Request to score two profiles against each other"""
    profile_a: Profile
    profile_b: Profile
    config_id: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "profileA": {
                    "id": "u1",
                    "subjects": ["Math", "CS"],
                    "timezone": "UTC+3",
                    "skillLevel": "BEGINNER",
                    "availableDays": ["Monday", "Wednesday"],
                    "studyStyle": "COLLABORATIVE",
                },
                "profileB": {
                    "id": "u2",
                    "subjects": ["math", "physics"],
                    "timezone": "UTC-2",
                    "skillLevel": "ADVANCED",
                    "availableDays": ["monday"],
                    "studyStyle": "MIXED",
                },
            }
        }
    )


class RankRequest(CamelModel):
    """Request to rank a candidate pool against a reference profile"""
    reference: Profile
    candidates: List[Profile] = Field(default_factory=list)
    limit: int = Field(
        default_factory=lambda: settings.ENGINE_CONFIG["default_limit"], ge=1, le=500
    )
    min_score: int = Field(
        default_factory=lambda: settings.ENGINE_CONFIG["default_min_score"], ge=0, le=100
    )
    config_id: Optional[str] = None


# =============================================================================
# API RESPONSE SCHEMAS
# =============================================================================

class QualityResponse(CamelModel):
    """Label and color for a score"""
    score: int
    label: str
    color: str


class ScoreResponse(CamelModel):
    """Single pair result"""
    match_score: MatchScore
    label: str
    color: str


class RankedMatchResponse(CamelModel):
    """Ranked candidate with presentation hints"""
    profile: Profile
    match_score: MatchScore
    label: str
    color: str


class RankResponse(CamelModel):
    """Ranking result"""
    total_candidates: int
    returned: int
    processing_time_ms: float
    results: List[RankedMatchResponse]
