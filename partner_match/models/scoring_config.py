"""
Scoring Configuration Models
"""

from typing import List, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import datetime
import uuid

from ..config.settings import (
    DEFAULT_WEIGHTS,
    NEUTRAL_SCORE,
    SUBJECT_SCORING,
    TIMEZONE_BANDS,
    TIMEZONE_COMPATIBLE_MAX_DIFFERENCE,
    SKILL_LEVEL_ORDER,
    SKILL_DISTANCE_SCORES,
    SKILL_DISTANCE_DEFAULT,
    AVAILABILITY_SCORING,
    COMPATIBLE_STYLES,
    STYLE_SCORING,
)


class ScoringWeights(BaseModel):
    """Weights for each compatibility factor"""
    model_config = ConfigDict(frozen=True)

    subjects: float = Field(DEFAULT_WEIGHTS["subjects"], ge=0, le=1)
    timezone: float = Field(DEFAULT_WEIGHTS["timezone"], ge=0, le=1)
    skill_level: float = Field(DEFAULT_WEIGHTS["skill_level"], ge=0, le=1)
    availability: float = Field(DEFAULT_WEIGHTS["availability"], ge=0, le=1)
    study_style: float = Field(DEFAULT_WEIGHTS["study_style"], ge=0, le=1)

    @model_validator(mode="after")
    def check_total(self):
        total = (
            self.subjects
            + self.timezone
            + self.skill_level
            + self.availability
            + self.study_style
        )
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"weights must sum to 1.0, got {total:.4f}")
        return self


class TimezoneBand(BaseModel):
    """One piece of the timezone decay curve: base - slope * (d - start)"""
    model_config = ConfigDict(frozen=True)

    max_difference: Optional[int] = None  # None = open-ended
    base: float
    slope: float
    start: int = 0


class SubjectCriteria(BaseModel):
    """Subject overlap bonus"""
    model_config = ConfigDict(frozen=True)

    bonus_per_extra_shared: float = SUBJECT_SCORING["bonus_per_extra_shared"]
    max_bonus_multiplier: float = SUBJECT_SCORING["max_bonus_multiplier"]


class TimezoneCriteria(BaseModel):
    """Timezone decay curve"""
    model_config = ConfigDict(frozen=True)

    bands: List[TimezoneBand] = Field(
        default_factory=lambda: [TimezoneBand(**b) for b in TIMEZONE_BANDS]
    )
    compatible_max_difference: int = TIMEZONE_COMPATIBLE_MAX_DIFFERENCE

    @field_validator("bands")
    @classmethod
    def check_bands(cls, bands: List[TimezoneBand]) -> List[TimezoneBand]:
        if not bands:
            raise ValueError("at least one timezone band is required")
        if bands[-1].max_difference is not None:
            raise ValueError("the last timezone band must be open-ended")
        return bands


class SkillCriteria(BaseModel):
    """Skill level ordering and distance table"""
    model_config = ConfigDict(frozen=True)

    levels: List[str] = Field(default_factory=lambda: list(SKILL_LEVEL_ORDER))
    distance_scores: Dict[int, float] = Field(
        default_factory=lambda: dict(SKILL_DISTANCE_SCORES)
    )
    default_score: float = SKILL_DISTANCE_DEFAULT


class AvailabilityCriteria(BaseModel):
    """Day/hour overlap weights"""
    model_config = ConfigDict(frozen=True)

    day_weight: float = AVAILABILITY_SCORING["day_weight"]
    hour_weight: float = AVAILABILITY_SCORING["hour_weight"]
    hour_overlap_score: float = AVAILABILITY_SCORING["hour_overlap_score"]
    hour_no_overlap_score: float = AVAILABILITY_SCORING["hour_no_overlap_score"]


class StyleCriteria(BaseModel):
    """Study style adjacency table"""
    model_config = ConfigDict(frozen=True)

    compatible: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in COMPATIBLE_STYLES.items()}
    )
    same_score: float = STYLE_SCORING["same"]
    compatible_score: float = STYLE_SCORING["compatible"]
    incompatible_score: float = STYLE_SCORING["incompatible"]


class ScoringConfig(BaseModel):
    """Complete, immutable scoring configuration"""
    model_config = ConfigDict(frozen=True)

    config_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = "Default"
    description: Optional[str] = None

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    neutral_score: float = Field(NEUTRAL_SCORE, ge=0, le=1)

    subjects: SubjectCriteria = Field(default_factory=SubjectCriteria)
    timezone: TimezoneCriteria = Field(default_factory=TimezoneCriteria)
    skill_level: SkillCriteria = Field(default_factory=SkillCriteria)
    availability: AvailabilityCriteria = Field(default_factory=AvailabilityCriteria)
    study_style: StyleCriteria = Field(default_factory=StyleCriteria)

    created_at: datetime = Field(default_factory=datetime.utcnow)


def create_default_scoring_config(
    name: str = "Default",
    weights: Optional[Dict[str, float]] = None,
    description: Optional[str] = None,
) -> ScoringConfig:
    """
    Factory function to create a scoring config, optionally overriding weights
    """
    merged = dict(DEFAULT_WEIGHTS)
    if weights:
        merged.update(weights)

    return ScoringConfig(
        name=name,
        description=description,
        weights=ScoringWeights(**merged),
    )


DEFAULT_SCORING_CONFIG = create_default_scoring_config()
