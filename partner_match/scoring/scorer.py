"""
Compatibility Scoring
=====================
Deterministic weighted scoring between two study-partner profiles.

Factors:
- Subjects (35%): Shared academic subjects
- Timezone (25%): Overlapping waking hours
- Skill Level (15%): Balanced learning partnerships
- Availability (15%): Shared days and hour blocks
- Study Style (10%): Learning preference compatibility

Every factor resolves missing data to a neutral default, so scoring never
raises on a well-formed profile.
"""

import math
import re
from typing import Optional, Dict, Any, List, Sequence, Tuple

from ..models.schemas import (
    Profile,
    MatchScore,
    ScoreBreakdown,
    MatchDetails,
    RankedMatch,
)
from ..models.scoring_config import ScoringConfig, DEFAULT_SCORING_CONFIG
from ..config.settings import MATCH_QUALITY_MAPPING

# Whole-hour offsets only; "UTC+5:30" does not parse
_UTC_OFFSET = re.compile(r"UTC([+-]\d{1,2})")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative scores"""
    return int(math.floor(value + 0.5))


def parse_utc_offset(timezone: Optional[str]) -> Optional[int]:
    """Parse 'UTC+N' / 'UTC-N' into an hour offset, or None"""
    if not timezone:
        return None
    match = _UTC_OFFSET.fullmatch(timezone.strip().upper())
    if not match:
        return None
    return int(match.group(1))


def _shared(first: List[str], second: List[str]) -> List[str]:
    """Items of first that also appear in second, compared case-insensitively"""
    second_lower = {item.lower() for item in second}
    return [item for item in first if item.lower() in second_lower]


def _clamp(score: float) -> float:
    return max(0.0, min(1.0, score))


class CompatibilityScorer:
    """
    Scores two profiles across five weighted factors.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        """
        Initialize with a scoring configuration or use defaults.
        """
        self.config = config or DEFAULT_SCORING_CONFIG
        self.weights = {
            "subjects": self.config.weights.subjects,
            "timezone": self.config.weights.timezone,
            "skill_level": self.config.weights.skill_level,
            "availability": self.config.weights.availability,
            "study_style": self.config.weights.study_style,
        }
        self._skill_index = {
            level.upper(): index
            for index, level in enumerate(self.config.skill_level.levels)
        }

    def score(self, a: Profile, b: Profile) -> MatchScore:
        """
        Calculate the compatibility of profile b from profile a's side.

        Args:
            a: Reference profile (its casing/order is used for detail lists)
            b: Other profile

        Returns:
            MatchScore with total, per-factor breakdown and details
        """
        subjects = self._score_subjects(a, b)
        timezone = self._score_timezone(a, b)
        skill = self._score_skill_level(a, b)
        availability = self._score_availability(a, b)
        style = self._score_study_style(a, b)

        factors = {
            "subjects": _clamp(subjects["score"]),
            "timezone": _clamp(timezone["score"]),
            "skill_level": _clamp(skill["score"]),
            "availability": _clamp(availability["score"]),
            "study_style": _clamp(style["score"]),
        }

        weighted = sum(factors[name] * self.weights[name] for name in factors)
        total = max(0, min(100, round_half_up(weighted * 100)))

        return MatchScore(
            total_score=total,
            breakdown=ScoreBreakdown(
                **{name: round_half_up(value * 100) for name, value in factors.items()}
            ),
            details=MatchDetails(
                shared_subjects=subjects["shared"],
                timezone_compatible=timezone["compatible"],
                skill_level_difference=skill["difference"],
                shared_days=availability["shared_days"],
                shared_hours=availability["shared_hours"],
                style_compatible=style["compatible"],
            ),
        )

    # =========================================================================
    # Factor scores (0-1)
    # =========================================================================

    def _score_subjects(self, a: Profile, b: Profile) -> Dict[str, Any]:
        """Score shared subjects. Missing subjects count as no match."""
        if not a.subjects or not b.subjects:
            return {"score": 0.0, "shared": []}

        shared = _shared(a.subjects, b.subjects)
        if not shared:
            return {"score": 0.0, "shared": []}

        criteria = self.config.subjects
        overlap_ratio = len(shared) / max(len(a.subjects), len(b.subjects))
        bonus = min(
            1 + criteria.bonus_per_extra_shared * (len(shared) - 1),
            criteria.max_bonus_multiplier,
        )

        return {"score": min(overlap_ratio * bonus, 1.0), "shared": shared}

    def _score_timezone(self, a: Profile, b: Profile) -> Dict[str, Any]:
        """Score timezone proximity by hour difference"""
        neutral = {"score": self.config.neutral_score, "compatible": True}

        if not a.timezone or not b.timezone:
            return neutral

        if a.timezone.strip() == b.timezone.strip():
            return {"score": 1.0, "compatible": True}

        offset_a = parse_utc_offset(a.timezone)
        offset_b = parse_utc_offset(b.timezone)
        if offset_a is None or offset_b is None:
            return neutral

        difference = abs(offset_a - offset_b)
        criteria = self.config.timezone

        score = 0.0
        for band in criteria.bands:
            if band.max_difference is None or difference <= band.max_difference:
                score = band.base - band.slope * (difference - band.start)
                break

        return {
            "score": max(score, 0.0),
            "compatible": difference <= criteria.compatible_max_difference,
        }

    def _score_skill_level(self, a: Profile, b: Profile) -> Dict[str, Any]:
        """Score the distance between skill levels"""
        neutral = {"score": self.config.neutral_score, "difference": 0}

        if not a.skill_level or not b.skill_level:
            return neutral

        index_a = self._skill_index.get(a.skill_level.strip().upper())
        index_b = self._skill_index.get(b.skill_level.strip().upper())
        if index_a is None or index_b is None:
            return neutral

        difference = abs(index_a - index_b)
        criteria = self.config.skill_level
        score = criteria.distance_scores.get(difference, criteria.default_score)

        return {"score": score, "difference": difference}

    def _score_availability(self, a: Profile, b: Profile) -> Dict[str, Any]:
        """Score shared days (60%) and shared hour blocks (40%)"""
        if not a.available_days or not b.available_days:
            return {
                "score": self.config.neutral_score,
                "shared_days": [],
                "shared_hours": [],
            }

        shared_days = _shared(a.available_days, b.available_days)
        if not shared_days:
            # No common day means no common study time
            return {"score": 0.0, "shared_days": [], "shared_hours": []}

        criteria = self.config.availability
        hours_score = self.config.neutral_score
        shared_hours: List[str] = []

        if a.available_hours and b.available_hours:
            shared_hours = _shared(a.available_hours, b.available_hours)
            hours_score = (
                criteria.hour_overlap_score
                if shared_hours
                else criteria.hour_no_overlap_score
            )

        day_ratio = len(shared_days) / max(len(a.available_days), len(b.available_days))
        score = day_ratio * criteria.day_weight + hours_score * criteria.hour_weight

        return {
            "score": score,
            "shared_days": shared_days,
            "shared_hours": shared_hours,
        }

    def _score_study_style(self, a: Profile, b: Profile) -> Dict[str, Any]:
        """Score study style compatibility"""
        if not a.study_style or not b.study_style:
            return {"score": self.config.neutral_score, "compatible": True}

        style_a = a.study_style.strip().upper()
        style_b = b.study_style.strip().upper()
        criteria = self.config.study_style

        if style_a == style_b:
            return {"score": criteria.same_score, "compatible": True}

        compatible = (
            style_b in criteria.compatible.get(style_a, [])
            or style_a in criteria.compatible.get(style_b, [])
        )
        if compatible:
            return {"score": criteria.compatible_score, "compatible": True}

        return {"score": criteria.incompatible_score, "compatible": False}


# =============================================================================
# Ranking
# =============================================================================

def select_candidates(reference: Profile, candidates: Sequence[Profile]) -> List[Profile]:
    """Drop candidates that are the reference profile itself"""
    if reference.id is None:
        return list(candidates)
    return [c for c in candidates if c.id != reference.id]


def filter_and_rank(
    scored: Sequence[Tuple[Profile, MatchScore]],
    limit: int,
    min_score: int,
) -> List[RankedMatch]:
    """
    Keep scores at or above min_score, sort descending and truncate.

    The sort is stable, so equal scores keep the order they were given in.
    """
    kept = [
        RankedMatch(profile=profile, match_score=match)
        for profile, match in scored
        if match.total_score >= min_score
    ]
    kept.sort(key=lambda r: r.match_score.total_score, reverse=True)
    return kept[: max(limit, 0)]


def score_compatibility(
    a: Profile,
    b: Profile,
    config: Optional[ScoringConfig] = None,
) -> MatchScore:
    """Score two profiles with the given (or default) configuration"""
    return CompatibilityScorer(config).score(a, b)


def rank_candidates(
    reference: Profile,
    candidates: Sequence[Profile],
    limit: int = 10,
    min_score: int = 40,
    config: Optional[ScoringConfig] = None,
) -> List[RankedMatch]:
    """
    Rank a candidate pool against a reference profile.

    Args:
        reference: Profile to find partners for
        candidates: Candidate pool (the reference itself is skipped by id)
        limit: Maximum number of results
        min_score: Minimum total score for inclusion

    Returns:
        Ranked matches, best first; empty when nothing qualifies
    """
    scorer = CompatibilityScorer(config)
    pool = select_candidates(reference, candidates)
    scored = [(candidate, scorer.score(reference, candidate)) for candidate in pool]
    return filter_and_rank(scored, limit, min_score)


# =============================================================================
# Presentation helpers
# =============================================================================

def _quality_for(score: float) -> Tuple[str, str]:
    for min_score, label, color in MATCH_QUALITY_MAPPING:
        if score >= min_score:
            return label, color
    return MATCH_QUALITY_MAPPING[-1][1], MATCH_QUALITY_MAPPING[-1][2]


def get_match_quality_label(score: float) -> str:
    """Map a total score to a human-readable label"""
    return _quality_for(score)[0]


def get_match_quality_color(score: float) -> str:
    """Map a total score to a UI color tag"""
    return _quality_for(score)[1]
