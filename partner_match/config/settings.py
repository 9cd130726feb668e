"""
Configuration settings for the Partner Matching Engine
"""

from typing import Dict, List, Any
import os

# =============================================================================
# SERVER CONFIGURATION
# =============================================================================

SERVER_CONFIG = {
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT", "8000")),
    "log_level": os.getenv("LOG_LEVEL", "INFO"),
    "log_file": os.getenv("LOG_FILE") or None,
}

# =============================================================================
# ENGINE CONFIGURATION
# =============================================================================

ENGINE_CONFIG = {
    "max_workers": int(os.getenv("MATCH_MAX_WORKERS", "4")),
    # Candidate pools at least this large are scored on a thread pool
    "parallel_threshold": int(os.getenv("MATCH_PARALLEL_THRESHOLD", "200")),
    "default_limit": int(os.getenv("MATCH_DEFAULT_LIMIT", "10")),
    "default_min_score": int(os.getenv("MATCH_DEFAULT_MIN_SCORE", "40")),
}

# =============================================================================
# DEFAULT SCORING WEIGHTS
# =============================================================================

DEFAULT_WEIGHTS = {
    "subjects": 0.35,
    "timezone": 0.25,
    "skill_level": 0.15,
    "availability": 0.15,
    "study_style": 0.10,
}

# Score assigned when a factor cannot be evaluated
NEUTRAL_SCORE = 0.5

# =============================================================================
# SUBJECTS
# =============================================================================

SUBJECT_SCORING = {
    "bonus_per_extra_shared": 0.1,
    "max_bonus_multiplier": 1.5,
}

# =============================================================================
# TIMEZONE
# =============================================================================

# (max_difference, base, slope, start): score = base - slope * (d - start)
# The last band is open-ended and floored at 0.
TIMEZONE_BANDS: List[Dict[str, Any]] = [
    {"max_difference": 2, "base": 1.0, "slope": 0.05, "start": 0},
    {"max_difference": 5, "base": 0.85, "slope": 0.05, "start": 2},
    {"max_difference": 8, "base": 0.7, "slope": 0.06, "start": 5},
    {"max_difference": None, "base": 0.3, "slope": 0.02, "start": 8},
]

TIMEZONE_COMPATIBLE_MAX_DIFFERENCE = 8

# =============================================================================
# SKILL LEVEL
# =============================================================================

SKILL_LEVEL_ORDER = ["BEGINNER", "INTERMEDIATE", "ADVANCED", "EXPERT"]

SKILL_DISTANCE_SCORES = {
    0: 1.0,
    1: 0.9,
    2: 0.7,
    3: 0.5,
}

SKILL_DISTANCE_DEFAULT = 0.3

# =============================================================================
# AVAILABILITY
# =============================================================================

AVAILABILITY_SCORING = {
    "day_weight": 0.6,
    "hour_weight": 0.4,
    "hour_overlap_score": 1.0,
    "hour_no_overlap_score": 0.3,
}

# =============================================================================
# STUDY STYLE
# =============================================================================

COMPATIBLE_STYLES = {
    "COLLABORATIVE": ["COLLABORATIVE", "MIXED"],
    "INDEPENDENT": ["INDEPENDENT", "SOLO", "MIXED"],
    "MIXED": ["COLLABORATIVE", "INDEPENDENT", "MIXED", "VISUAL", "AUDITORY"],
    "VISUAL": ["VISUAL", "MIXED"],
    "AUDITORY": ["AUDITORY", "MIXED"],
    "KINESTHETIC": ["KINESTHETIC", "MIXED"],
    "READING_WRITING": ["READING_WRITING", "MIXED"],
    "SOLO": ["SOLO", "INDEPENDENT", "MIXED"],
}

STYLE_SCORING = {
    "same": 1.0,
    "compatible": 0.8,
    "incompatible": 0.3,
}

# =============================================================================
# MATCH QUALITY MAPPING
# =============================================================================

MATCH_QUALITY_MAPPING = [
    (80, "Excellent Match", "green"),
    (70, "Great Match", "blue"),
    (60, "Good Match", "cyan"),
    (50, "Fair Match", "yellow"),
    (40, "Possible Match", "orange"),
    (0, "Low Match", "gray"),
]
