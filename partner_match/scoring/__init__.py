# Compatibility scoring module
from .scorer import (
    CompatibilityScorer,
    score_compatibility,
    rank_candidates,
    get_match_quality_label,
    get_match_quality_color,
)
