"""
Partner Matching Engine - Main Orchestrator
===========================================
Wraps the compatibility scorer with:
- Candidate ranking with optional parallel scoring for large pools
- Runtime statistics
- Hot-swappable scoring configuration

Scoring itself is pure, so candidates can be scored on any thread
without coordination.
"""

import logging
import threading
import time
from typing import Optional, List, Dict, Any, Sequence
from concurrent.futures import ThreadPoolExecutor

from .models.schemas import Profile, MatchScore, RankedMatch
from .models.scoring_config import ScoringConfig, create_default_scoring_config
from .scoring.scorer import CompatibilityScorer, select_candidates, filter_and_rank
from .config import settings

logger = logging.getLogger(__name__)


class MatchingEngine:
    """
    Scores profile pairs and ranks candidate pools.
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        max_workers: Optional[int] = None,
        parallel_threshold: Optional[int] = None,
    ):
        """
        Initialize the matching engine.

        Args:
            config: Scoring configuration (uses defaults if not provided)
            max_workers: Thread pool size for large candidate pools
            parallel_threshold: Pool size at which scoring fans out to threads
        """
        self.config = config or create_default_scoring_config()
        self.scorer = CompatibilityScorer(self.config)
        self.max_workers = max_workers or settings.ENGINE_CONFIG["max_workers"]
        self.parallel_threshold = (
            parallel_threshold
            if parallel_threshold is not None
            else settings.ENGINE_CONFIG["parallel_threshold"]
        )

        self._lock = threading.Lock()
        self.stats = self._empty_stats()

    def score_pair(self, a: Profile, b: Profile) -> MatchScore:
        """Score profile b against profile a"""
        result = self.scorer.score(a, b)
        with self._lock:
            self.stats["total_comparisons"] += 1
        return result

    def rank_candidates(
        self,
        reference: Profile,
        candidates: Sequence[Profile],
        limit: Optional[int] = None,
        min_score: Optional[int] = None,
    ) -> List[RankedMatch]:
        """
        Rank candidates against a reference profile.

        Args:
            reference: Profile to find partners for
            candidates: Candidate pool
            limit: Maximum number of results (default from ENGINE_CONFIG)
            min_score: Minimum total score for inclusion (default from ENGINE_CONFIG)

        Returns:
            Ranked matches, best first. Equal scores keep input order.
        """
        if limit is None:
            limit = settings.ENGINE_CONFIG["default_limit"]
        if min_score is None:
            min_score = settings.ENGINE_CONFIG["default_min_score"]

        start_time = time.time()
        scorer = self.scorer
        pool = select_candidates(reference, candidates)

        if len(pool) >= self.parallel_threshold and self.max_workers > 1:
            logger.debug(
                "Scoring %d candidates on %d workers", len(pool), self.max_workers
            )
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # map() yields in submission order
                scores = list(
                    executor.map(lambda candidate: scorer.score(reference, candidate), pool)
                )
        else:
            scores = [scorer.score(reference, candidate) for candidate in pool]

        results = filter_and_rank(list(zip(pool, scores)), limit, min_score)

        total_time = (time.time() - start_time) * 1000
        with self._lock:
            self.stats["total_comparisons"] += len(pool)
            self.stats["total_rankings"] += 1
            self.stats["total_matches_returned"] += len(results)
            self.stats["total_processing_time_ms"] += total_time

        logger.info(
            "Ranked %d candidates for %s: %d returned (min_score=%d, limit=%d) in %.2fms",
            len(pool),
            reference.id or "<anonymous>",
            len(results),
            min_score,
            limit,
            total_time,
        )
        return results

    def update_config(self, new_config: ScoringConfig):
        """Swap in a new scoring configuration"""
        self.config = new_config
        self.scorer = CompatibilityScorer(new_config)
        logger.info("Scoring config updated to '%s'", new_config.name)

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics"""
        with self._lock:
            stats = self.stats.copy()
        if stats["total_rankings"] > 0:
            stats["avg_matches_per_ranking"] = round(
                stats["total_matches_returned"] / stats["total_rankings"], 2
            )
            stats["avg_ranking_time_ms"] = round(
                stats["total_processing_time_ms"] / stats["total_rankings"], 2
            )
        stats["total_processing_time_ms"] = round(stats["total_processing_time_ms"], 2)
        return stats

    def reset_stats(self):
        """Reset engine statistics"""
        with self._lock:
            self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_comparisons": 0,
            "total_rankings": 0,
            "total_matches_returned": 0,
            "total_processing_time_ms": 0.0,
        }


# =============================================================================
# Convenience Functions
# =============================================================================

def create_engine(
    weights: Optional[Dict[str, float]] = None,
    max_workers: Optional[int] = None,
) -> MatchingEngine:
    """
    Factory function to create a MatchingEngine with custom weights.

    Args:
        weights: Partial weight overrides, e.g. {"subjects": 0.45, "study_style": 0.0}
        max_workers: Thread pool size for large pools

    Returns:
        Configured MatchingEngine instance
    """
    config = create_default_scoring_config(name="Custom", weights=weights)
    return MatchingEngine(config=config, max_workers=max_workers)


def quick_score(profile_a: Dict[str, Any], profile_b: Dict[str, Any]) -> MatchScore:
    """
    Quick scoring function for two profiles given as dictionaries.

    Accepts snake_case or camelCase keys.
    """
    engine = MatchingEngine()
    return engine.score_pair(
        Profile.model_validate(profile_a),
        Profile.model_validate(profile_b),
    )
