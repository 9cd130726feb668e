"""
FastAPI Endpoints for the Partner Matching Engine
=================================================
RESTful API for study-partner compatibility scoring.

Base URL: http://localhost:8000

Endpoints:
- GET  /                            - API info
- GET  /api/health                  - Health check
- POST /api/match/score             - Score two profiles
- POST /api/match/rank              - Rank candidates for a profile
- GET  /api/match/quality           - Label and color for a score
- POST /api/match/configure         - Register a weight profile
- GET  /api/match/configure         - List weight profiles
- GET  /api/match/configure/{id}    - Get a weight profile
- DELETE /api/match/configure/{id}  - Delete a weight profile
- GET  /api/stats                   - Engine statistics
"""

import logging
import time
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional, Dict
from datetime import datetime

from ..models.schemas import (
    ScoreRequest,
    ScoreResponse,
    RankRequest,
    RankResponse,
    RankedMatchResponse,
    QualityResponse,
)
from ..models.scoring_config import ScoringConfig
from ..scoring.scorer import get_match_quality_label, get_match_quality_color
from ..engine import MatchingEngine

logger = logging.getLogger(__name__)


# =============================================================================
# FastAPI App Initialization
# =============================================================================

app = FastAPI(
    title="Partner Matching Engine API",
    description="""
## Study Partner Compatibility Scoring

Scores how well two students would study together and ranks candidate
partners for a student.

### Factors:
- **Subjects** (35%), **Timezone** (25%), **Skill Level** (15%),
  **Availability** (15%), **Study Style** (10%)

### Quick Start:
1. Use `/api/match/score` to compare two profiles
2. Use `/api/match/rank` to rank a candidate pool
3. Register alternate weights with `/api/match/configure` and pass `configId`
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Storage & Engine Initialization
# =============================================================================

# In-memory registry of custom weight profiles
scoring_configs: Dict[str, ScoringConfig] = {}
engines: Dict[str, MatchingEngine] = {}

default_engine = MatchingEngine()


# =============================================================================
# Health & Info Endpoints
# =============================================================================

@app.get("/", tags=["Info"])
async def root():
    """API information and available endpoints"""
    return {
        "service": "Partner Matching Engine",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "Score": "POST /api/match/score",
            "Rank": "POST /api/match/rank",
            "Quality": "GET /api/match/quality",
            "Configure": "POST /api/match/configure",
            "Health": "GET /api/health",
        },
    }


@app.get("/api/health", tags=["Info"])
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "service": "Partner Matching Engine",
        "version": "1.0.0",
        "timestamp": datetime.utcnow().isoformat(),
        "weight_profiles": len(scoring_configs),
    }


# =============================================================================
# Matching Endpoints
# =============================================================================

@app.post("/api/match/score", response_model=ScoreResponse, tags=["Matching"])
async def score_pair(request: ScoreRequest):
    """
    Score how compatible profileB is with profileA.

    Missing profile fields resolve to neutral sub-scores, never errors.
    """
    engine = _get_engine(request.config_id)
    match_score = engine.score_pair(request.profile_a, request.profile_b)

    return ScoreResponse(
        match_score=match_score,
        label=get_match_quality_label(match_score.total_score),
        color=get_match_quality_color(match_score.total_score),
    )


@app.post("/api/match/rank", response_model=RankResponse, tags=["Matching"])
async def rank_candidates(request: RankRequest):
    """
    Rank candidate partners for a reference profile.

    - The reference itself is skipped (matched by id)
    - Only candidates scoring at least `minScore` are returned
    - Results sorted by score, at most `limit`
    """
    engine = _get_engine(request.config_id)
    start_time = time.time()

    ranked = engine.rank_candidates(
        reference=request.reference,
        candidates=request.candidates,
        limit=request.limit,
        min_score=request.min_score,
    )

    return RankResponse(
        total_candidates=len(request.candidates),
        returned=len(ranked),
        processing_time_ms=round((time.time() - start_time) * 1000, 2),
        results=[
            RankedMatchResponse(
                profile=r.profile,
                match_score=r.match_score,
                label=get_match_quality_label(r.match_score.total_score),
                color=get_match_quality_color(r.match_score.total_score),
            )
            for r in ranked
        ],
    )


@app.get("/api/match/quality", response_model=QualityResponse, tags=["Matching"])
async def match_quality(score: int = Query(..., ge=0, le=100, description="Total score")):
    """Label and color tag for a total score"""
    return QualityResponse(
        score=score,
        label=get_match_quality_label(score),
        color=get_match_quality_color(score),
    )


# =============================================================================
# Weight Profile Endpoints
# =============================================================================

@app.post("/api/match/configure", tags=["Configuration"])
async def create_scoring_config(config: ScoringConfig):
    """Register a weight profile"""
    scoring_configs[config.config_id] = config
    engines[config.config_id] = MatchingEngine(config=config)
    logger.info("Registered weight profile %s (%s)", config.config_id, config.name)

    return {
        "config_id": config.config_id,
        "status": "created",
        "message": "Weight profile saved successfully",
    }


@app.get("/api/match/configure", tags=["Configuration"])
async def list_configs():
    """List all weight profiles"""
    return {
        "count": len(scoring_configs),
        "configs": [
            {"config_id": c.config_id, "name": c.name, "created_at": c.created_at.isoformat()}
            for c in scoring_configs.values()
        ],
    }


@app.get("/api/match/configure/{config_id}", tags=["Configuration"])
async def get_config(config_id: str):
    """Get a weight profile by ID"""
    if config_id not in scoring_configs:
        raise HTTPException(status_code=404, detail="Weight profile not found")
    return scoring_configs[config_id]


@app.delete("/api/match/configure/{config_id}", tags=["Configuration"])
async def delete_config(config_id: str):
    """Delete a weight profile"""
    if config_id not in scoring_configs:
        raise HTTPException(status_code=404, detail="Weight profile not found")
    del scoring_configs[config_id]
    engines.pop(config_id, None)
    logger.info("Deleted weight profile %s", config_id)
    return {"status": "deleted", "config_id": config_id}


# =============================================================================
# Statistics
# =============================================================================

@app.get("/api/stats", tags=["Info"])
async def get_stats():
    """Get engine statistics"""
    return {
        "default_engine": default_engine.get_stats(),
        "custom_configs": len(scoring_configs),
    }


# =============================================================================
# Helper Functions
# =============================================================================

def _get_engine(config_id: Optional[str] = None) -> MatchingEngine:
    """Get engine by weight profile ID or return default"""
    if config_id is None:
        return default_engine
    if config_id not in engines:
        raise HTTPException(status_code=404, detail=f"Weight profile not found: {config_id}")
    return engines[config_id]


# =============================================================================
# Error Handlers
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "type": type(exc).__name__,
        },
    )
