"""Pytest fixtures for Partner Matching Engine tests."""
import importlib

import pytest

from partner_match.config import settings
from partner_match.models.schemas import Profile


# =============================================================================
# PROFILE FIXTURES
# =============================================================================


@pytest.fixture
def full_profile():
    """A profile with every scored field populated."""
    return Profile(
        id="alice",
        subjects=["Math", "Physics"],
        timezone="UTC+1",
        skill_level="INTERMEDIATE",
        available_days=["Monday", "Wednesday", "Friday"],
        available_hours=["Morning", "Evening"],
        study_style="COLLABORATIVE",
        goals=["Pass finals"],
        interests=["Chess"],
    )


@pytest.fixture
def profile_a():
    """Reference profile from the worked example."""
    return Profile(
        id="a",
        subjects=["Math", "CS"],
        timezone="UTC+3",
        skill_level="BEGINNER",
        available_days=["Monday", "Wednesday"],
        study_style="COLLABORATIVE",
    )


@pytest.fixture
def profile_b():
    """Counterpart to profile_a."""
    return Profile(
        id="b",
        subjects=["math", "physics"],
        timezone="UTC-2",
        skill_level="ADVANCED",
        available_days=["monday"],
        study_style="MIXED",
    )


@pytest.fixture
def empty_profile():
    """A profile with nothing but an id."""
    return Profile(id="empty")


@pytest.fixture
def candidate_pool(full_profile):
    """Mixed-quality candidates for ranking tests, including the reference itself."""
    return [
        full_profile,
        Profile(
            id="twin",
            subjects=["math", "physics"],
            timezone="UTC+1",
            skill_level="INTERMEDIATE",
            available_days=["monday", "wednesday", "friday"],
            available_hours=["morning"],
            study_style="COLLABORATIVE",
        ),
        Profile(
            id="close",
            subjects=["Math", "Biology"],
            timezone="UTC+2",
            skill_level="ADVANCED",
            available_days=["Monday"],
            study_style="MIXED",
        ),
        Profile(
            id="far",
            subjects=["History"],
            timezone="UTC-10",
            skill_level="EXPERT",
            available_days=["Sunday"],
            study_style="SOLO",
        ),
        Profile(id="blank"),
    ]


# =============================================================================
# SETTINGS FIXTURES
# =============================================================================


@pytest.fixture
def reload_settings(monkeypatch):
    """Re-read settings from the given environment, restoring them afterwards."""

    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        importlib.reload(settings)
        return settings

    yield _reload
    monkeypatch.undo()
    importlib.reload(settings)
