"""
Partner Matching Engine
=======================
Weighted compatibility scoring for study partners:
  Subjects (35%), Timezone (25%), Skill Level (15%),
  Availability (15%), Study Style (10%)

Scores two profiles on a 0-100 scale and ranks candidate pools.
"""

__version__ = "1.0.0"
__author__ = "Partner Matching Team"
