"""Internship match scoring: ranked, explained recommendations for a profile."""

__version__ = "0.1.0"

from .models import MatchScore, Posting, Profile, Recommendation
from .scorer import calculate_match_score, calculate_recommendations, generate_reasoning

__all__ = [
    "MatchScore",
    "Posting",
    "Profile",
    "Recommendation",
    "calculate_match_score",
    "calculate_recommendations",
    "generate_reasoning",
]
