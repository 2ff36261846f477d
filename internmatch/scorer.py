"""
Match scoring for (profile, posting) pairs.

Responsibilities:
- Compute four independent sub-scores in [0, 1] and their weighted total.
- Emit human-readable reasoning for a score breakdown.
- Rank a batch of postings and drop those below the inclusion threshold.

Non-Responsibilities:
- No persistence.
- No input validation (see schema.py).

Invariant:
Given identical inputs, this module must always return the same scores,
the same reasoning and the same order.
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .logger import get_logger
from .models import MatchScore, Posting, Profile, Recommendation
from .similarity import (
    are_synonyms,
    extract_state_code,
    normalize,
    related_interest_terms,
    tokens_overlap,
)

WEIGHTS = {
    "skills": 0.4,
    "experience": 0.2,
    "location": 0.2,
    "interests": 0.2,
}

INCLUSION_THRESHOLD = 0.3
FALLBACK_REASONING = "Good overall match"
COMPETITIVE_STIPEND = 4000

# Float sums such as 0.1 + 0.1 + 0.1 land a hair above 0.3.
_THRESHOLD_EPSILON = 1e-9

NEUTRAL = 0.5

EXACT_TIER_CUES = {
    "beginner": ("entry", "beginner", "no experience"),
    "intermediate": ("intermediate", "some experience"),
    "advanced": ("advanced", "senior", "experienced"),
}

OVERQUALIFIED_CUES = {
    "advanced": ("intermediate", "beginner"),
    "intermediate": ("beginner",),
}


def round_half_up(value: float) -> int:
    """Round .5 upwards instead of to the nearest even integer."""
    return int(math.floor(value + 0.5))


def skills_score(profile_skills: Iterable[str], required_skills: Sequence[str]) -> float:
    """
    Fraction of required skills covered by the profile.

    A requirement is covered when any profile skill contains it, is
    contained by it, or is a listed synonym. Each requirement counts once.
    """
    required = [normalize(s) for s in required_skills]
    if not required:
        return NEUTRAL

    owned = [normalize(s) for s in profile_skills]
    matched = [
        skill for skill in required
        if any(tokens_overlap(mine, skill) or are_synonyms(mine, skill) for mine in owned)
    ]
    return len(matched) / len(required)


def experience_score(level: Optional[str], requirements: Sequence[str]) -> float:
    if not level:
        return NEUTRAL

    text = normalize(" ".join(requirements))
    level = normalize(level)

    if any(cue in text for cue in EXACT_TIER_CUES.get(level, ())):
        return 1.0
    if any(cue in text for cue in OVERQUALIFIED_CUES.get(level, ())):
        return 0.8
    return 0.6


def location_score(preferred: Optional[str], location: Optional[str], remote: bool) -> float:
    if remote:
        return 1.0
    if not preferred or not location:
        return NEUTRAL

    mine = normalize(preferred)
    theirs = normalize(location)

    if mine == theirs:
        return 1.0
    if mine in theirs or theirs in mine:
        return 0.8

    my_state = extract_state_code(mine)
    their_state = extract_state_code(theirs)
    if my_state and their_state and my_state == their_state:
        return 0.6

    # A "remote" preference cannot be met here: the posting is on-site.
    return 0.3


def interests_score(interests: Sequence[str], description: str, title: str) -> float:
    if not interests:
        return NEUTRAL

    content = normalize(f"{description or ''} {title or ''}")

    def _matches(interest: str) -> bool:
        interest = normalize(interest)
        if interest in content:
            return True
        terms = related_interest_terms(interest)
        return bool(terms) and any(term in content for term in terms)

    matched = [i for i in interests if _matches(i)]
    return len(matched) / len(interests)


def calculate_match_score(profile: Profile, posting: Posting) -> MatchScore:
    skills = skills_score(profile.skills, posting.skills_required)
    experience = experience_score(profile.experience_level, posting.requirements)
    location = location_score(profile.preferred_location, posting.location, posting.remote)
    interests = interests_score(profile.interests, posting.description, posting.title)

    total = (
        skills * WEIGHTS["skills"]
        + experience * WEIGHTS["experience"]
        + location * WEIGHTS["location"]
        + interests * WEIGHTS["interests"]
    )
    return MatchScore(
        total=total,
        skills=skills,
        experience=experience,
        location=location,
        interests=interests,
    )


def generate_reasoning(profile: Profile, posting: Posting, scores: MatchScore) -> List[str]:
    """
    Explain a score breakdown, one category at a time, in a fixed order.

    May return an empty list; the fallback text is applied by the caller.
    """
    reasoning: List[str] = []

    if scores.skills > 0.7:
        reasoning.append(f"Excellent skills match ({round_half_up(scores.skills * 100)}%)")
    elif scores.skills > 0.5:
        reasoning.append(f"Good skills match ({round_half_up(scores.skills * 100)}%)")

    if scores.experience > 0.8:
        reasoning.append("Perfect experience level fit")
    elif scores.experience > 0.6:
        reasoning.append("Experience level aligns well")

    if scores.location > 0.8:
        reasoning.append("Great location match")
    elif posting.remote:
        reasoning.append("Remote work available")

    if scores.interests > 0.6:
        reasoning.append("Aligns with your interests")

    if posting.stipend_amount is not None and posting.stipend_amount >= COMPETITIVE_STIPEND:
        reasoning.append("Competitive compensation")

    return reasoning


def exceeds_threshold(total: float) -> bool:
    return total - INCLUSION_THRESHOLD > _THRESHOLD_EPSILON


def rank_postings(profile: Profile, postings: Iterable[Posting]) -> List[Tuple[Posting, MatchScore]]:
    """Score every posting, best first, without applying the threshold."""
    scored = [(posting, calculate_match_score(profile, posting)) for posting in postings]
    scored.sort(key=lambda pair: pair[1].total, reverse=True)
    return scored


def calculate_recommendations(profile: Profile, postings: Iterable[Posting]) -> List[Recommendation]:
    """
    Rank postings for a profile.

    Args:
        profile: The user's profile
        postings: Candidate internship postings, in catalog order

    Returns:
        Recommendations whose total score exceeds INCLUSION_THRESHOLD,
        sorted by match_score descending; ties keep catalog order
    """
    logger = get_logger()
    recommendations: List[Recommendation] = []

    for posting in postings:
        scores = calculate_match_score(profile, posting)
        if not exceeds_threshold(scores.total):
            logger.debug(
                "Posting below threshold",
                user_id=profile.user_id,
                internship_id=posting.id,
                total=round(scores.total, 4),
            )
            continue

        reasoning = generate_reasoning(profile, posting, scores) or [FALLBACK_REASONING]
        recommendations.append(
            Recommendation(
                user_id=profile.user_id,
                internship_id=posting.id,
                match_score=round_half_up(scores.total * 100),
                reasoning=tuple(reasoning),
            )
        )

    # list.sort is stable, so equal scores keep catalog order
    recommendations.sort(key=lambda r: r.match_score, reverse=True)
    return recommendations
