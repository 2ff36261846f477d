"""
Value objects passed into and out of the match-scoring engine.

Profiles and postings usually arrive as JSON documents; ``from_dict`` is
tolerant of missing fields (absent lists become empty, absent strings
become None) so the engine can stay total over its input domain.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

EXPERIENCE_LEVELS = ("beginner", "intermediate", "advanced")


def _string_list(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple, set, frozenset)):
        return ()
    return tuple(v for v in value if isinstance(v, str) and v.strip())


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value != "":
        return value
    return None


def _optional_amount(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


@dataclass(frozen=True)
class Profile:
    """A user's declared skills, interests, experience tier and location."""

    user_id: str
    skills: Tuple[str, ...] = ()
    interests: Tuple[str, ...] = ()
    experience_level: Optional[str] = None
    preferred_location: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        user_id = data.get("user_id")
        return cls(
            user_id="" if user_id is None else str(user_id),
            skills=_string_list(data.get("skills")),
            interests=_string_list(data.get("interests")),
            experience_level=_optional_str(data.get("experience_level")),
            preferred_location=_optional_str(data.get("preferred_location")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "skills": list(self.skills),
            "interests": list(self.interests),
            "experience_level": self.experience_level,
            "preferred_location": self.preferred_location,
        }


@dataclass(frozen=True)
class Posting:
    """An internship listing."""

    id: str
    title: str = ""
    description: str = ""
    requirements: Tuple[str, ...] = ()
    skills_required: Tuple[str, ...] = ()
    location: Optional[str] = None
    remote: bool = False
    stipend_amount: Optional[float] = None
    stipend_currency: str = "USD"
    company_id: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Posting":
        posting_id = data.get("id")
        company_id = data.get("company_id")
        return cls(
            id="" if posting_id is None else str(posting_id),
            title=_optional_str(data.get("title")) or "",
            description=_optional_str(data.get("description")) or "",
            requirements=_string_list(data.get("requirements")),
            skills_required=_string_list(data.get("skills_required")),
            location=_optional_str(data.get("location")),
            remote=data.get("remote") is True,
            stipend_amount=_optional_amount(data.get("stipend_amount")),
            stipend_currency=_optional_str(data.get("stipend_currency")) or "USD",
            company_id=None if company_id is None else str(company_id),
            is_active=data.get("is_active", True) is not False,
        )


@dataclass(frozen=True)
class MatchScore:
    """Weighted total and the four sub-scores, all in [0, 1]."""

    total: float
    skills: float
    experience: float
    location: float
    interests: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "total": self.total,
            "skills": self.skills,
            "experience": self.experience,
            "location": self.location,
            "interests": self.interests,
        }


@dataclass(frozen=True)
class Recommendation:
    user_id: str
    internship_id: str
    match_score: int
    reasoning: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def reasoning_text(self) -> str:
        return ", ".join(self.reasoning)

    def to_dict(self) -> Dict[str, Any]:
        """Record shape stored and served by the web application."""
        return {
            "user_id": self.user_id,
            "internship_id": self.internship_id,
            "match_score": self.match_score,
            "reasoning": self.reasoning_text,
        }
