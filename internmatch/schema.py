from typing import Any, Dict, List, Tuple

from .models import EXPERIENCE_LEVELS

PROFILE_REQUIRED_STR_FIELDS = ["user_id"]
PROFILE_LIST_FIELDS = ["skills", "interests"]
PROFILE_OPTIONAL_STR_FIELDS = ["experience_level", "preferred_location"]

POSTING_REQUIRED_STR_FIELDS = ["id", "title"]
POSTING_LIST_FIELDS = ["requirements", "skills_required"]
POSTING_OPTIONAL_STR_FIELDS = [
    "description",
    "location",
    "company_id",
    "stipend_currency",
]
POSTING_BOOL_FIELDS = ["remote", "is_active"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_identifier(v: Any) -> bool:
    # JSON ids are often numeric; bool is an int subclass but never an id
    if isinstance(v, bool):
        return False
    return _is_non_empty_str(v) or isinstance(v, int)


def _check_required(data: Dict[str, Any], fields: List[str], errors: List[str]) -> None:
    for f in fields:
        if f not in data or data[f] is None:
            errors.append(f"Missing required field: {f}")
        elif f in ("id", "user_id"):
            if not _is_identifier(data[f]):
                errors.append(f"Field '{f}' must be a non-empty string or integer")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")


def _check_lists(data: Dict[str, Any], fields: List[str], errors: List[str]) -> None:
    for f in fields:
        v = data.get(f)
        if v is None:
            continue
        if not isinstance(v, list):
            errors.append(f"Field '{f}' must be a list of strings if provided")
        elif not all(isinstance(item, str) for item in v):
            errors.append(f"Field '{f}' must contain only strings")


def _check_optional_strs(data: Dict[str, Any], fields: List[str], errors: List[str]) -> None:
    for f in fields:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")


def validate_profile(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Profile must be a JSON object"]

    errors: List[str] = []
    _check_required(data, PROFILE_REQUIRED_STR_FIELDS, errors)
    _check_lists(data, PROFILE_LIST_FIELDS, errors)
    _check_optional_strs(data, PROFILE_OPTIONAL_STR_FIELDS, errors)

    level = data.get("experience_level")
    if isinstance(level, str) and level and level.lower() not in EXPERIENCE_LEVELS:
        errors.append(
            f"Field 'experience_level' must be one of {', '.join(EXPERIENCE_LEVELS)}"
        )

    return errors


def validate_posting(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Posting must be a JSON object"]

    errors: List[str] = []
    _check_required(data, POSTING_REQUIRED_STR_FIELDS, errors)
    _check_lists(data, POSTING_LIST_FIELDS, errors)
    _check_optional_strs(data, POSTING_OPTIONAL_STR_FIELDS, errors)

    for f in POSTING_BOOL_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], bool):
            errors.append(f"Field '{f}' must be true or false if provided")

    amount = data.get("stipend_amount")
    if amount is not None:
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            errors.append("Field 'stipend_amount' must be a number if provided")
        elif amount < 0:
            errors.append("Field 'stipend_amount' must not be negative")

    return errors


def validate_postings(items: List[Dict[str, Any]]) -> List[Tuple[int, List[str]]]:
    """Validate a catalog; returns (index, errors) for each invalid posting."""
    problems = []
    for index, item in enumerate(items):
        errors = validate_posting(item)
        if errors:
            problems.append((index, errors))
    return problems
