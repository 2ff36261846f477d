import argparse
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from . import __version__
from .env import get_settings, load_env
from .logger import get_logger, reset_logger
from .models import Posting, Profile, Recommendation
from .resume import fetch_resume_text, merge_resume_skills, parse_resume_text
from .schema import validate_postings, validate_profile
from .scorer import exceeds_threshold, rank_postings, calculate_recommendations


def _read_json(path_arg: str, what: str) -> Any:
    path = Path(path_arg)
    if not path.exists():
        raise SystemExit(f"{what} file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise SystemExit(f"{what} file is not valid JSON ({path}): {e}")


def extract_postings(document: Any) -> List[Dict[str, Any]]:
    """Accept either a bare array or {"internships": [...]}."""
    if isinstance(document, dict) and "internships" in document:
        document = document["internships"]
    if not isinstance(document, list):
        raise SystemExit("Postings file must hold a JSON array or an object with an 'internships' array")
    return document


def _print_errors(header: str, errors: List[str]) -> None:
    print(header)
    for e in errors:
        print(f" - {e}")


def _load_inputs(args: argparse.Namespace):
    """Load and validate profile and postings; exit 2 on invalid input."""
    profile_data = _read_json(args.profile, "Profile")
    postings_data = extract_postings(_read_json(args.postings, "Postings"))

    invalid = False
    errors = validate_profile(profile_data)
    if errors:
        _print_errors("Invalid profile:", errors)
        invalid = True
    for index, posting_errors in validate_postings(postings_data):
        _print_errors(f"Invalid posting #{index}:", posting_errors)
        invalid = True
    if invalid:
        raise SystemExit(2)

    profile = Profile.from_dict(profile_data)
    postings = [Posting.from_dict(p) for p in postings_data]
    return profile, postings


def recommend_for_profile(
    profile: Profile,
    postings: Iterable[Posting],
    resume_text: Optional[str] = None,
) -> List[Recommendation]:
    """Rank active postings for a profile, optionally enriched from a resume.

    This is the caller side of the engine: it picks the catalog, folds
    resume skills into the profile and records run metrics.
    """
    logger = get_logger()

    if resume_text:
        parsed = parse_resume_text(resume_text)
        profile = merge_resume_skills(profile, parsed.skills)
        logger.debug("Merged resume skills", user_id=profile.user_id, skills=parsed.skills)

    active = [p for p in postings if p.is_active]
    recommendations = calculate_recommendations(profile, active)

    logger.record_run(len(active), len(recommendations))
    logger.info(
        "Recommendations generated",
        user_id=profile.user_id,
        postings=len(active),
        count=len(recommendations),
    )
    return recommendations


def _resume_text(args: argparse.Namespace) -> Optional[str]:
    if getattr(args, "resume_file", None):
        path = Path(args.resume_file)
        if not path.exists():
            raise SystemExit(f"Resume file not found: {path}")
        return path.read_text(encoding="utf-8")
    if getattr(args, "resume_url", None):
        try:
            return fetch_resume_text(args.resume_url)
        except ValueError as e:
            raise SystemExit(str(e))
    return None


def cmd_recommend(args: argparse.Namespace) -> None:
    profile, postings = _load_inputs(args)
    recommendations = recommend_for_profile(profile, postings, _resume_text(args))
    if args.limit is not None:
        recommendations = recommendations[: args.limit]

    payload = json.dumps([r.to_dict() for r in recommendations], indent=2, ensure_ascii=False)
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload + "\n", encoding="utf-8")
        print(f"Wrote {len(recommendations)} recommendations to {out}")
    else:
        print(payload)


def cmd_score(args: argparse.Namespace) -> None:
    profile, postings = _load_inputs(args)
    active = [p for p in postings if p.is_active]
    if not active:
        print("No active postings.")
        return

    for posting, scores in rank_postings(profile, active):
        marker = "" if exceeds_threshold(scores.total) else "  (below threshold)"
        print(f"ID: {posting.id}  {posting.title}{marker}")
        print(f"  Total: {scores.total:.3f}")
        print(
            f"  Skills: {scores.skills:.2f}  Experience: {scores.experience:.2f}  "
            f"Location: {scores.location:.2f}  Interests: {scores.interests:.2f}"
        )
        print()


def cmd_validate(args: argparse.Namespace) -> None:
    if not args.profile and not args.postings:
        raise SystemExit("Nothing to validate. Pass --profile and/or --postings.")

    invalid = False
    if args.profile:
        errors = validate_profile(_read_json(args.profile, "Profile"))
        if errors:
            _print_errors("Invalid profile:", errors)
            invalid = True
    if args.postings:
        postings = extract_postings(_read_json(args.postings, "Postings"))
        for index, errors in validate_postings(postings):
            _print_errors(f"Invalid posting #{index}:", errors)
            invalid = True
    if invalid:
        raise SystemExit(2)
    print("Valid")


def cmd_parse_resume(args: argparse.Namespace) -> None:
    if args.input:
        path = Path(args.input)
        if not path.exists():
            raise SystemExit(f"Input file not found: {path}")
        text = path.read_text(encoding="utf-8")
    else:
        try:
            text = fetch_resume_text(args.url)
        except ValueError as e:
            raise SystemExit(str(e))
    print(json.dumps(parse_resume_text(text).to_dict(), indent=2))


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="internmatch", description="Internship match scoring CLI")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    rec = subparsers.add_parser("recommend", help="Rank postings for a profile and print recommendation records")
    rec.add_argument("--profile", required=True, help="Path to profile JSON")
    rec.add_argument("--postings", required=True, help="Path to postings JSON (array or {\"internships\": [...]})")
    resume = rec.add_mutually_exclusive_group()
    resume.add_argument("--resume-file", help="Plain-text resume whose skills are added to the profile")
    resume.add_argument("--resume-url", help="Text or HTML resume URL whose skills are added to the profile")
    rec.add_argument("--limit", type=non_negative_int, help="Keep only the top N recommendations")
    rec.add_argument("--output", help="Write JSON here instead of stdout")
    rec.set_defaults(func=cmd_recommend)

    sco = subparsers.add_parser("score", help="Show the score breakdown for every active posting")
    sco.add_argument("--profile", required=True, help="Path to profile JSON")
    sco.add_argument("--postings", required=True, help="Path to postings JSON")
    sco.set_defaults(func=cmd_score)

    val = subparsers.add_parser("validate", help="Validate profile and/or postings JSON")
    val.add_argument("--profile", help="Path to profile JSON")
    val.add_argument("--postings", help="Path to postings JSON")
    val.set_defaults(func=cmd_validate)

    prs = subparsers.add_parser("parse-resume", help="Extract skills, experience and education keywords from a resume")
    src = prs.add_mutually_exclusive_group(required=True)
    src.add_argument("--input", help="Path to a plain-text resume")
    src.add_argument("--url", help="Text or HTML resume URL")
    prs.set_defaults(func=cmd_parse_resume)

    return parser


def main(argv: Optional[List[str]] = None):
    # Load .env if present (INTERNMATCH_LOG_LEVEL, INTERNMATCH_RESUME_TIMEOUT, etc.)
    load_env()
    settings = get_settings()
    reset_logger()
    get_logger(level=settings.log_level, log_dir=settings.log_dir, enable_file=settings.log_to_file)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
