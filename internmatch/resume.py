"""
Resume text as a source of profile skills.

Parses plain resume text for known skills, experience and education
keywords, and fetches that text from a resume URL. Only text and HTML
resumes are read; PDF and Word documents must be converted to text by
the caller.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

import requests
from bs4 import BeautifulSoup

from .env import get_settings
from .logger import get_logger
from .models import Profile
from .retry import RetryError, TransientHTTPError, exponential_backoff, should_retry_http_status
from .similarity import normalize

COMMON_SKILLS = [
    "JavaScript",
    "Python",
    "Java",
    "C++",
    "React",
    "Node.js",
    "TypeScript",
    "SQL",
    "HTML",
    "CSS",
    "Git",
    "Docker",
    "AWS",
    "Machine Learning",
    "Data Analysis",
    "UI/UX",
    "Mobile Development",
    "API Development",
]

EXPERIENCE_KEYWORDS = ["intern", "developer", "engineer", "analyst", "designer"]
EDUCATION_KEYWORDS = ["university", "college", "bachelor", "master", "degree"]

TEXT_CONTENT_TYPES = ("text/plain", "text/markdown")
HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


@dataclass(frozen=True)
class ParsedResume:
    skills: List[str] = field(default_factory=list)
    experience: List[str] = field(default_factory=list)
    education: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "skills": list(self.skills),
            "experience": list(self.experience),
            "education": list(self.education),
        }


def parse_resume_text(text: Optional[str]) -> ParsedResume:
    """Keyword scan of resume text; matching is case-insensitive substring."""
    content = normalize(text)
    return ParsedResume(
        skills=[s for s in COMMON_SKILLS if normalize(s) in content],
        experience=[k for k in EXPERIENCE_KEYWORDS if k in content],
        education=[k for k in EDUCATION_KEYWORDS if k in content],
    )


def merge_resume_skills(profile: Profile, skills: Iterable[str]) -> Profile:
    """Return a copy of the profile with new skills appended, skipping
    case-insensitive duplicates. The given profile is untouched."""
    seen = {normalize(s) for s in profile.skills}
    merged = list(profile.skills)
    for skill in skills:
        key = normalize(skill)
        if key and key not in seen:
            seen.add(key)
            merged.append(skill)
    return replace(profile, skills=tuple(merged))


def html_to_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text(" ", strip=True)


@exponential_backoff(
    max_retries=3,
    base_delay=1.0,
    exceptions=(requests.exceptions.Timeout, requests.exceptions.ConnectionError, TransientHTTPError),
)
def _fetch_with_retry(url: str, timeout: float) -> requests.Response:
    """Fetch URL with automatic retry on transient errors.

    The body is streamed; callers read it through _read_limited.
    """
    resp = requests.get(url, timeout=timeout, stream=True)
    if should_retry_http_status(resp.status_code):
        resp.close()
        raise TransientHTTPError(resp.status_code, url)
    return resp


def _read_limited(resp: requests.Response, max_bytes: int) -> bytes:
    """Read a streamed body, stopping as soon as it passes max_bytes.

    Raises:
        ValueError: If Content-Length or the bytes read exceed max_bytes
    """
    declared = resp.headers.get("Content-Length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        resp.close()
        raise ValueError(f"Resume too large ({declared} bytes, limit {max_bytes}): {resp.url}")

    chunks = []
    total = 0
    try:
        for chunk in resp.iter_content(chunk_size=65536):
            total += len(chunk)
            if total > max_bytes:
                raise ValueError(f"Resume too large (over {max_bytes} bytes): {resp.url}")
            chunks.append(chunk)
    finally:
        resp.close()
    return b"".join(chunks)


def _content_type(resp: requests.Response) -> str:
    return resp.headers.get("Content-Type", "").split(";")[0].strip().lower()


def fetch_resume_text(url: str, timeout: Optional[float] = None, max_bytes: Optional[int] = None) -> str:
    """Fetch a resume and return its text.

    Args:
        url: Public resume URL
        timeout: Request timeout in seconds (default: INTERNMATCH_RESUME_TIMEOUT)
        max_bytes: Largest accepted body (default: INTERNMATCH_RESUME_MAX_BYTES)

    Returns:
        Resume text; HTML is reduced to its visible text

    Raises:
        ValueError: On HTTP errors, timeouts, oversized bodies or
            unsupported (binary) content types
    """
    settings = get_settings()
    timeout = settings.resume_timeout if timeout is None else timeout
    max_bytes = settings.resume_max_bytes if max_bytes is None else max_bytes
    logger = get_logger()

    logger.record_resume_fetch_attempt()
    try:
        resp = _fetch_with_retry(url, timeout)
        resp.raise_for_status()
    except RetryError as e:
        cause = e.__cause__
        if isinstance(cause, TransientHTTPError):
            logger.record_resume_fetch_failure(f"HTTPError_{cause.status_code}")
            logger.error("Resume request failed", url=url, status=cause.status_code)
            raise ValueError(f"Resume request failed ({cause.status_code}): {url}")
        if isinstance(cause, requests.exceptions.Timeout):
            logger.record_resume_fetch_failure("Timeout")
            logger.warning("Resume request timed out", url=url)
            raise ValueError("Resume request timed out. Try again later.")
        logger.record_resume_fetch_failure("ConnectionError")
        logger.error("Resume request could not connect", url=url, error=str(cause))
        raise ValueError(f"Resume request error: {cause}")
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_resume_fetch_failure(f"HTTPError_{status}")
        if status == 404:
            logger.warning("Resume URL not found", url=url, status=404)
            raise ValueError(f"Resume URL not found (404): {url}")
        logger.error("Resume request failed", url=url, status=status)
        raise ValueError(f"Resume request failed ({status}): {url}")
    except requests.exceptions.RequestException as e:
        logger.record_resume_fetch_failure("RequestException")
        logger.error("Resume request error", url=url, error=str(e))
        raise ValueError(f"Resume request error: {e}")

    content_type = _content_type(resp)
    if content_type not in HTML_CONTENT_TYPES + TEXT_CONTENT_TYPES and content_type != "":
        resp.close()
        logger.record_resume_fetch_failure("UnsupportedContentType")
        logger.warning("Unsupported resume content type", url=url, content_type=content_type)
        raise ValueError(
            f"Unsupported resume content type '{content_type}'. Provide a text or HTML resume."
        )

    try:
        body = _read_limited(resp, max_bytes)
    except ValueError:
        logger.record_resume_fetch_failure("TooLarge")
        logger.warning("Resume too large", url=url, limit=max_bytes)
        raise
    except requests.exceptions.RequestException as e:
        logger.record_resume_fetch_failure("RequestException")
        logger.error("Resume download interrupted", url=url, error=str(e))
        raise ValueError(f"Resume request error: {e}")

    text = body.decode(resp.encoding or "utf-8", errors="replace")
    if content_type in HTML_CONTENT_TYPES:
        text = html_to_text(text)

    logger.record_resume_fetch_success()
    logger.debug("Fetched resume", url=url, chars=len(text))
    return text
