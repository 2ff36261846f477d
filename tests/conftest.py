"""
Pytest configuration and shared fixtures.
"""

import io
import pytest
import json
from pathlib import Path
from typing import Dict, Any, List, Optional

import requests

from internmatch.logger import get_logger, reset_logger
from internmatch.models import Posting, Profile


@pytest.fixture(autouse=True)
def quiet_logger():
    """Fresh global logger per test, without console or file output."""
    reset_logger()
    logger = get_logger(enable_console=False, enable_file=False)
    yield logger
    reset_logger()


@pytest.fixture
def profile_data() -> Dict[str, Any]:
    """A JavaScript-skilled profile in San Francisco."""
    return {
        "user_id": "user-1",
        "skills": ["JavaScript", "React", "Node.js"],
        "interests": ["Web Development", "Fintech"],
        "experience_level": "intermediate",
        "preferred_location": "San Francisco, CA",
    }


@pytest.fixture
def postings_data() -> List[Dict[str, Any]]:
    """A frontend posting and a remote data-science posting."""
    return [
        {
            "id": "1",
            "company_id": "1",
            "title": "Frontend Developer Intern",
            "description": "Work on web development projects using React and JavaScript",
            "requirements": ["Intermediate programming skills"],
            "skills_required": ["JavaScript", "React", "CSS"],
            "location": "San Francisco, CA",
            "remote": False,
            "stipend_amount": 4500,
            "stipend_currency": "USD",
            "is_active": True,
        },
        {
            "id": "2",
            "company_id": "2",
            "title": "Data Science Intern",
            "description": "Analyze data using Python and machine learning",
            "requirements": ["Python experience", "Statistics background"],
            "skills_required": ["Python", "Machine Learning", "SQL"],
            "location": "New York, NY",
            "remote": True,
            "stipend_amount": 5000,
            "stipend_currency": "USD",
            "is_active": True,
        },
    ]


@pytest.fixture
def profile(profile_data) -> Profile:
    return Profile.from_dict(profile_data)


@pytest.fixture
def frontend_posting(postings_data) -> Posting:
    return Posting.from_dict(postings_data[0])


@pytest.fixture
def data_science_posting(postings_data) -> Posting:
    return Posting.from_dict(postings_data[1])


@pytest.fixture
def profile_file(tmp_path, profile_data) -> Path:
    path = tmp_path / "profile.json"
    path.write_text(json.dumps(profile_data))
    return path


@pytest.fixture
def postings_file(tmp_path, postings_data) -> Path:
    path = tmp_path / "postings.json"
    path.write_text(json.dumps({"internships": postings_data}, indent=2))
    return path


def make_response(
    status: int = 200,
    body: str = "",
    content_type: str = "text/plain; charset=utf-8",
    url: str = "https://files.example.com/resume.txt",
    content_length: Optional[int] = None,
) -> requests.Response:
    """Build a real streamed requests.Response without touching the network."""
    resp = requests.Response()
    resp.status_code = status
    resp.raw = io.BytesIO(body.encode("utf-8"))
    resp.headers["Content-Type"] = content_type
    if content_length is not None:
        resp.headers["Content-Length"] = str(content_length)
    resp.encoding = "utf-8"
    resp.url = url
    resp.reason = "Test"
    return resp


@pytest.fixture
def no_sleep(monkeypatch):
    """Skip retry delays."""
    monkeypatch.setattr("internmatch.retry.time.sleep", lambda seconds: None)


@pytest.fixture
def response_factory():
    return make_response
