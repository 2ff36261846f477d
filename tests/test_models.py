"""Tests for value objects built from JSON documents."""

import dataclasses

import pytest

from internmatch.models import Posting, Profile, Recommendation


class TestProfileFromDict:

    def test_full_profile(self, profile_data):
        profile = Profile.from_dict(profile_data)
        assert profile.user_id == "user-1"
        assert profile.skills == ("JavaScript", "React", "Node.js")
        assert profile.experience_level == "intermediate"
        assert profile.to_dict()["skills"] == ["JavaScript", "React", "Node.js"]

    def test_missing_fields_become_empty(self):
        profile = Profile.from_dict({"user_id": 42})
        assert profile.user_id == "42"
        assert profile.skills == ()
        assert profile.interests == ()
        assert profile.experience_level is None
        assert profile.preferred_location is None

    def test_blank_and_non_string_entries_dropped(self):
        profile = Profile.from_dict({"user_id": "u", "skills": ["Python", "", "  ", None, 3, "SQL"]})
        assert profile.skills == ("Python", "SQL")

    def test_empty_strings_are_absent(self):
        profile = Profile.from_dict({"user_id": "u", "experience_level": "", "preferred_location": ""})
        assert profile.experience_level is None
        assert profile.preferred_location is None

    def test_frozen(self, profile):
        with pytest.raises(dataclasses.FrozenInstanceError):
            profile.skills = ("Go",)


class TestPostingFromDict:

    def test_defaults(self):
        posting = Posting.from_dict({"id": 7, "title": "Intern"})
        assert posting.id == "7"
        assert posting.description == ""
        assert posting.requirements == ()
        assert posting.skills_required == ()
        assert posting.location is None
        assert posting.remote is False
        assert posting.stipend_amount is None
        assert posting.stipend_currency == "USD"
        assert posting.is_active is True

    def test_remote_must_be_true(self):
        assert Posting.from_dict({"id": "1", "remote": "yes"}).remote is False
        assert Posting.from_dict({"id": "1", "remote": True}).remote is True

    def test_stipend_must_be_numeric(self):
        assert Posting.from_dict({"id": "1", "stipend_amount": "4000"}).stipend_amount is None
        assert Posting.from_dict({"id": "1", "stipend_amount": True}).stipend_amount is None
        assert Posting.from_dict({"id": "1", "stipend_amount": 4000}).stipend_amount == 4000

    def test_inactive(self):
        assert Posting.from_dict({"id": "1", "is_active": False}).is_active is False


class TestRecommendation:

    def test_reasoning_joined_for_records(self):
        rec = Recommendation("u", "i", 80, ("Great location match", "Competitive compensation"))
        assert rec.reasoning_text == "Great location match, Competitive compensation"
        assert rec.to_dict()["reasoning"] == "Great location match, Competitive compensation"
