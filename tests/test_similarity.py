"""
Tests for text similarity helpers.
"""

import pytest

from internmatch.similarity import (
    RELATED_INTEREST_TERMS,
    STATE_CODES,
    SYNONYMS,
    are_synonyms,
    extract_state_code,
    normalize,
    related_interest_terms,
    tokens_overlap,
)


class TestNormalize:

    def test_lower_cases(self):
        assert normalize("Node.JS") == "node.js"

    def test_keeps_whitespace(self):
        """No stripping or collapsing."""
        assert normalize("  Machine  Learning ") == "  machine  learning "

    def test_none_is_empty(self):
        assert normalize(None) == ""


class TestTokensOverlap:

    def test_equal_tokens(self):
        assert tokens_overlap("React", "react")

    def test_containment_both_directions(self):
        assert tokens_overlap("sql", "PostgreSQL")
        assert tokens_overlap("React Native", "react")

    def test_short_tokens_over_match(self):
        """Containment is liberal: "java" matches "javascript"."""
        assert tokens_overlap("Java", "JavaScript")

    def test_unrelated_tokens(self):
        assert not tokens_overlap("go", "python")


class TestAreSynonyms:

    def test_canonical_then_alias(self):
        assert are_synonyms("javascript", "node.js")

    def test_alias_then_canonical(self):
        assert are_synonyms("JS", "JavaScript")

    def test_ai_is_machine_learning(self):
        assert are_synonyms("AI", "Machine Learning")

    def test_two_aliases_are_not_synonyms(self):
        """Only canonical/alias pairs count, not alias/alias."""
        assert not are_synonyms("ml", "ai")

    def test_unrelated(self):
        assert not are_synonyms("python", "java")


class TestRelatedInterestTerms:

    def test_known_interest(self):
        terms = related_interest_terms("Artificial Intelligence")
        assert "neural" in terms
        assert "deep learning" in terms

    def test_unknown_interest(self):
        assert related_interest_terms("gardening") is None


class TestExtractStateCode:

    @pytest.mark.parametrize("location,expected", [
        ("San Francisco, CA", "ca"),
        ("New York, NY", "ny"),
        ("Dallas, TX", "tx"),
    ])
    def test_simple_locations(self, location, expected):
        assert extract_state_code(location) == expected

    def test_table_order_beats_string_order(self):
        """"chicago" contains "ca", which precedes "il" in the table."""
        assert extract_state_code("Chicago, IL") == "ca"
        assert extract_state_code("Portland, OR") == "la"

    def test_no_code(self):
        assert extract_state_code("Quebec") is None

    def test_missing_location(self):
        assert extract_state_code(None) is None
        assert extract_state_code("") is None


class TestTables:

    def test_state_table_has_fifty_unique_codes(self):
        assert len(STATE_CODES) == 50
        assert len(set(STATE_CODES)) == 50

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            SYNONYMS["go"] = frozenset({"golang"})
        with pytest.raises(TypeError):
            RELATED_INTEREST_TERMS["fintech"] = frozenset()
