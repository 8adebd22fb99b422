"""Tests for name-key and address normalization."""

import pytest

from email_identity.identity.normalize import normalize_email_address, normalize_name_key


class TestNormalizeNameKey:
    """Tests for normalize_name_key."""

    def test_title_and_case_collide(self):
        assert normalize_name_key("Dr. Antonio Ache") == "antonio ache"
        assert normalize_name_key("antonio ache") == "antonio ache"

    def test_strips_accents(self):
        assert normalize_name_key("José Ñúñez") == "jose nunez"

    def test_strips_all_titles(self):
        assert normalize_name_key("Mrs. Jane Doe") == "jane doe"
        assert normalize_name_key("Ms Jane Doe") == "jane doe"
        assert normalize_name_key("Prof. Ada Lovelace") == "ada lovelace"
        assert normalize_name_key("Mr John Smith") == "john smith"

    def test_strips_multiple_titles(self):
        assert normalize_name_key("MR. AND MRS. SMITH") == "and smith"
        assert normalize_name_key("Dr.Dr. Who") == "who"

    def test_title_letters_inside_words_are_kept(self):
        assert normalize_name_key("Andrew Drake") == "andrew drake"
        assert normalize_name_key("Thandi Msimang") == "thandi msimang"
        assert normalize_name_key("Professor X") == "professor x"

    def test_punctuation_becomes_space(self):
        assert normalize_name_key("O'Brien, Pat") == "o brien pat"
        assert normalize_name_key("smith-jones") == "smith jones"

    def test_collapses_whitespace(self):
        assert normalize_name_key("  John   \t Smith \n") == "john smith"

    def test_keeps_digits(self):
        assert normalize_name_key("Agent 007") == "agent 007"

    def test_empty_and_none(self):
        assert normalize_name_key(None) == ""
        assert normalize_name_key("") == ""
        assert normalize_name_key("   ") == ""

    def test_title_only_is_empty(self):
        assert normalize_name_key("Dr.") == ""

    @pytest.mark.parametrize(
        "raw",
        [
            "Dr. Antonio Ache",
            "MR. AND MRS. SMITH",
            "x_dr",
            "ødr Smith",
            "Dr.Dr. Who",
            "  José   Ñúñez ",
            "Ærøskøbing Mr.",
            "mr.s",
            "O'Brien, Pat",
            "",
        ],
    )
    def test_idempotent(self, raw):
        key = normalize_name_key(raw)
        assert normalize_name_key(key) == key


class TestNormalizeEmailAddress:
    """Tests for normalize_email_address."""

    def test_trims_and_lowercases(self):
        assert normalize_email_address("  Antonio@Example.COM ") == "antonio@example.com"

    def test_blank_is_none(self):
        assert normalize_email_address("") is None
        assert normalize_email_address("   ") is None

    def test_none_is_none(self):
        assert normalize_email_address(None) is None
