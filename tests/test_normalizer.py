"""
Unit tests for text normalization and skill-list parsing.
"""

import unittest

from normalizer import (
    contains_term,
    contains_word_form,
    normalize_skill_list,
    normalize_text,
    round_half_up,
    tokenize,
    unique_trimmed,
)


class TestSkillListNormalization(unittest.TestCase):
    """Test the single entry point for every required-skills shape."""

    def test_comma_joined_string(self):
        """Test a delimiter-joined string splits into ordered tokens."""
        self.assertEqual(
            normalize_skill_list("JavaScript, React, Node.js"),
            ["JavaScript", "React", "Node.js"],
        )

    def test_malformed_single_element_list(self):
        """Test a newline-joined, enumerated one-element list is re-split."""
        self.assertEqual(
            normalize_skill_list(["1: Python\n2: SQL\n3: AWS"]),
            ["Python", "SQL", "AWS"],
        )

    def test_stop_words_dropped(self):
        """Test filler tokens are removed from free-text lists."""
        self.assertEqual(
            normalize_skill_list("Python; and; Docker | etc | Advanced"),
            ["Python", "Docker"],
        )

    def test_short_tokens_dropped(self):
        """Test tokens shorter than two characters are dropped."""
        self.assertEqual(normalize_skill_list("C, Go, R"), ["Go"])

    def test_list_is_trimmed_and_deduplicated(self):
        """Test a regular list keeps order, drops blanks and case-insensitive repeats."""
        self.assertEqual(
            normalize_skill_list(["Python", " python ", "  ", "SQL"]),
            ["Python", "SQL"],
        )

    def test_empty_inputs(self):
        """Test None, empty string and empty list yield no skills."""
        self.assertEqual(normalize_skill_list(None), [])
        self.assertEqual(normalize_skill_list(""), [])
        self.assertEqual(normalize_skill_list([]), [])

    def test_bullet_and_newline_delimiters(self):
        """Test bullets and line breaks act as delimiters in a string."""
        self.assertEqual(
            normalize_skill_list("• Kotlin\n• Swift\r\nFlutter"),
            ["Kotlin", "Swift", "Flutter"],
        )


class TestTermSearch(unittest.TestCase):
    """Test whole-token matching helpers."""

    def test_metacharacters_are_literal(self):
        """Test regex metacharacters in a term are escaped."""
        self.assertTrue(contains_term("Daily work in C++ and C#.", "c++"))
        self.assertTrue(contains_term("Daily work in C++ and C#.", "C#"))
        self.assertFalse(contains_term("cpp only", "c++"))

    def test_no_match_inside_longer_token(self):
        """Test a term does not match inside a longer word."""
        self.assertFalse(contains_term("Wrote JavaScript daily", "java"))
        self.assertTrue(contains_term("Wrote Java daily", "java"))

    def test_blank_term(self):
        """Test blank terms never match."""
        self.assertFalse(contains_term("anything", "  "))

    def test_word_forms_match_inflections(self):
        """Test longer keywords match plural and inflected forms."""
        self.assertTrue(contains_word_form("Bachelors in Physics", "bachelor"))
        self.assertTrue(contains_word_form("Experienced engineer", "experience"))
        self.assertFalse(contains_word_form("Rebachelor", "bachelor"))

    def test_word_forms_keep_short_tokens_whole(self):
        """Test short keywords still require a whole token."""
        self.assertFalse(contains_word_form("Ledger reconciliation", "led"))
        self.assertFalse(contains_word_form("Basic skills", "ba"))
        self.assertTrue(contains_word_form("BA in History", "ba"))


class TestTextHelpers(unittest.TestCase):
    """Test the small shared helpers."""

    def test_round_half_up(self):
        """Test halves round up like the UI expects."""
        self.assertEqual(round_half_up(66.5), 67)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(66.49), 66)

    def test_normalize_text_replaces_unicode(self):
        """Test bullets, dashes and CRLF are normalized."""
        self.assertEqual(normalize_text("• Python – SQL\r\nAWS"), "- Python - SQL\nAWS")

    def test_tokenize_keeps_dotted_names(self):
        """Test tokens such as node.js survive tokenization."""
        self.assertEqual(tokenize("Node.js, C++ and Go."), ["node.js", "c++", "and", "go"])

    def test_unique_trimmed_limit(self):
        """Test de-duplication and the size cap."""
        self.assertEqual(unique_trimmed(["a", "A", "b", "", "c"], limit=2), ["a", "b"])


if __name__ == "__main__":
    unittest.main()
