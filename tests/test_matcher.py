"""
Unit tests for required-skill matching.
"""

import unittest

from matcher import is_skill_present, match_skills, skill_variations


class TestSkillMatching(unittest.TestCase):
    """Test skill resolution and scoring."""

    def test_partial_match_scenario(self):
        """Test two of three skills found scores 67 with Node.js missing."""
        result = match_skills(
            "Proficient in JavaScript and React development",
            "JavaScript, React, Node.js",
        )
        self.assertEqual(result.score, 67)
        self.assertEqual(result.matched, ["JavaScript", "React"])
        self.assertIn("Node.js", result.missing)

    def test_empty_skill_list_is_neutral(self):
        """Test an empty or unparseable list returns 75 with no lists."""
        for skills in ([], "", None, " , ; "):
            result = match_skills("Any resume text", skills)
            self.assertEqual(result.score, 75)
            self.assertEqual(result.matched, [])
            self.assertEqual(result.missing, [])

    def test_score_floor(self):
        """Test no matches still scores the floor of 20."""
        result = match_skills("I enjoy painting landscapes.", "Kubernetes, Terraform")
        self.assertEqual(result.score, 20)

    def test_score_ceiling(self):
        """Test a full match is capped at 95."""
        result = match_skills("Python and SQL on AWS", ["Python", "SQL", "AWS"])
        self.assertEqual(result.score, 95)

    def test_variation_lookup(self):
        """Test an alias from the variation table counts as the skill."""
        self.assertTrue(is_skill_present("Built single page apps in ES6", "JavaScript"))
        self.assertIn("golang", skill_variations("Go"))

    def test_unknown_skill_is_its_own_variation(self):
        """Test a skill outside the table resolves to itself."""
        self.assertEqual(skill_variations(" Haskell "), ["haskell"])

    def test_word_boundary_prevents_substring_hit(self):
        """Test Java is not found inside JavaScript."""
        self.assertFalse(is_skill_present("Wrote JavaScript daily", "Java"))

    def test_contextual_match(self):
        """Test a contextual phrase accepts a term fused into a longer token."""
        self.assertTrue(is_skill_present("Built services with Flaskr extensions", "Flask"))

    def test_contextual_match_after_header_is_substring(self):
        """Test a skill after a context header matches inside a longer word on that line only."""
        self.assertTrue(is_skill_present("Technical skills: Google Cloud", "Go"))
        self.assertFalse(is_skill_present("Technical skills:\nGoogle Cloud", "Go"))

    def test_metacharacter_skill(self):
        """Test skills containing regex metacharacters are matched literally."""
        result = match_skills("Expert in C++ and C#", ["C++", "C#"])
        self.assertEqual(result.matched, ["C++", "C#"])

    def test_list_caps(self):
        """Test matched is capped at five and missing at three."""
        skills = ["Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot", "Golf", "Hotel"]
        all_present = match_skills(" ".join(skills), skills)
        self.assertEqual(len(all_present.matched), 5)
        self.assertEqual(all_present.matched_count, 8)
        none_present = match_skills("nothing relevant", skills)
        self.assertEqual(len(none_present.missing), 3)
        self.assertEqual(none_present.total, 8)

    def test_monotonic_when_skill_added(self):
        """Test adding a required skill verbatim never lowers the score."""
        skills = "Python, Docker, Kafka"
        before = match_skills("Python developer", skills).score
        after = match_skills("Python developer. Kafka streaming.", skills).score
        self.assertGreaterEqual(after, before)

    def test_score_bounds(self):
        """Test the score stays within [20, 95] for non-empty lists."""
        texts = ["", "Python", "Python SQL AWS Docker"]
        for text in texts:
            score = match_skills(text, "Python, SQL, AWS, Docker").score
            self.assertGreaterEqual(score, 20)
            self.assertLessEqual(score, 95)


if __name__ == "__main__":
    unittest.main()
