"""
Unit tests for candidate profile extraction.
"""

import unittest

from profile_extractor import extract_name, extract_phone, extract_profile

SAMPLE_RESUME = """Priya Sharma
priya.sharma@example.com | +91 9876543210
Bangalore, India
Objective
Full stack developer with 4 years of experience in JavaScript and Python.
Skills
JavaScript, Python, React, Node.js, Django, MySQL, PostgreSQL, Redis, Git, Docker, AWS
Experience
Software Engineer at Infosys Limited (2021 - 2023)
Associate Developer at Tech Mahindra (2019 - 2021)
Projects
- Inventory tracker built with Django and Redis
- Chat application using React and Node.js
Education
B.Tech in Computer Science, VIT University, 2019
Certifications
AWS Certified Developer Associate"""


class TestProfileExtraction(unittest.TestCase):
    """Test the keyword heuristics on a typical resume."""

    def setUp(self):
        self.profile = extract_profile(SAMPLE_RESUME, "priya.pdf")

    def test_personal_info(self):
        """Test name, email, phone and location are found."""
        info = self.profile.personal_info
        self.assertEqual(info.name, "Priya Sharma")
        self.assertEqual(info.email, "priya.sharma@example.com")
        self.assertEqual(info.phone, "+91 9876543210")
        self.assertEqual(info.location, "Bangalore")

    def test_technical_skills_by_category(self):
        """Test skills are bucketed into their keyword categories."""
        skills = self.profile.technical_skills
        self.assertEqual(skills.languages, ["javascript", "python"])
        self.assertEqual(skills.frameworks, ["react", "node.js", "django"])
        self.assertEqual(skills.databases, ["mysql", "postgresql", "redis"])
        self.assertEqual(skills.tools, ["git", "docker"])
        self.assertEqual(skills.cloud, ["aws"])
        self.assertEqual(skills.other, [])

    def test_experience_entries(self):
        """Test one entry per "at <Company>" line after the experience header."""
        companies = [entry.company for entry in self.profile.experience]
        self.assertEqual(companies, ["Infosys Limited", "Tech Mahindra"])

    def test_education(self):
        """Test degree keywords are upper-cased with the detected field."""
        self.assertEqual(len(self.profile.education), 1)
        entry = self.profile.education[0]
        self.assertEqual(entry.degree, "B.TECH")
        self.assertEqual(entry.field, "Computer Science")

    def test_projects(self):
        """Test project lines are stripped of bullets and tagged with technologies."""
        first = self.profile.projects[0]
        self.assertEqual(first.name, "Inventory tracker built with Django and Redis")
        self.assertEqual(first.technologies, ["django", "redis"])

    def test_certifications_and_years(self):
        """Test certification phrases and total years."""
        self.assertEqual(self.profile.certifications, ["AWS Certified"])
        self.assertEqual(self.profile.total_experience_years, 4)

    def test_to_dict_uses_camel_case(self):
        """Test the serialized profile exposes the API field names."""
        payload = self.profile.to_dict()
        self.assertEqual(payload["fileName"], "priya.pdf")
        self.assertEqual(payload["personalInfo"]["name"], "Priya Sharma")
        self.assertEqual(payload["totalExperienceYears"], 4)

    def test_idempotent(self):
        """Test extracting twice gives equal profiles."""
        self.assertEqual(extract_profile(SAMPLE_RESUME, "priya.pdf"), self.profile)


class TestProfileEdgeCases(unittest.TestCase):
    """Test fallbacks when signals are missing."""

    def test_objective_line_is_not_a_name(self):
        """Test a line mentioning objective is skipped as a name."""
        self.assertEqual(extract_name(["Career Objective", "John Smith"]), "John Smith")

    def test_generic_phone_format(self):
        """Test a North American phone format is recognized."""
        self.assertEqual(extract_phone("Phone: (555) 123-4567"), "(555) 123-4567")

    def test_plural_degree_names(self):
        """Test "Bachelors" and "Masters" lines produce education entries."""
        profile = extract_profile("Bachelors in Computer Science\nMasters in Software Engineering", "x")
        self.assertEqual([entry.degree for entry in profile.education], ["BACHELOR", "MASTER"])
        self.assertEqual(profile.education[0].field, "Computer Science")

    def test_empty_text(self):
        """Test empty text yields an empty profile without raising."""
        profile = extract_profile("")
        self.assertEqual(profile.personal_info.name, "")
        self.assertEqual(profile.technical_skills.all_skills(), [])
        self.assertEqual(profile.experience, [])
        self.assertEqual(profile.projects, [])
        self.assertEqual(profile.total_experience_years, 0)


if __name__ == "__main__":
    unittest.main()
