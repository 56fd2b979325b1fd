"""
Integration tests for the HTTP endpoints.
"""

import json
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from api import app

JOB = {
    "jobTitle": "Frontend Developer",
    "requiredSkills": "JavaScript, React, Node.js",
    "minExperience": 1,
    "maxExperience": 4,
    "education": "none",
}
RESUME = "Proficient in JavaScript and React development"


class TestApi(unittest.TestCase):
    """Test the FastAPI app with the rule-based engine."""

    def setUp(self):
        patcher = patch("api.get_nlp_handle", return_value=None)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = TestClient(app)

    def test_health(self):
        """Test the health endpoint reports LLM configuration."""
        with patch("config.OPENAI_API_KEY", ""):
            response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "llmConfigured": False})

    def test_analyze_text(self):
        """Test a single text analysis returns the scored record."""
        response = self.client.post("/analyze/text", json={"resumeText": RESUME, "jobDescription": JOB})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["skillsMatch"], 67)
        self.assertEqual(body["keywordMatches"], ["JavaScript", "React"])
        self.assertEqual(body["engine"], "rules")

    def test_analyze_text_rejects_empty_resume(self):
        """Test blank resume text is a client error."""
        response = self.client.post("/analyze/text", json={"resumeText": "  ", "jobDescription": JOB})
        self.assertEqual(response.status_code, 400)

    def test_profile(self):
        """Test the profile endpoint returns camelCase fields."""
        response = self.client.post(
            "/profile", json={"resumeText": "Jane Doe\njane@example.com\nPython and Docker"}
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["personalInfo"]["email"], "jane@example.com")
        self.assertEqual(body["technicalSkills"]["languages"], ["python"])

    def test_report(self):
        """Test the report endpoint wraps the analysis."""
        response = self.client.post(
            "/report", json={"resumeText": RESUME, "fileName": "cv.txt", "jobDescription": JOB}
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["candidateInfo"]["fileName"], "cv.txt")
        self.assertEqual(len(body["charts"]["skillsComparison"]), 3)

    def test_batch_upload(self):
        """Test multipart upload of several text resumes."""
        files = [
            ("resumes", ("a.txt", RESUME.encode("utf-8"), "text/plain")),
            ("resumes", ("b.txt", b"Enjoys hiking.", "text/plain")),
        ]
        response = self.client.post("/analyze/", data={"job": json.dumps(JOB)}, files=files)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual([item["fileName"] for item in body["results"]], ["a.txt", "b.txt"])
        self.assertEqual(body["ranking"]["rankings"][0]["fileName"], "a.txt")
        self.assertEqual(body["summary"]["analysisMethod"], "individual")

    def test_batch_unreadable_file(self):
        """Test an unsupported file type still completes with a fallback record."""
        files = [("resumes", ("photo.png", b"\x89PNG", "image/png"))]
        response = self.client.post("/analyze/", data={"job": json.dumps(JOB)}, files=files)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["results"][0]["analysis"]["engine"], "fallback")

    def test_batch_rejects_bad_job(self):
        """Test malformed or non-object job JSON is a client error."""
        files = [("resumes", ("a.txt", RESUME.encode("utf-8"), "text/plain"))]
        for job in ("{not json", "[1, 2]"):
            response = self.client.post("/analyze/", data={"job": job}, files=files)
            self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
