"""
Unit tests for batch analysis and deterministic ranking.
"""

import json
import threading
import time
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from models import ResumeAnalysis
from ranking import analyze_batch, build_fallback_ranking, summarize_batch

JOB = {
    "jobTitle": "Backend Developer",
    "requiredSkills": ["Python", "SQL", "Docker"],
    "minExperience": 2,
    "maxExperience": 6,
}

RESUMES = [
    ("strong.txt", "Backend developer with 5 years experience in Python, SQL and Docker. Built APIs."),
    ("partial.txt", "Python scripting for 3 years."),
    ("thin.txt", "Enthusiastic graduate looking for a first role."),
]


class ConcurrencyTrackingNlp:
    """Sentence splitter that records how many threads are inside it at once."""

    def __init__(self):
        self._lock = threading.Lock()
        self.active = 0
        self.max_active = 0
        self.calls = 0

    def __call__(self, text):
        with self._lock:
            self.active += 1
            self.calls += 1
            self.max_active = max(self.max_active, self.active)
        time.sleep(0.01)
        with self._lock:
            self.active -= 1
        return SimpleNamespace(sents=[SimpleNamespace(text=text)])


def make_analysis(score, insights="", strengths=None, weaknesses=None, engine="rules"):
    return ResumeAnalysis(
        overall_score=score,
        skills_match=score,
        experience_match=score,
        education_match=score,
        technical_fit=score,
        cultural_fit=score,
        communication_score=score,
        leadership_potential=score,
        ai_insights=insights,
        strengths=strengths or [],
        weaknesses=weaknesses or [],
        engine=engine,
    )


class TestFallbackRanking(unittest.TestCase):
    """Test ranking by overall score."""

    def test_order_and_ties(self):
        """Test descending score with ties broken by file name."""
        ranking = build_fallback_ranking([
            ("c.pdf", make_analysis(70)),
            ("a.pdf", make_analysis(90)),
            ("b.pdf", make_analysis(70)),
        ])
        self.assertEqual([entry.file_name for entry in ranking.rankings], ["a.pdf", "b.pdf", "c.pdf"])
        self.assertEqual([entry.rank for entry in ranking.rankings], [1, 2, 3])
        self.assertEqual(
            ranking.summary,
            "Ranked 3 candidates based on individual analysis scores. Top candidate: a.pdf with 90% match.",
        )

    def test_entry_details(self):
        """Test reasoning text and the strength and weakness caps."""
        analysis = make_analysis(
            80, insights="Good fit.", strengths=["s1", "s2", "s3", "s4"], weaknesses=["w1", "w2", "w3"]
        )
        entry = build_fallback_ranking([("x.pdf", analysis)]).rankings[0]
        self.assertEqual(entry.reasoning, "Ranked #1 based on overall score of 80%. Good fit.")
        self.assertEqual(entry.key_strengths, ["s1", "s2", "s3"])
        self.assertEqual(entry.key_weaknesses, ["w1", "w2"])
        self.assertEqual(entry.recommendation, "Recommended")

    def test_empty(self):
        """Test an empty pool yields no rankings."""
        ranking = build_fallback_ranking([])
        self.assertEqual(ranking.rankings, [])
        self.assertEqual(ranking.summary, "No candidates were analysed.")


class TestBatchSummary(unittest.TestCase):
    """Test the batch summary numbers."""

    def test_summary(self):
        """Test average, top score and recommended count."""
        analyses = [
            ("a", make_analysis(90)),
            ("b", make_analysis(70, engine="llm")),
            ("c", make_analysis(70)),
        ]
        summary = summarize_batch(analyses, "individual")
        self.assertEqual(summary.total_candidates, 3)
        self.assertEqual(summary.average_score, 77)
        self.assertEqual(summary.top_score, 90)
        self.assertEqual(summary.recommended_count, 1)
        self.assertEqual(summary.engines, ["llm", "rules"])


class TestAnalyzeBatch(unittest.TestCase):
    """Test analyze_batch end to end."""

    def test_order_preserved(self):
        """Test results keep the input order while the ranking is sorted."""
        batch = analyze_batch(RESUMES, JOB, max_workers=3)
        self.assertEqual([name for name, _ in batch.analyses], ["strong.txt", "partial.txt", "thin.txt"])
        self.assertEqual(batch.ranking.rankings[0].file_name, "strong.txt")
        self.assertEqual(batch.summary.analysis_method, "individual")
        self.assertEqual(batch.summary.total_candidates, 3)

    def test_matches_single_analysis(self):
        """Test parallel results equal sequential results."""
        parallel = analyze_batch(RESUMES, JOB, max_workers=3)
        sequential = analyze_batch(RESUMES, JOB, max_workers=1)
        self.assertEqual(parallel.analyses, sequential.analyses)

    def test_shared_nlp_called_one_at_a_time(self):
        """Test worker threads never enter the shared NLP handle concurrently."""
        nlp = ConcurrencyTrackingNlp()
        batch = analyze_batch(RESUMES * 2, JOB, nlp=nlp, max_workers=4)
        self.assertEqual(len(batch.analyses), 6)
        self.assertEqual(nlp.calls, 6)
        self.assertEqual(nlp.max_active, 1)

    def test_unreadable_resume_gets_fallback(self):
        """Test an empty resume text gets the neutral fallback record."""
        batch = analyze_batch([("blank.pdf", ""), RESUMES[0]], JOB)
        blank = dict(batch.analyses)["blank.pdf"]
        self.assertEqual(blank.overall_score, 50)
        self.assertEqual(blank.engine, "fallback")
        self.assertEqual(len(batch.ranking.rankings), 2)

    def test_empty_batch(self):
        """Test an empty batch completes with an empty summary."""
        batch = analyze_batch([], JOB)
        self.assertEqual(batch.analyses, [])
        self.assertEqual(batch.summary.total_candidates, 0)
        self.assertEqual(batch.summary.analysis_method, "none")

    def test_comparative_ranking_used(self):
        """Test a usable LLM ranking replaces the fallback ranking."""
        client = MagicMock()
        ranking_reply = json.dumps({
            "rankings": [
                {"fileName": "partial.txt", "rank": 1, "reasoning": "Focused"},
                {"fileName": "strong.txt", "rank": 2, "reasoning": "Broad"},
            ],
            "summary": "Comparative view",
        })
        scoring_reply = json.dumps({"aiInsights": "Reviewed."})

        def create(**kwargs):
            prompt = kwargs["messages"][-1]["content"]
            content = ranking_reply if "Rank every candidate" in prompt else scoring_reply
            return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])

        client.chat.completions.create.side_effect = create
        batch = analyze_batch(RESUMES[:2], JOB, llm_client=client)
        self.assertEqual(batch.summary.analysis_method, "comparative")
        self.assertEqual(batch.ranking.rankings[0].file_name, "partial.txt")
        self.assertEqual(batch.ranking.summary, "Comparative view")

    def test_to_dict_shape(self):
        """Test the serialized batch exposes results, ranking and summary."""
        payload = analyze_batch(RESUMES[:1], JOB).to_dict()
        self.assertEqual(payload["results"][0]["fileName"], "strong.txt")
        self.assertIn("rankings", payload["ranking"])
        self.assertEqual(payload["summary"]["totalCandidates"], 1)


if __name__ == "__main__":
    unittest.main()
