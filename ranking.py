"""Batch analysis across many resumes and comparative ranking of the results."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import config
from ai_analyzer import rank_candidates_with_llm
from analyzer import analyze_one_resume, coerce_job, recommendation_category
from models import ComparativeRanking, JobDescription, RankEntry, ResumeAnalysis
from nlp import SerializedPipeline
from normalizer import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchSummary:
    total_candidates: int
    average_score: int
    top_score: int
    recommended_count: int
    analysis_method: str
    engines: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCandidates": self.total_candidates,
            "averageScore": self.average_score,
            "topScore": self.top_score,
            "recommendedCount": self.recommended_count,
            "analysisMethod": self.analysis_method,
            "engines": list(self.engines),
        }


@dataclass(frozen=True)
class BatchResult:
    analyses: List[Tuple[str, ResumeAnalysis]] = field(default_factory=list)
    ranking: ComparativeRanking = field(default_factory=ComparativeRanking)
    summary: Optional[BatchSummary] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [{"fileName": name, "analysis": analysis.to_dict()} for name, analysis in self.analyses],
            "ranking": self.ranking.to_dict(),
            "summary": self.summary.to_dict() if self.summary else None,
        }


def fallback_analysis(file_name: str, reason: str) -> ResumeAnalysis:
    """Neutral analysis used when one resume in a batch cannot be scored."""
    score = config.BATCH_FALLBACK_SCORE
    return ResumeAnalysis(
        overall_score=score,
        skills_match=score,
        experience_match=score,
        education_match=score,
        technical_fit=score,
        cultural_fit=score,
        communication_score=score,
        leadership_potential=score,
        ai_insights=f"Analysis for {file_name} could not be completed: {reason}",
        strengths=["Shows potential for the role"],
        weaknesses=["Resume content could not be analysed"],
        recommendations=["Request a readable copy of the resume", "Verify experience claims through reference checks"],
        recommendation=recommendation_category(score),
        engine="fallback",
    )


def _analyze_safely(
    file_name: str, resume_text: str, job: JobDescription, nlp: Any, llm_client: Any
) -> ResumeAnalysis:
    try:
        return analyze_one_resume(resume_text, job, file_name=file_name, nlp=nlp, llm_client=llm_client)
    except ValueError as exc:
        logger.warning("Skipping detailed analysis for %s: %s", file_name, exc)
        return fallback_analysis(file_name, str(exc))


def build_fallback_ranking(analyses: Sequence[Tuple[str, ResumeAnalysis]]) -> ComparativeRanking:
    """Deterministic ranking by overall score; ties are broken by file name."""
    ordered = sorted(analyses, key=lambda item: (-item[1].overall_score, item[0]))
    rankings: List[RankEntry] = []
    for rank, (file_name, analysis) in enumerate(ordered, start=1):
        rankings.append(
            RankEntry(
                file_name=file_name,
                rank=rank,
                overall_score=analysis.overall_score,
                reasoning=f"Ranked #{rank} based on overall score of {analysis.overall_score}%. {analysis.ai_insights}".strip(),
                key_strengths=list(analysis.strengths[:3]),
                key_weaknesses=list(analysis.weaknesses[:2]),
                recommendation=recommendation_category(analysis.overall_score),
            )
        )

    if rankings:
        top = rankings[0]
        summary = (
            f"Ranked {len(rankings)} candidates based on individual analysis scores. "
            f"Top candidate: {top.file_name} with {top.overall_score}% match."
        )
    else:
        summary = "No candidates were analysed."
    return ComparativeRanking(rankings=rankings, summary=summary)


def summarize_batch(analyses: Sequence[Tuple[str, ResumeAnalysis]], analysis_method: str) -> BatchSummary:
    scores = [analysis.overall_score for _, analysis in analyses]
    return BatchSummary(
        total_candidates=len(scores),
        average_score=round_half_up(sum(scores) / len(scores)) if scores else 0,
        top_score=max(scores) if scores else 0,
        recommended_count=sum(1 for score in scores if score >= config.RECOMMENDED_THRESHOLD),
        analysis_method=analysis_method,
        engines=sorted({analysis.engine for _, analysis in analyses}),
    )


def analyze_batch(
    resumes: Sequence[Tuple[str, str]],
    job: Any,
    nlp: Any = None,
    llm_client: Any = None,
    max_workers: Optional[int] = None,
) -> BatchResult:
    """Analyse ``(file_name, resume_text)`` pairs in parallel and rank the results.

    Results keep the input order regardless of completion order. A resume whose
    text is empty gets a neutral fallback analysis so the batch still completes.
    """
    job_description = coerce_job(job)
    if not resumes:
        return BatchResult(ranking=build_fallback_ranking([]), summary=summarize_batch([], "none"))

    workers = max(1, min(max_workers or config.BATCH_MAX_WORKERS, len(resumes)))
    shared_nlp = SerializedPipeline(nlp) if nlp is not None and workers > 1 else nlp
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_analyze_safely, file_name, text, job_description, shared_nlp, llm_client)
            for file_name, text in resumes
        ]
        analyses = [(file_name, future.result()) for (file_name, _), future in zip(resumes, futures)]

    ranking = None
    method = "individual"
    if llm_client is not None:
        ranking = rank_candidates_with_llm(analyses, job_description, client=llm_client)
        if ranking is not None:
            method = "comparative"
    if ranking is None:
        ranking = build_fallback_ranking(analyses)

    logger.info("Batch of %s resumes analysed (%s ranking).", len(analyses), method)
    return BatchResult(analyses=analyses, ranking=ranking, summary=summarize_batch(analyses, method))
