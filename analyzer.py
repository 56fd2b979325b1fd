"""Rule-based resume analysis engine: score aggregation and narrative templates."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple, Union

import config
from ai_analyzer import LLMScores, request_llm_scores
from estimators import (
    estimate_communication,
    estimate_cultural_fit,
    estimate_experience,
    estimate_leadership,
    estimate_technical_fit,
    evaluate_education,
    identify_experience_gaps,
)
from matcher import SkillMatchResult, match_skills
from models import CandidateProfile, JobDescription, ResumeAnalysis
from normalizer import clamp, round_half_up, unique_trimmed
from profile_extractor import extract_profile

logger = logging.getLogger(__name__)

JobInput = Union[JobDescription, Mapping[str, Any], None]


@dataclass(frozen=True)
class ComponentScores:
    skills: int
    experience: int
    education: int
    technical_fit: int
    cultural_fit: int
    communication: int
    leadership: int
    # True when technical_fit came from an external collaborator rather than the rule-based estimator.
    external_technical: bool = False


@dataclass(frozen=True)
class Narrative:
    ai_insights: str
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


# --- Overall score & category --------------------------------------------------

def compute_overall_score(scores: ComponentScores) -> int:
    if scores.external_technical:
        weights = config.SCORE_WEIGHTS
        weighted = (
            scores.skills * weights["skills"]
            + scores.experience * weights["experience"]
            + scores.technical_fit * weights["technical"]
            + scores.education * weights["education"]
        )
        return clamp(round_half_up(weighted), 0, 100)
    components = [scores.skills, scores.experience, scores.education, scores.technical_fit]
    return clamp(round_half_up(sum(components) / len(components)), 0, 100)


def recommendation_category(overall_score: int) -> str:
    if overall_score >= config.EXCELLENT_THRESHOLD:
        return "Highly Recommended"
    if overall_score >= config.STRONG_THRESHOLD:
        return "Recommended"
    if overall_score >= config.GOOD_THRESHOLD:
        return "Consider"
    return "Not Recommended"


# --- Narrative builders --------------------------------------------------------

def _banded(score: int, excellent: str, strong: str, good: str) -> Optional[str]:
    if score >= config.EXCELLENT_THRESHOLD:
        return excellent
    if score >= config.STRONG_THRESHOLD:
        return strong
    if score >= config.GOOD_THRESHOLD:
        return good
    return None


def generate_strengths(scores: ComponentScores, overall_score: int) -> List[str]:
    strengths: List[str] = [
        _banded(
            scores.skills,
            "Excellent technical skill alignment with job requirements",
            "Strong technical skill match",
            "Good technical foundation",
        ),
        _banded(
            scores.technical_fit,
            "Strong technical fit for the specific role",
            "Good role-specific technical background",
            "Adequate technical alignment",
        ),
        _banded(
            scores.experience,
            "Extensive and highly relevant experience",
            "Strong relevant experience",
            "Solid industry experience",
        ),
        _banded(
            overall_score,
            "Outstanding overall candidate profile",
            "Excellent overall fit for the role",
            "Well-rounded candidate",
        ),
    ]
    if scores.skills >= config.STRONG_THRESHOLD and scores.technical_fit >= config.STRONG_THRESHOLD:
        strengths.append("Strong combination of general and role-specific skills")
    if scores.skills >= config.STRONG_THRESHOLD and scores.experience >= config.STRONG_THRESHOLD:
        strengths.append("Excellent blend of skills and experience")

    trimmed = unique_trimmed([item for item in strengths if item], config.NARRATIVE_LIST_LIMIT)
    return trimmed or ["Shows potential for the role"]


def generate_weaknesses(scores: ComponentScores) -> List[str]:
    weaknesses: List[str] = []

    if scores.skills < 50:
        weaknesses.append("Significant technical skill gaps")
    elif scores.skills < 65:
        weaknesses.append("Limited technical skill match")

    if scores.technical_fit < 50:
        weaknesses.append("Limited fit for the specific role requirements")
    elif scores.technical_fit < 65:
        weaknesses.append("Some role-specific technical gaps")

    if scores.experience < 50:
        weaknesses.append("Insufficient relevant experience")
    elif scores.experience < 65:
        weaknesses.append("Experience gap in required areas")

    if scores.skills < 60 and scores.technical_fit < 60:
        weaknesses.append("May require significant technical training")
    elif scores.skills < 70 and scores.technical_fit < 70:
        weaknesses.append("May need additional role-specific training")

    if scores.skills < 60 and scores.experience < 60:
        weaknesses.append("May require significant onboarding and mentoring")
    if scores.skills > 80 and scores.technical_fit < 50:
        weaknesses.append("Good general skills but limited role-specific expertise")
    if scores.technical_fit > 80 and scores.experience < 50:
        weaknesses.append("Strong technical fit but limited practical experience")

    trimmed = unique_trimmed(weaknesses, config.NARRATIVE_LIST_LIMIT)
    return trimmed or ["Meets basic requirements"]


def generate_recommendations(overall_score: int, skills_score: int, missing_skills: List[str]) -> List[str]:
    if overall_score >= config.EXCELLENT_THRESHOLD:
        recommendations = ["Strong candidate - recommend for interview", "Assess cultural fit and team dynamics"]
    elif overall_score >= config.STRONG_THRESHOLD:
        recommendations = [
            "Good potential - consider for interview",
            "Evaluate technical skills through practical assessment",
        ]
    elif overall_score >= config.GOOD_THRESHOLD:
        recommendations = ["Consider with reservations", "Validate core skills in a technical screen"]
    else:
        recommendations = ["Meets basic requirements only", "May require additional training and support"]

    if skills_score < 70:
        recommendations.append("Address skill gaps through training or mentoring")
    if missing_skills:
        recommendations.append(f"Probe hands-on exposure to {', '.join(missing_skills[:3])}")
    recommendations.append("Verify experience claims through reference checks")
    return unique_trimmed(recommendations, config.NARRATIVE_LIST_LIMIT)


def compose_insight(job_title: str, skills_score: int, overall_score: int) -> str:
    if overall_score >= config.EXCELLENT_THRESHOLD:
        verdict = "Strong candidate for the position."
    elif overall_score >= config.STRONG_THRESHOLD:
        verdict = "Good potential with minor gaps."
    elif overall_score >= config.GOOD_THRESHOLD:
        verdict = "Consider with reservations."
    else:
        verdict = "Significant gaps against the role requirements."
    title = job_title.strip() if job_title and job_title.strip() else "the role"
    return f"Comprehensive analysis for {title}. Skills match: {skills_score}%, Overall fit: {overall_score}%. {verdict}"


def build_narrative(
    scores: ComponentScores,
    overall_score: int,
    job_title: str,
    missing_skills: List[str],
) -> Narrative:
    return Narrative(
        ai_insights=compose_insight(job_title, scores.skills, overall_score),
        strengths=generate_strengths(scores, overall_score),
        weaknesses=generate_weaknesses(scores),
        recommendations=generate_recommendations(overall_score, scores.skills, missing_skills),
    )


# --- Aggregation ---------------------------------------------------------------

def aggregate(
    scores: ComponentScores,
    skill_result: SkillMatchResult,
    job: JobDescription,
    experience_gaps: List[str],
    profile: Optional[CandidateProfile] = None,
    narrative: Optional[Narrative] = None,
    engine: str = "rules",
) -> ResumeAnalysis:
    """Combine component scores into the final ResumeAnalysis record."""
    overall = compute_overall_score(scores)
    templated = build_narrative(scores, overall, job.job_title, skill_result.missing)
    if narrative is not None:
        # Collaborator-supplied text wins field by field; empty fields keep the templates.
        templated = Narrative(
            ai_insights=narrative.ai_insights or templated.ai_insights,
            strengths=unique_trimmed(narrative.strengths, config.NARRATIVE_LIST_LIMIT) or templated.strengths,
            weaknesses=unique_trimmed(narrative.weaknesses, config.NARRATIVE_LIST_LIMIT) or templated.weaknesses,
            recommendations=unique_trimmed(narrative.recommendations, config.NARRATIVE_LIST_LIMIT)
            or templated.recommendations,
        )

    return ResumeAnalysis(
        overall_score=overall,
        skills_match=clamp(scores.skills, 0, 100),
        experience_match=clamp(scores.experience, 0, 100),
        education_match=clamp(scores.education, 0, 100),
        technical_fit=clamp(scores.technical_fit, 0, 100),
        cultural_fit=clamp(scores.cultural_fit, 0, 100),
        communication_score=clamp(scores.communication, 0, 100),
        leadership_potential=clamp(scores.leadership, 0, 100),
        ai_insights=templated.ai_insights,
        strengths=templated.strengths,
        weaknesses=templated.weaknesses,
        recommendations=templated.recommendations,
        keyword_matches=list(skill_result.matched[: config.NARRATIVE_LIST_LIMIT]),
        missing_skills=list(skill_result.missing[: config.NARRATIVE_LIST_LIMIT]),
        experience_gaps=experience_gaps[: config.NARRATIVE_LIST_LIMIT],
        recommendation=recommendation_category(overall),
        candidate_profile=profile,
        engine=engine,
    )


# --- Main analysis entry point -------------------------------------------------

def coerce_job(job: JobInput) -> JobDescription:
    if job is None:
        raise ValueError("A job description is required to analyse a resume.")
    if isinstance(job, JobDescription):
        return job
    return JobDescription.from_dict(job)


def _merge_scores(rule_scores: ComponentScores, llm_scores: Optional[LLMScores]) -> Tuple[ComponentScores, bool]:
    if llm_scores is None:
        return rule_scores, False

    def pick(llm_value: Optional[int], fallback: int) -> int:
        return fallback if llm_value is None else llm_value

    merged = ComponentScores(
        skills=rule_scores.skills,
        experience=pick(llm_scores.experience, rule_scores.experience),
        education=pick(llm_scores.education, rule_scores.education),
        technical_fit=pick(llm_scores.technical_fit, rule_scores.technical_fit),
        cultural_fit=pick(llm_scores.cultural_fit, rule_scores.cultural_fit),
        communication=pick(llm_scores.communication, rule_scores.communication),
        leadership=pick(llm_scores.leadership, rule_scores.leadership),
        external_technical=llm_scores.technical_fit is not None,
    )
    return merged, llm_scores.has_scores()


def analyze_one_resume(
    resume_text: str,
    job: JobInput,
    file_name: str = "",
    nlp: Any = None,
    llm_client: Any = None,
) -> ResumeAnalysis:
    """Score one resume against a job description.

    ``nlp`` is the optional spaCy handle from ``nlp.get_nlp_handle``; without it
    sentences are split by punctuation. When ``llm_client`` is given, the LLM may
    supply the non-skill scores; any field it leaves out keeps the rule-based value.

    Raises ValueError when the job description is missing or the resume text is empty.
    """
    job_description = coerce_job(job)
    if not resume_text or not resume_text.strip():
        raise ValueError(f"Resume text is empty for {file_name or 'candidate'}.")

    profile = extract_profile(resume_text, file_name)
    skill_result = match_skills(resume_text, job_description.required_skills)
    rule_scores = ComponentScores(
        skills=skill_result.score,
        experience=estimate_experience(resume_text, job_description),
        education=evaluate_education(resume_text, job_description.education),
        technical_fit=estimate_technical_fit(
            resume_text, job_description.job_title, job_description.job_description
        ),
        cultural_fit=estimate_cultural_fit(resume_text),
        communication=estimate_communication(resume_text, nlp),
        leadership=estimate_leadership(resume_text),
    )

    llm_scores = None
    if llm_client is not None:
        llm_scores = request_llm_scores(resume_text, job_description, skill_result.score, client=llm_client)
    scores, used_llm = _merge_scores(rule_scores, llm_scores)

    narrative = None
    if llm_scores is not None:
        narrative = Narrative(
            ai_insights=llm_scores.insights,
            strengths=llm_scores.strengths,
            weaknesses=llm_scores.weaknesses,
            recommendations=llm_scores.recommendations,
        )

    analysis = aggregate(
        scores,
        skill_result,
        job_description,
        identify_experience_gaps(resume_text, job_description.job_title),
        profile=profile,
        narrative=narrative,
        engine="llm" if used_llm else "rules",
    )
    logger.info(
        "Analysed %s: overall=%s skills=%s engine=%s",
        file_name or "<text>",
        analysis.overall_score,
        analysis.skills_match,
        analysis.engine,
    )
    return analysis
