"""Detailed per-candidate report built from a ResumeAnalysis."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

import config
from matcher import is_skill_present
from models import CandidateProfile, JobDescription, ResumeAnalysis

SCORE_CHART_ROWS = [
    ("Skills Match", "skills_match", "#667eea"),
    ("Experience", "experience_match", "#764ba2"),
    ("Education", "education_match", "#f093fb"),
    ("Technical Fit", "technical_fit", "#4facfe"),
    ("Communication", "communication_score", "#43e97b"),
    ("Leadership", "leadership_potential", "#38f9d7"),
]


@dataclass(frozen=True)
class ScoreDetail:
    score: int
    details: str
    items: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "details": self.details, "items": list(self.items)}


@dataclass(frozen=True)
class CandidateReport:
    candidate_info: Dict[str, str]
    job_info: Dict[str, str]
    overall_score: int
    fit_level: str
    recommendation: str
    executive_summary: str
    detailed_scores: Dict[str, ScoreDetail]
    strengths: List[str]
    weaknesses: List[str]
    recommendations: List[str]
    next_steps: List[str]
    score_breakdown: List[Dict[str, Any]]
    skills_comparison: List[Dict[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidateInfo": dict(self.candidate_info),
            "jobInfo": dict(self.job_info),
            "overallAssessment": {
                "overallScore": self.overall_score,
                "fitLevel": self.fit_level,
                "recommendation": self.recommendation,
                "summary": self.executive_summary,
            },
            "detailedScores": {key: detail.to_dict() for key, detail in self.detailed_scores.items()},
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "recommendations": list(self.recommendations),
            "nextSteps": list(self.next_steps),
            "charts": {
                "scoreBreakdown": list(self.score_breakdown),
                "skillsComparison": list(self.skills_comparison),
            },
        }


def fit_level(overall_score: int) -> str:
    if overall_score >= config.EXCELLENT_THRESHOLD:
        return "Excellent"
    if overall_score >= config.STRONG_THRESHOLD:
        return "Good"
    if overall_score >= config.GOOD_THRESHOLD:
        return "Fair"
    return "Poor"


def recommendation_sentence(overall_score: int) -> str:
    if overall_score >= config.EXCELLENT_THRESHOLD:
        return "Highly Recommended - Excellent candidate for the role"
    if overall_score >= config.STRONG_THRESHOLD:
        return "Recommended - Strong candidate with good potential"
    if overall_score >= config.GOOD_THRESHOLD:
        return "Consider - Decent candidate with some development needs"
    return "Not Recommended - Significant gaps in requirements"


def executive_summary(analysis: ResumeAnalysis, job_title: str) -> str:
    top_strength = analysis.strengths[0] if analysis.strengths else "relevant background"
    main_concern = analysis.weaknesses[0] if analysis.weaknesses else "some skill gaps"
    return (
        f"This candidate shows {fit_level(analysis.overall_score).lower()} fit for the "
        f"{job_title or 'open'} position. Key strength: {top_strength}. Main consideration: {main_concern}."
    )


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def _skills_detail(analysis: ResumeAnalysis) -> ScoreDetail:
    matched = len(analysis.keyword_matches)
    missing = len(analysis.missing_skills)
    details = f"Matched {matched} required skills. " + (
        f"Missing {missing} key skills." if missing else "All key skills present."
    )
    return ScoreDetail(analysis.skills_match, details, list(analysis.keyword_matches))


def _experience_detail(analysis: ResumeAnalysis, profile: Optional[CandidateProfile]) -> ScoreDetail:
    years = profile.total_experience_years if profile else 0
    projects = len(profile.projects) if profile else 0
    if years > 0:
        details = f"{years} years of relevant experience with {projects} documented projects."
    else:
        details = f"Entry-level candidate with {projects} projects demonstrating practical skills."
    items = [f"{entry.title} at {entry.company}" for entry in profile.experience] if profile else []
    return ScoreDetail(analysis.experience_match, details, items)


def _education_detail(analysis: ResumeAnalysis, profile: Optional[CandidateProfile]) -> ScoreDetail:
    education = profile.education if profile else []
    certifications = profile.certifications if profile else []
    details = (
        f"{_plural(len(education), 'educational qualification')} with "
        f"{_plural(len(certifications), 'professional certification')}."
    )
    items = [f"{entry.degree} in {entry.field}" for entry in education] + list(certifications)
    return ScoreDetail(analysis.education_match, details, items)


def _technical_detail(analysis: ResumeAnalysis, profile: Optional[CandidateProfile]) -> ScoreDetail:
    items: List[str] = []
    total = 0
    if profile:
        skills = profile.technical_skills
        total = len(skills.all_skills())
        for label, values in (
            ("Programming", skills.languages),
            ("Frameworks", skills.frameworks),
            ("Databases", skills.databases),
        ):
            if values:
                items.append(f"{label}: {', '.join(values[:3])}")
    details = f"Demonstrates proficiency in {total} technical skills across multiple domains."
    return ScoreDetail(analysis.technical_fit, details, items)


def _communication_detail(score: int) -> ScoreDetail:
    if score >= 80:
        details = "Resume demonstrates clear communication and professional presentation."
    elif score >= 70:
        details = "Good communication skills evident in resume structure and content."
    else:
        details = "Resume could benefit from improved clarity and organization."
    return ScoreDetail(score, details)


def _leadership_detail(score: int) -> ScoreDetail:
    if score >= 80:
        details = "Strong indicators of leadership potential and initiative."
    elif score >= 70:
        details = "Some leadership experience or potential demonstrated."
    else:
        details = "Limited leadership experience evident in current background."
    return ScoreDetail(score, details)


def next_steps(analysis: ResumeAnalysis) -> List[str]:
    if analysis.overall_score >= config.STRONG_THRESHOLD:
        steps = [
            "Schedule technical interview to assess practical skills",
            "Conduct behavioral interview to evaluate cultural fit",
        ]
    elif analysis.overall_score >= config.GOOD_THRESHOLD:
        steps = [
            "Consider for phone screening to clarify experience",
            "Assess willingness to develop missing skills",
        ]
    else:
        steps = [
            "Provide feedback on areas for improvement",
            "Consider for future opportunities after skill development",
        ]
    if analysis.missing_skills:
        steps.append(f"Evaluate proficiency in: {', '.join(analysis.missing_skills[:2])}")
    return steps


def skills_comparison(
    analysis: ResumeAnalysis, job: JobDescription, resume_text: Optional[str] = None
) -> List[Dict[str, Any]]:
    matched = {skill.lower() for skill in analysis.keyword_matches}
    rows = []
    for skill in job.resolved_required_skills():
        if resume_text is not None:
            present = is_skill_present(resume_text, skill)
        else:
            present = skill.lower() in matched
        rows.append({"skill": skill, "required": True, "present": present})
    return rows


def build_candidate_report(
    analysis: ResumeAnalysis,
    job: JobDescription,
    file_name: str,
    analysis_date: Optional[date] = None,
    resume_text: Optional[str] = None,
) -> CandidateReport:
    profile = analysis.candidate_profile
    info = profile.personal_info if profile else None
    day = analysis_date or date.today()
    return CandidateReport(
        candidate_info={
            "name": (info.name if info else "") or "Name not specified",
            "email": (info.email if info else "") or "Email not provided",
            "phone": (info.phone if info else "") or "Phone not provided",
            "location": (info.location if info else "") or "Location not specified",
            "fileName": file_name,
        },
        job_info={
            "title": job.job_title,
            "department": job.department or "Not specified",
            "analysisDate": f"{day:%B} {day.day}, {day.year}",
        },
        overall_score=analysis.overall_score,
        fit_level=fit_level(analysis.overall_score),
        recommendation=recommendation_sentence(analysis.overall_score),
        executive_summary=executive_summary(analysis, job.job_title),
        detailed_scores={
            "skillsMatch": _skills_detail(analysis),
            "experienceMatch": _experience_detail(analysis, profile),
            "educationMatch": _education_detail(analysis, profile),
            "technicalFit": _technical_detail(analysis, profile),
            "communicationScore": _communication_detail(analysis.communication_score),
            "leadershipPotential": _leadership_detail(analysis.leadership_potential),
        },
        strengths=list(analysis.strengths),
        weaknesses=list(analysis.weaknesses),
        recommendations=list(analysis.recommendations),
        next_steps=next_steps(analysis),
        score_breakdown=[
            {"label": label, "value": getattr(analysis, attr), "color": color}
            for label, attr, color in SCORE_CHART_ROWS
        ],
        skills_comparison=skills_comparison(analysis, job, resume_text),
    )
