"""Plain data records exchanged between the engine and its callers."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from normalizer import normalize_skill_list

SkillList = Union[str, List[str]]


def _pick(payload: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return default


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [line.strip() for line in value.splitlines() if line.strip()]
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


# --- Job description -----------------------------------------------------------

@dataclass(frozen=True)
class JobDescription:
    job_title: str = ""
    department: str = ""
    experience_level: str = ""
    min_experience: int = 0
    max_experience: int = 0
    required_skills: SkillList = field(default_factory=list)
    preferred_skills: SkillList = field(default_factory=list)
    education: str = ""
    job_description: str = ""
    responsibilities: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "JobDescription":
        """Build from the job form payload; camelCase and snake_case keys are both accepted."""
        required = _pick(payload, "requiredSkills", "required_skills", default=[])
        preferred = _pick(payload, "preferredSkills", "preferred_skills", default=[])
        return cls(
            job_title=str(_pick(payload, "jobTitle", "job_title", "title", default="")).strip(),
            department=str(_pick(payload, "department", default="")).strip(),
            experience_level=str(_pick(payload, "experienceLevel", "experience_level", default="")).strip().lower(),
            min_experience=_as_int(_pick(payload, "minExperience", "min_experience", default=0)),
            max_experience=_as_int(_pick(payload, "maxExperience", "max_experience", default=0)),
            required_skills=required if isinstance(required, str) else list(required),
            preferred_skills=preferred if isinstance(preferred, str) else list(preferred),
            education=str(_pick(payload, "education", default="")).strip(),
            job_description=str(_pick(payload, "jobDescription", "job_description", "description", default="")),
            responsibilities=_as_str_list(_pick(payload, "responsibilities", default=[])),
        )

    def resolved_required_skills(self) -> List[str]:
        return normalize_skill_list(self.required_skills)

    def resolved_preferred_skills(self) -> List[str]:
        return normalize_skill_list(self.preferred_skills)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobTitle": self.job_title,
            "department": self.department,
            "experienceLevel": self.experience_level,
            "minExperience": self.min_experience,
            "maxExperience": self.max_experience,
            "requiredSkills": self.resolved_required_skills(),
            "preferredSkills": self.resolved_preferred_skills(),
            "education": self.education,
            "jobDescription": self.job_description,
            "responsibilities": list(self.responsibilities),
        }


# --- Candidate profile ---------------------------------------------------------

@dataclass(frozen=True)
class PersonalInfo:
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""


@dataclass(frozen=True)
class EducationEntry:
    degree: str
    field: str
    institution: str
    year: str


@dataclass(frozen=True)
class ExperienceEntry:
    title: str
    company: str
    duration: str
    description: str
    technologies: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ProjectEntry:
    name: str
    description: str
    technologies: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TechnicalSkills:
    languages: List[str] = field(default_factory=list)
    frameworks: List[str] = field(default_factory=list)
    databases: List[str] = field(default_factory=list)
    tools: List[str] = field(default_factory=list)
    cloud: List[str] = field(default_factory=list)
    other: List[str] = field(default_factory=list)

    def all_skills(self) -> List[str]:
        return self.languages + self.frameworks + self.databases + self.tools + self.cloud + self.other


@dataclass(frozen=True)
class CandidateProfile:
    file_name: str
    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    education: List[EducationEntry] = field(default_factory=list)
    experience: List[ExperienceEntry] = field(default_factory=list)
    technical_skills: TechnicalSkills = field(default_factory=TechnicalSkills)
    projects: List[ProjectEntry] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    total_experience_years: int = 0

    def to_dict(self) -> Dict[str, Any]:
        info = self.personal_info
        skills = self.technical_skills
        return {
            "fileName": self.file_name,
            "personalInfo": {
                "name": info.name,
                "email": info.email,
                "phone": info.phone,
                "location": info.location,
            },
            "education": [
                {"degree": e.degree, "field": e.field, "institution": e.institution, "year": e.year}
                for e in self.education
            ],
            "experience": [
                {
                    "title": e.title,
                    "company": e.company,
                    "duration": e.duration,
                    "description": e.description,
                    "technologies": list(e.technologies),
                }
                for e in self.experience
            ],
            "technicalSkills": {
                "languages": list(skills.languages),
                "frameworks": list(skills.frameworks),
                "databases": list(skills.databases),
                "tools": list(skills.tools),
                "cloud": list(skills.cloud),
                "other": list(skills.other),
            },
            "projects": [
                {"name": p.name, "description": p.description, "technologies": list(p.technologies)}
                for p in self.projects
            ],
            "certifications": list(self.certifications),
            "totalExperienceYears": self.total_experience_years,
        }


# --- Analysis output -----------------------------------------------------------

@dataclass(frozen=True)
class ResumeAnalysis:
    overall_score: int
    skills_match: int
    experience_match: int
    education_match: int
    technical_fit: int
    cultural_fit: int
    communication_score: int
    leadership_potential: int
    ai_insights: str = ""
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    keyword_matches: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    experience_gaps: List[str] = field(default_factory=list)
    recommendation: str = ""
    candidate_profile: Optional[CandidateProfile] = None
    engine: str = "rules"

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "overallScore": self.overall_score,
            "skillsMatch": self.skills_match,
            "experienceMatch": self.experience_match,
            "educationMatch": self.education_match,
            "technicalFit": self.technical_fit,
            "culturalFit": self.cultural_fit,
            "communicationScore": self.communication_score,
            "leadershipPotential": self.leadership_potential,
            "aiInsights": self.ai_insights,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "recommendations": list(self.recommendations),
            "keywordMatches": list(self.keyword_matches),
            "missingSkills": list(self.missing_skills),
            "experienceGaps": list(self.experience_gaps),
            "recommendation": self.recommendation,
            "engine": self.engine,
        }
        if self.candidate_profile is not None:
            payload["candidateProfile"] = self.candidate_profile.to_dict()
        return payload


@dataclass(frozen=True)
class RankEntry:
    file_name: str
    rank: int
    overall_score: int
    reasoning: str
    key_strengths: List[str] = field(default_factory=list)
    key_weaknesses: List[str] = field(default_factory=list)
    recommendation: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileName": self.file_name,
            "rank": self.rank,
            "overallScore": self.overall_score,
            "reasoning": self.reasoning,
            "keyStrengths": list(self.key_strengths),
            "keyWeaknesses": list(self.key_weaknesses),
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class ComparativeRanking:
    rankings: List[RankEntry] = field(default_factory=list)
    summary: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rankings": [entry.to_dict() for entry in self.rankings],
            "summary": self.summary,
        }
