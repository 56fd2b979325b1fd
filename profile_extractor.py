"""Turn raw resume text into a structured CandidateProfile.

Every helper here is a coarse keyword heuristic. Nothing raises: a signal that
cannot be found yields an empty string, an empty list or zero.
"""

import logging
import re
from typing import List, Optional, Sequence

from estimators import extract_experience_years
from models import (
    CandidateProfile,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectEntry,
    TechnicalSkills,
)
from normalizer import contains_term, contains_word_form, distinct_hits
from skills import (
    CERTIFICATION_PHRASES,
    DEGREE_KEYWORDS,
    FIELD_KEYWORDS,
    PROFILE_CLOUD,
    PROFILE_DATABASES,
    PROFILE_FRAMEWORKS,
    PROFILE_LANGUAGES,
    PROFILE_LOCATIONS,
    PROFILE_OTHER,
    PROFILE_TOOLS,
)

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(
    r"(?:\+91|91)?[\s-]?[6-9]\d{9}|(?:\+\d{1,3})?[\s-]?\(?\d{3}\)?[\s-]?\d{3}[\s-]?\d{4}"
)
NAME_RE = re.compile(r"^[A-Za-z\s.]+$")
COMPANY_RE = re.compile(r"\bat\s+([A-Z][a-zA-Z&.]*(?:\s+[A-Z][a-zA-Z&.]*)*)")
BULLET_PREFIX = " -*\t\u2022"

EXPERIENCE_HEADERS = ("experience", "work history", "employment")
PROJECT_HEADERS = ("project", "portfolio")
EXPERIENCE_WINDOW = 20
PROJECT_WINDOW = 15
DEFAULT_FIELD = "Computer Science"


def _content_lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _find_header(lines: Sequence[str], headers: Sequence[str]) -> Optional[int]:
    for index, line in enumerate(lines):
        lowered = line.lower()
        if any(header in lowered for header in headers):
            return index
    return None


# --- Contact details -----------------------------------------------------------

def extract_name(lines: Sequence[str]) -> str:
    for line in lines[:5]:
        if "@" in line or "+" in line:
            continue
        if not 4 <= len(line) < 50:
            continue
        if "objective" in line.lower():
            continue
        if NAME_RE.match(line):
            return line
    return ""


def extract_email(text: str) -> str:
    match = EMAIL_RE.search(text)
    return match.group(0) if match else ""


def extract_phone(text: str) -> str:
    match = PHONE_RE.search(text)
    return match.group(0).strip() if match else ""


def extract_location(text: str) -> str:
    for city in PROFILE_LOCATIONS:
        if contains_term(text, city):
            return city.capitalize()
    return ""


# --- Skills --------------------------------------------------------------------

def _scan_with_forms(text: str, keywords: Sequence[str], alternate) -> List[str]:
    hits: List[str] = []
    for keyword in keywords:
        if keyword in hits:
            continue
        if contains_term(text, keyword) or contains_term(text, alternate(keyword)):
            hits.append(keyword)
    return hits


def extract_technical_skills(text: str) -> TechnicalSkills:
    return TechnicalSkills(
        languages=distinct_hits(text, PROFILE_LANGUAGES),
        frameworks=_scan_with_forms(text, PROFILE_FRAMEWORKS, lambda kw: kw.replace(".js", "js")),
        databases=_scan_with_forms(text, PROFILE_DATABASES, lambda kw: kw.replace("sql", " sql")),
        tools=distinct_hits(text, PROFILE_TOOLS),
        cloud=distinct_hits(text, PROFILE_CLOUD),
        other=distinct_hits(text, PROFILE_OTHER),
    )


# --- Sections ------------------------------------------------------------------

def extract_experience_entries(lines: Sequence[str]) -> List[ExperienceEntry]:
    header = _find_header(lines, EXPERIENCE_HEADERS)
    if header is None:
        return []
    entries: List[ExperienceEntry] = []
    for line in lines[header + 1 : header + 1 + EXPERIENCE_WINDOW]:
        match = COMPANY_RE.search(line)
        if not match:
            continue
        entries.append(
            ExperienceEntry(
                title="Software Developer",
                company=match.group(1).strip(),
                duration="1 year",
                description="Software development experience",
                technologies=[],
            )
        )
    return entries


def extract_education_entries(text: str) -> List[EducationEntry]:
    fields = distinct_hits(text, FIELD_KEYWORDS)
    field_name = fields[0].title() if fields else DEFAULT_FIELD
    return [
        EducationEntry(degree=degree.upper(), field=field_name, institution="University", year="2023")
        for degree in DEGREE_KEYWORDS
        if contains_word_form(text, degree)
    ]


def extract_projects(lines: Sequence[str]) -> List[ProjectEntry]:
    header = _find_header(lines, PROJECT_HEADERS)
    if header is None:
        return []
    projects: List[ProjectEntry] = []
    for raw in lines[header + 1 : header + 1 + PROJECT_WINDOW]:
        line = raw.lstrip(BULLET_PREFIX).strip()
        if not 10 <= len(line) < 100:
            continue
        if "project" in line.lower() or not line[0].isupper():
            continue
        technologies = distinct_hits(line, list(PROFILE_LANGUAGES) + list(PROFILE_FRAMEWORKS) + list(PROFILE_DATABASES))
        projects.append(ProjectEntry(name=line, description="Project description", technologies=technologies))
    return projects


def extract_certifications(text: str) -> List[str]:
    return [label for phrase, label in CERTIFICATION_PHRASES.items() if contains_term(text, phrase)]


# --- Entry point ---------------------------------------------------------------

def extract_profile(resume_text: str, file_name: str = "") -> CandidateProfile:
    """Build a CandidateProfile from raw resume text."""
    text = resume_text or ""
    lines = _content_lines(text)
    profile = CandidateProfile(
        file_name=file_name or "",
        personal_info=PersonalInfo(
            name=extract_name(lines),
            email=extract_email(text),
            phone=extract_phone(text),
            location=extract_location(text),
        ),
        education=extract_education_entries(text),
        experience=extract_experience_entries(lines),
        technical_skills=extract_technical_skills(text),
        projects=extract_projects(lines),
        certifications=extract_certifications(text),
        total_experience_years=extract_experience_years(text),
    )
    logger.debug(
        "Profile for %s: %s skills, %s experience entries, %s projects",
        file_name,
        len(profile.technical_skills.all_skills()),
        len(profile.experience),
        len(profile.projects),
    )
    return profile
