"""Rule-based estimators for experience, education and the supplementary fit dimensions."""

import logging
import math
import re
from typing import Any, List, Optional

import config
from normalizer import (
    contains_term,
    contains_word_form,
    distinct_hits,
    distinct_word_forms,
    lower_collapsed,
    round_half_up,
    tokenize,
)
from skills import (
    ACTION_VERBS,
    EDUCATION_ALIASES,
    EDUCATION_KEYWORDS,
    EDUCATION_LADDER,
    LEADERSHIP_SIGNALS,
    ROLE_HINTS,
    ROLE_KEYWORDS,
    SECTION_HEADERS,
    SENIORITY_TITLES,
    TEAMWORK_SIGNALS,
    TECH_FIELDS,
)

logger = logging.getLogger(__name__)

YEARS_RE = re.compile(r"(\d+)\s*\+?\s*years?", re.IGNORECASE)
PROJECT_RE = re.compile(r"project", re.IGNORECASE)
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
BULLET_LINE_RE = re.compile(r"^\s*[-*\u2022\u25cf]\s+\S", re.MULTILINE)
SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+|\n+")

# --- Experience ----------------------------------------------------------------

def extract_experience_years(text: str) -> int:
    """Largest "<n> year(s)" figure mentioned in the text, 0 when none."""
    if not text:
        return 0
    years = [int(value) for value in YEARS_RE.findall(text)]
    return max(years) if years else 0


def count_project_mentions(text: str) -> int:
    return len(PROJECT_RE.findall(text or ""))


def _level_matches_years(level: str, years: int) -> bool:
    level = (level or "").strip().lower()
    if level == "entry":
        return years <= 2
    if level == "mid":
        return 2 <= years <= 5
    if level == "senior":
        return years >= 5
    if level == "lead":
        return years >= 7
    return False


def estimate_experience(resume_text: str, job: Any) -> int:
    """Score experience against ``job.min_experience``/``max_experience``/``experience_level``."""
    text = resume_text or ""
    years = extract_experience_years(text)

    if not YEARS_RE.search(text):
        project_mentions = count_project_mentions(text)
        if project_mentions >= 2:
            logger.debug("No year mentions; project fallback with %s mentions", project_mentions)
            return min(config.PROJECT_FALLBACK_CEILING, 60 + 10 * project_mentions)

    min_required = max(int(getattr(job, "min_experience", 0) or 0), 0)
    max_required = int(getattr(job, "max_experience", 0) or 0) or config.DEFAULT_MAX_EXPERIENCE

    score = 50
    if years >= min_required:
        if years <= max_required:
            score += 30
        elif years <= max_required + 2:
            score += 25
        else:
            score += 15
    else:
        score += math.floor(20 * years / max(min_required, 1))

    score += 3 * len(distinct_word_forms(text, ACTION_VERBS))
    score += 5 * len(distinct_word_forms(text, SENIORITY_TITLES))
    if _level_matches_years(getattr(job, "experience_level", ""), years):
        score += 10

    return min(config.EXPERIENCE_SCORE_CEILING, score)


# --- Education -----------------------------------------------------------------

def normalize_education_level(value: Optional[str]) -> str:
    """Map free-form requirement labels ("Bachelor's Degree", "Masters") onto ladder keys."""
    if not value:
        return ""
    cleaned = re.sub(r"\s+", " ", value.strip().lower())
    cleaned = re.sub(r"\s*(degree|level)$", "", cleaned)
    if cleaned in EDUCATION_KEYWORDS or cleaned == "none":
        return cleaned
    if cleaned in EDUCATION_ALIASES:
        return EDUCATION_ALIASES[cleaned]
    for alias, level in EDUCATION_ALIASES.items():
        if cleaned.startswith(alias):
            return level
    for level in EDUCATION_KEYWORDS:
        if cleaned.startswith(level.replace("_", " ")):
            return level
    return cleaned


def _mentions_level(text: str, level: str) -> bool:
    return any(contains_word_form(text, keyword) for keyword in EDUCATION_KEYWORDS.get(level, []))


def evaluate_education(resume_text: str, required_education: Optional[str]) -> int:
    """Score the resume against a required degree level."""
    required = normalize_education_level(required_education)
    if not required or required == "none":
        return config.EDUCATION_UNCONSTRAINED_SCORE

    text = resume_text or ""
    # Unranked requirements (bootcamp, unknown labels) treat every ladder level as higher.
    start = EDUCATION_LADDER.index(required) + 1 if required in EDUCATION_LADDER else 0
    higher_level = None
    for level in EDUCATION_LADDER[start:]:
        if _mentions_level(text, level):
            higher_level = level
            break

    score = 50
    # A higher ranked degree also satisfies the required level.
    if _mentions_level(text, required) or (higher_level and required in EDUCATION_LADDER):
        score += 35
    if higher_level:
        score += 10

    if any(contains_term(text, field_name) for field_name in TECH_FIELDS):
        score += 10

    return min(config.EDUCATION_SCORE_CEILING, score)


# --- Technical fit -------------------------------------------------------------

def detect_role(job_title: str, job_description: str = "") -> str:
    haystack = f"{job_title or ''} {job_description or ''}"
    for role, hints in ROLE_HINTS:
        if distinct_hits(haystack, hints):
            return role
    return "fullstack"


def estimate_technical_fit(resume_text: str, job_title: str, job_description: str = "") -> int:
    role = detect_role(job_title, job_description)
    keywords = ROLE_KEYWORDS[role]
    matched = distinct_hits(resume_text or "", keywords)
    logger.debug("Technical fit for role %s: %s/%s keywords", role, len(matched), len(keywords))
    return round_half_up(min(95, 40 + len(matched) / len(keywords) * 55))


# --- Soft signals --------------------------------------------------------------

def estimate_cultural_fit(resume_text: str) -> int:
    return min(90, 60 + 5 * len(distinct_hits(resume_text or "", TEAMWORK_SIGNALS)))


def estimate_leadership(resume_text: str) -> int:
    return min(90, 55 + 7 * len(distinct_hits(resume_text or "", LEADERSHIP_SIGNALS)))


def split_sentences(text: str, nlp: Any = None) -> List[str]:
    """Sentence split through the NLP handle when available, otherwise by punctuation."""
    if not text:
        return []
    if nlp is not None:
        try:
            doc = nlp(text)
            return [sent.text.strip() for sent in doc.sents if sent.text.strip()]
        except ValueError as exc:
            logger.warning("NLP sentence split failed, using regex split: %s", exc)
    return [chunk.strip() for chunk in SENTENCE_SPLIT_RE.split(text) if chunk and chunk.strip()]


def _section_header_count(text: str) -> int:
    found = set()
    for line in text.splitlines():
        candidate = line.strip().strip(":").lower()
        if not candidate or len(candidate) > 40:
            continue
        for header in SECTION_HEADERS:
            if candidate.startswith(header):
                found.add(header)
    return len(found)


def estimate_communication(resume_text: str, nlp: Any = None) -> int:
    """Structure and clarity heuristic: sentence length, section headers, contact, bullets."""
    text = resume_text or ""
    score = 60

    sentences = split_sentences(text, nlp)
    if sentences:
        average_words = sum(len(tokenize(sentence)) for sentence in sentences) / len(sentences)
        if 8 <= average_words <= 25:
            score += 10
    if _section_header_count(text) >= 2:
        score += 10
    if EMAIL_RE.search(text):
        score += 5
    if len(BULLET_LINE_RE.findall(text)) >= 3:
        score += 5
    return min(90, score)


# --- Gaps ----------------------------------------------------------------------

def identify_experience_gaps(resume_text: str, job_title: str) -> List[str]:
    lowered = lower_collapsed(resume_text)
    gaps: List[str] = []
    if "leadership" not in lowered and "lead" not in lowered:
        gaps.append("Leadership experience")
    title_words = (job_title or "").strip().split()
    if title_words and title_words[0].lower() not in lowered:
        gaps.append(f"Specific {job_title.strip()} experience")
    if not any(phrase in lowered for phrase in ("team lead", "managed a team", "team management")):
        gaps.append("Team management experience")
    return gaps[: config.NARRATIVE_LIST_LIMIT]
