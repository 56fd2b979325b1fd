"""Resolve required skills against resume text."""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Pattern, Tuple

import config
from normalizer import (
    SkillListInput,
    clamp,
    contains_term,
    normalize_skill_list,
    round_half_up,
)
from skills import CONTEXT_HEADERS, SKILL_VARIATIONS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillMatchResult:
    score: int
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    total: int = 0
    matched_count: int = 0


def skill_variations(skill: str) -> List[str]:
    """Accepted surface forms for a skill; unknown skills are their own variation."""
    key = skill.strip().lower()
    return SKILL_VARIATIONS.get(key, [key])


@lru_cache(maxsize=1024)
def _context_patterns(variation: str) -> Tuple[Pattern[str], ...]:
    escaped = re.escape(variation)
    headers = "|".join(CONTEXT_HEADERS)
    # `.` stops at a newline, so each pattern is confined to one line.
    return (
        re.compile(rf"(?:{headers}).*{escaped}", re.IGNORECASE),
        re.compile(rf"{escaped}.*development", re.IGNORECASE),
        re.compile(rf"{escaped}.*programming", re.IGNORECASE),
        re.compile(rf"using.*{escaped}", re.IGNORECASE),
        re.compile(rf"with.*{escaped}", re.IGNORECASE),
    )


def _has_context_mention(text: str, variation: str) -> bool:
    return any(pattern.search(text) for pattern in _context_patterns(variation))


def is_skill_present(resume_text: str, skill: str) -> bool:
    for variation in skill_variations(skill):
        if contains_term(resume_text, variation):
            logger.debug("Skill %r matched by variation %r", skill, variation)
            return True
        if _has_context_mention(resume_text, variation):
            logger.debug("Skill %r matched contextually by %r", skill, variation)
            return True
    return False


def match_skills(resume_text: str, required_skills: SkillListInput) -> SkillMatchResult:
    """Score how many of ``required_skills`` the resume mentions.

    The score is the matched percentage clamped to the configured floor and
    ceiling. An empty or unparseable skill list yields the neutral score.
    """
    skills = normalize_skill_list(required_skills)
    if not skills:
        return SkillMatchResult(score=config.SKILL_SCORE_NEUTRAL)

    text = resume_text or ""
    matched: List[str] = []
    missing: List[str] = []
    for skill in skills:
        if is_skill_present(text, skill):
            matched.append(skill)
        else:
            missing.append(skill)

    percentage = len(matched) / len(skills) * 100
    score = clamp(round_half_up(percentage), config.SKILL_SCORE_FLOOR, config.SKILL_SCORE_CEILING)
    logger.debug("Skill match: %s/%s -> %s", len(matched), len(skills), score)
    return SkillMatchResult(
        score=score,
        matched=matched[: config.MATCHED_SKILLS_LIMIT],
        missing=missing[: config.MISSING_SKILLS_LIMIT],
        total=len(skills),
        matched_count=len(matched),
    )
