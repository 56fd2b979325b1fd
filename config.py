"""Scoring policy and runtime settings for the resume fitness engine."""

import os

from dotenv import load_dotenv

load_dotenv()

# LLM collaborator
OPENAI_API_KEY: str = os.getenv("OPENROUTER_API_KEY") or os.getenv("OPENAI_API_KEY", "")
OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "https://openrouter.ai/api/v1")
LLM_MODEL: str = os.getenv("RESUME_LLM_MODEL", "openai/gpt-4o-mini")
LLM_MAX_ATTEMPTS: int = int(os.getenv("LLM_MAX_ATTEMPTS", "2"))
LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))
LLM_JSON_MODE: bool = os.getenv("LLM_JSON_MODE", "true").lower() in ("1", "true", "yes")
LLM_HTTP_REFERER: str = os.getenv("LLM_HTTP_REFERER", "Local")
LLM_APP_TITLE: str = os.getenv("LLM_APP_TITLE", "Resume Fitness Engine")

# NLP
SPACY_MODEL: str = os.getenv("SPACY_MODEL", "en_core_web_sm")

# Batch processing
BATCH_MAX_WORKERS: int = int(os.getenv("BATCH_MAX_WORKERS", "4"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Overall score weights, used when an external technical-fit signal is present
SCORE_WEIGHTS = {
    "skills": 0.4,
    "experience": 0.3,
    "technical": 0.2,
    "education": 0.1,
}

# Skill score clamp
SKILL_SCORE_FLOOR = 20
SKILL_SCORE_CEILING = 95
SKILL_SCORE_NEUTRAL = 75
MATCHED_SKILLS_LIMIT = 5
MISSING_SKILLS_LIMIT = 3

# Estimator ceilings
EXPERIENCE_SCORE_CEILING = 95
PROJECT_FALLBACK_CEILING = 85
EDUCATION_SCORE_CEILING = 95
EDUCATION_UNCONSTRAINED_SCORE = 85
DEFAULT_MAX_EXPERIENCE = 10

# Narrative list cap
NARRATIVE_LIST_LIMIT = 5

# Score bands for narrative and recommendation category
EXCELLENT_THRESHOLD = 85
STRONG_THRESHOLD = 75
GOOD_THRESHOLD = 65
RECOMMENDED_THRESHOLD = 75

# Neutral score for a resume that could not be analysed inside a batch
BATCH_FALLBACK_SCORE = 50
