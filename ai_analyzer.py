import json
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence, Tuple

from openai import OpenAI

import config
from models import ComparativeRanking, JobDescription, RankEntry, ResumeAnalysis

logger = logging.getLogger(__name__)


@dataclass
class LLMScores:
    """Partial scores returned by the LLM; None means "not supplied, use the rule-based value"."""

    experience: Optional[int] = None
    education: Optional[int] = None
    technical_fit: Optional[int] = None
    cultural_fit: Optional[int] = None
    communication: Optional[int] = None
    leadership: Optional[int] = None
    insights: str = ""
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def has_scores(self) -> bool:
        return any(
            value is not None
            for value in (
                self.experience,
                self.education,
                self.technical_fit,
                self.cultural_fit,
                self.communication,
                self.leadership,
            )
        )


@lru_cache(maxsize=1)
def get_default_client() -> Optional[OpenAI]:
    if not config.OPENAI_API_KEY:
        logger.info("AI Analyzer: no API key configured; LLM scoring disabled.")
        return None

    headers = {
        "HTTP-Referer": config.LLM_HTTP_REFERER,
        "X-Title": config.LLM_APP_TITLE,
    }
    try:
        client = OpenAI(
            api_key=config.OPENAI_API_KEY,
            base_url=config.OPENAI_BASE_URL,
            default_headers=headers,
            timeout=config.LLM_TIMEOUT_SECONDS,
        )
        logger.info("AI Analyzer: initialized OpenAI-compatible client for base_url=%s", config.OPENAI_BASE_URL)
        return client
    except Exception as exc:  # pragma: no cover - best effort logging
        logger.exception("AI Analyzer: failed to initialize client: %s", exc)
        return None


SCORING_PROMPT_TEMPLATE = """
You are an expert technical recruiter. Compare the resume with the job description (ignore layout artefacts).

Role: {job_title}
Department: {department}
Experience band: {min_experience}-{max_experience} years ({experience_level})
Required skills: {required_skills}
Preferred skills: {preferred_skills}
Required education: {education}
Keyword skill match already computed: {skills_match}%

Respond ONLY with a JSON object matching this schema:
{{
  "experienceMatch": <integer 0-100>,
  "educationMatch": <integer 0-100>,
  "technicalFit": <integer 0-100 fit for this specific role>,
  "culturalFit": <integer 0-100>,
  "communicationScore": <integer 0-100>,
  "leadershipPotential": <integer 0-100>,
  "aiInsights": <string 2-3 sentence synopsis>,
  "strengths": [<short strings>],
  "weaknesses": [<short strings>],
  "recommendations": [<short interview or hiring notes>]
}}

Rules:
- Output must be valid JSON (double quotes, no trailing commas).
- Use null for any score you cannot estimate.
- Keep each list to at most 5 entries.

Job Description:
---
{job_description}
---

Resume Text:
---
{resume_text}
---
"""


RANKING_PROMPT_TEMPLATE = """
You are an expert technical recruiter comparing candidates for the role "{job_title}".
Required skills: {required_skills}

Candidates (already scored individually):
{candidate_lines}

Rank every candidate from best to worst fit. Respond ONLY with a JSON object:
{{
  "rankings": [
    {{
      "fileName": <candidate file name exactly as given>,
      "rank": <integer starting at 1>,
      "overallScore": <integer 0-100>,
      "reasoning": <one or two sentences>,
      "keyStrengths": [<up to 3 strings>],
      "keyWeaknesses": [<up to 2 strings>],
      "recommendation": <"Highly Recommended" | "Recommended" | "Consider" | "Not Recommended">
    }}
  ],
  "summary": <string comparing the pool>
}}
"""


EXCERPT_MAX_CHARS = 6000
# Blocks headed by these sections survive truncation first.
EXCERPT_SECTION_ORDER = (
    "experience",
    "work history",
    "employment",
    "project",
    "skills",
    "technical",
    "summary",
    "education",
)
CODE_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def request_llm_scores(
    resume_text: str,
    job: JobDescription,
    skills_match: int,
    client: Optional[OpenAI] = None,
) -> Optional[LLMScores]:
    """Ask the LLM for the non-skill scores; returns None on any failure."""
    llm_client = client or get_default_client()
    if llm_client is None:
        return None

    prompt = SCORING_PROMPT_TEMPLATE.format(
        job_title=job.job_title or "Not specified",
        department=job.department or "Not specified",
        min_experience=job.min_experience,
        max_experience=job.max_experience or config.DEFAULT_MAX_EXPERIENCE,
        experience_level=job.experience_level or "unspecified",
        required_skills=_format_focus_list(job.resolved_required_skills()),
        preferred_skills=_format_focus_list(job.resolved_preferred_skills()),
        education=job.education or "none",
        skills_match=skills_match,
        job_description=(job.job_description or "").strip(),
        resume_text=_prepare_resume_excerpt(resume_text),
    )
    messages = [
        {
            "role": "system",
            "content": "You are a meticulous HR analyst. Respond only with valid JSON matching the requested schema.",
        },
        {"role": "user", "content": prompt},
    ]

    try:
        parsed = _call_llm_with_retries(llm_client, _request_kwargs(messages), job.job_title or "resume")
    except Exception as exc:
        logger.exception("LLM scoring failed for %s: %s", job.job_title or "resume", exc)
        return None

    return _scores_from_payload(parsed)


def rank_candidates_with_llm(
    candidates: Sequence[Tuple[str, ResumeAnalysis]],
    job: JobDescription,
    client: Optional[OpenAI] = None,
) -> Optional[ComparativeRanking]:
    """Comparative ranking across candidates; None when unavailable or the reply is unusable."""
    llm_client = client or get_default_client()
    if llm_client is None or len(candidates) < 2:
        return None

    candidate_lines = "\n".join(
        f"- {file_name}: overall {analysis.overall_score}%, skills {analysis.skills_match}%, "
        f"experience {analysis.experience_match}%, matched [{', '.join(analysis.keyword_matches)}], "
        f"missing [{', '.join(analysis.missing_skills)}]"
        for file_name, analysis in candidates
    )
    prompt = RANKING_PROMPT_TEMPLATE.format(
        job_title=job.job_title or "Not specified",
        required_skills=_format_focus_list(job.resolved_required_skills()),
        candidate_lines=candidate_lines,
    )
    messages = [
        {"role": "system", "content": "You rank job candidates. Respond only with valid JSON."},
        {"role": "user", "content": prompt},
    ]

    try:
        parsed = _call_llm_with_retries(llm_client, _request_kwargs(messages), "comparative ranking")
    except Exception as exc:
        logger.exception("LLM comparative ranking failed: %s", exc)
        return None

    return _ranking_from_payload(parsed, {file_name: analysis for file_name, analysis in candidates})


def _request_kwargs(messages: List[Dict[str, str]]) -> Dict[str, Any]:
    request_kwargs: Dict[str, Any] = {
        "model": config.LLM_MODEL,
        "messages": messages,
    }
    if config.LLM_JSON_MODE:
        request_kwargs["response_format"] = {"type": "json_object"}
    return request_kwargs


def _scores_from_payload(payload: Dict[str, Any]) -> LLMScores:
    return LLMScores(
        experience=_coerce_score(payload.get("experienceMatch")),
        education=_coerce_score(payload.get("educationMatch")),
        technical_fit=_coerce_score(payload.get("technicalFit")),
        cultural_fit=_coerce_score(payload.get("culturalFit")),
        communication=_coerce_score(payload.get("communicationScore")),
        leadership=_coerce_score(payload.get("leadershipPotential")),
        insights=str(payload.get("aiInsights") or "").strip(),
        strengths=_ensure_list_of_strings(payload.get("strengths")),
        weaknesses=_ensure_list_of_strings(payload.get("weaknesses")),
        recommendations=_ensure_list_of_strings(payload.get("recommendations")),
    )


def _ranking_from_payload(
    payload: Dict[str, Any], analyses: Dict[str, ResumeAnalysis]
) -> Optional[ComparativeRanking]:
    raw_rankings = payload.get("rankings")
    if not isinstance(raw_rankings, list):
        logger.warning("LLM ranking payload has no rankings list.")
        return None

    entries: List[RankEntry] = []
    seen = set()
    for item in raw_rankings:
        if not isinstance(item, dict):
            continue
        file_name = str(item.get("fileName") or "").strip()
        if file_name not in analyses or file_name in seen:
            continue
        seen.add(file_name)
        score = _coerce_score(item.get("overallScore"))
        entries.append(
            RankEntry(
                file_name=file_name,
                rank=_coerce_int(item.get("rank")) or len(entries) + 1,
                overall_score=analyses[file_name].overall_score if score is None else score,
                reasoning=str(item.get("reasoning") or "").strip(),
                key_strengths=_ensure_list_of_strings(item.get("keyStrengths"))[:3],
                key_weaknesses=_ensure_list_of_strings(item.get("keyWeaknesses"))[:2],
                recommendation=str(item.get("recommendation") or analyses[file_name].recommendation).strip(),
            )
        )

    if len(entries) != len(analyses):
        logger.warning("LLM ranking covered %s of %s candidates; discarding.", len(entries), len(analyses))
        return None

    entries.sort(key=lambda entry: entry.rank)
    renumbered = [
        RankEntry(
            file_name=entry.file_name,
            rank=position,
            overall_score=entry.overall_score,
            reasoning=entry.reasoning,
            key_strengths=entry.key_strengths,
            key_weaknesses=entry.key_weaknesses,
            recommendation=entry.recommendation,
        )
        for position, entry in enumerate(entries, start=1)
    ]
    return ComparativeRanking(rankings=renumbered, summary=str(payload.get("summary") or "").strip())


def _ensure_list_of_strings(payload: Any) -> List[str]:
    if isinstance(payload, str):
        payload = [payload]
    if not isinstance(payload, list):
        return []
    return [item.strip() for item in payload if isinstance(item, str) and item.strip()]


def _coerce_int(value: Any) -> int:
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return 0


def _coerce_score(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return None
    return max(0, min(100, score))


def _call_llm_with_retries(
    llm_client: OpenAI,
    request_kwargs: Dict[str, Any],
    label: str,
    max_attempts: Optional[int] = None,
) -> Dict[str, Any]:
    attempts = max(1, max_attempts or config.LLM_MAX_ATTEMPTS)
    base_messages = request_kwargs.get("messages", [])
    for attempt in range(attempts):
        response = llm_client.chat.completions.create(**request_kwargs)
        raw = response.choices[0].message.content or ""
        logger.debug("AI Analyzer raw response (%s, attempt %s): %s", label, attempt + 1, raw)
        try:
            parsed = json.loads(_extract_json_from_response(raw))
        except ValueError as exc:
            logger.warning("JSON extraction failed for %s (attempt %s): %s", label, attempt + 1, exc)
            if attempt == attempts - 1:
                raise
            request_kwargs = dict(request_kwargs)
            request_kwargs["messages"] = base_messages + [
                {
                    "role": "system",
                    "content": "Reminder: respond strictly with the requested JSON object. Do not include any markdown, explanations, or surrounding text.",
                }
            ]
            continue
        if not isinstance(parsed, dict):
            raise ValueError("LLM response JSON is not an object.")
        return parsed
    raise RuntimeError("LLM retry loop exhausted.")  # pragma: no cover


def _prepare_resume_excerpt(resume_text: str, max_chars: int = EXCERPT_MAX_CHARS) -> str:
    text = (resume_text or "").strip()
    if len(text) <= max_chars:
        return text

    def priority(block: str) -> int:
        heading = block.splitlines()[0].strip().lower()
        for index, section in enumerate(EXCERPT_SECTION_ORDER):
            if heading.startswith(section):
                return index
        return len(EXCERPT_SECTION_ORDER)

    blocks = [block.strip() for block in re.split(r"\n\s*\n", text) if block.strip()]
    blocks.sort(key=priority)
    return "\n\n".join(blocks)[:max_chars]


def _format_focus_list(items: List[str]) -> str:
    if not items:
        return "None specified"
    return ", ".join(items[:12])


def _extract_json_from_response(raw: str) -> str:
    """Pull the outermost parseable JSON object out of an LLM reply."""
    text = CODE_FENCE_RE.sub("", (raw or "").strip())
    if not text:
        raise ValueError("Empty response from LLM.")

    start = text.find("{")
    end = text.rfind("}")
    while start != -1 and end > start:
        candidate = text[start : end + 1]
        try:
            json.loads(candidate)
        except ValueError:
            end = text.rfind("}", start, end)
            continue
        return candidate

    raise ValueError("LLM response did not contain a valid JSON object.")
