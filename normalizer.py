"""Text clean-up, term search and skill-list parsing helpers shared by every matcher."""

import logging
import math
import re
from functools import lru_cache
from typing import Iterable, List, Optional, Pattern, Sequence, Union

from skills import SKILL_STOP_WORDS

logger = logging.getLogger(__name__)

# --- Unicode clean-up ----------------------------------------------------------

_CHAR_REPLACEMENTS = {
    "\u2022": "-",
    "\u2023": "-",
    "\u25e6": "-",
    "\u25cf": "-",
    "\u2043": "-",
    "\u2212": "-",
    "\u2013": "-",
    "\u2014": "-",
    "\u2010": "-",
    "\u2012": "-",
    "\u2015": "-",
    "\uf0b7": "-",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\ufb01": "fi",
    "\ufb02": "fl",
    "\u00ad": "",
    "\u00a0": " ",
    "\u2024": ".",
}
_TRANSLATION_TABLE = str.maketrans(_CHAR_REPLACEMENTS)

WHITESPACE_RE = re.compile(r"\s+")
WORD_RE = re.compile(r"[a-z0-9][a-z0-9+#./-]*", re.IGNORECASE)

# Comma, semicolon, pipe, CR/LF, bullet, middle dot and hyphen.
SKILL_DELIMITER_RE = re.compile(r"[,;|\n\r\u2022\u00b7\-]+")
ENUMERATION_PREFIX_RE = re.compile(r"^\d+:\s*")
ENUMERATION_ONLY_RE = re.compile(r"^\d+:?$")

# Keywords at least this long match as word prefixes in contains_word_form.
WORD_FORM_MIN_LENGTH = 4

SkillListInput = Union[str, Sequence[str], None]


def normalize_text(text: Optional[str]) -> str:
    """Replace unicode bullets/dashes/quotes and tidy line breaks."""
    if not text:
        return ""
    cleaned = text.translate(_TRANSLATION_TABLE)
    cleaned = re.sub(r"\r\n?", "\n", cleaned)
    cleaned = re.sub(r"[ \t]+\n", "\n", cleaned)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
    return cleaned.strip()


def collapse_whitespace(text: Optional[str]) -> str:
    if not text:
        return ""
    return WHITESPACE_RE.sub(" ", text).strip()


def lower_collapsed(text: Optional[str]) -> str:
    return collapse_whitespace(text).lower()


def tokenize(text: Optional[str]) -> List[str]:
    """Lower-cased word tokens; keeps in-word punctuation such as node.js or c++."""
    if not text:
        return []
    return [token.lower().rstrip(".") for token in WORD_RE.findall(text)]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


# --- Term search ---------------------------------------------------------------

@lru_cache(maxsize=2048)
def term_pattern(term: str) -> Pattern[str]:
    """Case-insensitive whole-token pattern for a literal term."""
    return re.compile(rf"(?<!\w){re.escape(term.strip())}(?!\w)", re.IGNORECASE)


def contains_term(text: str, term: str) -> bool:
    if not text or not term or not term.strip():
        return False
    return term_pattern(term).search(text) is not None


@lru_cache(maxsize=1024)
def word_prefix_pattern(term: str) -> Pattern[str]:
    return re.compile(rf"(?<!\w){re.escape(term.strip())}", re.IGNORECASE)


def contains_word_form(text: str, term: str) -> bool:
    """Like ``contains_term``, but terms of four or more characters also match
    inflected forms ("Bachelors", "Managers", "Experienced").

    Short tokens such as "ba", "ms" or "led" stay whole-token matches.
    """
    if not text or not term or not term.strip():
        return False
    if len(term.strip()) < WORD_FORM_MIN_LENGTH:
        return contains_term(text, term)
    return word_prefix_pattern(term).search(text) is not None


def distinct_hits(text: str, terms: Iterable[str]) -> List[str]:
    """Terms from ``terms`` that occur as whole tokens, in the order given."""
    hits: List[str] = []
    for term in terms:
        if term not in hits and contains_term(text, term):
            hits.append(term)
    return hits


def distinct_word_forms(text: str, terms: Iterable[str]) -> List[str]:
    """Same as ``distinct_hits`` using ``contains_word_form``."""
    hits: List[str] = []
    for term in terms:
        if term not in hits and contains_word_form(text, term):
            hits.append(term)
    return hits


# --- Skill list parsing --------------------------------------------------------

def _split_skill_string(raw: str) -> List[str]:
    tokens: List[str] = []
    for token in SKILL_DELIMITER_RE.split(raw):
        stripped = token.strip()
        if len(stripped) < 2 or stripped.lower() in SKILL_STOP_WORDS:
            continue
        tokens.append(stripped)
    return tokens


def normalize_skill_list(raw: SkillListInput) -> List[str]:
    """Return an ordered list of distinct skill tokens.

    Accepts a delimiter-joined string, a list of skills, or a one-element list
    whose element still carries newline-separated, possibly enumerated entries
    (``["1: Python\\n2: SQL"]``).
    """
    if raw is None:
        return []

    if isinstance(raw, str):
        tokens = _split_skill_string(raw)
    else:
        items = [str(item) for item in raw if item is not None]
        if len(items) == 1 and "\n" in items[0]:
            logger.debug("Re-splitting newline-joined skill list: %r", items[0])
            tokens = []
            for token in _split_skill_string(items[0]):
                if ENUMERATION_ONLY_RE.match(token):
                    continue
                token = ENUMERATION_PREFIX_RE.sub("", token).strip()
                if len(token) >= 2:
                    tokens.append(token)
        else:
            tokens = [item.strip() for item in items if item.strip()]

    seen = set()
    result: List[str] = []
    for token in tokens:
        key = token.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(token)
    return result


def unique_trimmed(items: Iterable[str], limit: int = 5) -> List[str]:
    seen = set()
    result: List[str] = []
    for item in items:
        if not item:
            continue
        normalized = item.strip()
        if not normalized or normalized.lower() in seen:
            continue
        seen.add(normalized.lower())
        result.append(normalized)
        if len(result) >= limit:
            break
    return result
