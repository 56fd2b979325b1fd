"""Process-lifetime spaCy pipeline used for sentence segmentation."""

import logging
import threading
from functools import lru_cache
from typing import Any, Optional

import spacy
from spacy.language import Language

import config

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_nlp_handle(model_name: Optional[str] = None) -> Optional[Language]:
    """Lazy-load the spaCy pipeline once per process.

    Falls back to a blank English pipeline with a rule-based sentencizer when the
    trained model is not installed. Returns None only when spaCy itself cannot
    build a pipeline; callers then use the regex sentence split.
    """
    name = model_name or config.SPACY_MODEL
    try:
        return spacy.load(name, disable=["ner"])
    except OSError:
        logger.warning("spaCy model %s not installed; using blank English sentencizer.", name)
    try:
        nlp = spacy.blank("en")
        nlp.add_pipe("sentencizer")
        return nlp
    except (ValueError, ImportError) as exc:
        logger.error("Unable to build spaCy pipeline: %s", exc)
        return None


class SerializedPipeline:
    """Call wrapper that lets batch worker threads share one spaCy pipeline.

    spaCy makes no thread-safety promise for ``nlp(text)``, so calls are taken
    one at a time; the rest of each analysis still runs in parallel.
    """

    def __init__(self, nlp: Any):
        self._nlp = nlp
        self._lock = threading.Lock()

    def __call__(self, text: str) -> Any:
        with self._lock:
            return self._nlp(text)
