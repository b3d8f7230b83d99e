"""
Cybersecurity dataset classifier.

Decides whether an uploaded CSV / JSON file looks like network-intrusion
or security data:

  1. parse the content (headers + capped row sample)
  2. match the cyber vocabulary against headers and full text
  3. match structural patterns (IPs, ports, MACs, hashes, labels, ...)
  4. weighted confidence vs. a keyword-dependent acceptance threshold

Every call is a pure function of the file content; nothing is cached.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional

from pipeline.content_parser import parse_content
from pipeline.dataset_source import DatasetSource
from pipeline.errors import ClassifierError, ReadError
from pipeline.keyword_matcher import match_keywords
from pipeline.pattern_matcher import match_patterns
from pipeline.scoring import (
    DEFAULT_CALIBRATION,
    Calibration,
    acceptance_threshold,
    combined_confidence,
    keyword_confidence,
    pattern_confidence,
)
from pipeline.vocabulary import MAX_JSON_DEPTH, MAX_SAMPLE_ROWS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    is_cybersecurity_related: bool
    confidence: float
    matched_keywords: FrozenSet[str] = frozenset()
    matched_patterns: FrozenSet[str] = frozenset()
    debug_info: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly copy (evidence sorted for stable output)."""
        return {
            "is_cybersecurity_related": self.is_cybersecurity_related,
            "confidence": self.confidence,
            "matched_keywords": sorted(self.matched_keywords),
            "matched_patterns": sorted(
                self.matched_patterns, key=lambda p: int(p.rsplit("_", 1)[-1])
            ),
            "debug_info": dict(self.debug_info),
        }


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def conservative_result(
    error: Exception,
    filename: str = "",
    file_size: int = 0,
    started_at: Optional[str] = None
) -> ClassificationResult:
    """Negative verdict used whenever the file could not be read or parsed."""
    logger.warning("Dataset classification failed for %s: %s", filename or "<unnamed>", error)
    return ClassificationResult(
        is_cybersecurity_related=False,
        confidence=0.0,
        debug_info=MappingProxyType({
            "error": str(error),
            "error_type": type(error).__name__,
            "filename": filename,
            "file_size": file_size,
            "started_at": started_at or _now(),
            "finished_at": _now(),
        })
    )


def classify_source(
    source: DatasetSource,
    calibration: Calibration = DEFAULT_CALIBRATION,
    max_rows: int = MAX_SAMPLE_ROWS,
    max_depth: int = MAX_JSON_DEPTH
) -> ClassificationResult:
    started_at = _now()
    t0 = time.perf_counter()

    try:
        parsed = parse_content(
            source.text(),
            source.extension,
            max_rows=max_rows,
            max_depth=max_depth
        )
    except ClassifierError as e:
        return conservative_result(e, source.name, source.byte_length, started_at)

    logger.debug("Detected %s with headers %s", parsed.file_type, list(parsed.headers))

    # ---------------- Evidence ----------------
    keywords = match_keywords(parsed.headers, parsed.raw_text)
    patterns = match_patterns(parsed.sample_rows, parsed.raw_text)

    # ---------------- Scoring ----------------
    kw_conf = keyword_confidence(len(keywords), calibration)
    pat_conf = pattern_confidence(len(patterns), calibration)
    confidence = combined_confidence(kw_conf, pat_conf)
    threshold = acceptance_threshold(len(keywords), calibration)
    is_related = confidence >= threshold

    debug_info = {
        "filename": source.name,
        "file_size": source.byte_length,
        "file_type": parsed.file_type,
        "analyzed_headers": parsed.headers,
        "sample_row_count": len(parsed.sample_rows),
        "keyword_confidence": kw_conf,
        "pattern_confidence": pat_conf,
        "overall_confidence": confidence,
        "threshold": threshold,
        "calibration": calibration.name,
        "started_at": started_at,
        "finished_at": _now(),
        "elapsed_ms": round((time.perf_counter() - t0) * 1000, 3),
    }

    logger.info(
        "[Dataset Classification] %s (%d bytes): related=%s confidence=%.3f "
        "threshold=%.2f keywords=%d patterns=%d",
        source.name, source.byte_length, is_related, confidence,
        threshold, len(keywords), len(patterns)
    )

    return ClassificationResult(
        is_cybersecurity_related=is_related,
        confidence=confidence,
        matched_keywords=keywords,
        matched_patterns=patterns,
        debug_info=MappingProxyType(debug_info)
    )


def classify_dataset(content, filename: str, **options) -> ClassificationResult:
    """
    Classify raw upload content.

    `content` may be bytes or already-decoded text; `filename` is only used
    for its extension. Options are passed to classify_source.
    """
    if content is None:
        return read_failure(filename, "No file content received")
    if isinstance(content, str):
        content = content.encode("utf-8")
    return classify_source(DatasetSource(name=filename, content=bytes(content)), **options)


def read_failure(filename: str, message: str, file_size: int = 0) -> ClassificationResult:
    return conservative_result(ReadError(message), filename, file_size)


def classify_path(path, **options) -> ClassificationResult:
    try:
        source = DatasetSource.from_path(path)
    except ClassifierError as e:
        return conservative_result(e, str(path))
    return classify_source(source, **options)
