from dataclasses import dataclass
from typing import Tuple

from pipeline.vocabulary import (
    EXTENDED_KEYWORD_STEPS,
    EXTENDED_PATTERN_STEPS,
    EXTENDED_THRESHOLD_STEPS,
    KEYWORD_WEIGHT,
    LEGACY_KEYWORD_STEPS,
    LEGACY_PATTERN_STEPS,
    LEGACY_THRESHOLD_STEPS,
    PATTERN_WEIGHT,
)

Steps = Tuple[Tuple[int, float], ...]


@dataclass(frozen=True)
class Calibration:
    name: str
    keyword_steps: Steps
    pattern_steps: Steps
    threshold_steps: Steps


EXTENDED = Calibration(
    name="extended",
    keyword_steps=EXTENDED_KEYWORD_STEPS,
    pattern_steps=EXTENDED_PATTERN_STEPS,
    threshold_steps=EXTENDED_THRESHOLD_STEPS,
)

LEGACY = Calibration(
    name="legacy",
    keyword_steps=LEGACY_KEYWORD_STEPS,
    pattern_steps=LEGACY_PATTERN_STEPS,
    threshold_steps=LEGACY_THRESHOLD_STEPS,
)

CALIBRATIONS = {c.name: c for c in (EXTENDED, LEGACY)}
DEFAULT_CALIBRATION = EXTENDED


def get_calibration(name: str) -> Calibration:
    try:
        return CALIBRATIONS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown calibration '{name}', expected one of {sorted(CALIBRATIONS)}"
        ) from None


def step_value(steps: Steps, count: int) -> float:
    """Value of the first band whose minimum is <= count."""
    for minimum, value in steps:
        if count >= minimum:
            return value
    return 0.0


def keyword_confidence(n_keywords: int, calibration: Calibration = DEFAULT_CALIBRATION) -> float:
    return step_value(calibration.keyword_steps, n_keywords)


def pattern_confidence(n_patterns: int, calibration: Calibration = DEFAULT_CALIBRATION) -> float:
    return step_value(calibration.pattern_steps, n_patterns)


def combined_confidence(kw_conf: float, pat_conf: float) -> float:
    # keywords carry more weight than structural patterns
    return min(1.0, kw_conf * KEYWORD_WEIGHT + pat_conf * PATTERN_WEIGHT)


def acceptance_threshold(n_keywords: int, calibration: Calibration = DEFAULT_CALIBRATION) -> float:
    return step_value(calibration.threshold_steps, n_keywords)
