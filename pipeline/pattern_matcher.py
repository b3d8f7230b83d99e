from typing import FrozenSet, Iterable

from pipeline.vocabulary import PATTERN_TABLE


def match_patterns(sample_rows: Iterable[str], raw_text: str = "") -> FrozenSet[str]:
    """Identifiers of the structural patterns seen in any sample row or the full text."""
    matched = set()
    remaining = list(PATTERN_TABLE)

    for text in list(sample_rows) + [raw_text]:
        if not remaining:
            break
        if not text:
            continue
        still_open = []
        for pattern_id, regex in remaining:
            if regex.search(text):
                matched.add(pattern_id)
            else:
                still_open.append((pattern_id, regex))
        remaining = still_open

    return frozenset(matched)
