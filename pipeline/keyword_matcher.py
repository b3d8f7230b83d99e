from typing import FrozenSet, Iterable

from pipeline.vocabulary import KEYWORD_REGEXES


def match_keywords(headers: Iterable[str], raw_text: str = "") -> FrozenSet[str]:
    """
    Distinct vocabulary terms found in the data.

    Headers match on containment ("dst_host_count" also counts "count"),
    the full text only on whole words.
    """
    headers = [h.lower() for h in headers]
    matched = set()

    for keyword, regex in KEYWORD_REGEXES:
        if any(keyword in header for header in headers):
            matched.add(keyword)
        elif raw_text and regex.search(raw_text):
            matched.add(keyword)

    return frozenset(matched)
