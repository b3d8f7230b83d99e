import pandas as pd

# Fixed demo accuracies shown on the results views
SECURE_ACCURACIES = {
    "KNN Binary": 0.9760368900303525,
    "KNN Multi": 0.9740368900303525,
    "Random Forest Binary": 0.9741029652113005,
    "Random Forest Multi": 0.9731029652113005,
}

UNSAFE_ACCURACIES = {
    "KNN Binary": 0.7260368900303525,
    "KNN Multi": 0.7140368900303525,
    "Random Forest Binary": 0.7341029652113005,
    "Random Forest Multi": 0.7131029652113005,
}

SAFE_ACCURACY = 0.9

PATTERN_LABELS = {
    "pattern_0": "IPv4 address",
    "pattern_1": "Port number",
    "pattern_2": "MAC address",
    "pattern_3": "Web server log timestamp",
    "pattern_4": "Traffic label",
    "pattern_5": "Attack category",
    "pattern_6": "MD5 digest",
    "pattern_7": "SHA-1 digest",
    "pattern_8": "SHA-256 digest",
    "pattern_9": "URL",
}


def average_accuracy(accuracies):
    values = list(accuracies.values())
    if not values:
        return 0.0
    return sum(values) / len(values)


def performance_band(value):
    """
    Colour band for a metric cell.
    Returns None for blanks / non-numeric cells.
    """
    if isinstance(value, str):
        if value.strip() in ("", "-"):
            return None
        try:
            value = float(value)
        except ValueError:
            return None

    if value >= 0.95:
        return "high"
    if value >= 0.9:
        return "good"
    if value >= 0.85:
        return "fair"
    return "low"


def security_status(accuracies):
    """(is_safe, threat_level) derived from the average model accuracy."""
    avg = average_accuracy(accuracies)
    if avg >= SAFE_ACCURACY:
        return True, "none"
    if avg < 0.75:
        return False, "high"
    if avg < 0.85:
        return False, "medium"
    return False, "low"


def evidence_frame(result):
    """Matched keywords / patterns of a ClassificationResult as a table."""
    rows = [
        {"Evidence": "Keyword", "Match": kw}
        for kw in sorted(result.matched_keywords)
    ]
    rows += [
        {"Evidence": "Pattern", "Match": PATTERN_LABELS.get(p, p)}
        for p in sorted(result.matched_patterns, key=lambda p: int(p.rsplit("_", 1)[-1]))
    ]
    return pd.DataFrame(rows, columns=["Evidence", "Match"])
