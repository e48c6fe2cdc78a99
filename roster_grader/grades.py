"""Letter grades derived from relative performance against a baseline."""

# Inclusive lower bounds, evaluated top-down
GRADE_THRESHOLDS = [
    (0.25, "A+"),
    (0.18, "A"),
    (0.12, "A-"),
    (0.08, "B+"),
    (0.04, "B"),
    (0.00, "B-"),
    (-0.04, "C+"),
    (-0.08, "C"),
    (-0.12, "C-"),
    (-0.20, "D"),
]

FAILING_GRADE = "F"

# Worst to best
GRADE_ORDER = ["F", "D", "C-", "C", "C+", "B-", "B", "B+", "A-", "A", "A+"]


def grade_from_delta_pct(delta_pct: float) -> str:
    """Map a relative delta (0.10 = 10% above baseline) to a letter grade."""
    for threshold, grade in GRADE_THRESHOLDS:
        if delta_pct >= threshold:
            return grade
    return FAILING_GRADE


def grade_rank(grade: str) -> int:
    """Return the ordinal of a grade, 0 for F up to 10 for A+."""
    return GRADE_ORDER.index(grade)


def grade_tier(grade: str) -> str:
    """Collapse a grade into its display tier.

    Returns:
        "elite" for A grades, "solid" for B grades, "average" for C grades,
        "weak" for D and "poor" for F
    """
    if grade.startswith("A"):
        return "elite"
    if grade.startswith("B"):
        return "solid"
    if grade.startswith("C"):
        return "average"
    if grade == "D":
        return "weak"
    return "poor"
