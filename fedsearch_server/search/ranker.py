from typing import List

from ..models.schema import ResultRecord


def max_score(records: List[ResultRecord]) -> float:
    """Largest original score, never below 0."""
    return max([r["original_relevance_score"] for r in records] + [0.0])


def normalize_scores(records: List[ResultRecord]) -> List[ResultRecord]:
    """
    Rescale scores onto [0, 1] using the request-wide maximum as divisor.

    The floor is fixed at 0 rather than the observed minimum. When every
    score is 0 the divisor is 1, so all normalized scores are 0.
    Returns new records; the inputs are left untouched.
    """
    top = max_score(records)
    divisor = top if top > 0 else 1.0
    return [
        {**r, "normalized_score": r["original_relevance_score"] / divisor}
        for r in records
    ]


def rank_results(records: List[ResultRecord]) -> List[ResultRecord]:
    """
    Stable sort by normalized_score, highest first.

    Equal scores keep their input order (provider declaration order, then
    the order each provider reported them).
    """
    return sorted(records, key=lambda r: r["normalized_score"], reverse=True)
