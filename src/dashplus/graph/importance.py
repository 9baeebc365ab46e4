"""Heuristic task importance scoring."""

from dashplus.models import ImportanceReport, TraversalRecord

# Upper bounds (exclusive) of each ranking bucket above "isolated"
RANKING_THRESHOLDS = (
    (3, "low"),
    (10, "medium"),
    (20, "high"),
)

BLOCKING_WEIGHT = 2


def calculate_ranking(score: float) -> str:
    """Map an importance score to its ranking category."""
    if score == 0:
        return "isolated"
    for upper, ranking in RANKING_THRESHOLDS:
        if score < upper:
            return ranking
    return "critical"


def score_importance(
    task_id: str,
    backlinks: list[TraversalRecord],
    forward_links: list[TraversalRecord],
    blocked_tasks: list[TraversalRecord],
) -> ImportanceReport:
    """Combine direct backlinks and the blocking chain into an importance report.

    Each backlink contributes its link strength, or 1.0 when the link has
    no strength or a strength of 0. Each transitively blocked task
    contributes ``BLOCKING_WEIGHT``.
    """
    backlink_score = sum(record.link.strength or 1.0 for record in backlinks)
    blocking_score = len(blocked_tasks) * BLOCKING_WEIGHT
    score = backlink_score + blocking_score

    return ImportanceReport(
        task_id=task_id,
        backlink_count=len(backlinks),
        forward_link_count=len(forward_links),
        blocking_count=len(blocked_tasks),
        importance_score=score,
        ranking=calculate_ranking(score),
    )
