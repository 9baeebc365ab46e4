"""Tests for importance ranking."""

import pytest

from dashplus.graph.importance import calculate_ranking, score_importance
from dashplus.models import Link, Task, TraversalRecord


@pytest.mark.parametrize(
    ("score", "ranking"),
    [
        (0, "isolated"),
        (0.1, "low"),
        (2.99, "low"),
        (3, "medium"),
        (9.5, "medium"),
        (10, "high"),
        (19.9, "high"),
        (20, "critical"),
        (150, "critical"),
    ],
)
def test_calculate_ranking(score: float, ranking: str) -> None:
    """Test the half-open ranking buckets."""
    assert calculate_ranking(score) == ranking


def record(source_id: str, strength: float | None = None) -> TraversalRecord:
    return TraversalRecord(
        task=Task(id=source_id, content=source_id),
        link=Link(id=f"{source_id}-x", source_id=source_id, target_id="x", strength=strength),
        depth=1,
    )


def test_score_importance() -> None:
    """Test combining backlink strength and blocked task count."""
    backlinks = [record("a", 0.5), record("b"), record("c", 1.0)]
    blocked = [record("a"), record("d"), record("e"), record("f")]

    report = score_importance("x", backlinks, [record("g")], blocked)

    assert report.importance_score == 10.5
    assert report.ranking == "high"
    assert report.backlink_count == 3
    assert report.forward_link_count == 1
    assert report.blocking_count == 4


@pytest.mark.parametrize(("strength", "score"), [(None, 1.0), (0.0, 1.0), (0.25, 0.25), (1.0, 1.0)])
def test_backlink_strength_weight(strength: float | None, score: float) -> None:
    """Test that a missing or zero strength weighs a backlink as 1.0."""
    report = score_importance("x", [record("a", strength)], [], [])

    assert report.importance_score == score
