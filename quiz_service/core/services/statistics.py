"""Percentile ranking of users by score."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from quiz_service.constants.quiz_constants import STATS_MESSAGE_TEMPLATE
from quiz_service.core.errors import NoStatsForUserError
from quiz_service.core.models import StatsReport, UserSummary

logger = logging.getLogger(__name__)


def compute_stats(username: str, summaries: Iterable[UserSummary]) -> StatsReport:
    """Rank ``username`` against every summary, the caller included.

    ``better_count`` counts scores strictly below the caller's, so ties never
    count in the caller's favour and a lone user ranks at 0%.
    """
    rows = list(summaries)
    caller = next((row for row in rows if row.username == username), None)
    if caller is None or not rows:
        logger.warning("Stats not available for user %s", username)
        raise NoStatsForUserError(username)

    all_scores = sorted(row.score for row in rows)
    better_count = sum(1 for score in all_scores if score < caller.score)
    percentage = better_count / len(all_scores) * 100
    message = STATS_MESSAGE_TEMPLATE.format(score=caller.score, percentage=percentage)

    logger.info(
        "Stats calculated for %s: score=%d better_than=%.2f%%",
        username,
        caller.score,
        percentage,
    )
    return StatsReport(
        username=username,
        score=caller.score,
        better_count=better_count,
        total_users=len(all_scores),
        percentage=percentage,
        message=message,
        users=leaderboard(rows),
    )


def leaderboard(summaries: Iterable[UserSummary]) -> list[UserSummary]:
    """Return summaries sorted by score descending, then username."""
    return sorted(summaries, key=lambda row: (-row.score, row.username))
