"""
Service module for the cycle summary shown by the Home, Calendar and Trends views.

This module merges computed statistics with a user's manual override. The
override only drives the current-cycle prediction; historical averages and
symptom analytics always come from logged data.

Typical usage:
    entries = repository.get_entries(user_id)
    override = repository.get_manual_override(user_id)
    summary = build_cycle_summary(entries, override)
"""
from typing import Iterable, List, Optional, Tuple

from aws_lambda_powertools import Logger

from src.models.cycle import CycleStatistics, CycleSummary, Episode, ManualOverride
from src.services.constants import PREDICTION_SOURCE_COMPUTED, PREDICTION_SOURCE_MANUAL
from src.services.prediction import predict_next
from src.services.statistics import compute_statistics, extract_episodes
from src.services.utils import EntryLike, coerce_entries

logger = Logger()

def resolve_prediction_averages(
    stats: CycleStatistics,
    override: Optional[ManualOverride] = None
) -> Tuple[Optional[int], Optional[int], Optional[str]]:
    """
    Pick the averages used for the current-cycle prediction.

    Args:
        stats: Statistics computed from logged entries
        override: Manual averages, used only when both values are set

    Returns:
        Tuple of (cycle length, period duration, source) where source is
        "manual", "computed" or None when no cycle length is available
    """
    if override is not None and override.is_complete:
        return override.avg_cycle_length, override.avg_period_duration, PREDICTION_SOURCE_MANUAL
    if stats.average_cycle_length is not None:
        return stats.average_cycle_length, stats.average_period_duration, PREDICTION_SOURCE_COMPUTED
    return None, None, None

def build_cycle_summary(
    entries: Iterable[EntryLike],
    override: Optional[ManualOverride] = None,
    episodes: Optional[List[Episode]] = None
) -> CycleSummary:
    """
    Compute statistics and the current-cycle prediction in one pass.

    Args:
        entries: All of the user's entries in any order
        override: Optional manual averages
        episodes: Pre-computed episodes, extracted from entries when omitted

    Returns:
        CycleSummary; prediction is None when neither an override nor two
        episodes are available, or when no period has been logged yet

    Example:
        >>> summary = build_cycle_summary(entries, ManualOverride(avg_cycle_length=30, avg_period_duration=4))
        >>> summary.prediction_source
        'manual'
    """
    valid_entries = coerce_entries(entries)
    if episodes is None:
        episodes = extract_episodes(valid_entries)
    stats = compute_statistics(episodes, valid_entries)

    cycle_length, period_duration, source = resolve_prediction_averages(stats, override)
    summary = CycleSummary(statistics=stats)

    if cycle_length is None or not episodes:
        logger.info("Not enough data for prediction", extra={
            "total_episodes": len(episodes),
            "has_override": override is not None and override.is_complete
        })
        return summary

    summary.prediction = predict_next(episodes[-1].start_date, cycle_length)
    summary.prediction_cycle_length = cycle_length
    summary.prediction_period_duration = period_duration
    summary.prediction_source = source

    logger.info("Cycle prediction calculated", extra={
        "prediction_source": source,
        "next_period": str(summary.prediction.next_period)
    })
    return summary
