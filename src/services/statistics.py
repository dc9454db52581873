"""
Statistics calculation service for cycle tracking data.

This module groups flow days into period episodes and derives average cycle
length, average period duration, next-period predictions and symptom
frequency from them.

Typical usage:
    episodes = extract_episodes(entries)
    stats = compute_statistics(episodes, entries)
"""
from collections import Counter
from statistics import mean
from typing import Iterable, List

from aws_lambda_powertools import Logger

from src.models.cycle import CycleStatistics, Episode, SymptomCount
from src.services.constants import EPISODE_MAX_GAP_DAYS, MAX_COMMON_SYMPTOMS
from src.services.prediction import predict_next
from src.services.utils import (
    EntryLike,
    coerce_entries,
    dedupe_by_date,
    get_flow_entries,
    round_half_up
)

logger = Logger()

def extract_episodes(entries: Iterable[EntryLike]) -> List[Episode]:
    """
    Group flow days into episodes.

    Args:
        entries: Entries in any order; malformed records are skipped

    Returns:
        Episodes in ascending date order, non-overlapping

    Note:
        Flow days belong to the same episode when the gap between their dates
        is at most one day. Days without an entry count as non-flow days, so
        only explicit flow entries take part in grouping.
    """
    flow_entries = get_flow_entries(dedupe_by_date(coerce_entries(entries)))

    episodes = []
    start = None
    last_date = None
    for entry in flow_entries:
        if start is None:
            start = last_date = entry.date
        elif (entry.date - last_date).days <= EPISODE_MAX_GAP_DAYS:
            last_date = entry.date
        else:
            episodes.append(Episode(start_date=start, end_date=last_date))
            start = last_date = entry.date

    if start is not None:
        episodes.append(Episode(start_date=start, end_date=last_date))

    logger.debug("Extracted episodes", extra={
        "flow_days": len(flow_entries),
        "episodes": len(episodes)
    })
    return episodes

def rank_symptoms(entries: Iterable[EntryLike], limit: int = MAX_COMMON_SYMPTOMS) -> List[SymptomCount]:
    """
    Count symptom tags across all entries and rank them.

    Args:
        entries: Entries in any order; malformed records are skipped
        limit: Maximum number of symptoms to return

    Returns:
        Symptoms by descending count; ties keep first-seen order in date order
    """
    counts = Counter()
    for entry in dedupe_by_date(coerce_entries(entries)):
        counts.update(entry.symptoms)

    # Counter.most_common is stable for equal counts (insertion order)
    return [
        SymptomCount(symptom=symptom, count=count)
        for symptom, count in counts.most_common(limit)
    ]

def compute_statistics(episodes: List[Episode], entries: Iterable[EntryLike]) -> CycleStatistics:
    """
    Calculate historical averages and the computed prediction.

    Args:
        episodes: Episodes from extract_episodes, ascending
        entries: Entries used for the symptom tally

    Returns:
        CycleStatistics with:
        - average_cycle_length: mean gap between episode starts (None below 2 episodes)
        - average_period_duration: mean episode duration (None with no episodes)
        - predicted_next_period / predicted_next_ovulation (None without a cycle length)
        - common_symptoms: top symptoms across all entries

    Example:
        >>> episodes = extract_episodes(entries)
        >>> stats = compute_statistics(episodes, entries)
        >>> stats.average_cycle_length
        28
    """
    stats = CycleStatistics(
        common_symptoms=rank_symptoms(entries),
        total_episodes=len(episodes)
    )

    if episodes:
        stats.average_period_duration = round_half_up(mean(e.duration for e in episodes))

    if len(episodes) >= 2:
        cycle_lengths = [
            (episodes[i].start_date - episodes[i - 1].start_date).days
            for i in range(1, len(episodes))
        ]
        stats.average_cycle_length = round_half_up(mean(cycle_lengths))

        prediction = predict_next(episodes[-1].start_date, stats.average_cycle_length)
        stats.predicted_next_period = prediction.next_period
        stats.predicted_next_ovulation = prediction.next_ovulation

    logger.info("Cycle statistics calculated", extra={
        "total_episodes": stats.total_episodes,
        "average_cycle_length": stats.average_cycle_length,
        "average_period_duration": stats.average_period_duration
    })
    return stats
