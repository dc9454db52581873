"""
Service module for classifying calendar dates into cycle phases.

Classification anchors on the most recent logged flow day and projects the
average cycle forward from it. Unlike prediction, it falls back to a default
period duration when only a cycle length is known.

Typical usage:
    >>> phase = classify_phase(date(2024, 1, 16), entries, 28, 5)
    >>> phase.value
    'ovulatory'
"""
from datetime import date, timedelta
from typing import Dict, Iterable, Optional

from src.models.cycle import CyclePhase
from src.services.constants import (
    DEFAULT_PERIOD_DURATION,
    OVULATORY_WINDOW_START,
    OVULATORY_WINDOW_END
)
from src.services.utils import EntryLike, coerce_entries, dedupe_by_date, get_flow_entries

def band_cycle_day(cycle_day: int, avg_period_duration: int) -> CyclePhase:
    """
    Map a zero-based cycle day to its phase band.

    Args:
        cycle_day: Days since the anchor, reduced modulo the cycle length
        avg_period_duration: Length of the menstrual band

    Returns:
        Phase for that cycle day
    """
    if cycle_day < avg_period_duration:
        return CyclePhase.MENSTRUAL
    if cycle_day < OVULATORY_WINDOW_START:
        return CyclePhase.FOLLICULAR
    if cycle_day < OVULATORY_WINDOW_END:
        return CyclePhase.OVULATORY
    return CyclePhase.LUTEAL

def classify_phase(
    target_date: date,
    entries: Iterable[EntryLike],
    avg_cycle_length: Optional[int],
    avg_period_duration: Optional[int] = None
) -> CyclePhase:
    """
    Classify a calendar date into a cycle phase.

    Args:
        target_date: Date to classify
        entries: Logged entries in any order
        avg_cycle_length: Computed or manual cycle length, None if unknown
        avg_period_duration: Computed or manual period duration, defaults to 5

    Returns:
        CyclePhase; UNKNOWN without a cycle length or without any flow day
        to anchor on

    Example:
        >>> classify_phase(date(2024, 1, 2), entries, 28, 5)
        <CyclePhase.MENSTRUAL: 'menstrual'>
    """
    if not avg_cycle_length:
        return CyclePhase.UNKNOWN

    flow_entries = get_flow_entries(dedupe_by_date(coerce_entries(entries)), reverse=True)
    return _classify(target_date, [e.date for e in flow_entries], avg_cycle_length, avg_period_duration)

def classify_range(
    start_date: date,
    end_date: date,
    entries: Iterable[EntryLike],
    avg_cycle_length: Optional[int],
    avg_period_duration: Optional[int] = None
) -> Dict[date, CyclePhase]:
    """
    Classify every day of an inclusive date range, e.g. a calendar month.

    Args:
        start_date: First day to classify
        end_date: Last day to classify (inclusive)
        entries: Logged entries in any order
        avg_cycle_length: Computed or manual cycle length
        avg_period_duration: Computed or manual period duration

    Returns:
        Mapping of date to phase in ascending date order
    """
    flow_entries = get_flow_entries(dedupe_by_date(coerce_entries(entries)), reverse=True)
    flow_dates = [e.date for e in flow_entries]

    phases = {}
    current = start_date
    while current <= end_date:
        if not avg_cycle_length:
            phases[current] = CyclePhase.UNKNOWN
        else:
            phases[current] = _classify(current, flow_dates, avg_cycle_length, avg_period_duration)
        current += timedelta(days=1)
    return phases

def _classify(
    target_date: date,
    flow_dates_desc: list,
    avg_cycle_length: int,
    avg_period_duration: Optional[int]
) -> CyclePhase:
    if target_date in flow_dates_desc:
        return CyclePhase.MENSTRUAL

    if not flow_dates_desc:
        return CyclePhase.UNKNOWN

    # Dates before the first logged period anchor on that period instead
    anchor = next((d for d in flow_dates_desc if d <= target_date), flow_dates_desc[-1])

    # Python's % is non-negative for a positive modulus
    cycle_day = (target_date - anchor).days % avg_cycle_length
    return band_cycle_day(cycle_day, avg_period_duration or DEFAULT_PERIOD_DURATION)
