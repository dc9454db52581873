"""Tests for episode extraction and statistics calculation."""
from datetime import date, timedelta

import pytest

from src.models.cycle import Episode
from src.models.entry import Entry, FlowLevel, Symptom
from src.services.statistics import compute_statistics, extract_episodes, rank_symptoms
from src.services.utils import round_half_up

def flow_day(d: date, flow: FlowLevel = FlowLevel.MEDIUM) -> Entry:
    return Entry(date=d, flow=flow)

def test_extract_episodes_no_flow_days():
    """Test that entries without flow yield no episodes and no averages."""
    entries = [
        Entry(date=date(2024, 1, 1)),
        Entry(date=date(2024, 1, 2), symptoms=[Symptom.ACNE]),
    ]

    episodes = extract_episodes(entries)
    stats = compute_statistics(episodes, entries)

    assert episodes == []
    assert stats.average_cycle_length is None
    assert stats.average_period_duration is None
    assert stats.predicted_next_period is None
    assert stats.predicted_next_ovulation is None

def test_extract_episodes_empty_input():
    """Test episode extraction with no entries at all."""
    assert extract_episodes([]) == []

def test_single_flow_day_is_one_day_episode():
    """Test that an isolated flow day yields a 1-day episode."""
    episodes = extract_episodes([flow_day(date(2024, 1, 5))])

    assert len(episodes) == 1
    assert episodes[0].start_date == date(2024, 1, 5)
    assert episodes[0].end_date == date(2024, 1, 5)
    assert episodes[0].duration == 1

def test_two_consecutive_flow_days_form_one_episode():
    """Test that adjacent flow days are grouped together."""
    episodes = extract_episodes([flow_day(date(2024, 1, 5)), flow_day(date(2024, 1, 6))])

    assert episodes == [Episode(start_date=date(2024, 1, 5), end_date=date(2024, 1, 6))]
    assert episodes[0].duration == 2

def test_gap_of_more_than_one_day_splits_episodes():
    """Test that a missing day between flow days starts a new episode."""
    episodes = extract_episodes([
        flow_day(date(2024, 1, 1)),
        flow_day(date(2024, 1, 2)),
        flow_day(date(2024, 1, 4)),  # Jan 3 not logged
    ])

    assert [(e.start_date, e.end_date) for e in episodes] == [
        (date(2024, 1, 1), date(2024, 1, 2)),
        (date(2024, 1, 4), date(2024, 1, 4)),
    ]

def test_explicit_none_flow_entry_splits_episodes():
    """Test that an explicit no-flow entry behaves like a missing day."""
    episodes = extract_episodes([
        flow_day(date(2024, 1, 1)),
        Entry(date=date(2024, 1, 2), flow=FlowLevel.NONE),
        flow_day(date(2024, 1, 3)),
    ])

    assert len(episodes) == 2

def test_episodes_are_ordered_and_disjoint(regular_entries):
    """Test that episodes never overlap, are ascending and last at least a day."""
    episodes = extract_episodes(list(reversed(regular_entries)))

    assert len(episodes) == 3
    for previous, current in zip(episodes, episodes[1:]):
        assert previous.end_date < current.start_date
    assert all(e.duration >= 1 for e in episodes)

def test_duplicate_dates_are_deduplicated_last_write_wins():
    """Test that a later entry for the same date replaces the earlier one."""
    entries = [
        flow_day(date(2024, 1, 1)),
        flow_day(date(2024, 1, 2)),
        Entry(date=date(2024, 1, 2), flow=FlowLevel.NONE),  # Corrected later
        flow_day(date(2024, 1, 3)),
    ]

    episodes = extract_episodes(entries)

    assert [(e.start_date, e.end_date) for e in episodes] == [
        (date(2024, 1, 1), date(2024, 1, 1)),
        (date(2024, 1, 3), date(2024, 1, 3)),
    ]

def test_malformed_records_are_skipped():
    """Test that unparseable records do not abort extraction."""
    entries = [
        {"date": "2024-01-05", "flow": "Light", "symptoms": ["Cramps"]},
        {"date": "not-a-date", "flow": "Heavy", "symptoms": ["Cramps"]},
        {"date": "2024-01-06", "flow": "Unknown"},
        {"date": "2024-01-06", "flow": "Heavy"},
    ]

    episodes = extract_episodes(entries)
    stats = compute_statistics(episodes, entries)

    assert [(e.start_date, e.end_date) for e in episodes] == [
        (date(2024, 1, 5), date(2024, 1, 6)),
    ]
    assert stats.common_symptoms[0].count == 1

def test_average_cycle_length_from_episode_starts():
    """Test that cycle length is measured between episode start dates."""
    entries = [flow_day(date(2024, 1, 1)), flow_day(date(2024, 1, 29))]

    episodes = extract_episodes(entries)
    stats = compute_statistics(episodes, entries)

    assert stats.average_cycle_length == 28
    assert stats.average_period_duration == 1
    assert stats.total_episodes == 2

def test_statistics_with_regular_cycles(regular_entries):
    """Test statistics and computed prediction for regular 28-day cycles."""
    episodes = extract_episodes(regular_entries)
    stats = compute_statistics(episodes, regular_entries)

    assert stats.average_cycle_length == 28
    assert stats.average_period_duration == 5
    # Last period starts 2024-02-26
    assert stats.predicted_next_period == date(2024, 3, 25)
    assert stats.predicted_next_ovulation == date(2024, 3, 11)

def test_single_episode_has_duration_but_no_cycle_length():
    """Test that one episode gives a duration but no cycle length or prediction."""
    entries = [flow_day(date(2024, 1, 1) + timedelta(days=i)) for i in range(4)]

    stats = compute_statistics(extract_episodes(entries), entries)

    assert stats.average_period_duration == 4
    assert stats.average_cycle_length is None
    assert stats.predicted_next_period is None

def test_averages_round_half_up():
    """Test that .5 averages round up rather than to even."""
    entries = [
        # 2-day and 3-day periods, cycle gaps of 28 and 29 days
        flow_day(date(2024, 1, 1)), flow_day(date(2024, 1, 2)),
        flow_day(date(2024, 1, 29)), flow_day(date(2024, 1, 30)), flow_day(date(2024, 1, 31)),
        flow_day(date(2024, 2, 27)), flow_day(date(2024, 2, 28)),
        flow_day(date(2024, 2, 29)),
    ]

    episodes = extract_episodes(entries)
    stats = compute_statistics(episodes, entries)

    assert [e.duration for e in episodes] == [2, 3, 3]
    assert stats.average_cycle_length == 29  # mean(28, 29) = 28.5
    assert stats.average_period_duration == 3  # mean(2, 3, 3) = 2.67

@pytest.mark.parametrize("value, places, expected", [
    (28.5, 0, 29),
    (2.5, 0, 3),
    (2.25, 1, 2.3),
    (2.35, 1, 2.4),
    (3.0, 1, 3.0),
])
def test_round_half_up(value, places, expected):
    """Test half-up rounding at whole days and at one decimal place."""
    result = round_half_up(value, places)

    assert result == expected
    assert isinstance(result, int) == (places == 0)

def test_common_symptoms_ranked_by_count(symptom_entries):
    """Test that more frequent symptoms rank higher and ties keep first-seen order."""
    ranked = rank_symptoms(symptom_entries)

    assert [(s.symptom, s.count) for s in ranked] == [
        (Symptom.CRAMPS, 5),
        (Symptom.HEADACHE, 3),
        (Symptom.FATIGUE, 3),
    ]

def test_common_symptoms_capped_at_five():
    """Test that only the top five symptoms are returned."""
    entries = [
        Entry(date=date(2024, 1, 1) + timedelta(days=i), symptoms=[symptom])
        for i, symptom in enumerate(list(Symptom)[:7])
    ]

    ranked = compute_statistics([], entries).common_symptoms

    assert len(ranked) == 5
    assert [s.symptom for s in ranked] == list(Symptom)[:5]

def test_symptoms_counted_on_non_flow_days(symptom_entries):
    """Test that symptom tallies include entries without flow."""
    stats = compute_statistics(extract_episodes(symptom_entries), symptom_entries)

    assert stats.common_symptoms[0].symptom == Symptom.CRAMPS
    assert stats.common_symptoms[0].count == 5

def test_duplicate_symptoms_in_entry_counted_once():
    """Test that a symptom listed twice in one entry counts once."""
    entry = Entry(date=date(2024, 1, 1), symptoms=["Cramps", "Cramps"])

    assert entry.symptoms == [Symptom.CRAMPS]
    assert rank_symptoms([entry])[0].count == 1

def test_compute_statistics_is_idempotent(regular_entries, symptom_entries):
    """Test that repeated calls on the same snapshot give identical results."""
    entries = regular_entries + symptom_entries

    first = compute_statistics(extract_episodes(entries), entries)
    second = compute_statistics(extract_episodes(entries), entries)

    assert first == second
    assert first.model_dump_json() == second.model_dump_json()

def test_unsorted_input_matches_sorted_input(regular_entries, symptom_entries):
    """Test that input order does not change episodes or statistics."""
    # Symptom days chosen so no date is logged twice
    extra = [e for e in symptom_entries if e.date.day >= 10]
    entries = sorted(regular_entries + extra, key=lambda e: e.date)
    shuffled = entries[1::2] + entries[::2]

    assert extract_episodes(shuffled) == extract_episodes(entries)
    assert compute_statistics(extract_episodes(shuffled), shuffled) == \
        compute_statistics(extract_episodes(entries), entries)
