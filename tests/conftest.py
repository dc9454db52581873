"""
Pytest configuration and shared fixtures.
"""
import pytest
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List

from src.models.entry import Entry, FlowLevel, Symptom

def flow_days(start: date, days: int, flow: FlowLevel = FlowLevel.MEDIUM) -> List[Entry]:
    """Build consecutive flow-day entries starting at start."""
    return [
        Entry(date=start + timedelta(days=offset), flow=flow)
        for offset in range(days)
    ]

@dataclass
class LambdaContext:
    """Minimal Lambda context accepted by Logger.inject_lambda_context."""
    function_name: str = "test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:eu-west-1:123456789012:function:test"
    aws_request_id: str = "da658bd3-2d6f-4e7b-8ec2-937234644fdc"

@pytest.fixture
def lambda_context() -> LambdaContext:
    return LambdaContext()

@pytest.fixture
def regular_entries() -> List[Entry]:
    """Three 5-day periods exactly 28 days apart, starting 2024-01-01."""
    entries = []
    for i in range(3):
        entries.extend(flow_days(date(2024, 1, 1) + timedelta(days=i * 28), 5))
    return entries

@pytest.fixture
def symptom_entries() -> List[Entry]:
    """Entries where Cramps appears 5 times, Headache 3 times and Fatigue 3 times."""
    return [
        Entry(date=date(2024, 1, 1), flow=FlowLevel.HEAVY, symptoms=[Symptom.CRAMPS, Symptom.HEADACHE]),
        Entry(date=date(2024, 1, 2), flow=FlowLevel.MEDIUM, symptoms=[Symptom.CRAMPS, Symptom.FATIGUE]),
        Entry(date=date(2024, 1, 3), symptoms=[Symptom.CRAMPS, Symptom.HEADACHE]),
        Entry(date=date(2024, 1, 10), symptoms=[Symptom.CRAMPS, Symptom.FATIGUE]),
        Entry(date=date(2024, 1, 11), symptoms=[Symptom.CRAMPS, Symptom.HEADACHE, Symptom.FATIGUE]),
    ]
